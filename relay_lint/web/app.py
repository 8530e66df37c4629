"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from relay_lint import __version__
from relay_lint.web.api import router


def create_app() -> FastAPI:
    app = FastAPI(title="relay-lint", version=__version__)
    app.include_router(router)
    return app
