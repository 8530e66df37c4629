"""HTTP lint service."""

from relay_lint.web.app import create_app

__all__ = ["create_app"]
