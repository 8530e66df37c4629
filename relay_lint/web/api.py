"""FastAPI routes for the lint service."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from relay_lint.options import RuleConfigError, parse_settings
from relay_lint.pipeline import lint_source
from relay_lint.rules import PRESETS, RULES, build_rules

router = APIRouter(prefix="/api")


# --- Request models ---

class LintRequest(BaseModel):
    source: str
    filename: str = "input.js"
    settings: dict[str, Any] = {}


# --- Endpoints ---

@router.get("/rules")
async def list_rules():
    return {
        "rules": [
            {
                "name": name,
                "description": rule_cls.description,
                "presets": {
                    preset: severities.get(name).value
                    for preset, severities in PRESETS.items()
                    if name in severities
                },
            }
            for name, rule_cls in RULES.items()
        ],
    }


@router.post("/lint")
async def lint(req: LintRequest):
    try:
        rules = build_rules(parse_settings(req.settings))
    except RuleConfigError as e:
        raise HTTPException(422, str(e))

    try:
        diagnostics = lint_source(req.source, req.filename, rules)
    except ValueError as e:
        # Unsupported file extension
        raise HTTPException(400, str(e))

    return {
        "count": len(diagnostics),
        "diagnostics": [d.to_dict() for d in diagnostics],
    }
