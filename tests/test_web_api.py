"""Tests for the HTTP lint service."""

import pytest

# Only run if fastapi/httpx are installed
try:
    from fastapi.testclient import TestClient
    from relay_lint.web import create_app
    HAS_WEB = True
except ImportError:
    HAS_WEB = False

pytestmark = pytest.mark.skipif(not HAS_WEB, reason="web dependencies not installed")


@pytest.fixture
def client():
    return TestClient(create_app())


def test_list_rules(client):
    res = client.get("/api/rules")
    assert res.status_code == 200
    names = [r["name"] for r in res.json()["rules"]]
    assert names == ["unused-fields", "must-colocate-fragment-spreads"]


def test_lint_reports_unused_field(client):
    res = client.post("/api/lint", json={
        "source": "graphql`fragment F on Page { title unused }`;\nx.title;\n",
    })
    assert res.status_code == 200
    data = res.json()
    assert data["count"] == 1
    diagnostic = data["diagnostics"][0]
    assert diagnostic["rule"] == "unused-fields"
    assert diagnostic["line"] == 1
    assert diagnostic["severity"] == "warn"


def test_lint_with_settings(client):
    res = client.post("/api/lint", json={
        "source": "graphql`fragment F on Page { title }`;",
        "filename": "F.tsx",
        "settings": {"preset": "strict", "rules": {"must-colocate-fragment-spreads": "off"}},
    })
    assert res.status_code == 200
    assert res.json()["diagnostics"][0]["severity"] == "error"


def test_lint_bad_settings(client):
    res = client.post("/api/lint", json={
        "source": "x;",
        "settings": {"rules": {"unused-fields": ["warn", {"unknown": 1}]}},
    })
    assert res.status_code == 422


def test_lint_unsupported_filename(client):
    res = client.post("/api/lint", json={"source": "x", "filename": "notes.txt"})
    assert res.status_code == 400
