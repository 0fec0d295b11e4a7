# tests/server/test_analyze_router.py
import io
import random

import pytest

from sensei.controllers.audit_controller import AuditController
from sensei.server.app import create_app

VALID_HTML = (
    "<html><head><title>Server test page title</title></head>"
    "<body><h1>Hi</h1><img src='x.png'><a href='/'>click here</a></body></html>"
)


@pytest.fixture
def client():
    app = create_app({
        "TESTING": True,
        "AUDIT_CONTROLLER": AuditController(rng=random.Random(0)),
    })
    return app.test_client()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_analyze_json(client):
    response = client.post("/api/analyze", json={"html": VALID_HTML, "url": "https://example.com/"})
    data = response.get_json()

    assert response.status_code == 200
    assert data["url"] == "https://example.com/"
    assert data["type"] == "html"
    assert data["isPlaceholder"] is False
    assert {"performance", "seo", "accessibility", "bestPractices"} == set(data["subscores"])
    assert all("howToFix" in issue for issue in data["issues"])
    assert data["elementAnalysis"]["analyzedElements"] == data["elementAnalysis"]["totalElements"]


def test_analyze_requires_html(client):
    response = client.post("/api/analyze", json={"url": "https://example.com/"})
    assert response.status_code == 400
    assert "error" in response.get_json()

    response = client.post("/api/analyze", data="not json", content_type="text/plain")
    assert response.status_code == 400


def test_analyze_upload(client):
    response = client.post(
        "/api/analyze",
        data={"file": (io.BytesIO(VALID_HTML.encode("utf-8")), "page.html")},
        content_type="multipart/form-data",
    )
    data = response.get_json()

    assert response.status_code == 200
    assert data["url"] == "page.html"
    assert data["type"] == "file"


@pytest.mark.parametrize("payload", [
    b"<div>fragment only</div>",
    b"\xff\xfe\x00 <html><head><body></html>",
])
def test_analyze_upload_rejects_invalid_files(client, payload):
    response = client.post(
        "/api/analyze",
        data={"file": (io.BytesIO(payload), "bad.html")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_analyze_elements(client):
    response = client.post("/api/analyze/elements", json={"html": VALID_HTML, "url": "u"})
    data = response.get_json()

    assert response.status_code == 200
    assert data["url"] == "u"
    assert [s["name"] for s in data["sectionAnalysis"]][0] == "Header"
    issues = {i["issue"] for i in data["elementIssues"]}
    assert "Image missing alt text" in issues
    assert "Non-descriptive link text" in issues
    assert all(i["section"] == "general" for i in data["elementIssues"] if i["element"] == "Image")


def test_analyze_elements_requires_html(client):
    assert client.post("/api/analyze/elements", json={}).status_code == 400


def test_rules_catalogue(client):
    data = client.get("/api/rules").get_json()
    assert "MISSING_VIEWPORT" in data["document"]["check_viewport"]
    assert "MISSING_ALT" in data["elements"]["image"]


@pytest.mark.parametrize("route", ["/api/analyze", "/api/analyze/elements"])
@pytest.mark.parametrize("body", [["<html></html>"], "just a string", 42, None])
def test_non_object_json_body_is_rejected(client, route, body):
    response = client.post(route, json=body)
    assert response.status_code == 400
    assert "error" in response.get_json()


@pytest.mark.parametrize("route", ["/api/analyze", "/api/analyze/elements"])
@pytest.mark.parametrize("field", ["url", "type"])
def test_non_string_fields_are_rejected(client, route, field):
    response = client.post(route, json={"html": VALID_HTML, field: 5})
    assert response.status_code == 400
    assert field in response.get_json()["error"]
