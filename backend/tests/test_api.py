import json
import pytest
from fastapi.testclient import TestClient
from conftest import FakeGenerate, StubCheck, null_client
from futuresafe.api.deps import get_engine, get_generator
from futuresafe.core.engine import RiskEngine
from futuresafe.main import app
from futuresafe.models.outcome import Ok

AUDIT = json.dumps({"riskScore": 10, "summary": "Looks compliant", "violations": []})


@pytest.fixture
def generate():
    return FakeGenerate(reply=AUDIT)


@pytest.fixture
def phishing():
    return StubCheck("phishing", False, Ok(False))


@pytest.fixture
def client(generate, phishing):
    engine = RiskEngine(
        generate,
        phishing=phishing,
        domain_age=StubCheck("domain_age", "unknown", Ok(500)),
        client_factory=null_client,
    )
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_generator] = lambda: generate
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_scan_returns_camel_case_report(client):
    resp = client.post("/scan", json={
        "url": "https://example.com",
        "pageText": "Privacy Policy. Terms of Service. Contact Us.",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["riskScore"] == 6
    assert body["verdict"] == "SAFE"
    assert body["details"]["phishingFlag"] is False
    assert body["details"]["domainAgeDays"] == 500
    assert body["details"]["aiScore"] == 10
    assert body["issues"] == []


def test_scan_rejects_invalid_url(client):
    assert client.post("/scan", json={"url": "not a url"}).status_code == 422


def test_chat_requires_message(client):
    assert client.post("/chat", json={"message": "  "}).status_code == 400


def test_chat_embeds_scan_report(client, generate):
    generate.reply = AUDIT
    resp = client.post("/chat", json={"message": "Is it safe?", "url": "https://example.com", "pageText": "Privacy Policy"})
    assert resp.status_code == 200
    # first prompt is the audit, the last is the chat question
    prompt = generate.prompts[-1]
    assert prompt.startswith("WEBSITE SECURITY SCAN DATA:")
    assert '"riskScore"' in prompt
    assert "Is it safe?" in prompt


def test_chat_without_url_forwards_message(client, generate):
    resp = client.post("/chat", json={"message": "hello"})
    assert resp.json() == {"reply": AUDIT}
    assert generate.prompts == ["hello"]


def test_chat_maps_llm_errors(client, generate):
    generate.error = RuntimeError("quota")
    resp = client.post("/chat", json={"message": "hello"})
    assert resp.status_code == 500
    assert "quota" in resp.json()["detail"]


def test_scan_echoes_request_url_unchanged(client, phishing):
    resp = client.post("/scan", json={"url": "https://example.com", "pageText": ""})
    assert resp.json()["url"] == "https://example.com"
    assert phishing.calls == ["https://example.com"]


def test_scan_rejects_non_http_scheme(client, phishing):
    assert client.post("/scan", json={"url": "ftp://example.com"}).status_code == 422
    assert phishing.calls == []


def test_chat_rejects_invalid_url(client):
    assert client.post("/chat", json={"message": "hi", "url": "nope"}).status_code == 422
