import httpx
import pytest
from futuresafe.checks.phishing import PhishingCheck
from futuresafe.models.outcome import FailureKind


def client_with(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def reply(payload, status=200):
    def handler(request):
        return httpx.Response(status, json=payload)
    return handler


@pytest.mark.asyncio
async def test_verified_entry_is_flagged():
    seen = {}

    def handler(request):
        seen["body"] = request.content.decode()
        return httpx.Response(200, json={"results": {"in_database": True, "verified": True}})

    async with client_with(handler) as client:
        outcome = await PhishingCheck(app_key="k").run(client, "http://bad.example/login")
    assert outcome.value is True
    assert "format=json" in seen["body"]
    assert "app_key=k" in seen["body"]


@pytest.mark.asyncio
async def test_unverified_entry_is_not_flagged():
    async with client_with(reply({"results": {"in_database": True, "verified": False}})) as client:
        outcome = await PhishingCheck().run(client, "https://example.com")
    assert outcome.ok and outcome.value is False


@pytest.mark.asyncio
async def test_network_error_fails_soft():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with client_with(handler) as client:
        outcome = await PhishingCheck().run(client, "https://example.com")
    assert outcome.kind is FailureKind.NETWORK
    assert outcome.resolve(PhishingCheck.default) is False


@pytest.mark.asyncio
async def test_timeout_fails_soft():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    async with client_with(handler) as client:
        outcome = await PhishingCheck().run(client, "https://example.com")
    assert outcome.kind is FailureKind.TIMEOUT


@pytest.mark.asyncio
async def test_non_json_and_http_errors_fail_soft():
    async with client_with(lambda r: httpx.Response(200, text="<html>")) as client:
        assert (await PhishingCheck().run(client, "https://example.com")).kind is FailureKind.MALFORMED
    async with client_with(reply({}, status=509)) as client:
        assert (await PhishingCheck().run(client, "https://example.com")).kind is FailureKind.PROVIDER


@pytest.mark.asyncio
async def test_invalid_url_is_not_sent():
    def handler(request):
        raise AssertionError("should not be called")

    async with client_with(handler) as client:
        outcome = await PhishingCheck().run(client, "not a url")
    assert outcome.kind is FailureKind.INVALID_INPUT
