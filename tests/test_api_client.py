"""Tests for the HTTP client: headers, status mapping, network failures."""

import httpx
import pytest

from heyteam.api_client import ApiClient, extract_error_message, mask_headers, parse_model
from heyteam.domain.departments.schemas import Department
from heyteam.errors import ApiError, NetworkError, NotFoundError
from heyteam.session import Session


@pytest.mark.asyncio
async def test_session_credentials_are_sent(backend, client):
    await client.get("/api/departments")

    _, _, headers = backend.requests[-1]
    assert headers["authorization"] == "Bearer secret-token"
    assert headers["cookie"] == "sid=abc"
    assert headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_no_auth_headers_without_session(backend, transport):
    async with ApiClient(session=Session(), base_url="http://test", transport=transport) as api:
        await api.get("/api/departments")

    _, _, headers = backend.requests[-1]
    assert "authorization" not in headers
    assert "cookie" not in headers


@pytest.mark.asyncio
async def test_404_raises_not_found_with_backend_message(client):
    with pytest.raises(NotFoundError) as excinfo:
        await client.get("/api/jobs/nope/roster")

    assert excinfo.value.message == "Job not found"


@pytest.mark.asyncio
async def test_4xx_raises_api_error_with_status(backend, client):
    backend.reject_with = (403, {"error": "Forbidden for this organization"})

    with pytest.raises(ApiError) as excinfo:
        await client.post("/api/departments", {"name": "Ops"})

    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "Forbidden for this organization"


@pytest.mark.asyncio
async def test_204_returns_none(client):
    assert await client.delete("/api/departments/d1") is None


def _failing_transport(handler_calls):
    def handler(request):
        handler_calls.append(str(request.url))
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error_with_diagnosis():
    calls = []
    api = ApiClient(
        session=Session(),
        base_url="https://portal.example",
        transport=_failing_transport(calls),
        connectivity_url="https://probe.example/get",
    )
    try:
        with pytest.raises(NetworkError) as excinfo:
            await api.get("/api/jobs/J1/roster")
    finally:
        await api.aclose()

    error = excinfo.value
    assert error.error_type == "Connection Error"
    assert "[Connectivity Test: FAILED]" in error.diagnosis
    # the request itself, then the connectivity probe
    assert calls == ["https://portal.example/api/jobs/J1/roster", "https://probe.example/get"]


@pytest.mark.asyncio
async def test_connectivity_probe_passes_when_only_backend_is_down():
    def handler(request):
        if request.url.host == "probe.example":
            return httpx.Response(200, json={"ok": True})
        raise httpx.ReadTimeout("timed out", request=request)

    api = ApiClient(
        base_url="https://portal.example",
        transport=httpx.MockTransport(handler),
        connectivity_url="https://probe.example/get",
    )
    try:
        with pytest.raises(NetworkError) as excinfo:
            await api.get("/api/messages/history")
    finally:
        await api.aclose()

    assert excinfo.value.error_type == "Timeout Error"
    assert "[Connectivity Test: PASSED]" in excinfo.value.diagnosis


def test_mask_headers_hides_credentials():
    masked = mask_headers({"Authorization": "Bearer abc", "Cookie": "sid=1", "Accept": "application/json"})

    assert masked == {
        "Authorization": "Bearer ***masked***",
        "Cookie": "***masked***",
        "Accept": "application/json",
    }


def test_extract_error_message_variants():
    request = httpx.Request("GET", "https://portal.example/x")

    assert extract_error_message(httpx.Response(400, json={"message": "Bad"}, request=request)) == "Bad"
    assert extract_error_message(httpx.Response(400, json={"error": "Worse"}, request=request)) == "Worse"
    assert extract_error_message(httpx.Response(500, text="Gateway down", request=request)) == "Gateway down"
    assert extract_error_message(httpx.Response(500, json={}, request=request)) == "Request failed"


def test_parse_model_rejects_wrong_shape():
    with pytest.raises(ApiError):
        parse_model(Department, {"name": "No id"})
