"""REST response handling: success bodies, error rejections and decode failures.

Tests cover:
    - 2xx JSON bodies are returned parsed; empty bodies give None
    - >= 400 raises RestResponseError with parsed JSON or raw text body
    - Non-JSON success bodies raise ResponseDecodeError
    - Sync variant and responses coming from a real AsyncClient (MockTransport)
"""

import httpx
import pytest

from qnd_utils.core.errors import RestResponseError, ResponseDecodeError
from qnd_utils.infrastructure.rest import (
    handle_rest_response, handle_rest_response_sync,
)


@pytest.mark.asyncio
async def test_success_returns_parsed_json():
    response = httpx.Response(200, json={"id": 1, "name": "Janine"})
    assert await handle_rest_response(response) == {"id": 1, "name": "Janine"}


@pytest.mark.asyncio
async def test_redirect_range_status_still_succeeds():
    response = httpx.Response(304, json=[1, 2])
    assert await handle_rest_response(response) == [1, 2]


@pytest.mark.asyncio
async def test_empty_success_body_returns_none():
    assert await handle_rest_response(httpx.Response(204)) is None


@pytest.mark.asyncio
async def test_error_status_with_json_body():
    response = httpx.Response(404, json={"error": "not found"})
    with pytest.raises(RestResponseError) as exc_info:
        await handle_rest_response(response)
    assert exc_info.value.to_dict() == {"status": 404, "body": {"error": "not found"}}


@pytest.mark.asyncio
async def test_error_status_with_text_body_falls_back_to_text():
    response = httpx.Response(500, text="Internal failure")
    with pytest.raises(RestResponseError) as exc_info:
        await handle_rest_response(response)
    assert exc_info.value.status == 500
    assert exc_info.value.body == "Internal failure"


@pytest.mark.asyncio
async def test_threshold_is_400():
    with pytest.raises(RestResponseError):
        await handle_rest_response(httpx.Response(400, text=""))
    assert await handle_rest_response(httpx.Response(399, json={"ok": True})) == {"ok": True}


@pytest.mark.asyncio
async def test_success_with_invalid_json_raises_decode_error():
    with pytest.raises(ResponseDecodeError) as exc_info:
        await handle_rest_response(httpx.Response(200, text="<html></html>"))
    assert exc_info.value.body == "<html></html>"
    assert exc_info.value.http_status == 502


def test_sync_variant():
    assert handle_rest_response_sync(httpx.Response(201, json={"created": True})) == {
        "created": True,
    }
    with pytest.raises(RestResponseError) as exc_info:
        handle_rest_response_sync(httpx.Response(403, json={"error": "forbidden"}))
    assert exc_info.value.body == {"error": "forbidden"}


@pytest.mark.asyncio
async def test_with_async_client_responses():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/users/1":
            return httpx.Response(200, json={"id": 1})
        return httpx.Response(404, json={"error": "not found"})

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://api.test",
    ) as client:
        assert await handle_rest_response(await client.get("/users/1")) == {"id": 1}
        with pytest.raises(RestResponseError) as exc_info:
            await handle_rest_response(await client.get("/users/2"))
    assert exc_info.value.status == 404
