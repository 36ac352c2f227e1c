"""HTTP backend request shape and error mapping."""

from __future__ import annotations

import json

import httpx
import pytest

from connectapi.config import AppSettings
from connectapi.services.backend import SearchBackend
from connectapi.services.credentials import MemoryCredentialStore
from connectapi.services.exceptions import BackendError, MalformedResponse, NetworkFailure


@pytest.mark.asyncio
async def test_search_posts_query_and_parses_results():
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url == httpx.URL("http://localhost:5000/api/user/search")
        assert json.loads(request.content) == {"query": "weather"}
        return httpx.Response(
            200,
            json={
                "message": "2 APIs found",
                "apis": [
                    {"_id": "a1", "name": "OpenWeather", "category": "weather"},
                    {"_id": "a2", "name": "WeatherStack"},
                ],
            },
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        response = await SearchBackend(client).search("weather")

    assert response.message == "2 APIs found"
    assert [item.id for item in response.apis] == ["a1", "a2"]
    assert response.apis[0].details == {"name": "OpenWeather", "category": "weather"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"message": "nothing"},
        {"message": "nothing", "apis": "oops"},
        {"message": "nothing", "apis": [{"name": "no id"}]},
    ],
)
async def test_search_tolerates_missing_or_malformed_apis(body):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        response = await SearchBackend(client).search("x")

    assert response.apis is None
    assert response.message == "nothing"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(204),
    ],
)
async def test_search_rejects_non_object_bodies(response):
    async def handler(request: httpx.Request) -> httpx.Response:
        return response

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MalformedResponse):
            await SearchBackend(client).search("x")


@pytest.mark.asyncio
async def test_search_error_carries_backend_message():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"message": "rate limited"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(BackendError) as info:
            await SearchBackend(client).search("x")

    assert info.value.message == "rate limited"
    assert info.value.status_code == 429
    assert not isinstance(info.value, NetworkFailure)


@pytest.mark.asyncio
async def test_search_error_without_structured_message():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(BackendError) as info:
            await SearchBackend(client).search("x")

    assert info.value.message is None
    assert info.value.status_code == 502


@pytest.mark.asyncio
async def test_transport_errors_become_network_failures():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(NetworkFailure) as info:
            await SearchBackend(client).search("x")

    assert info.value.message is None
    assert "connection refused" in str(info.value)


@pytest.mark.asyncio
async def test_trending_gets_list():
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url == httpx.URL("http://localhost:5000/api/user/trending")
        return httpx.Response(200, json=[{"_id": "t1"}, {"id": "t2"}, {"_id": 3}])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        items = await SearchBackend(client).trending()

    assert [item.id for item in items] == ["t1", "t2", "3"]


@pytest.mark.asyncio
async def test_trending_empty_body_is_empty_list():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await SearchBackend(client).trending() == []


@pytest.mark.asyncio
async def test_trending_rejects_non_list_body():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"apis": []})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MalformedResponse):
            await SearchBackend(client).trending()


@pytest.mark.asyncio
async def test_requests_carry_stored_credential():
    seen: list[str | None] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json=[])

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await SearchBackend(client, credential_store=MemoryCredentialStore("tok")).trending()
        await SearchBackend(client, credential_store=MemoryCredentialStore()).trending()
        await SearchBackend(client).trending()

    assert seen == ["Bearer tok", None, None]


@pytest.mark.asyncio
async def test_endpoints_follow_settings():
    requested: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json={"apis": []})

    settings = AppSettings(api={"base_url": "https://directory.example/v2/", "search_path": "find"})
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await SearchBackend(client, settings=settings).search("x")

    assert requested == ["https://directory.example/v2/find"]


@pytest.mark.asyncio
async def test_trending_skips_entries_without_id():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[{"_id": "t1"}, {"name": "missing id"}, "junk", {"_id": "t2", "name": "Maps"}],
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        items = await SearchBackend(client).trending()

    assert [item.id for item in items] == ["t1", "t2"]


@pytest.mark.asyncio
async def test_unencodable_query_becomes_backend_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"apis": []})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(BackendError) as info:
            await SearchBackend(client).search("\ud800")

    assert info.value.message is None
