"""Shared pytest fixtures: a scriptable directory backend and JWT helpers."""

from __future__ import annotations

import asyncio
import time
from typing import Any

import jwt
import pytest

from connectapi.config import get_settings
from connectapi.domain.models import APIData, SearchResponse

SIGNING_KEY = "connectapi-test-signing-key-0123456789"


def api(item_id: str, **fields: Any) -> APIData:
    return APIData.model_validate({"_id": item_id, **fields})


def make_token(claims: dict[str, Any] | None = None, *, expires_in: int | None = 3600) -> str:
    payload = dict(claims or {})
    if expires_in is not None:
        payload["exp"] = int(time.time()) + expires_in
    return jwt.encode(payload, SIGNING_KEY, algorithm="HS256")


class FakeDirectoryBackend:
    """In-memory backend whose replies can be held back until a test releases them."""

    def __init__(
        self,
        *,
        trending: list[APIData] | None = None,
        trending_error: Exception | None = None,
    ) -> None:
        self.search_calls: list[str] = []
        self.trending_calls = 0
        self.replies: dict[str, SearchResponse | Exception] = {}
        self._gates: dict[str, asyncio.Future] = {}
        self._trending = list(trending or [])
        self._trending_error = trending_error
        self._trending_gate: asyncio.Future | None = None

    def reply(self, query: str, result: SearchResponse | Exception) -> None:
        self.replies[query] = result

    def hold(self, query: str) -> asyncio.Future:
        gate = asyncio.get_running_loop().create_future()
        self._gates[query] = gate
        return gate

    def hold_trending(self) -> asyncio.Future:
        self._trending_gate = asyncio.get_running_loop().create_future()
        return self._trending_gate

    async def search(self, query: str) -> SearchResponse:
        self.search_calls.append(query)
        gate = self._gates.pop(query, None)
        if gate is not None:
            await gate
        result = self.replies.get(query, SearchResponse())
        if isinstance(result, Exception):
            raise result
        return result

    async def trending(self) -> list[APIData]:
        self.trending_calls += 1
        if self._trending_gate is not None:
            await self._trending_gate
        if self._trending_error is not None:
            raise self._trending_error
        return list(self._trending)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def backend() -> FakeDirectoryBackend:
    return FakeDirectoryBackend(trending=[api(f"t{i}", name=f"Trending {i}") for i in range(7)])
