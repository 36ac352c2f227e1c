"""HTTP client for the directory's search and trending endpoints."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from connectapi.config import AppSettings
from connectapi.domain.models import APIData, SearchResponse
from connectapi.logging import logger
from connectapi.services.credentials import CredentialStore
from connectapi.services.exceptions import BackendError, MalformedResponse, NetworkFailure


class SearchBackend:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: AppSettings | None = None,
        credential_store: CredentialStore | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or AppSettings()
        self._store = credential_store

    async def search(self, query: str) -> SearchResponse:
        response = await self._send(
            "POST",
            self._settings.api.search_path,
            json={"query": query},
        )
        payload = self._decode_json(response)
        if not isinstance(payload, dict):
            raise MalformedResponse("Search response is not a JSON object.")
        return SearchResponse.from_payload(payload)

    async def trending(self) -> list[APIData]:
        response = await self._send("GET", self._settings.api.trending_path)
        payload = self._decode_json(response)
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise MalformedResponse("Trending response is not a JSON array.")
        items: list[APIData] = []
        for position, entry in enumerate(payload):
            try:
                items.append(APIData.model_validate(entry))
            except ValidationError as exc:
                logger.warning(
                    "trending_entry_skipped",
                    position=position,
                    errors=exc.error_count(),
                )
        return items

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = self._settings.endpoint(path)
        try:
            response = await self._client.request(
                method,
                url,
                headers=self._auth_headers(),
                timeout=self._settings.api.request_timeout_seconds,
                **kwargs,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            message = _error_message(exc.response)
            logger.info(
                "backend_request_rejected",
                method=method,
                url=url,
                status_code=status_code,
                message=message,
            )
            raise BackendError(message, status_code=status_code) from exc
        except httpx.RequestError as exc:
            raise NetworkFailure(str(exc) or exc.__class__.__name__) from exc
        except UnicodeEncodeError as exc:
            logger.warning("backend_request_unencodable", method=method, url=url, error=str(exc))
            raise BackendError(None) from exc
        return response

    def _auth_headers(self) -> dict[str, str]:
        if self._store is None:
            return {}
        token = self._store.get_credential()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse("Response body is not valid JSON.") from exc


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


__all__ = ["SearchBackend"]
