"""Read-only access to the client's persisted credential."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol, runtime_checkable

from connectapi.logging import logger


@runtime_checkable
class CredentialStore(Protocol):
    def get_credential(self) -> str | None: ...


class MemoryCredentialStore:
    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get_credential(self) -> str | None:
        return self._token or None


class FileCredentialStore:
    """JSON object on disk keyed like browser local storage, e.g. ``{"userToken": "..."}``."""

    def __init__(self, path: str | Path, *, key: str = "userToken") -> None:
        self.path = Path(path)
        self.key = key

    def get_credential(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("credential_store_unreadable", path=str(self.path), error=str(exc))
            return None

        if not isinstance(data, dict):
            return None
        value = data.get(self.key)
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()


__all__ = ["CredentialStore", "FileCredentialStore", "MemoryCredentialStore"]
