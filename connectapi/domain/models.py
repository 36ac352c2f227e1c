"""Pydantic models exchanged with the directory backend and the identity layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class APIData(BaseModel):
    """One directory entry. Only ``id`` is interpreted; every other field is carried as-is."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    id: str = Field(alias="_id", min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def details(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class UserClaims(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    role: str | None = None
    name: str | None = None

    @field_validator("id", "role", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    role: str | None = None
    display_name: str = "User"


class SearchResponse(BaseModel):
    """Lenient view of a search reply.

    ``apis`` is ``None`` whenever the backend omitted it or sent something that is
    not a list of well-formed entries.
    """

    message: str | None = None
    apis: list[APIData] | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> SearchResponse:
        message = payload.get("message")
        if not isinstance(message, str):
            message = None

        raw_apis = payload.get("apis")
        apis: list[APIData] | None = None
        if isinstance(raw_apis, list):
            try:
                apis = [APIData.model_validate(item) for item in raw_apis]
            except ValidationError:
                apis = None
        return cls(message=message, apis=apis)


__all__ = [
    "APIData",
    "Identity",
    "SearchResponse",
    "UserClaims",
]
