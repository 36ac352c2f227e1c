"""Domain-specific exceptions."""

from __future__ import annotations


class ServiceError(Exception):
    pass


class BackendError(ServiceError):
    """The backend answered with a failure status."""

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message or f"Backend request failed ({status_code or 'unknown'})")
        self.message = message
        self.status_code = status_code


class NetworkFailure(BackendError):
    """The request never produced a response (connection error, timeout)."""

    def __init__(self, detail: str) -> None:
        super().__init__(None)
        self.detail = detail

    def __str__(self) -> str:
        return f"Network failure: {self.detail}"


class MalformedResponse(ServiceError):
    pass


class IdentityDecodeFailure(ServiceError):
    pass


__all__ = [
    "BackendError",
    "IdentityDecodeFailure",
    "MalformedResponse",
    "NetworkFailure",
    "ServiceError",
]
