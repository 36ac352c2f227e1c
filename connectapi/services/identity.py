"""Resolve the signed-in user's display identity from the stored credential."""

from __future__ import annotations

from typing import Any

import jwt
from pydantic import ValidationError

from connectapi.config import IdentitySettings
from connectapi.domain.models import Identity, UserClaims
from connectapi.logging import logger
from connectapi.services.credentials import CredentialStore
from connectapi.services.exceptions import IdentityDecodeFailure


class TokenDecoder:
    """Reads claims from a JWT without checking its signature.

    The signature belongs to the backend; the client only needs the display
    claims. Expiry is still enforced unless disabled.
    """

    def __init__(self, *, verify_expiry: bool = True) -> None:
        self.verify_expiry = verify_expiry

    def decode(self, credential: str) -> UserClaims:
        try:
            payload: dict[str, Any] = jwt.decode(
                credential,
                options={"verify_signature": False, "verify_exp": self.verify_expiry},
            )
        except jwt.ExpiredSignatureError as exc:
            raise IdentityDecodeFailure("Credential has expired.") from exc
        except jwt.InvalidTokenError as exc:
            raise IdentityDecodeFailure(f"Credential is malformed: {exc}") from exc

        try:
            return UserClaims.model_validate(payload)
        except ValidationError as exc:
            raise IdentityDecodeFailure(f"Credential claims are invalid: {exc}") from exc


class IdentityResolver:
    def __init__(
        self,
        store: CredentialStore,
        decoder: TokenDecoder | None = None,
        settings: IdentitySettings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or IdentitySettings()
        self._decoder = decoder or TokenDecoder(verify_expiry=self._settings.verify_expiry)

    def resolve(self) -> Identity:
        """Never raises: an absent or unusable credential yields the default identity."""

        default = Identity(display_name=self._settings.default_display_name)
        credential = self._store.get_credential()
        if not credential:
            return default

        try:
            claims = self._decoder.decode(credential)
        except IdentityDecodeFailure as exc:
            logger.warning("identity_decode_failed", error=str(exc))
            return default

        name = (claims.name or "").strip()
        identity = Identity(
            id=claims.id,
            role=claims.role,
            display_name=name or default.display_name,
        )
        logger.debug("identity_resolved", user_id=identity.id, role=identity.role)
        return identity


__all__ = ["IdentityResolver", "TokenDecoder"]
