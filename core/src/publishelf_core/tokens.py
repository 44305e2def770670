from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, Final

import jwt

from publishelf_core.config import Settings
from publishelf_core.cookies import parse_token_expiry

ALGORITHM: Final[str] = "HS256"

_CLAIM_FIELDS: Final[tuple[str, ...]] = ("role", "firstname", "lastname", "email")


class TokenError(Exception):
    """Raised when a session token cannot be issued or verified."""


def _require_secret(settings: Settings) -> str:
    secret = settings.session.jwt_secret
    if not secret:
        raise TokenError("JWT secret is not configured")
    return secret


def generate_token(
    user: Mapping[str, Any], settings: Settings, *, now: datetime | None = None
) -> str:
    secret = _require_secret(settings)
    issued_at = now or datetime.now(UTC)
    lifetime = timedelta(milliseconds=parse_token_expiry(settings.session.expires_in))

    payload: dict[str, Any] = {"id": str(user.get("id") or user.get("_id") or "")}
    for field in _CLAIM_FIELDS:
        payload[field] = user.get(field)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + lifetime

    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str, settings: Settings) -> dict[str, Any]:
    secret = _require_secret(settings)
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        raise TokenError("Invalid or expired token") from e
