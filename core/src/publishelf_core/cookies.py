from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Final, Literal

from publishelf_core.config import Settings

SameSite = Literal["lax", "none", "strict"]

DEFAULT_MAX_AGE_MS: Final[int] = 24 * 60 * 60 * 1000

_EXPIRY_RE = re.compile(r"([0-9]+)([smhd])")

_UNIT_MS: Final[dict[str, int]] = {
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
}


@dataclass(frozen=True)
class CookieOptions:
    """How the session cookie is issued. ``max_age`` is in milliseconds."""

    httponly: bool
    secure: bool
    samesite: SameSite
    max_age: int
    path: str = "/"

    def set_cookie_kwargs(self) -> dict[str, Any]:
        # Starlette's Response.set_cookie takes max_age in seconds.
        return {
            "max_age": self.max_age // 1000,
            "path": self.path,
            "httponly": self.httponly,
            "secure": self.secure,
            "samesite": self.samesite,
        }

    def delete_cookie_kwargs(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "httponly": self.httponly,
            "secure": self.secure,
            "samesite": self.samesite,
        }


def parse_token_expiry(raw: str | None) -> int:
    """Convert an expiry like ``"12h"`` into milliseconds.

    Anything that is not ``<digits><s|m|h|d>`` (or that works out to zero)
    yields ``DEFAULT_MAX_AGE_MS``.
    """

    if not raw:
        return DEFAULT_MAX_AGE_MS

    match = _EXPIRY_RE.fullmatch(raw)
    if match is None:
        return DEFAULT_MAX_AGE_MS

    try:
        amount = int(match.group(1))
    except ValueError:
        # Digit runs beyond the interpreter's int conversion limit.
        return DEFAULT_MAX_AGE_MS

    value = amount * _UNIT_MS[match.group(2)]
    return value if value > 0 else DEFAULT_MAX_AGE_MS


def _samesite(settings: Settings) -> SameSite:
    return "none" if settings.is_production else "lax"


def get_cookie_options(settings: Settings) -> CookieOptions:
    return CookieOptions(
        httponly=True,
        secure=settings.is_production,
        samesite=_samesite(settings),
        max_age=parse_token_expiry(settings.session.expires_in),
    )


def get_clear_cookie_options(settings: Settings) -> CookieOptions:
    """Options used when expiring the session cookie on logout.

    Flags must match the ones the cookie was issued with (``get_cookie_options``).
    """

    return CookieOptions(
        httponly=True,
        secure=settings.is_production,
        samesite=_samesite(settings),
        max_age=0,
    )
