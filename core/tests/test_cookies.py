from __future__ import annotations

import pytest

from publishelf_core.config import SessionConfig, Settings, load_settings
from publishelf_core.cookies import (
    DEFAULT_MAX_AGE_MS,
    CookieOptions,
    get_clear_cookie_options,
    get_cookie_options,
    parse_token_expiry,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1s", 1000),
        ("45s", 45_000),
        ("30m", 30 * 60_000),
        ("12h", 12 * 3_600_000),
        ("1d", 86_400_000),
        ("7d", 7 * 86_400_000),
        ("007h", 7 * 3_600_000),
    ],
)
def test_parse_token_expiry_units(raw: str, expected: int) -> None:
    assert parse_token_expiry(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None, "", "abc", "-5m", "5w", "5", "h", "1.5h", " 1h", "1h ", "1h\n", "1H", "0s", "0d",
        "9" * 5000 + "s",
    ],
)
def test_parse_token_expiry_falls_back_to_one_day(raw: str | None) -> None:
    assert parse_token_expiry(raw) == DEFAULT_MAX_AGE_MS == 86_400_000


def test_production_scenario() -> None:
    cfg = load_settings({"JWT_EXPIRES_IN": "12h", "NODE_ENV": "production"})
    assert get_cookie_options(cfg) == CookieOptions(
        httponly=True, secure=True, samesite="none", max_age=43_200_000
    )


def test_development_scenario_with_unset_expiry() -> None:
    cfg = load_settings({"NODE_ENV": "development"})
    assert get_cookie_options(cfg) == CookieOptions(
        httponly=True, secure=False, samesite="lax", max_age=86_400_000
    )


def test_padded_environment_values_use_defaults_and_lax_policy() -> None:
    cfg = load_settings({"JWT_EXPIRES_IN": " 12h ", "NODE_ENV": " production"})
    assert get_cookie_options(cfg) == CookieOptions(
        httponly=True, secure=False, samesite="lax", max_age=86_400_000
    )


def test_oversized_expiry_from_environment_falls_back() -> None:
    cfg = load_settings({"JWT_EXPIRES_IN": "9" * 5000 + "s", "NODE_ENV": "production"})
    assert get_cookie_options(cfg).max_age == DEFAULT_MAX_AGE_MS


@pytest.mark.parametrize("environment", ["production", "development", "test", "Production", ""])
def test_malformed_expiry_falls_back_in_every_mode(environment: str) -> None:
    cfg = Settings(environment=environment, session=SessionConfig(expires_in="abc"))
    assert get_cookie_options(cfg).max_age == 86_400_000


@pytest.mark.parametrize(
    ("environment", "secure", "samesite"),
    [
        ("production", True, "none"),
        ("development", False, "lax"),
        ("staging", False, "lax"),
        ("PRODUCTION", False, "lax"),
    ],
)
def test_secure_and_samesite_follow_runtime_mode(
    environment: str, secure: bool, samesite: str
) -> None:
    opts = get_cookie_options(Settings(environment=environment))
    assert opts.secure is secure
    assert opts.samesite == samesite
    assert opts.httponly is True


def test_cookie_options_are_immutable() -> None:
    opts = get_cookie_options(Settings())
    with pytest.raises(AttributeError):
        opts.httponly = False  # type: ignore[misc]


def test_repeated_calls_return_equal_independent_values() -> None:
    cfg = Settings(session=SessionConfig(expires_in="2h"))
    first = get_cookie_options(cfg)
    second = get_cookie_options(cfg)
    assert first == second
    assert first is not second


def test_set_cookie_kwargs_converts_to_seconds() -> None:
    opts = CookieOptions(httponly=True, secure=True, samesite="none", max_age=43_200_000)
    assert opts.set_cookie_kwargs() == {
        "max_age": 43_200,
        "path": "/",
        "httponly": True,
        "secure": True,
        "samesite": "none",
    }
    assert "max_age" not in opts.delete_cookie_kwargs()


def test_clear_cookie_options_match_issue_flags() -> None:
    cfg = Settings(environment="production")
    issued = get_cookie_options(cfg)
    cleared = get_clear_cookie_options(cfg)
    assert cleared.max_age == 0
    assert (cleared.httponly, cleared.secure, cleared.samesite, cleared.path) == (
        issued.httponly,
        issued.secure,
        issued.samesite,
        issued.path,
    )
