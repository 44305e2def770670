from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from publishelf_core.api.models import ApiResponse, fail, ok
from publishelf_core.config import Settings
from publishelf_core.cookies import CookieOptions, get_clear_cookie_options, get_cookie_options
from publishelf_core.forms import FORMS, TRIM_FIELDS, password_strength, trim_payload
from publishelf_core.tokens import TokenError, generate_token, verify_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


class AuthUser(BaseModel):
    id: str
    role: str | None = None


class PasswordStrengthRequest(BaseModel):
    password: str = ""


class PasswordStrengthInfo(BaseModel):
    score: int
    label: str
    next_hint: str | None = None


def get_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=500, detail="Server settings not initialized")
    return settings


def require_user(
    request: Request,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> dict[str, Any]:
    """Resolve the caller from the session cookie or fail with 401."""

    token = request.cookies.get(settings.session.cookie_name)
    if not token:
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    try:
        return verify_token(token, settings)
    except TokenError as e:
        logger.warning(f"Rejected session token: {e}")
        raise HTTPException(status_code=401, detail="Not authorized, token failed") from e


@router.post("/api/logout", response_model=ApiResponse[None])
@router.post("/api/auth/logout", response_model=ApiResponse[None])
async def logout(settings: Settings = Depends(get_settings)) -> JSONResponse:  # noqa: B008
    response = JSONResponse(content=ok("Logged out successfully").model_dump(mode="json"))
    options = get_clear_cookie_options(settings)
    response.delete_cookie(settings.session.cookie_name, **options.delete_cookie_kwargs())
    return response


def get_cookie_policy(
    request: Request,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> CookieOptions:
    options = getattr(request.app.state, "cookie_options", None)
    return options if options is not None else get_cookie_options(settings)


@router.get("/api/auth/me", response_model=ApiResponse[dict[str, AuthUser]])
async def me(
    response: Response,
    claims: dict[str, Any] = Depends(require_user),  # noqa: B008
    settings: Settings = Depends(get_settings),  # noqa: B008
    options: CookieOptions = Depends(get_cookie_policy),  # noqa: B008
) -> ApiResponse[dict[str, AuthUser]]:
    """Return the verified caller and refresh the session cookie."""

    token = generate_token(claims, settings)
    response.set_cookie(settings.session.cookie_name, token, **options.set_cookie_kwargs())

    user = AuthUser(id=str(claims.get("id") or ""), role=claims.get("role"))
    return ok("User verified", {"user": user})


@router.post("/api/auth/validate/{form_name}", response_model=ApiResponse[dict[str, Any]])
async def validate_form(
    form_name: str,
    payload: dict[str, Any] | None = Body(default=None),  # noqa: B008
) -> JSONResponse:
    builder = FORMS.get(form_name)
    if builder is None:
        raise HTTPException(status_code=404, detail=f"Unknown form: {form_name}")

    form = builder()
    form.load(payload or {})
    form.validate_all()

    if not form.is_valid:
        return JSONResponse(
            status_code=422,
            content=fail("Validation failed", {"errors": form.error_payload()}).model_dump(
                mode="json"
            ),
        )

    # Never echo secrets back to the client.
    cleaned = trim_payload(
        {
            name: form.values.get(name)
            for name, binding in form.bindings.items()
            if binding.input_type != "password"
        },
        TRIM_FIELDS.get(form_name, ()),
    )
    return JSONResponse(content=ok("Form is valid", cleaned).model_dump(mode="json"))


@router.post("/api/auth/password-strength", response_model=ApiResponse[PasswordStrengthInfo])
async def strength(body: PasswordStrengthRequest) -> ApiResponse[PasswordStrengthInfo]:
    result = password_strength(body.password)
    return ok(
        "Password strength computed",
        PasswordStrengthInfo(score=result.score, label=result.label, next_hint=result.next_hint),
    )
