"""Validation rules and field sets for the authentication forms."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Final

from publishelf_core.forms.fields import (
    FieldBinding,
    FormState,
    Rule,
    build_form,
    check,
    matches_field,
    min_length,
    pattern,
    required,
)

EMAIL_RE: Final = re.compile(r"\A[^\s@]+@[^\s@]+\.[^\s@]+\Z")
NAME_RE: Final = re.compile(r"\A[A-Za-z\s]+\Z")
PUBLISHING_HOUSE_RE: Final = re.compile(r"\A[A-Za-z0-9\s]+\Z")

PASSWORD_MIN_LENGTH: Final[int] = 3


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def email_rules(label: str = "Email") -> tuple[Rule, ...]:
    return (
        required(f"{label} is required."),
        pattern(EMAIL_RE, "Please enter a valid email address."),
        check(lambda v: _text(v) == _text(v).lower(), "Uppercase letters are not allowed."),
        check(
            lambda v: _text(v).strip() == _text(v),
            "Email cannot contain leading or trailing spaces.",
        ),
    )


def basic_name_rules(label: str) -> tuple[Rule, ...]:
    return (
        required(f"{label} is required."),
        check(lambda v: _text(v).strip() != "", f"{label} cannot be empty."),
        pattern(NAME_RE, "Only alphabets and spaces allowed."),
    )


def publishing_house_rules() -> tuple[Rule, ...]:
    return (
        required("Publishing house name is required."),
        check(lambda v: _text(v).strip() != "", "Publishing house name cannot be empty."),
        pattern(PUBLISHING_HOUSE_RE, "Only alphanumeric and spaces allowed."),
    )


def password_rules() -> tuple[Rule, ...]:
    return (
        required("Password is required."),
        min_length(
            PASSWORD_MIN_LENGTH,
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.",
        ),
        check(
            lambda v: _text(v).strip() == _text(v),
            "Password cannot start or end with spaces.",
        ),
    )


def confirm_password_rules(password_field: str = "password") -> tuple[Rule, ...]:
    return (
        required("Please confirm your password."),
        matches_field(password_field, "Passwords do not match."),
    )


def terms_rules() -> tuple[Rule, ...]:
    return (required("You must agree to the Terms and Privacy Policy."),)


def trim_payload(data: Mapping[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    out = dict(data)
    for name in fields:
        if isinstance(out.get(name), str):
            out[name] = out[name].strip()
    return out


def _name_fields() -> list[FieldBinding]:
    return [
        FieldBinding("firstname", "First Name", basic_name_rules("First name")),
        FieldBinding("lastname", "Last Name", basic_name_rules("Last name")),
    ]


def _password_fields() -> list[FieldBinding]:
    return [
        FieldBinding(
            "password",
            "Password",
            password_rules(),
            revalidates=("confirmPassword",),
            input_type="password",
        ),
        FieldBinding(
            "confirmPassword",
            "Confirm Password",
            confirm_password_rules(),
            revalidates=("password",),
            input_type="password",
        ),
    ]


def _terms_field() -> FieldBinding:
    return FieldBinding("termsAccepted", "Terms", terms_rules(), input_type="checkbox")


def login_form() -> FormState:
    return build_form(
        [
            FieldBinding(
                "email", "Email address", (required("Email is required."),), input_type="email"
            ),
            FieldBinding(
                "password", "Password", (required("Password is required."),), input_type="password"
            ),
        ]
    )


def buyer_signup_form() -> FormState:
    return build_form(
        [
            *_name_fields(),
            FieldBinding("email", "Email", email_rules(), input_type="email"),
            *_password_fields(),
            _terms_field(),
        ]
    )


def manager_signup_form() -> FormState:
    return buyer_signup_form()


def publisher_signup_form() -> FormState:
    return build_form(
        [
            *_name_fields(),
            FieldBinding("publishingHouse", "Publishing House Name", publishing_house_rules()),
            FieldBinding(
                "businessEmail", "Business Email", email_rules("Business email"), input_type="email"
            ),
            *_password_fields(),
            _terms_field(),
        ]
    )


FORMS: Final[dict[str, Callable[[], FormState]]] = {
    "login": login_form,
    "buyer-signup": buyer_signup_form,
    "manager-signup": manager_signup_form,
    "publisher-signup": publisher_signup_form,
}

# Fields trimmed before a validated payload is handed on.
TRIM_FIELDS: Final[dict[str, tuple[str, ...]]] = {
    "login": ("email",),
    "buyer-signup": ("firstname", "lastname", "email"),
    "manager-signup": ("firstname", "lastname", "email"),
    "publisher-signup": ("firstname", "lastname", "publishingHouse", "businessEmail"),
}


def known_forms() -> set[str]:
    return set(FORMS.keys())
