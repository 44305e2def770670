from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^A-Za-z0-9]")

LABELS: Final[tuple[str, ...]] = (
    "Too Weak",
    "Very Weak",
    "Weak",
    "Moderate",
    "Strong",
    "Very Strong",
)


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    label: str
    next_hint: str | None


def password_strength(password: str) -> PasswordStrength:
    """Score a password 0-5 and suggest the next unmet requirement."""

    has_upper = bool(_UPPER.search(password))
    has_digit = bool(_DIGIT.search(password))
    has_special = bool(_SPECIAL.search(password))

    score = sum(
        (
            len(password) >= 3,
            len(password) >= 6,
            has_upper,
            has_digit,
            has_special,
        )
    )

    # Hints are offered in this order, not in scoring order.
    criteria = (
        (len(password) >= 3, "At least 3 characters"),
        (has_upper, "Add an uppercase letter (A-Z)"),
        (has_digit, "Add a number (0-9)"),
        (has_special, "Add a special character (!@#$%)"),
        (len(password) >= 6, "At least 6 characters (stronger)"),
    )
    next_hint = next((hint for ok, hint in criteria if not ok), None)

    return PasswordStrength(score=score, label=LABELS[score], next_hint=next_hint)
