from publishelf_core.forms.fields import FieldBinding, FieldError, FormState, build_form
from publishelf_core.forms.strength import PasswordStrength, password_strength
from publishelf_core.forms.validations import FORMS, TRIM_FIELDS, known_forms, trim_payload

__all__ = [
    "FORMS",
    "TRIM_FIELDS",
    "FieldBinding",
    "FieldError",
    "FormState",
    "PasswordStrength",
    "build_form",
    "known_forms",
    "password_strength",
    "trim_payload",
]
