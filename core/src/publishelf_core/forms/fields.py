from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

# A rule inspects a field value (and the whole form for cross-field checks)
# and returns an error message, or None when the value passes.
Rule = Callable[[Any, Mapping[str, Any]], str | None]


@dataclass(frozen=True)
class FieldError:
    message: str


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class RequiredRule:
    message: str

    def __call__(self, value: Any, values: Mapping[str, Any]) -> str | None:
        return self.message if _is_empty(value) else None


def required(message: str) -> RequiredRule:
    return RequiredRule(message)


def min_length(length: int, message: str) -> Rule:
    def _rule(value: Any, values: Mapping[str, Any]) -> str | None:
        return message if len(str(value)) < length else None

    return _rule


def pattern(regex: str | re.Pattern[str], message: str) -> Rule:
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def _rule(value: Any, values: Mapping[str, Any]) -> str | None:
        return None if compiled.search(str(value)) else message

    return _rule


def check(predicate: Callable[[Any], bool], message: str) -> Rule:
    def _rule(value: Any, values: Mapping[str, Any]) -> str | None:
        return None if predicate(value) else message

    return _rule


def matches_field(other: str, message: str) -> Rule:
    def _rule(value: Any, values: Mapping[str, Any]) -> str | None:
        return None if value == values.get(other) else message

    return _rule


@dataclass(frozen=True)
class FieldBinding:
    """One form field: its name, label and validation rules.

    ``revalidates`` names sibling fields that must be checked again when this
    field loses focus (e.g. password and its confirmation).
    """

    name: str
    label: str
    rules: tuple[Rule, ...] = ()
    revalidates: tuple[str, ...] = ()
    input_type: str = "text"

    @property
    def is_required(self) -> bool:
        return any(isinstance(r, RequiredRule) for r in self.rules)

    def validate(self, value: Any, values: Mapping[str, Any] | None = None) -> FieldError | None:
        form_values = values or {}

        required_rules = [r for r in self.rules if isinstance(r, RequiredRule)]
        for rule in required_rules:
            message = rule(value, form_values)
            if message:
                return FieldError(message)

        if _is_empty(value):
            return None

        for rule in self.rules:
            if isinstance(rule, RequiredRule):
                continue
            message = rule(value, form_values)
            if message:
                return FieldError(message)
        return None

    def on_blur(self, form: FormState) -> dict[str, FieldError | None]:
        return form.blur(self.name)


@dataclass
class FormState:
    """Shared state the field bindings register against."""

    bindings: dict[str, FieldBinding] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, FieldError] = field(default_factory=dict)

    def register(self, binding: FieldBinding) -> FieldBinding:
        if binding.name in self.bindings:
            raise ValueError(f"Field already registered: {binding.name}")
        self.bindings[binding.name] = binding
        return binding

    def set_value(self, name: str, value: Any) -> None:
        self.values[name] = value

    def load(self, data: Mapping[str, Any]) -> None:
        for name in self.bindings:
            if name in data:
                self.values[name] = data[name]

    def trigger(self, name: str) -> FieldError | None:
        binding = self.bindings.get(name)
        if binding is None:
            raise KeyError(name)

        error = binding.validate(self.values.get(name), self.values)
        if error is None:
            self.errors.pop(name, None)
        else:
            self.errors[name] = error
        return error

    def blur(self, name: str) -> dict[str, FieldError | None]:
        binding = self.bindings.get(name)
        if binding is None:
            raise KeyError(name)

        results = {name: self.trigger(name)}
        for sibling in binding.revalidates:
            if sibling in self.bindings:
                results[sibling] = self.trigger(sibling)
        return results

    def validate_all(self) -> dict[str, FieldError]:
        for name in self.bindings:
            self.trigger(name)
        return dict(self.errors)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_payload(self) -> dict[str, dict[str, str]]:
        return {name: {"message": err.message} for name, err in self.errors.items()}


def build_form(bindings: Iterable[FieldBinding]) -> FormState:
    form = FormState()
    for binding in bindings:
        form.register(binding)
    return form
