"""Validator contract and helpers for building validators."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import TypeAdapter, ValidationError

SUCCESS_MARKER = "Success"
MAX_REPORTED_ERRORS = 5


@dataclass(frozen=True)
class Validation:
    """Pass/fail verdict of one validator with a human-readable explanation."""

    ok: bool
    explanation: str

    @classmethod
    def passed(cls, explanation: str = f"{SUCCESS_MARKER}!") -> Validation:
        return cls(ok=True, explanation=explanation)

    @classmethod
    def failed(cls, explanation: str) -> Validation:
        return cls(ok=False, explanation=explanation)

    @classmethod
    def from_explanation(cls, explanation: str) -> Validation:
        """Read a bare explanation string; it passes when it starts with the success marker."""

        return cls(ok=explanation.startswith(SUCCESS_MARKER), explanation=explanation)


Validator: TypeAlias = Callable[[Any], Validation | str]


def run_validator(validator: Validator, value: Any) -> Validation:
    """Call a validator and normalize its return value."""

    verdict = validator(value)
    if isinstance(verdict, Validation):
        return verdict
    if isinstance(verdict, str):
        return Validation.from_explanation(verdict)
    raise TypeError(f"validator returned {type(verdict).__name__}, expected Validation or str")


def describe_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into one line."""

    details = error.errors(include_url=False)
    parts: list[str] = []
    for item in details[:MAX_REPORTED_ERRORS]:
        location = ".".join(str(part) for part in item["loc"]) or "value"
        parts.append(f"{location}: {item['msg']}")
    if len(details) > MAX_REPORTED_ERRORS:
        parts.append(f"... {len(details) - MAX_REPORTED_ERRORS} more")
    return "; ".join(parts)


def type_validator(tp: Any) -> Validator:
    """Validate values against a type or pydantic model."""

    adapter = TypeAdapter(tp)

    def validate(value: Any) -> Validation:
        try:
            adapter.validate_python(value)
        except ValidationError as exc:
            return Validation.failed(describe_validation_error(exc))
        return Validation.passed()

    return validate


def predicate_validator(predicate: Callable[[Any], Any], description: str) -> Validator:
    """Pass when ``predicate(value)`` is truthy; otherwise explain with ``description``."""

    def validate(value: Any) -> Validation:
        if predicate(value):
            return Validation.passed()
        return Validation.failed(f"{value!r} failed: {description}")

    return validate


def accept_all(value: Any) -> Validation:
    _ = value
    return Validation.passed()
