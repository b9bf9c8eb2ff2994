"""Utilities for validating stored payloads before instantiating models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, ClassVar, Mapping


class ModelValidationError(ValueError):
    """Raised when a payload does not satisfy a model's requirements."""

    def __init__(self, model: type[Any], errors: list[str]) -> None:
        self.model = model
        self.errors = list(errors)
        message = ", ".join(self.errors) if self.errors else "invalid payload"
        super().__init__(f"{model.__name__} validation failed: {message}")


@dataclass(frozen=True)
class FieldSpec:
    expected: Any
    description: str
    required: bool = True


def is_non_negative_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value >= 0


def is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _matches(value: Any, expected: Any) -> bool:
    if expected is Any:
        return True
    if isinstance(expected, tuple):
        return any(_matches(value, part) for part in expected)
    if isinstance(expected, type):
        if expected is int:
            return isinstance(value, int) and not isinstance(value, bool)
        if expected is float:
            return isinstance(value, Real) and not isinstance(value, bool)
        return isinstance(value, expected)
    if callable(expected):
        try:
            return bool(expected(value))
        except (TypeError, ValueError):
            return False
    return True


class ModelValidator:
    """Base class for model payload validators."""

    model: ClassVar[type[Any]]
    fields: ClassVar[Mapping[str, FieldSpec]]

    @classmethod
    def validate(cls, data: Any) -> dict[str, Any]:
        if not isinstance(data, Mapping):
            raise ModelValidationError(
                cls.model, ["Payload must be a mapping of field names to values"]
            )

        errors: list[str] = []
        normalized: dict[str, Any] = {}

        for name, spec in cls.fields.items():
            if name not in data:
                if spec.required:
                    errors.append(f"Missing required field '{name}' ({spec.description})")
                continue

            value = data[name]
            if not _matches(value, spec.expected):
                errors.append(
                    f"Field '{name}' expected {spec.description}, "
                    f"received {type(value).__name__}"
                )
                continue
            normalized[name] = value

        if errors:
            raise ModelValidationError(cls.model, errors)
        return normalized


__all__ = [
    "FieldSpec",
    "ModelValidationError",
    "ModelValidator",
    "is_non_negative_int",
    "is_non_negative_number",
]
