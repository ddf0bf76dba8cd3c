"""Argument evaluator: type-checks operator arguments and renders them for the wire."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from rulebricks.errors import TypeMismatchError
from rulebricks.forge.types import DynamicValueType
from rulebricks.forge.values import DynamicValue


def is_iso_date(value: str) -> bool:
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def _matches(value: Any, expected: DynamicValueType) -> bool:
    match expected:
        case DynamicValueType.STRING:
            return isinstance(value, str)
        case DynamicValueType.NUMBER:
            return isinstance(value, int | float) and not isinstance(value, bool)
        case DynamicValueType.BOOLEAN:
            return isinstance(value, bool)
        case DynamicValueType.DATE:
            if isinstance(value, date):
                return True
            return isinstance(value, str) and is_iso_date(value)
        case DynamicValueType.LIST | DynamicValueType.OBJECT:
            return isinstance(value, list | tuple | dict)
    return False


def render(value: Any) -> Any:
    """Render a value for the wire, walking nested containers."""
    if isinstance(value, Argument):
        return value.render()
    if isinstance(value, DynamicValue):
        return value.to_dict()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, list | tuple):
        return [render(item) for item in value]
    if isinstance(value, dict):
        return {key: render(item) for key, item in value.items()}
    return value


class Argument:
    """One operator argument, validated against its expected type on construction.

    ``expected_type=None`` means the position is generic and accepts any value.
    """

    def __init__(self, value: Any, expected_type: DynamicValueType | None) -> None:
        self.value = value
        self.expected_type = expected_type
        self._validate()

    @property
    def is_dynamic(self) -> bool:
        return isinstance(self.value, DynamicValue)

    def _validate(self) -> None:
        if self.expected_type is None:
            return
        if isinstance(self.value, DynamicValue):
            if self.value.value_type != self.expected_type:
                raise TypeMismatchError(
                    f"Dynamic value '{self.value.name}' has type {self.value.value_type}, "
                    f"but {self.expected_type} was expected"
                )
            return
        if self.expected_type == DynamicValueType.FUNCTION:
            raise TypeMismatchError("Function arguments cannot be supplied as literals")
        if not _matches(self.value, self.expected_type):
            raise TypeMismatchError(
                f"Value {self.value!r} has type {type(self.value).__name__}, "
                f"but {self.expected_type} was expected"
            )

    def render(self) -> Any:
        return render(self.value)

    def to_dict(self) -> Any:
        return self.render()

    def __str__(self) -> str:
        if isinstance(self.value, DynamicValue):
            return f"<{self.value.name.upper()}>"
        return str(self.value)

    def __repr__(self) -> str:
        return f"Argument({self.value!r}, {self.expected_type!r})"
