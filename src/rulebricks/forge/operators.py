"""Typed fields and their operator catalogues.

Catalogues are plain data (``OperatorDef``). Checks that go beyond argument
types live in ``OPERATOR_VALIDATORS``, keyed by ``(RuleType, operator key)``,
so the catalogue itself stays serializable.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from datetime import UTC, date, datetime, time
from typing import Any, ClassVar

from rulebricks.errors import TypeMismatchError, ValidationError
from rulebricks.forge.arguments import Argument, render
from rulebricks.forge.types import (
    ARG_TYPES,
    DynamicValueType,
    OperatorArg,
    OperatorDef,
    OperatorResult,
    RuleType,
)
from rulebricks.forge.values import DynamicValue


def _arg(
    name: str,
    type: str,
    description: str,
    *,
    placeholder: str | None = None,
    items: str | None = None,
) -> OperatorArg:
    return OperatorArg(
        name=name, type=type, description=description, placeholder=placeholder, items=items
    )


def _op(
    name: str,
    *args: OperatorArg,
    description: str | None = None,
    skip_typecheck: bool = False,
) -> OperatorDef:
    return OperatorDef(name=name, args=args, description=description, skip_typecheck=skip_typecheck)


def _match_any(kind: str) -> OperatorDef:
    return _op("any", description=f"Match any {kind} value", skip_typecheck=True)


BOOLEAN_OPERATORS: dict[str, OperatorDef] = {
    "any": _match_any("boolean"),
    "is_true": _op("is true", description="Check if value is true"),
    "is_false": _op("is false", description="Check if value is false"),
}

NUMBER_OPERATORS: dict[str, OperatorDef] = {
    "any": _match_any("numeric"),
    "equals": _op("equals", _arg("value", "number", "Number that value must equal")),
    "does_not_equal": _op(
        "does not equal", _arg("value", "number", "Number that value must not equal")
    ),
    "greater_than": _op(
        "greater than", _arg("bound", "number", "Number that value must be greater than")
    ),
    "less_than": _op("less than", _arg("bound", "number", "Number that value must be less than")),
    "greater_than_or_equal": _op(
        "greater than or equal to",
        _arg("bound", "number", "Number that value must be greater than or equal to"),
    ),
    "less_than_or_equal": _op(
        "less than or equal to",
        _arg("bound", "number", "Number that value must be less than or equal to"),
    ),
    "between": _op(
        "between",
        _arg(
            "start",
            "number",
            "Number that value must be greater than or equal to",
            placeholder="Start",
        ),
        _arg("end", "number", "Number that value must be less than or equal to", placeholder="End"),
    ),
    "not_between": _op(
        "not between",
        _arg("start", "number", "Number that value must be less than", placeholder="Start"),
        _arg("end", "number", "Number that value must be greater than", placeholder="End"),
    ),
    "is_even": _op("is even", description="Check if value is even"),
    "is_odd": _op("is odd", description="Check if value is odd"),
    "is_positive": _op("is positive", description="Check if value is greater than zero"),
    "is_negative": _op("is negative", description="Check if value is less than zero"),
    "is_zero": _op("is zero", description="Check if value equals zero"),
    "is_not_zero": _op("is not zero", description="Check if value does not equal zero"),
    "is_multiple_of": _op(
        "is a multiple of", _arg("multiple", "number", "Number that value must be a multiple of")
    ),
    "is_not_multiple_of": _op(
        "is not a multiple of",
        _arg("multiple", "number", "Number that value must not be a multiple of"),
    ),
    "is_power_of": _op("is a power of", _arg("base", "number", "The base number")),
}


def _days(description: str) -> OperatorArg:
    return _arg("days", "number", description)


DATE_OPERATORS: dict[str, OperatorDef] = {
    "any": _match_any("date"),
    "is_past": _op("is in the past", description="Date is in the past"),
    "is_future": _op("is in the future", description="Date is in the future"),
    "days_ago": _op("days ago", _days("Number of days ago that the date is equal to")),
    "less_than_days_ago": _op(
        "is less than N days ago",
        _days("Number of days ago that the date is less than or equal to"),
    ),
    "more_than_days_ago": _op(
        "is more than N days ago",
        _days("Number of days ago that the date is more than or equal to"),
    ),
    "days_from_now": _op(
        "days from now", _days("Number of days from now that the date is equal to")
    ),
    "less_than_days_from_now": _op(
        "is less than N days from now",
        _days("Number of days from now that the date is less than or equal to"),
    ),
    "more_than_days_from_now": _op(
        "is more than N days from now",
        _days("Number of days from now that the date is more than or equal to"),
    ),
    "is_today": _op("is today", description="Date is today"),
    "is_this_week": _op("is this week", description="Date is in the current week"),
    "is_this_month": _op("is this month", description="Date is in the current month"),
    "is_this_year": _op("is this year", description="Date is in the current year"),
    "is_next_week": _op("is next week", description="Date is in the next week"),
    "is_next_month": _op("is next month", description="Date is in the next month"),
    "is_next_year": _op("is next year", description="Date is in the next year"),
    "is_last_week": _op("is last week", description="Date is in the previous week"),
    "is_last_month": _op("is last month", description="Date is in the previous month"),
    "is_last_year": _op("is last year", description="Date is in the previous year"),
    "after": _op("after", _arg("date", "date", "Date that value must be after")),
    "on_or_after": _op("on or after", _arg("date", "date", "Date that value must be on or after")),
    "before": _op("before", _arg("date", "date", "Date that value must be before")),
    "on_or_before": _op(
        "on or before", _arg("date", "date", "Date that value must be on or before")
    ),
    "between": _op(
        "between",
        _arg("start", "date", "Date that value must be after", placeholder="From"),
        _arg("end", "date", "Date that value must be before", placeholder="To"),
    ),
    "not_between": _op(
        "not between",
        _arg("start", "date", "Date that value must be before", placeholder="From"),
        _arg("end", "date", "Date that value must be after", placeholder="To"),
    ),
}

STRING_OPERATORS: dict[str, OperatorDef] = {
    "any": _match_any("string"),
    "contains": _op(
        "contains", _arg("value", "string", "The value to search for within the string")
    ),
    "does_not_contain": _op(
        "does not contain", _arg("value", "string", "The value to search for within the string")
    ),
    "equals": _op("equals", _arg("value", "string", "The value to compare against")),
    "does_not_equal": _op("does not equal", _arg("value", "string", "The value to compare against")),
    "is_empty": _op("is empty", description="Check if string is empty"),
    "is_not_empty": _op("is not empty", description="Check if string is not empty"),
    "starts_with": _op(
        "starts with", _arg("value", "string", "The value the string should start with")
    ),
    "ends_with": _op("ends with", _arg("value", "string", "The value the string should end with")),
    "is_included_in": _op(
        "is included in",
        _arg("value", "list", "A list of values the string should be in", items="string"),
    ),
    "is_not_included_in": _op(
        "is not included in",
        _arg("value", "list", "A list of values the string should not be in", items="string"),
    ),
    "matches_regex": _op(
        "matches RegEx", _arg("regex", "string", "The regex the string should match")
    ),
    "does_not_match_regex": _op(
        "does not match RegEx", _arg("regex", "string", "The regex the string should not match")
    ),
    "is_valid_email": _op(
        "is a valid email address", description="Check if string is a valid email address"
    ),
    "is_not_valid_email": _op(
        "is not a valid email address", description="Check if string is not a valid email address"
    ),
    "is_valid_url": _op("is a valid URL", description="Check if string is a valid URL"),
    "is_not_valid_url": _op("is not a valid URL", description="Check if string is not a valid URL"),
    "is_valid_ip": _op("is a valid IP address", description="Check if string is a valid IP address"),
    "is_not_valid_ip": _op(
        "is not a valid IP address", description="Check if string is not a valid IP address"
    ),
    "is_uppercase": _op("is uppercase", description="Check if string is all uppercase"),
    "is_lowercase": _op("is lowercase", description="Check if string is all lowercase"),
    "is_numeric": _op(
        "is numeric", description="Check if string contains only numeric characters"
    ),
    "contains_only_digits": _op(
        "contains only digits", description="Check if string contains only digits"
    ),
    "contains_only_letters": _op(
        "contains only letters", description="Check if string contains only letters"
    ),
    "contains_only_digits_and_letters": _op(
        "contains only digits and letters",
        description="Check if string contains only digits and letters",
    ),
}


def _length(description: str) -> OperatorArg:
    return _arg("length", "number", description)


LIST_OPERATORS: dict[str, OperatorDef] = {
    "any": _match_any("list"),
    "contains": _op(
        "contains", _arg("value", "generic", "Value that must be contained in the list")
    ),
    "is_empty": _op("is empty", description="Check if list is empty"),
    "is_not_empty": _op("is not empty", description="Check if list is not empty"),
    "is_of_length": _op("is of length", _length("Length that the list must be")),
    "is_not_of_length": _op("is not of length", _length("Length that the list must not be")),
    "is_longer_than": _op("is longer than", _length("Length that the list must be longer than")),
    "is_shorter_than": _op(
        "is shorter than", _length("Length that the list must be shorter than")
    ),
    "contains_all_of": _op(
        "contains all of",
        _arg(
            "values",
            "list",
            "List of values that must be contained in the list",
            items="generic",
        ),
    ),
    "contains_any_of": _op(
        "contains any of",
        _arg(
            "values",
            "list",
            "List of values that might be contained in the list",
            items="generic",
        ),
    ),
    "contains_none_of": _op(
        "contains none of",
        _arg(
            "values",
            "list",
            "List of values that must not be contained in the list",
            items="generic",
        ),
    ),
    "does_not_contain": _op(
        "does not contain", _arg("value", "generic", "Value that must not be contained in the list")
    ),
    "is_equal_to": _op(
        "is equal to",
        _arg("list", "list", "Value that the list must be equal to", items="generic"),
    ),
    "is_not_equal_to": _op(
        "is not equal to",
        _arg("list", "list", "Value that the list must not be equal to", items="generic"),
    ),
    "contains_duplicates": _op(
        "contains duplicates", description="Check if list contains duplicate values"
    ),
    "does_not_contain_duplicates": _op(
        "does not contain duplicates",
        description="Check if list does not contain duplicate values",
    ),
    "contains_object_with_key_value": _op(
        "contains object with key & value",
        _arg("key", "string", "Key of any object contained in the list"),
        _arg("value", "generic", "Value that the key must be equal to"),
    ),
    "has_unique_elements": _op(
        "has unique elements", description="Check if all elements in the list are unique"
    ),
    "is_sublist_of": _op(
        "is a sublist of",
        _arg("superlist", "list", "List that should contain this list", items="generic"),
    ),
    "is_superlist_of": _op(
        "is a superlist of",
        _arg("sublist", "list", "List that should be contained in this list", items="generic"),
    ),
}


# --- Validation table ---

Validator = Callable[[Sequence[Any]], bool]


def _as_datetime(value: date | str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    return datetime.fromisoformat(value)


def _ascending(args: Sequence[Any]) -> bool:
    return args[0] < args[1]


def _ascending_dates(args: Sequence[Any]) -> bool:
    start, end = _as_datetime(args[0]), _as_datetime(args[1])
    if (start.tzinfo is None) != (end.tzinfo is None):
        start, end = start.replace(tzinfo=None), end.replace(tzinfo=None)
    return start < end


def _positive(args: Sequence[Any]) -> bool:
    return args[0] > 0


def _non_empty(args: Sequence[Any]) -> bool:
    return len(args[0]) > 0


OPERATOR_VALIDATORS: dict[tuple[RuleType, str], tuple[Validator, str]] = {
    (RuleType.NUMBER, "between"): (
        _ascending,
        "Invalid range for between: start ({0}) must be less than end ({1})",
    ),
    (RuleType.NUMBER, "not_between"): (
        _ascending,
        "Invalid range for not between: start ({0}) must be less than end ({1})",
    ),
    (RuleType.NUMBER, "is_power_of"): (
        _positive,
        "Invalid base for is power of: {0}. Base must be positive.",
    ),
    (RuleType.DATE, "between"): (
        _ascending_dates,
        "Invalid range for between: start ({0}) must be before end ({1})",
    ),
    (RuleType.DATE, "not_between"): (
        _ascending_dates,
        "Invalid range for not between: start ({0}) must be before end ({1})",
    ),
    (RuleType.STRING, "contains"): (_non_empty, "Invalid value for contains: {0!r}"),
    (RuleType.STRING, "does_not_contain"): (
        _non_empty,
        "Invalid value for does not contain: {0!r}",
    ),
    (RuleType.STRING, "starts_with"): (_non_empty, "Invalid value for starts with: {0!r}"),
    (RuleType.STRING, "ends_with"): (_non_empty, "Invalid value for ends with: {0!r}"),
    (RuleType.STRING, "matches_regex"): (_non_empty, "Invalid regex pattern: {0!r}"),
    (RuleType.STRING, "does_not_match_regex"): (_non_empty, "Invalid regex pattern: {0!r}"),
    (RuleType.STRING, "is_included_in"): (_non_empty, "List must not be empty"),
    (RuleType.STRING, "is_not_included_in"): (_non_empty, "List must not be empty"),
}


def title_case(text: str) -> str:
    """'address.city' -> 'Address City'."""
    return re.sub(r"[._\-\s]+", " ", text).strip().title()


# --- Fields ---


class Field:
    """A typed slot in a rule's request or response schema."""

    type: ClassVar[RuleType | None]
    value_type: ClassVar[DynamicValueType | None]
    operators: ClassVar[dict[str, OperatorDef]]

    def __init__(
        self,
        name: str,
        description: str = "",
        default_value: Any = None,
        *,
        key: str | None = None,
        display_name: str | None = None,
        wire_type: str | None = None,
    ) -> None:
        self.name = name
        self.key = key or name
        self.description = description
        self.display_name = display_name or title_case(name)
        # Type tag written to the schema; rehydrated fields keep the stored one ("array")
        self.wire_type = wire_type or str(self.type)
        self.default_value = self._initial_default() if default_value is None else default_value
        Argument(self.default_value, self.value_type)

    def _initial_default(self) -> Any:
        raise NotImplementedError

    def render_default(self) -> Any:
        return render(self.default_value)

    def apply(self, op_key: str, *values: Any) -> OperatorResult:
        """Type-check, validate and render one operator application."""
        op = self.operators.get(op_key)
        if op is None:
            raise ValidationError(
                f"Unknown operator '{op_key}' for {self.wire_type} field '{self.name}'"
            )
        if len(values) != op.arity:
            raise ValidationError(
                f"Operator '{op.name}' expects {op.arity} argument(s), got {len(values)}"
            )

        if op.skip_typecheck:
            return OperatorResult(op.name, [render(v) for v in values])

        rendered = [self._evaluate(spec, value) for spec, value in zip(op.args, values)]

        if not any(isinstance(v, DynamicValue) for v in values):
            check = OPERATOR_VALIDATORS.get((self.type, op_key))
            if check is not None:
                predicate, message = check
                if not predicate(values):
                    raise ValidationError(message.format(*values))

        return OperatorResult(op.name, rendered)

    def _evaluate(self, spec: OperatorArg, value: Any) -> Any:
        argument = Argument(value, ARG_TYPES[spec.type])
        if spec.items is None or argument.is_dynamic:
            return argument.render()
        if not isinstance(value, list | tuple):
            raise TypeMismatchError(
                f"Value {value!r} has type {type(value).__name__}, "
                f"but a list of {spec.items} values was expected"
            )
        item_type = ARG_TYPES[spec.items]
        return [Argument(item, item_type).render() for item in value]

    def any(self) -> OperatorResult:
        return self.apply("any")

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.display_name,
            "key": self.key,
            "type": self.wire_type,
            "operators": {key: op.to_dict() for key, op in self.operators.items()},
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, key={self.key!r})"


class BooleanField(Field):
    type = RuleType.BOOLEAN
    value_type = DynamicValueType.BOOLEAN
    operators = BOOLEAN_OPERATORS

    def _initial_default(self) -> bool:
        return False

    def is_true(self) -> OperatorResult:
        return self.apply("is_true")

    def is_false(self) -> OperatorResult:
        return self.apply("is_false")

    def equals(self, value: bool) -> OperatorResult:
        if isinstance(value, DynamicValue):
            raise ValidationError(
                f"Boolean field '{self.name}' cannot be compared to dynamic value '{value.name}'"
            )
        Argument(value, DynamicValueType.BOOLEAN)
        return self.is_true() if value else self.is_false()


class NumberField(Field):
    type = RuleType.NUMBER
    value_type = DynamicValueType.NUMBER
    operators = NUMBER_OPERATORS

    def _initial_default(self) -> int:
        return 0

    def equals(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("equals", value)

    def not_equals(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("does_not_equal", value)

    def greater_than(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("greater_than", value)

    def less_than(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("less_than", value)

    def greater_than_or_equal(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("greater_than_or_equal", value)

    def less_than_or_equal(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("less_than_or_equal", value)

    def between(self, start: float | DynamicValue, end: float | DynamicValue) -> OperatorResult:
        return self.apply("between", start, end)

    def not_between(self, start: float | DynamicValue, end: float | DynamicValue) -> OperatorResult:
        return self.apply("not_between", start, end)

    def is_even(self) -> OperatorResult:
        return self.apply("is_even")

    def is_odd(self) -> OperatorResult:
        return self.apply("is_odd")

    def is_positive(self) -> OperatorResult:
        return self.apply("is_positive")

    def is_negative(self) -> OperatorResult:
        return self.apply("is_negative")

    def is_zero(self) -> OperatorResult:
        return self.apply("is_zero")

    def is_not_zero(self) -> OperatorResult:
        return self.apply("is_not_zero")

    def is_multiple_of(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("is_multiple_of", value)

    def is_not_multiple_of(self, value: float | DynamicValue) -> OperatorResult:
        return self.apply("is_not_multiple_of", value)

    def is_power_of(self, base: float | DynamicValue) -> OperatorResult:
        return self.apply("is_power_of", base)


DateArg = date | str | DynamicValue


class DateField(Field):
    type = RuleType.DATE
    value_type = DynamicValueType.DATE
    operators = DATE_OPERATORS

    def _initial_default(self) -> datetime:
        return datetime.now(UTC)

    def is_past(self) -> OperatorResult:
        return self.apply("is_past")

    def is_future(self) -> OperatorResult:
        return self.apply("is_future")

    def days_ago(self, days: int | DynamicValue) -> OperatorResult:
        return self.apply("days_ago", days)

    def less_than_days_ago(self, days: int | DynamicValue) -> OperatorResult:
        return self.apply("less_than_days_ago", days)

    def more_than_days_ago(self, days: int | DynamicValue) -> OperatorResult:
        return self.apply("more_than_days_ago", days)

    def days_from_now(self, days: int | DynamicValue) -> OperatorResult:
        return self.apply("days_from_now", days)

    def less_than_days_from_now(self, days: int | DynamicValue) -> OperatorResult:
        return self.apply("less_than_days_from_now", days)

    def more_than_days_from_now(self, days: int | DynamicValue) -> OperatorResult:
        return self.apply("more_than_days_from_now", days)

    def is_today(self) -> OperatorResult:
        return self.apply("is_today")

    def is_this_week(self) -> OperatorResult:
        return self.apply("is_this_week")

    def is_this_month(self) -> OperatorResult:
        return self.apply("is_this_month")

    def is_this_year(self) -> OperatorResult:
        return self.apply("is_this_year")

    def is_next_week(self) -> OperatorResult:
        return self.apply("is_next_week")

    def is_next_month(self) -> OperatorResult:
        return self.apply("is_next_month")

    def is_next_year(self) -> OperatorResult:
        return self.apply("is_next_year")

    def is_last_week(self) -> OperatorResult:
        return self.apply("is_last_week")

    def is_last_month(self) -> OperatorResult:
        return self.apply("is_last_month")

    def is_last_year(self) -> OperatorResult:
        return self.apply("is_last_year")

    def after(self, value: DateArg) -> OperatorResult:
        return self.apply("after", value)

    def on_or_after(self, value: DateArg) -> OperatorResult:
        return self.apply("on_or_after", value)

    def before(self, value: DateArg) -> OperatorResult:
        return self.apply("before", value)

    def on_or_before(self, value: DateArg) -> OperatorResult:
        return self.apply("on_or_before", value)

    def between(self, start: DateArg, end: DateArg) -> OperatorResult:
        return self.apply("between", start, end)

    def not_between(self, start: DateArg, end: DateArg) -> OperatorResult:
        return self.apply("not_between", start, end)


class StringField(Field):
    type = RuleType.STRING
    value_type = DynamicValueType.STRING
    operators = STRING_OPERATORS

    def _initial_default(self) -> str:
        return ""

    def contains(self, value: str | DynamicValue) -> OperatorResult:
        return self.apply("contains", value)

    def not_contains(self, value: str | DynamicValue) -> OperatorResult:
        return self.apply("does_not_contain", value)

    def equals(self, value: str | DynamicValue) -> OperatorResult:
        return self.apply("equals", value)

    def not_equals(self, value: str | DynamicValue) -> OperatorResult:
        return self.apply("does_not_equal", value)

    def is_empty(self) -> OperatorResult:
        return self.apply("is_empty")

    def is_not_empty(self) -> OperatorResult:
        return self.apply("is_not_empty")

    def starts_with(self, value: str | DynamicValue) -> OperatorResult:
        return self.apply("starts_with", value)

    def ends_with(self, value: str | DynamicValue) -> OperatorResult:
        return self.apply("ends_with", value)

    def is_included_in(self, values: Sequence[str] | DynamicValue) -> OperatorResult:
        return self.apply("is_included_in", values)

    def is_not_included_in(self, values: Sequence[str] | DynamicValue) -> OperatorResult:
        return self.apply("is_not_included_in", values)

    def matches_regex(self, pattern: str | DynamicValue) -> OperatorResult:
        return self.apply("matches_regex", pattern)

    def not_matches_regex(self, pattern: str | DynamicValue) -> OperatorResult:
        return self.apply("does_not_match_regex", pattern)

    def is_email(self) -> OperatorResult:
        return self.apply("is_valid_email")

    def is_not_email(self) -> OperatorResult:
        return self.apply("is_not_valid_email")

    def is_url(self) -> OperatorResult:
        return self.apply("is_valid_url")

    def is_not_url(self) -> OperatorResult:
        return self.apply("is_not_valid_url")

    def is_ip(self) -> OperatorResult:
        return self.apply("is_valid_ip")

    def is_not_ip(self) -> OperatorResult:
        return self.apply("is_not_valid_ip")

    def is_uppercase(self) -> OperatorResult:
        return self.apply("is_uppercase")

    def is_lowercase(self) -> OperatorResult:
        return self.apply("is_lowercase")

    def is_numeric(self) -> OperatorResult:
        return self.apply("is_numeric")

    def contains_only_digits(self) -> OperatorResult:
        return self.apply("contains_only_digits")

    def contains_only_letters(self) -> OperatorResult:
        return self.apply("contains_only_letters")

    def contains_only_digits_and_letters(self) -> OperatorResult:
        return self.apply("contains_only_digits_and_letters")


class ListField(Field):
    type = RuleType.LIST
    value_type = DynamicValueType.LIST
    operators = LIST_OPERATORS

    def _initial_default(self) -> list[Any]:
        return []

    def contains(self, value: Any) -> OperatorResult:
        return self.apply("contains", value)

    def not_contains(self, value: Any) -> OperatorResult:
        return self.apply("does_not_contain", value)

    def is_empty(self) -> OperatorResult:
        return self.apply("is_empty")

    def is_not_empty(self) -> OperatorResult:
        return self.apply("is_not_empty")

    def length_equals(self, length: int | DynamicValue) -> OperatorResult:
        return self.apply("is_of_length", length)

    def length_not_equals(self, length: int | DynamicValue) -> OperatorResult:
        return self.apply("is_not_of_length", length)

    def longer_than(self, length: int | DynamicValue) -> OperatorResult:
        return self.apply("is_longer_than", length)

    def shorter_than(self, length: int | DynamicValue) -> OperatorResult:
        return self.apply("is_shorter_than", length)

    def contains_all(self, values: Sequence[Any] | DynamicValue) -> OperatorResult:
        return self.apply("contains_all_of", values)

    def contains_any(self, values: Sequence[Any] | DynamicValue) -> OperatorResult:
        return self.apply("contains_any_of", values)

    def contains_none(self, values: Sequence[Any] | DynamicValue) -> OperatorResult:
        return self.apply("contains_none_of", values)

    def equals(self, other: Sequence[Any] | DynamicValue) -> OperatorResult:
        return self.apply("is_equal_to", other)

    def not_equals(self, other: Sequence[Any] | DynamicValue) -> OperatorResult:
        return self.apply("is_not_equal_to", other)

    def has_duplicates(self) -> OperatorResult:
        return self.apply("contains_duplicates")

    def no_duplicates(self) -> OperatorResult:
        return self.apply("does_not_contain_duplicates")

    def contains_object_with_key_value(self, key: str | DynamicValue, value: Any) -> OperatorResult:
        return self.apply("contains_object_with_key_value", key, value)

    def has_unique_elements(self) -> OperatorResult:
        return self.apply("has_unique_elements")

    def is_sublist_of(self, superlist: Sequence[Any] | DynamicValue) -> OperatorResult:
        return self.apply("is_sublist_of", superlist)

    def is_superlist_of(self, sublist: Sequence[Any] | DynamicValue) -> OperatorResult:
        return self.apply("is_superlist_of", sublist)


class OpaqueField(Field):
    """A stored schema field whose type has no operator catalogue here ("object").

    Only ``any`` applies. The stored type tag and default are written back as-is.
    """

    type = None
    value_type = None
    operators = {"any": _op("any", description="Match any value", skip_typecheck=True)}

    def __init__(
        self,
        name: str,
        wire_type: str,
        description: str = "",
        default_value: Any = None,
        *,
        key: str | None = None,
        display_name: str | None = None,
    ) -> None:
        super().__init__(
            name,
            description,
            default_value,
            key=key,
            display_name=display_name,
            wire_type=wire_type,
        )

    def _initial_default(self) -> None:
        return None


FIELD_TYPES: dict[RuleType, type[Field]] = {
    RuleType.BOOLEAN: BooleanField,
    RuleType.NUMBER: NumberField,
    RuleType.STRING: StringField,
    RuleType.DATE: DateField,
    RuleType.LIST: ListField,
}
