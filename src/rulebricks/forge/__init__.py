"""Forge: build decision rules in code and serialize them for the rules engine."""

from rulebricks.forge.arguments import Argument
from rulebricks.forge.condition import Condition, ConditionRecord, ConditionSettings
from rulebricks.forge.operators import (
    FIELD_TYPES,
    BooleanField,
    DateField,
    Field,
    ListField,
    NumberField,
    OpaqueField,
    StringField,
)
from rulebricks.forge.rule import Rule
from rulebricks.forge.suite import RuleTest
from rulebricks.forge.types import (
    DynamicValueType,
    OperatorArg,
    OperatorDef,
    OperatorResult,
    RuleSettings,
    RuleType,
)
from rulebricks.forge.values import DynamicValue, DynamicValues

__all__ = [
    "FIELD_TYPES",
    "Argument",
    "BooleanField",
    "Condition",
    "ConditionRecord",
    "ConditionSettings",
    "DateField",
    "DynamicValue",
    "DynamicValueType",
    "DynamicValues",
    "Field",
    "ListField",
    "NumberField",
    "OpaqueField",
    "OperatorArg",
    "OperatorDef",
    "OperatorResult",
    "Rule",
    "RuleSettings",
    "RuleTest",
    "RuleType",
    "StringField",
]
