"""Type tags, operator descriptors and rule settings for the Forge model."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class RuleType(StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    DATE = "date"
    LIST = "list"
    FUNCTION = "function"


class DynamicValueType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    LIST = "list"
    FUNCTION = "function"
    OBJECT = "object"


# Operator arg type names as they appear in the catalogue; "generic" accepts anything
ARG_TYPES: dict[str, DynamicValueType | None] = {
    "string": DynamicValueType.STRING,
    "number": DynamicValueType.NUMBER,
    "boolean": DynamicValueType.BOOLEAN,
    "date": DynamicValueType.DATE,
    "list": DynamicValueType.LIST,
    "object": DynamicValueType.OBJECT,
    "generic": None,
}


class OperatorResult(NamedTuple):
    """An operator application ready to be placed in a condition."""

    operator: str
    args: list[Any]


class OperatorArg(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    description: str
    placeholder: str | None = None
    # Element type for list-typed args; not part of the wire catalogue
    items: str | None = Field(default=None, exclude=True)


class OperatorDef(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    args: tuple[OperatorArg, ...] = ()
    description: str | None = None
    skip_typecheck: bool = Field(default=False, alias="skipTypecheck")

    @property
    def arity(self) -> int:
        return len(self.args)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RuleSettings(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    testing: bool = False
    schema_validation: bool = Field(default=False, alias="schemaValidation")
    require_all_properties: bool = Field(default=False, alias="requireAllProperties")
    schema_locked: bool = Field(default=False, alias="schemaLocked")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
