"""Conditions: one row of a rule's decision table.

A ``Condition`` is a handle over a ``ConditionRecord``. The record object is the
one stored in the rule's condition list once ``then`` attaches it, so edits made
through the handle before or after attachment land in the same place. The
handle never caches its position; ``index`` is looked up on demand, which keeps
it correct after other conditions are deleted or moved.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from rulebricks.forge.types import OperatorResult

if TYPE_CHECKING:
    from rulebricks.forge.rule import Rule


class Predicate(BaseModel):
    model_config = ConfigDict(extra="allow")

    op: str
    args: list[Any] = Field(default_factory=list)


class Assignment(BaseModel):
    model_config = ConfigDict(extra="allow")

    value: Any = None


class ConditionSettings(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    enabled: bool = True
    group_id: str | None = Field(default=None, alias="groupId")
    priority: int = 0
    schedule: list[Any] = Field(default_factory=list)
    match_any: bool = Field(default=False, alias="or")


class ConditionRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    request: dict[str, Predicate] = Field(default_factory=dict)
    response: dict[str, Assignment] = Field(default_factory=dict)
    settings: ConditionSettings = Field(default_factory=ConditionSettings)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Condition:
    def __init__(self, rule: Rule, record: ConditionRecord | None = None) -> None:
        self._rule = rule
        self._record = record if record is not None else ConditionRecord()

    @property
    def record(self) -> ConditionRecord:
        return self._record

    @property
    def index(self) -> int | None:
        """Current position in the rule's condition list, or None if not attached."""
        return self._rule._position_of(self._record)

    @property
    def attached(self) -> bool:
        return self.index is not None

    def set_request(self, predicates: Mapping[str, OperatorResult]) -> Condition:
        request = self._rule._build_request(predicates)
        self._record.request = request
        return self

    def set_response(self, responses: Mapping[str, Any]) -> Condition:
        response = self._rule._build_response(responses)
        self._record.response = response
        return self

    def then(self, responses: Mapping[str, Any] | None = None) -> Rule:
        """Assign response values and attach this condition to the rule."""
        self.set_response(responses or {})
        self._rule._attach(self._record)
        return self._rule

    def set_priority(self, priority: int) -> Condition:
        self._record.settings.priority = priority
        return self

    def set_group(self, group_id: str | None) -> Condition:
        self._record.settings.group_id = group_id
        return self

    def set_schedule(self, schedule: list[Any]) -> Condition:
        self._record.settings.schedule = list(schedule)
        return self

    def enable(self) -> Condition:
        self._record.settings.enabled = True
        return self

    def disable(self) -> Condition:
        self._record.settings.enabled = False
        return self

    def to_dict(self) -> dict[str, Any]:
        return self._record.to_dict()

    def __repr__(self) -> str:
        return f"Condition(index={self.index}, fields={list(self._record.request)})"
