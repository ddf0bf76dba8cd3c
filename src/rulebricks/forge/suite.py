"""Rule tests: named request / expected-response pairs attached to a rule."""

from __future__ import annotations

import json
import secrets
import string
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

_ID_ALPHABET = string.ascii_letters + string.digits
UNTITLED_TEST = "Untitled Test"


def generate_test_id(length: int = 21) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


class RuleTest(BaseModel):
    """A regression case for a rule.

    ``last_executed``, ``test_state``, ``error`` and ``success`` are written by
    the server when it runs the suite; the client only carries them through.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(default_factory=generate_test_id)
    name: str = UNTITLED_TEST
    request: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("request", "testRequest"),
    )
    response: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("response", "expectedResponse"),
    )
    critical: bool = False
    last_executed: str | None = Field(
        default=None,
        validation_alias=AliasChoices("last_executed", "lastExecuted"),
        serialization_alias="lastExecuted",
    )
    test_state: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("test_state", "testState"),
        serialization_alias="testState",
    )
    error: str | bool | None = None
    success: bool = False

    def set_name(self, name: str) -> RuleTest:
        self.name = name
        return self

    def expect(self, request: dict[str, Any], response: dict[str, Any]) -> RuleTest:
        self.request = request
        self.response = response
        return self

    def is_critical(self, critical: bool = True) -> RuleTest:
        self.critical = critical
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json(cls, data: str | dict[str, Any]) -> RuleTest:
        if isinstance(data, str):
            data = json.loads(data)
        payload = {k: v for k, v in data.items() if v is not None}
        if not payload.get("id"):
            payload.pop("id", None)
        if not payload.get("name"):
            payload.pop("name", None)
        return cls.model_validate(payload)
