"""Pydantic models for workspace API list/create responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Summary(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Folder(_Summary):
    id: str
    name: str
    description: str | None = None
    updated_at: str | None = Field(default=None, alias="updatedAt")


class UserGroup(_Summary):
    id: str | None = None
    name: str
    description: str | None = None
    members: list[str] = Field(default_factory=list)


class RuleSummary(_Summary):
    id: str
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    published: bool | None = None


class DynamicValueSummary(_Summary):
    id: str
    name: str
    type: str
    value: Any = None

    @field_validator("type", mode="before")
    @classmethod
    def _unwrap_type(cls, v: Any) -> Any:
        # Some endpoints return {"value": "number"} instead of "number"
        if isinstance(v, dict):
            return v.get("value")
        return v
