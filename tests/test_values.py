"""Tests for forge/values.py: dynamic value references and the name cache."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from rulebricks.errors import DynamicValueNotFoundError, NotFoundError, PreconditionError
from rulebricks.forge.types import DynamicValueType
from rulebricks.forge.values import DynamicValue, DynamicValues, parse_value_type
from rulebricks.models import DynamicValueSummary


def _summaries(*rows: tuple[str, str, str]) -> list[DynamicValueSummary]:
    return [DynamicValueSummary(id=i, name=n, type=t) for i, n, t in rows]


class TestDynamicValue:
    def test_wire_form(self):
        value = DynamicValue(id="v1", name="limit", value_type=DynamicValueType.NUMBER)
        assert value.to_dict() == {"$rb": "globalValue", "id": "v1", "name": "limit"}

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("number", DynamicValueType.NUMBER),
            ("Number", DynamicValueType.NUMBER),
            ("array", DynamicValueType.LIST),
            ("bool", DynamicValueType.BOOLEAN),
            ("object", DynamicValueType.OBJECT),
        ],
    )
    def test_parse_value_type(self, raw, expected):
        assert parse_value_type(raw) is expected

    def test_parse_unknown_type(self):
        with pytest.raises(ValueError):
            parse_value_type("matrix")


class TestDynamicValues:
    @pytest.mark.asyncio
    async def test_unconfigured_registry(self):
        values = DynamicValues()
        assert not values.configured
        with pytest.raises(PreconditionError):
            await values.get("limit")
        with pytest.raises(PreconditionError):
            await values.set({"limit": 5})

    @pytest.mark.asyncio
    async def test_get_resolves_and_types(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        values = DynamicValues(workspace)

        limit = await values.get("limit")

        assert limit == DynamicValue(id="v1", name="limit", value_type=DynamicValueType.NUMBER)
        assert "limit" in values

    @pytest.mark.asyncio
    async def test_second_get_served_from_cache(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        values = DynamicValues(workspace)

        first = await values.get("limit")
        second = await values.get("limit")

        assert first is second
        assert workspace.values.list.await_count == 1

    @pytest.mark.asyncio
    async def test_missing_name(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        values = DynamicValues(workspace)

        with pytest.raises(DynamicValueNotFoundError) as exc:
            await values.get("ceiling")
        assert isinstance(exc.value, NotFoundError)
        assert "ceiling" not in values

    @pytest.mark.asyncio
    async def test_set_invalidates_cache(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        values = DynamicValues(workspace)
        await values.get("limit")

        await values.set({"limit": "high"}, user_groups=["analysts"])

        workspace.values.update.assert_awaited_once_with(
            {"limit": "high"}, user_groups=["analysts"]
        )
        assert "limit" not in values
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "string")))
        refreshed = await values.get("limit")
        assert refreshed.value_type is DynamicValueType.STRING

    @pytest.mark.asyncio
    async def test_set_failure_keeps_cache(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        workspace.values.update = AsyncMock(side_effect=RuntimeError("boom"))
        values = DynamicValues(workspace)
        await values.get("limit")

        with pytest.raises(RuntimeError):
            await values.set({"limit": 1})
        assert "limit" in values

    @pytest.mark.asyncio
    async def test_configure_resets_cache(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        values = DynamicValues(workspace)
        await values.get("limit")

        values.configure(workspace)

        assert values.configured
        assert "limit" not in values

    @pytest.mark.asyncio
    async def test_registries_do_not_share_cache(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        first, second = DynamicValues(workspace), DynamicValues(workspace)

        await first.get("limit")

        assert "limit" in first
        assert "limit" not in second

    @pytest.mark.asyncio
    async def test_clear_cache_forces_lookup(self, workspace):
        workspace.values.list = AsyncMock(return_value=_summaries(("v1", "limit", "number")))
        values = DynamicValues(workspace)
        await values.get("limit")

        values.clear_cache()
        await values.get("limit")

        assert workspace.values.list.await_count == 2
