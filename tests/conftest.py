"""Shared fixtures for rulebricks tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rulebricks.forge import Rule


@pytest.fixture
def workspace() -> MagicMock:
    """A fake RulebricksClient whose remote calls are AsyncMocks with empty results."""
    ws = MagicMock()
    ws.assets.import_rule = AsyncMock(return_value={})
    ws.assets.export_rule = AsyncMock(return_value={})
    ws.assets.rules.list = AsyncMock(return_value=[])
    ws.assets.rules.delete = AsyncMock(return_value={})
    ws.assets.folders.list = AsyncMock(return_value=[])
    ws.assets.folders.upsert = AsyncMock()
    ws.users.groups.list = AsyncMock(return_value=[])
    ws.users.groups.create = AsyncMock()
    ws.values.list = AsyncMock(return_value=[])
    ws.values.update = AsyncMock(return_value={})
    ws.rules.solve = AsyncMock(return_value={})
    return ws


@pytest.fixture
def eligibility_rule() -> Rule:
    """Rule with one number field `age` and one boolean response `eligible`."""
    rule = Rule().set_name("Eligibility")
    rule.add_number_field("age", "Applicant age", 0)
    rule.add_boolean_response("eligible", "Whether the applicant qualifies", False)
    return rule
