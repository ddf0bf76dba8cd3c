"""Dynamic values: named references resolved by the rules engine at solve time."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rulebricks.errors import DynamicValueNotFoundError, PreconditionError
from rulebricks.forge.types import DynamicValueType

if TYPE_CHECKING:
    from rulebricks.client import RulebricksClient

logger = logging.getLogger(__name__)

# Server-side type names that differ from DynamicValueType values
_TYPE_ALIASES: dict[str, DynamicValueType] = {
    "array": DynamicValueType.LIST,
    "str": DynamicValueType.STRING,
    "bool": DynamicValueType.BOOLEAN,
}


def parse_value_type(raw: str) -> DynamicValueType:
    """Map a server type name onto DynamicValueType. Raises ValueError if unknown."""
    key = raw.strip().lower()
    if key in _TYPE_ALIASES:
        return _TYPE_ALIASES[key]
    return DynamicValueType(key)


@dataclass(frozen=True)
class DynamicValue:
    id: str
    name: str
    value_type: DynamicValueType

    def to_dict(self) -> dict[str, Any]:
        return {"$rb": "globalValue", "id": self.id, "name": self.name}


class DynamicValues:
    """Name-keyed cache of dynamic values for one workspace.

    Any write through ``set`` drops the whole cache, since one update may change
    the types of several names. There is no locking: two concurrent ``get``
    calls for an uncached name may both hit the server; the last one to finish
    overwrites the cache entry with an equal value.
    """

    def __init__(self, client: RulebricksClient | None = None) -> None:
        self._client = client
        self._cache: dict[str, DynamicValue] = {}

    def configure(self, client: RulebricksClient) -> None:
        self._client = client
        self._cache = {}

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _require_client(self) -> RulebricksClient:
        if self._client is None:
            raise PreconditionError("DynamicValues is not configured; call configure(client) first")
        return self._client

    async def get(self, name: str) -> DynamicValue:
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        client = self._require_client()
        logger.debug(f"Dynamic value cache miss for '{name}'")
        for summary in await client.values.list():
            if summary.name == name:
                value = DynamicValue(
                    id=summary.id,
                    name=summary.name,
                    value_type=parse_value_type(summary.type),
                )
                self._cache[name] = value
                return value
        raise DynamicValueNotFoundError(f"Dynamic value '{name}' not found")

    async def set(
        self,
        values: dict[str, Any],
        user_groups: list[str] | None = None,
    ) -> None:
        client = self._require_client()
        await client.values.update(values, user_groups=user_groups)
        self.clear_cache()

    def clear_cache(self) -> None:
        self._cache = {}

    def __contains__(self, name: object) -> bool:
        return name in self._cache
