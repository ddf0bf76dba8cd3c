"""Async httpx client wrapper for the Rulebricks workspace API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from rulebricks.config import ClientConfig, load_client_config
from rulebricks.errors import (
    PreconditionError,
    RulebricksApiError,
    RulebricksTimeoutError,
    TransportError,
    error_for_status,
)
from rulebricks.forge.values import DynamicValues
from rulebricks.models import DynamicValueSummary, Folder, RuleSummary, UserGroup

logger = logging.getLogger(__name__)


class _Resource:
    def __init__(self, client: RulebricksClient) -> None:
        self._client = client


class FoldersResource(_Resource):
    async def list(self) -> list[Folder]:
        data = await self._client.request("GET", "/admin/folders")
        return [Folder.model_validate(item) for item in data or []]

    async def upsert(self, name: str, description: str | None = None) -> Folder:
        body: dict[str, Any] = {"name": name}
        if description is not None:
            body["description"] = description
        data = await self._client.request("POST", "/admin/folders", json=body)
        return Folder.model_validate(data)


class AssetRulesResource(_Resource):
    async def list(self) -> list[RuleSummary]:
        data = await self._client.request("GET", "/admin/rules/list")
        return [RuleSummary.model_validate(item) for item in data or []]

    async def delete(self, rule_id: str) -> dict:
        return await self._client.request("DELETE", "/admin/rules/delete", json={"id": rule_id})


class AssetsResource(_Resource):
    def __init__(self, client: RulebricksClient) -> None:
        super().__init__(client)
        self.rules = AssetRulesResource(client)
        self.folders = FoldersResource(client)

    async def import_rule(self, rule: dict[str, Any]) -> dict:
        return await self._client.request("POST", "/admin/rules/import", json={"rule": rule})

    async def export_rule(self, rule_id: str) -> dict:
        return await self._client.request("GET", "/admin/rules/export", params={"id": rule_id})


class GroupsResource(_Resource):
    async def list(self) -> list[UserGroup]:
        data = await self._client.request("GET", "/admin/users/groups")
        return [UserGroup.model_validate(item) for item in data or []]

    async def create(self, name: str, description: str | None = None) -> UserGroup:
        body: dict[str, Any] = {"name": name}
        if description is not None:
            body["description"] = description
        data = await self._client.request("POST", "/admin/users/groups", json=body)
        return UserGroup.model_validate(data)


class UsersResource(_Resource):
    def __init__(self, client: RulebricksClient) -> None:
        super().__init__(client)
        self.groups = GroupsResource(client)


class ValuesResource(_Resource):
    async def list(self) -> list[DynamicValueSummary]:
        data = await self._client.request("GET", "/admin/values")
        return [DynamicValueSummary.model_validate(item) for item in data or []]

    async def update(
        self,
        values: dict[str, Any],
        *,
        user_groups: list[str] | None = None,
    ) -> dict:
        body: dict[str, Any] = {"values": values}
        if user_groups:
            body["userGroups"] = user_groups
        return await self._client.request("PATCH", "/admin/values", json=body)


class RulesResource(_Resource):
    async def solve(self, slug: str, request: dict[str, Any]) -> dict:
        return await self._client.request("POST", f"/solve/{slug}", json=request)


class RulebricksClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        if config is None:
            config = load_client_config()
        self._api_key = api_key or config.api_key
        if not self._api_key:
            raise PreconditionError(
                "An API key is required; pass api_key or set RULEBRICKS_API_KEY"
            )
        self._base_url = base_url or config.base_url
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout if timeout is not None else config.timeout,
            headers={"x-api-key": self._api_key},
        )

        self.assets = AssetsResource(self)
        self.users = UsersResource(self)
        self.values = ValuesResource(self)
        self.rules = RulesResource(self)
        self.dynamic_values = DynamicValues(self)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> RulebricksClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request and decode the JSON body, mapping failures to TransportError."""
        try:
            resp = await self._client.request(method, path, params=params, json=json)
        except httpx.TimeoutException as e:
            raise RulebricksTimeoutError(f"Timeout exceeded when calling {method} {path}.") from e
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {resp.status_code}")

        if not resp.is_success:
            raise error_for_status(resp.status_code, _body(resp))

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise RulebricksApiError(
                f"Non-JSON response from {method} {path}",
                status_code=resp.status_code,
                body=resp.text,
            ) from e


def _body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None
