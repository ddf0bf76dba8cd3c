"""Rule aggregate: schemas, ordered conditions, test suite, workspace sync."""

from __future__ import annotations

import json
import logging
import re
import secrets
import string
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from rulebricks.errors import (
    NotFoundError,
    PreconditionError,
    SchemaReferenceError,
    TypeMismatchError,
    ValidationError,
)
from rulebricks.forge.arguments import Argument, render
from rulebricks.forge.condition import Assignment, Condition, ConditionRecord, Predicate
from rulebricks.forge.operators import (
    FIELD_TYPES,
    BooleanField,
    DateField,
    Field,
    ListField,
    NumberField,
    OpaqueField,
    StringField,
    title_case,
)
from rulebricks.forge.suite import RuleTest
from rulebricks.forge.types import OperatorResult, RuleSettings, RuleType

if TYPE_CHECKING:
    from datetime import date

    from rulebricks.client import RulebricksClient

logger = logging.getLogger(__name__)

EDITOR_URL = "https://app.rulebricks.com/rules/{id}"
UPDATED_BY = "Rulebricks Forge SDK"

_SLUG_CHARS = string.ascii_letters + string.digits
_ALIAS_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def generate_slug(length: int = 10) -> str:
    return "".join(secrets.choice(_SLUG_CHARS) for _ in range(length))


def validate_alias(alias: str) -> None:
    """Raise ValidationError unless alias is a usable slug."""
    if len(alias) < 3:
        raise ValidationError("Alias must be at least 3 characters long")
    if "/" in alias or "\\" in alias or " " in alias:
        raise ValidationError("Alias cannot contain slashes or spaces")
    if not _ALIAS_PATTERN.match(alias):
        raise ValidationError("Alias cannot contain special characters")


def build_sample(fields: Mapping[str, Field]) -> dict[str, Any]:
    """Nest every field's default under its dotted key path.

    Overlapping keys ("address" and "address.city") are rejected when fields are
    added, but a stored payload may still hold them; the later field wins there.
    """
    sample: dict[str, Any] = {}
    for field in fields.values():
        *parents, leaf = field.key.split(".")
        node = sample
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = field.render_default()
    return sample


def _schema_entry(field: Field) -> dict[str, Any]:
    return {
        "name": field.display_name,
        "key": field.key,
        "type": field.wire_type,
        "description": field.description,
        "defaultValue": field.render_default(),
        "show": True,
    }


# Schema type tags as stored by the server; "array" is its name for lists
_WIRE_TYPES: dict[str, type[Field]] = {str(tag): cls for tag, cls in FIELD_TYPES.items()}
_WIRE_TYPES["array"] = ListField


def _field_from_schema(entry: Mapping[str, Any]) -> Field:
    """Rebuild a field from a stored schema entry without losing its type or default."""
    key = entry.get("key") or entry.get("name") or ""
    type_name = entry.get("type") or str(RuleType.STRING)
    display_name = entry.get("name") or title_case(key)
    description = entry.get("description") or ""
    default = entry.get("defaultValue")

    field_cls = _WIRE_TYPES.get(type_name) if isinstance(type_name, str) else None
    if field_cls is None:
        logger.debug(f"Field '{key}' has type {type_name!r} with no operators; keeping it as stored")
        return OpaqueField(key, type_name, description, default, display_name=display_name)
    try:
        return field_cls(key, description, default, display_name=display_name, wire_type=type_name)
    except TypeMismatchError:
        logger.warning(f"Default {default!r} for {type_name} field '{key}' fails its type check")
        field = field_cls(key, description, display_name=display_name, wire_type=type_name)
        field.default_value = default
        return field


def _keys_overlap(a: str, b: str) -> bool:
    return a == b or a.startswith(f"{b}.") or b.startswith(f"{a}.")


class Rule:
    def __init__(self, workspace: RulebricksClient | None = None) -> None:
        self.id: str = str(uuid.uuid4())
        self.name = ""
        self.description = ""
        self.folder_id = ""
        self.slug = generate_slug()
        self.created_at = _now_iso()
        self.updated_at = self.created_at
        self.updated_by = UPDATED_BY
        self.settings = RuleSettings()
        self.access_groups: list[str] = []
        self.workspace = workspace

        self._fields: dict[str, Field] = {}
        self._response_fields: dict[str, Field] = {}
        self._conditions: list[ConditionRecord] = []
        self._test_suite: list[RuleTest] = []

        # Server-authoritative state, carried through unchanged
        self.published_request_schema: list[Any] = []
        self.published_response_schema: list[Any] = []
        self.published_conditions: list[Any] = []
        self.published_groups: dict[str, Any] = {}
        self.form: dict[str, Any] = {}
        self.history: list[Any] = []
        self.published = False
        self.test_request: dict[str, Any] = {}
        self.groups: dict[str, Any] = {}

    # --- Metadata ---

    def set_workspace(self, workspace: RulebricksClient) -> Rule:
        self.workspace = workspace
        return self

    def set_name(self, name: str) -> Rule:
        self.name = name
        return self

    def set_description(self, description: str) -> Rule:
        self.description = description
        return self

    def set_folder_id(self, folder_id: str) -> Rule:
        self.folder_id = folder_id
        return self

    def enable_continuous_testing(self, enabled: bool = True) -> Rule:
        self.settings.testing = enabled
        return self

    def enable_schema_validation(self, enabled: bool = True) -> Rule:
        self.settings.schema_validation = enabled
        return self

    def require_all_properties(self, enabled: bool = True) -> Rule:
        self.settings.require_all_properties = enabled
        return self

    def lock_schema(self, enabled: bool = True) -> Rule:
        self.settings.schema_locked = enabled
        return self

    def _require_workspace(self, action: str) -> RulebricksClient:
        if self.workspace is None:
            raise PreconditionError(f"A Rulebricks client is required to {action}")
        return self.workspace

    async def set_alias(self, alias: str) -> Rule:
        validate_alias(alias)
        workspace = self._require_workspace("set an alias")
        for summary in await workspace.assets.rules.list():
            if summary.slug == alias and summary.id != self.id:
                raise ValidationError(f"Alias '{alias}' is already used by another rule")
        self.slug = alias
        return self

    async def set_folder(self, folder_name: str, create_if_missing: bool = False) -> Rule:
        workspace = self._require_workspace("set a folder by name")
        folders = await workspace.assets.folders.list()
        folder = next((f for f in folders if f.name == folder_name), None)
        if folder is None:
            if not create_if_missing:
                raise NotFoundError(f"Folder '{folder_name}' not found")
            folder = await workspace.assets.folders.upsert(folder_name)
        self.folder_id = folder.id
        return self

    async def add_access_group(self, group_name: str, create_if_missing: bool = False) -> Rule:
        workspace = self._require_workspace("manage access groups")
        groups = await workspace.users.groups.list()
        if not any(g.name == group_name for g in groups):
            if not create_if_missing:
                raise NotFoundError(f"User group '{group_name}' not found")
            await workspace.users.groups.create(group_name)
        if group_name not in self.access_groups:
            self.access_groups.append(group_name)
        return self

    def remove_access_group(self, group_name: str) -> Rule:
        if group_name in self.access_groups:
            self.access_groups.remove(group_name)
        return self

    # --- Schema ---

    def _add(self, schema: dict[str, Field], field: Field) -> Any:
        # Sample payloads nest dotted keys, so "address" and "address.city" cannot coexist
        for other in schema.values():
            if other.name != field.name and _keys_overlap(other.key, field.key):
                raise ValidationError(
                    f"Field key '{field.key}' overlaps existing field key '{other.key}'"
                )
        schema[field.name] = field
        return field

    def add_boolean_field(
        self, name: str, description: str = "", default_value: bool = False, *, key: str | None = None
    ) -> BooleanField:
        return self._add(self._fields, BooleanField(name, description, default_value, key=key))

    def add_number_field(
        self, name: str, description: str = "", default_value: float = 0, *, key: str | None = None
    ) -> NumberField:
        return self._add(self._fields, NumberField(name, description, default_value, key=key))

    def add_string_field(
        self, name: str, description: str = "", default_value: str = "", *, key: str | None = None
    ) -> StringField:
        return self._add(self._fields, StringField(name, description, default_value, key=key))

    def add_date_field(
        self,
        name: str,
        description: str = "",
        default_value: date | str | None = None,
        *,
        key: str | None = None,
    ) -> DateField:
        return self._add(self._fields, DateField(name, description, default_value, key=key))

    def add_list_field(
        self,
        name: str,
        description: str = "",
        default_value: list[Any] | None = None,
        *,
        key: str | None = None,
    ) -> ListField:
        return self._add(self._fields, ListField(name, description, default_value, key=key))

    def add_boolean_response(
        self, name: str, description: str = "", default_value: bool = False, *, key: str | None = None
    ) -> BooleanField:
        return self._add(
            self._response_fields, BooleanField(name, description, default_value, key=key)
        )

    def add_number_response(
        self, name: str, description: str = "", default_value: float = 0, *, key: str | None = None
    ) -> NumberField:
        return self._add(
            self._response_fields, NumberField(name, description, default_value, key=key)
        )

    def add_string_response(
        self, name: str, description: str = "", default_value: str = "", *, key: str | None = None
    ) -> StringField:
        return self._add(
            self._response_fields, StringField(name, description, default_value, key=key)
        )

    def add_date_response(
        self,
        name: str,
        description: str = "",
        default_value: date | str | None = None,
        *,
        key: str | None = None,
    ) -> DateField:
        return self._add(self._response_fields, DateField(name, description, default_value, key=key))

    def add_list_response(
        self,
        name: str,
        description: str = "",
        default_value: list[Any] | None = None,
        *,
        key: str | None = None,
    ) -> ListField:
        return self._add(self._response_fields, ListField(name, description, default_value, key=key))

    @property
    def fields(self) -> dict[str, Field]:
        return dict(self._fields)

    @property
    def response_fields(self) -> dict[str, Field]:
        return dict(self._response_fields)

    def get_field(self, name: str) -> Field | None:
        return _lookup(self._fields, name)

    def get_response_field(self, name: str) -> Field | None:
        return _lookup(self._response_fields, name)

    # --- Conditions ---

    def _build_request(self, predicates: Mapping[str, OperatorResult]) -> dict[str, Predicate]:
        request: dict[str, Predicate] = {}
        for name, result in predicates.items():
            field = self.get_field(name)
            if field is None:
                raise SchemaReferenceError(f"Field '{name}' is not defined in the request schema")
            if not isinstance(result, OperatorResult) or not isinstance(result.args, list | tuple):
                raise ValidationError(
                    f"Predicate for '{name}' must be an operator result, got {result!r}"
                )
            operator, args = result
            request[field.key] = Predicate(op=operator, args=list(args))
        return request

    def _build_response(self, responses: Mapping[str, Any]) -> dict[str, Assignment]:
        response: dict[str, Assignment] = {}
        for name, value in responses.items():
            field = self.get_response_field(name)
            if field is None:
                raise SchemaReferenceError(f"Field '{name}' is not defined in the response schema")
            rendered = Argument(value, field.value_type).render()
            response[field.key] = Assignment(value=rendered)
        return response

    def _attach(self, record: ConditionRecord) -> None:
        if self._position_of(record) is None:
            self._conditions.append(record)

    def _position_of(self, record: ConditionRecord) -> int | None:
        for i, stored in enumerate(self._conditions):
            if stored is record:
                return i
        return None

    def when(self, predicates: Mapping[str, OperatorResult] | None = None) -> Condition:
        """Start a condition that matches when ALL predicates hold."""
        condition = Condition(self)
        condition.set_request(predicates or {})
        condition.record.settings.match_any = False
        return condition

    def any(self, predicates: Mapping[str, OperatorResult]) -> Condition:
        """Start a condition that matches when ANY predicate holds."""
        condition = Condition(self)
        condition.set_request(predicates)
        condition.record.settings.match_any = True
        return condition

    def get_conditions(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self._conditions]

    def get_condition_count(self) -> int:
        return len(self._conditions)

    def condition(self, index: int) -> Condition:
        return Condition(self, self._conditions[index])

    def delete_condition(self, index: int) -> Rule:
        """Remove the condition at index; later conditions shift down by one."""
        del self._conditions[index]
        return self

    def move_condition(self, index: int, new_index: int) -> Rule:
        record = self._conditions.pop(index)
        self._conditions.insert(new_index, record)
        return self

    # --- Test suite ---

    def add_test(self, test: RuleTest) -> Rule:
        existing = self.find_test_by_id(test.id)
        if existing is None:
            self._test_suite.append(test)
            return self
        for name in test.model_fields_set:
            setattr(existing, name, getattr(test, name))
        return self

    def remove_test(self, test_id: str) -> Rule:
        self._test_suite = [t for t in self._test_suite if t.id != test_id]
        return self

    def find_test_by_id(self, test_id: str) -> RuleTest | None:
        return next((t for t in self._test_suite if t.id == test_id), None)

    def find_test_by_name(self, name: str) -> RuleTest | None:
        return next((t for t in self._test_suite if t.name == name), None)

    @property
    def test_suite(self) -> list[RuleTest]:
        return list(self._test_suite)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "tag": self.folder_id,
            "slug": self.slug,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "updatedBy": self.updated_by,
            "settings": self.settings.to_dict(),
            "accessGroups": list(self.access_groups),
            "requestSchema": [_schema_entry(f) for f in self._fields.values()],
            "responseSchema": [_schema_entry(f) for f in self._response_fields.values()],
            "conditions": self.get_conditions(),
            "testSuite": [t.to_dict() for t in self._test_suite],
            "published_requestSchema": self.published_request_schema,
            "published_responseSchema": self.published_response_schema,
            "published_conditions": self.published_conditions,
            "published_groups": self.published_groups,
            "form": self.form,
            "history": self.history,
            "published": self.published,
            "sampleRequest": build_sample(self._fields),
            "sampleResponse": build_sample(self._response_fields),
            "testRequest": self.test_request,
            "groups": self.groups,
            "conditionCount": len(self._conditions),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(
        cls,
        data: str | Mapping[str, Any],
        workspace: RulebricksClient | None = None,
    ) -> Rule:
        rule = cls(workspace)
        rule._load(json.loads(data) if isinstance(data, str) else data)
        return rule

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        workspace: RulebricksClient | None = None,
    ) -> Rule:
        return cls.from_json(data, workspace)

    def _load(self, data: Mapping[str, Any]) -> None:
        """Replace all local state with a wire payload."""
        try:
            settings = RuleSettings.model_validate(data.get("settings") or {})
            conditions = [ConditionRecord.model_validate(c) for c in data.get("conditions") or []]
            tests = [RuleTest.from_json(t) for t in data.get("testSuite") or []]
        except PydanticValidationError as e:
            raise ValidationError(f"Malformed rule payload: {e}") from e

        fields: dict[str, Field] = {}
        for entry in data.get("requestSchema") or []:
            field = _field_from_schema(entry)
            fields[field.name] = field
        response_fields: dict[str, Field] = {}
        for entry in data.get("responseSchema") or []:
            field = _field_from_schema(entry)
            response_fields[field.name] = field

        self.id = data.get("id") or self.id
        self.name = data.get("name") or ""
        self.description = data.get("description") or ""
        self.folder_id = data.get("tag") or ""
        self.slug = data.get("slug") or self.slug
        self.created_at = data.get("createdAt") or self.created_at
        self.updated_at = data.get("updatedAt") or self.updated_at
        self.updated_by = data.get("updatedBy") or UPDATED_BY
        self.settings = settings
        self.access_groups = list(dict.fromkeys(data.get("accessGroups") or []))
        self._fields = fields
        self._response_fields = response_fields
        self._conditions = conditions
        self._test_suite = tests
        self.published_request_schema = data.get("published_requestSchema") or []
        self.published_response_schema = data.get("published_responseSchema") or []
        self.published_conditions = data.get("published_conditions") or []
        self.published_groups = data.get("published_groups") or {}
        self.form = data.get("form") or {}
        self.history = data.get("history") or []
        self.published = bool(data.get("published", False))
        self.test_request = data.get("testRequest") or {}
        self.groups = data.get("groups") or {}

    # --- Workspace sync ---

    async def update(self) -> Rule:
        workspace = self._require_workspace("update a rule")
        payload = self.to_dict()
        logger.debug(f"Importing rule {self.id} ({len(self._conditions)} conditions)")
        await workspace.assets.import_rule(payload)
        return self

    async def publish(self) -> Rule:
        workspace = self._require_workspace("publish a rule")
        payload = self.to_dict()
        payload["_publish"] = True
        await workspace.assets.import_rule(payload)
        logger.info(f"Published rule {self.id} as '{self.slug}'")
        return await self.from_workspace(self.id)

    async def from_workspace(self, rule_id: str) -> Rule:
        workspace = self._require_workspace("load a rule from the workspace")
        data = await workspace.assets.export_rule(rule_id)
        self._load(data)
        return self

    async def solve(self, request: Mapping[str, Any]) -> dict[str, Any]:
        workspace = self._require_workspace("solve a rule")
        return await workspace.rules.solve(self.slug, dict(request))

    def get_editor_url(self) -> str:
        self._require_workspace("build the editor URL")
        return EDITOR_URL.format(id=self.id)

    # --- Display ---

    def to_table(self) -> str:
        """Render the decision table as aligned plain text."""
        keys = [f.key for f in self._fields.values()]
        header = ["Condition", *keys, "Response"]
        rows: list[list[str]] = []
        for i, record in enumerate(self._conditions, start=1):
            row = [f"#{i}"]
            for key in keys:
                predicate = record.request.get(key)
                if predicate is None:
                    row.append("-")
                else:
                    args = ", ".join(str(render(a)) for a in predicate.args)
                    row.append(f"{predicate.op} {args}".strip())
            response = ", ".join(f"{k}: {a.value}" for k, a in record.response.items())
            row.append(response or "-")
            rows.append(row)

        widths = [max(len(r[col]) for r in [header, *rows]) for col in range(len(header))]
        separator = "-+-".join("-" * w for w in widths)

        def fmt(row: list[str]) -> str:
            return " | ".join(cell.ljust(widths[col]) for col, cell in enumerate(row))

        return "\n".join([fmt(header), separator, *(fmt(r) for r in rows)])

    def __repr__(self) -> str:
        return f'Rule(name="{self.name}", id="{self.id}", conditions={len(self._conditions)})'


def _lookup(schema: Mapping[str, Field], ref: str) -> Field | None:
    field = schema.get(ref)
    if field is not None:
        return field
    return next((f for f in schema.values() if f.key == ref), None)
