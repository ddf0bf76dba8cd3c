"""Exception hierarchy for the Forge builder and the workspace client."""

from __future__ import annotations

import json
from typing import Any


class ForgeError(Exception):
    """Base class for errors raised while authoring a rule."""


class TypeMismatchError(ForgeError, TypeError):
    """Raised when a literal or dynamic value does not match the expected type."""


class ValidationError(ForgeError, ValueError):
    """Raised when an operator argument or alias fails a declared check."""


class SchemaReferenceError(ForgeError, LookupError):
    """Raised when a condition references a field missing from the rule schema."""


class NotFoundError(ForgeError, LookupError):
    """Raised when a named remote resource (folder, group, value) does not exist."""


class DynamicValueNotFoundError(NotFoundError):
    """Raised when no dynamic value with the requested name exists."""


class PreconditionError(ForgeError, RuntimeError):
    """Raised when an operation needs a workspace client and none is attached."""


class TransportError(Exception):
    """Raised for failures surfaced by the HTTP layer."""


class RulebricksApiError(TransportError):
    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(_build_message(message, status_code, body))
        self.status_code = status_code
        self.body = body


class BadRequestError(RulebricksApiError):
    pass


class UnauthorizedError(RulebricksApiError):
    pass


class ForbiddenError(RulebricksApiError):
    pass


class ResourceNotFoundError(RulebricksApiError):
    pass


class InternalServerError(RulebricksApiError):
    pass


class RulebricksTimeoutError(TransportError):
    """Raised when a request exceeds the configured timeout."""


STATUS_ERRORS: dict[int, type[RulebricksApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: ResourceNotFoundError,
    500: InternalServerError,
}


def error_for_status(status_code: int, body: Any) -> RulebricksApiError:
    error_cls = STATUS_ERRORS.get(status_code, RulebricksApiError)
    return error_cls(status_code=status_code, body=body)


def _build_message(message: str | None, status_code: int | None, body: Any) -> str:
    lines: list[str] = []
    if message is not None:
        lines.append(message)
    if status_code is not None:
        lines.append(f"Status code: {status_code}")
    if body is not None:
        try:
            lines.append(f"Body: {json.dumps(body, indent=2)}")
        except (TypeError, ValueError):
            lines.append(f"Body: {body!r}")
    return "\n".join(lines)
