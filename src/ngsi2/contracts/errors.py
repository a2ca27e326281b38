# ngsi2/contracts/errors.py
"""
Protocol error taxonomy.

Every failure a client can observe on the NGSI v2 surface is one of the
``ProtocolError`` subclasses below. Each one carries the structured fields
needed to build the JSON error body and its one-line text rendering; the
mapping to HTTP status codes lives in ``ngsi2.api.errors``.
"""
from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

# C0/C1 controls and Unicode line separators
_LINE_BREAKING = re.compile(r"[\x00-\x1f\x7f-\x9f\u2028\u2029]")


def _one_line(text: str) -> str:
    return _LINE_BREAKING.sub(lambda m: repr(m.group())[1:-1], text)


class ErrorBody(BaseModel):
    """JSON error payload as defined by NGSI v2."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    description: str | None = None
    affected_items: list[str] | None = Field(default=None, alias="affectedItems")

    def to_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_text(self) -> str:
        """Single-line rendering; control characters are backslash-escaped."""
        items = ", ".join(self.affected_items or [])
        return _one_line(
            f"error: {self.error} | description: {self.description or ''}"
            f" | affectedItems: [{items}]"
        )


class ProtocolError(Exception):
    """Base class for classified NGSI v2 errors.

    Not raised directly: only the concrete kinds below have a status code.
    """

    affected_items: list[str] | None = None

    def __init__(self, description: str):
        self.description = description
        super().__init__(description)

    @property
    def kind(self) -> str:
        return type(self).__name__


class UnsupportedOperation(ProtocolError):
    """The context store does not implement the requested operation."""

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        super().__init__(f"this operation '{operation_name}' is not implemented")


class BadRequest(ProtocolError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class IncompatibleParameter(ProtocolError):
    def __init__(self, param1: str, param2: str, operation: str):
        self.param1 = param1
        self.param2 = param2
        self.operation = operation
        super().__init__(
            "The incoming request is invalid in this context. "
            f"{param1} is incompatible with {param2} in {operation} operation."
        )


class InvalidSyntax(ProtocolError):
    def __init__(self, offending_field: str):
        self.offending_field = offending_field
        super().__init__(
            "The incoming request is invalid in this context. "
            f"{offending_field} has a bad syntax."
        )


class ConflictingEntities(ProtocolError):
    """Several entities match the given id; the client should add a type."""

    def __init__(self, entity_id: str, hint_request: str):
        self.entity_id = entity_id
        self.hint_request = hint_request
        super().__init__(
            "Too many results. There are several results that match with the "
            f"{entity_id} used in the request. Instead of, you can use {hint_request}"
        )


class NotAcceptable(ProtocolError):
    def __init__(self) -> None:
        super().__init__("Not Acceptable: Accepted MIME types: text/plain.")


class IllegalArgument(ProtocolError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
