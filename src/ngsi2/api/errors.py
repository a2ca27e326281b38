# ngsi2/api/errors.py
"""
Error classification and content-negotiated rendering.

``STATUS_CODES`` is the single mapping from error kind to HTTP status.
``render_error`` is the single rendering function: a one-line text body
when the client accepts ``text/plain``, the JSON error body otherwise.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ngsi2.contracts.errors import (
    BadRequest,
    ConflictingEntities,
    ErrorBody,
    IllegalArgument,
    IncompatibleParameter,
    InvalidSyntax,
    NotAcceptable,
    ProtocolError,
    UnsupportedOperation,
)

logger = logging.getLogger(__name__)

PLAIN_TEXT = "text/plain"

STATUS_CODES: dict[type[ProtocolError], int] = {
    UnsupportedOperation: 501,
    BadRequest: 400,
    IncompatibleParameter: 400,
    InvalidSyntax: 400,
    ConflictingEntities: 409,
    NotAcceptable: 406,
    IllegalArgument: 400,
}


def status_for(error: ProtocolError) -> int:
    """Status code of an error kind.

    Raises:
        TypeError: For anything that is not a known kind. Such an error is
            a programming defect and must surface as a server failure.
    """
    for klass in type(error).__mro__:
        if klass in STATUS_CODES:
            return STATUS_CODES[klass]
    raise TypeError(f"Unclassified protocol error kind: {type(error).__name__}")


def error_body(error: ProtocolError) -> ErrorBody:
    return ErrorBody(
        error=str(status_for(error)),
        description=error.description,
        affected_items=error.affected_items,
    )


def accepts_plain_text(accept: str | None) -> bool:
    return accept is not None and PLAIN_TEXT in accept


def render_error(error: ProtocolError, accept: str | None) -> Response:
    body = error_body(error)
    status = int(body.error)
    if accepts_plain_text(accept):
        return PlainTextResponse(body.to_text(), status_code=status)
    return JSONResponse(body.to_dict(), status_code=status)


async def _protocol_error_handler(request: Request, exc: ProtocolError) -> Response:
    logger.error(
        "%s: %s",
        exc.kind,
        exc.description,
        extra={"kind": exc.kind, "path": request.url.path},
    )
    return render_error(exc, request.headers.get("accept"))


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    problems = [
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    return await _protocol_error_handler(request, BadRequest("; ".join(problems)))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProtocolError, _protocol_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
