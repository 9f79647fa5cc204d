"""JSON response envelopes and mapping of errors to HTTP statuses."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any

from werkzeug.wrappers import Response

from .errors import (
    DependencyUnavailableError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)

API_VERSION = "2.0"
ERROR_DOMAIN = "fantasy-league"


@dataclass(frozen=True)
class MappedError:
    http_status: int
    reason: str
    status: str


_INTERNAL = MappedError(500, "internalError", "INTERNAL")

_MAPPINGS = (
    (InvalidInputError, MappedError(400, "invalidInput", "INVALID_ARGUMENT")),
    (NotFoundError, MappedError(404, "notFound", "NOT_FOUND")),
    (UnauthorizedError, MappedError(401, "unauthorized", "UNAUTHENTICATED")),
    (DependencyUnavailableError, MappedError(503, "dependencyUnavailable", "UNAVAILABLE")),
)


def map_error(error: BaseException) -> MappedError:
    """Return the HTTP status, reason and status name for ``error``."""
    for error_type, mapped in _MAPPINGS:
        if isinstance(error, error_type):
            return mapped
    return _INTERNAL


def _default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def write_json(status: int, payload: Any) -> Response:
    body = json.dumps(payload, default=_default) + "\n"
    return Response(body, status=status, content_type="application/json")


def write_success(status: int, data: Any) -> Response:
    envelope: dict = {"apiVersion": API_VERSION}
    if data is not None:
        envelope["data"] = data
    return write_json(status, envelope)


def _error_envelope(code: int, message: str, status: str, reason: str) -> dict:
    return {
        "apiVersion": API_VERSION,
        "error": {
            "code": code,
            "message": message,
            "status": status,
            "errors": [{"domain": ERROR_DOMAIN, "reason": reason, "message": message}],
        },
    }


def write_error(error: BaseException) -> Response:
    mapped = map_error(error)
    message = str(error)
    return write_json(
        mapped.http_status,
        _error_envelope(mapped.http_status, message, mapped.status, mapped.reason),
    )


def write_internal_error() -> Response:
    return write_json(
        500, _error_envelope(500, "internal server error", "INTERNAL", "internalError")
    )