"""Request principal handling and WSGI middleware for authentication, logging and CORS."""

from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from werkzeug.wrappers import Request, Response

from .errors import UnauthorizedError
from .response import write_error

PRINCIPAL_ENVIRON_KEY = "fantasyleague.auth_principal"

_ALLOW_METHODS = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
_ALLOW_HEADERS = "Authorization,Content-Type,Accept"
_MAX_AGE = "600"


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    user_id: str
    email: str = ""


def with_principal(environ: Dict[str, Any], principal: Principal) -> Dict[str, Any]:
    """Return a copy of ``environ`` that carries ``principal``."""
    updated = dict(environ)
    updated[PRINCIPAL_ENVIRON_KEY] = principal
    return updated


def principal_from_environ(environ: Dict[str, Any]) -> Optional[Principal]:
    """Return the principal stored in ``environ``, or ``None``."""
    found = environ.get(PRINCIPAL_ENVIRON_KEY)
    return found if isinstance(found, Principal) else None


def require_auth(verifier: Any, view: Callable[..., Response]) -> Callable[..., Response]:
    """Wrap ``view`` so that it runs only for a valid bearer token.

    ``verifier.verify_access_token(token)`` returns a :class:`Principal` or raises.
    The view receives a request whose environ carries the principal.
    """

    @functools.wraps(view)
    def wrapper(request: Request, *args: Any, **kwargs: Any) -> Response:
        auth_header = (request.headers.get("Authorization") or "").strip()
        if not auth_header:
            return write_error(UnauthorizedError("missing Authorization header"))

        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
            return write_error(UnauthorizedError("invalid Authorization header format"))

        try:
            principal = verifier.verify_access_token(parts[1].strip())
        except Exception as exc:
            return write_error(exc)

        authed = Request(with_principal(request.environ, principal))
        return view(authed, *args, **kwargs)

    return wrapper


WSGIApp = Callable[[Dict[str, Any], Callable[..., Any]], Iterable[bytes]]


def request_logging(logger: Optional[logging.Logger], app: WSGIApp) -> WSGIApp:
    """Log method, path, remote address and duration of every request."""
    log = logger or logging.getLogger(__name__)

    def middleware(environ: Dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        started = time.perf_counter()
        result = app(environ, start_response)
        duration_ms = int((time.perf_counter() - started) * 1000)
        log.info(
            "http request",
            extra={
                "method": environ.get("REQUEST_METHOD", ""),
                "path": environ.get("PATH_INFO", ""),
                "remote_addr": environ.get("REMOTE_ADDR", ""),
                "duration_ms": duration_ms,
            },
        )
        return result

    return middleware


def cors(allowed_origins: Optional[Iterable[str]], app: WSGIApp) -> WSGIApp:
    """Add CORS headers for allowed origins and answer preflight requests."""
    allow_all = False
    allowed = set()
    for origin in allowed_origins or ():
        candidate = (origin or "").strip()
        if not candidate:
            continue
        if candidate == "*":
            allow_all = True
            continue
        allowed.add(candidate)

    def middleware(environ: Dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        origin = (environ.get("HTTP_ORIGIN") or "").strip()
        if not origin:
            return app(environ, start_response)

        extra: List[Tuple[str, str]] = []
        if allow_all or origin in allowed:
            if allow_all:
                extra.append(("Access-Control-Allow-Origin", "*"))
            else:
                extra.append(("Access-Control-Allow-Origin", origin))
                extra.append(("Vary", "Origin"))
            extra.append(("Access-Control-Allow-Methods", _ALLOW_METHODS))
            extra.append(("Access-Control-Allow-Headers", _ALLOW_HEADERS))
            extra.append(("Access-Control-Max-Age", _MAX_AGE))

        if environ.get("REQUEST_METHOD", "").upper() == "OPTIONS":
            return Response(status=204, headers=extra)(environ, start_response)

        def start_with_cors(status: str, headers: List[Tuple[str, str]], exc_info: Any = None) -> Any:
            return start_response(status, list(headers) + extra, exc_info)

        return app(environ, start_with_cors)

    return middleware