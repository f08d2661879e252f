"""
NoteDesk Backend: Request Context Middleware
===============================================

What:  Gives every request a correlation id and writes one access line
       naming the note operation it reached.
How:   The id comes from a well-formed X-Request-ID header or a fresh UUID4,
       lives in `request_id_var` for the duration of the request and is
       echoed as the X-Request-ID response header. After routing, the
       matched route name and the `note_id` path parameter are read back
       from the scope.

Access line (logger `notedesk.access`):
    2026-01-15T12:00:00 [INFO] notedesk.access: update_note note=3 -> 200 (4.2ms) [9f1c03ab52de]

Level: 5xx → WARNING (the failing layer has already logged the cause),
health probes → DEBUG, everything else → INFO. Bodies are never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("notedesk.access")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_REQUEST_ID_LENGTH = 64


def resolve_request_id(supplied: Optional[str]) -> str:
    """Keep a client-supplied id if it is short and printable, else mint one."""
    if supplied:
        supplied = supplied.strip()
        if 0 < len(supplied) <= MAX_REQUEST_ID_LENGTH and supplied.isprintable():
            return supplied
    return uuid.uuid4().hex[:12]


class RequestContextMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))
        request_id_var.set(rid)
        request.state.request_id = rid

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = rid

        # Routing fills these into the shared scope
        route = request.scope.get("route")
        operation = getattr(route, "name", None) or "unrouted"
        note_id = request.path_params.get("note_id")

        if operation == "health_check":
            level = logging.DEBUG
        elif response.status_code >= 500:
            level = logging.WARNING
        else:
            level = logging.INFO

        target = operation if note_id is None else f"{operation} note={note_id}"
        logger.log(
            level,
            "%s -> %d (%.1fms) [%s]",
            target,
            response.status_code,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "operation": operation,
                "note_id": note_id,
                "status": response.status_code,
            },
        )
        return response
