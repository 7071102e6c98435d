"""Trace ID middleware for request/response propagation."""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from factory_pulse.logging_config import bind_request_context, clear_request_context

_PROJECT_PATH = re.compile(r"/projects/(proj_[A-Za-z0-9_-]+)")


def project_id_from_path(path: str) -> str | None:
    """Project id addressed by a ``/projects/{project_id}/...`` URL, if any."""
    match = _PROJECT_PATH.search(path)
    return match.group(1) if match else None


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Extract X-Trace-Id from request or generate one, attach to response and log context.

    Requests under /projects/{project_id} also carry the project id in the log context.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = request.headers.get("x-trace-id") or f"trc_{uuid.uuid4().hex[:16]}"
        request.state.trace_id = trace_id
        bind_request_context(trace_id, project_id=project_id_from_path(request.url.path))

        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Trace-Id"] = trace_id
        return response
