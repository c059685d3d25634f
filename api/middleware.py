# ============================================================================
# File: api/middleware.py
# ============================================================================

import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
LATENCY_HEADER = "X-API-Latency-ms"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id (reusing the caller's X-Request-ID when
    present) and reports how long the handler took.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        response: Response = await call_next(request)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[LATENCY_HEADER] = str(elapsed_ms)

        logger.debug(
            f"[{request_id}] {request.method} {request.url.path} -> "
            f"{response.status_code} ({elapsed_ms}ms)"
        )
        return response
