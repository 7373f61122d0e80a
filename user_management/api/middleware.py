"""Request correlation and access logging middleware."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from user_management.api.errors import processing_failure_response
from user_management.core.logging_setup import REQUEST_ID_HEADER, resolve_request_id

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with a correlation id and optionally log it.

    The id is stored on request.state.request_id and echoed in the
    X-Request-ID response header. Bodies are never logged, so credentials
    stay out of the logs. Any exception no handler claimed is logged here
    and answered with an opaque PROCESSING_FAILURE.
    """

    def __init__(self, app: ASGIApp, *, log_requests: bool = True, log_responses: bool = True) -> None:
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        if self.log_requests:
            logger.info(
                "Request received: %s %s",
                request.method,
                request.url.path,
                extra={"request_id": request_id},
            )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Answered here so the fault is logged once, not again by the server.
            logger.exception(
                "Unhandled error while processing %s %s",
                request.method,
                request.url.path,
                extra={"request_id": request_id},
            )
            response = processing_failure_response(request_id)
        elapsed = time.perf_counter() - start
        response.headers[REQUEST_ID_HEADER] = request_id

        if self.log_responses:
            logger.info(
                "Request completed: %s %s status=%s",
                request.method,
                request.url.path,
                response.status_code,
                extra={"request_id": request_id, "latency_seconds": round(elapsed, 6)},
            )
        return response
