import time
import logging
from typing import Iterable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from ad_studio.logging_config import (
    generate_request_id, request_id,
    log_request_details, log_response_details
)

logger = logging.getLogger(__name__)

def _int_header(value):
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None

class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    def __init__(self, app, quiet_paths: Iterable[str] = ("/session", "/health")):
        super().__init__(app)
        # The page polls these while a video renders; only logged at DEBUG
        self.quiet_paths = set(quiet_paths)

    async def dispatch(self, request: Request, call_next):
        # Generate and set request ID
        req_id = generate_request_id()
        request_id.set(req_id)

        path = str(request.url.path)
        quiet = request.method == "GET" and path in self.quiet_paths
        should_log = not quiet or logger.isEnabledFor(logging.DEBUG)

        if should_log:
            client_ip = request.client.host if request.client else "unknown"
            log_request_details(
                logger,
                request.method,
                path,
                client_ip,
                request.headers.get("user-agent"),
                _int_header(request.headers.get("content-length"))
            )

        # Start timing
        start_time = time.monotonic()

        # Process request
        response = await call_next(request)

        # Calculate duration
        duration_ms = (time.monotonic() - start_time) * 1000

        if should_log:
            log_response_details(
                logger,
                request.method,
                path,
                response.status_code,
                _int_header(response.headers.get("content-length")),
                duration_ms=round(duration_ms, 2)
            )

        # Add request ID to response headers
        response.headers["X-Request-ID"] = req_id

        return response
