import asyncio
import logging
import json
import time
from datetime import datetime, timezone
from typing import Optional, Dict, Any
import uuid
from contextvars import ContextVar

# Context variable to track request IDs across async operations
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)

# Attributes every LogRecord carries; anything else came in through `extra`
STANDARD_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage',
    'exc_info', 'exc_text', 'stack_info', 'taskName', 'message'
}

class StructuredFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON logs"""

    def __init__(self, service_name: str = "ad-studio"):
        super().__init__()
        self.service_name = service_name

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name
        }

        # Add request ID if available
        req_id = request_id.get()
        if req_id:
            log_entry["request_id"] = req_id

        for key, value in record.__dict__.items():
            if key not in STANDARD_ATTRS and not key.startswith('_'):
                log_entry[key] = value

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)

def setup_logging(service_name: str = "ad-studio", log_level: str = "INFO") -> logging.Logger:
    """Setup structured logging for the service and the ad_studio package"""

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(service_name))

    for name in (service_name, "ad_studio"):
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, log_level.upper()))

        # Remove existing handlers
        for existing in logger.handlers[:]:
            logger.removeHandler(existing)

        logger.addHandler(handler)

        # Prevent duplicate logs
        logger.propagate = False

    return logging.getLogger(service_name)

class TimingContext:
    """Times a provider operation and logs start, completion, failure or cancellation.

    A session reset cancels an in-flight video task, so CancelledError is logged
    at INFO rather than as a failure.
    """

    def __init__(self, operation_name: str, logger: logging.Logger, extra_data: Optional[Dict[str, Any]] = None):
        self.operation_name = operation_name
        self.logger = logger
        self.extra_data = extra_data or {}
        self.start_time = None
        self.end_time = None

    def _log(self, level: int, message: str, event: str, **fields):
        self.logger.log(level, message, extra={
            "operation": self.operation_name,
            "event": event,
            **fields,
            **self.extra_data
        })

    def __enter__(self):
        self.start_time = time.monotonic()
        self._log(logging.INFO, f"Starting {self.operation_name}", "start")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.monotonic()
        duration_ms = round(self.duration_ms, 2)

        if exc_type is None:
            self._log(logging.INFO, f"Completed {self.operation_name}", "complete", duration_ms=duration_ms)
        elif issubclass(exc_type, asyncio.CancelledError):
            self._log(logging.INFO, f"Cancelled {self.operation_name}", "cancelled", duration_ms=duration_ms)
        else:
            self._log(
                logging.ERROR, f"Failed {self.operation_name}", "error",
                duration_ms=duration_ms,
                error_type=exc_type.__name__,
                error_message=str(exc_val)
            )

    @property
    def duration_ms(self) -> Optional[float]:
        """Elapsed milliseconds so far, or in total once the block has exited"""
        if self.start_time is None:
            return None
        end = self.end_time or time.monotonic()
        return (end - self.start_time) * 1000

def generate_request_id() -> str:
    """Short id used to correlate log lines of one HTTP request"""
    return uuid.uuid4().hex[:8]

def log_request_details(logger: logging.Logger, method: str, path: str, client_ip: str,
                       user_agent: Optional[str] = None, request_size: Optional[int] = None):
    logger.info(f"{method} {path}", extra={
        "event": "http_request",
        "method": method,
        "path": path,
        "client_ip": client_ip,
        "user_agent": user_agent,
        "request_size_bytes": request_size
    })

def log_response_details(logger: logging.Logger, method: str, path: str, status_code: int,
                        response_size: Optional[int] = None, duration_ms: Optional[float] = None):
    level = logging.WARNING if status_code >= 500 else logging.INFO
    logger.log(level, f"{method} {path} -> {status_code}", extra={
        "event": "http_response",
        "method": method,
        "path": path,
        "status_code": status_code,
        "response_size_bytes": response_size,
        "duration_ms": duration_ms
    })

def log_external_api_call(logger: logging.Logger, service: str, endpoint: str, method: str = "POST",
                         request_size: Optional[int] = None, response_status: Optional[int] = None,
                         duration_ms: Optional[float] = None, error: Optional[str] = None):
    """Log calls to the generation provider"""
    log_data = {
        "event": "external_api_call",
        "external_service": service,
        "endpoint": endpoint,
        "method": method,
        "response_status": response_status,
        "duration_ms": duration_ms
    }

    # Log payload size instead of the payload itself; it carries the image
    if request_size is not None:
        log_data["request_data_size"] = request_size

    if error:
        log_data["error"] = error
        logger.error(f"External API call failed: {service}", extra=log_data)
    else:
        logger.info(f"External API call: {service}", extra=log_data)
