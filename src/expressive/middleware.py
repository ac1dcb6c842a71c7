"""
=============================================================================
ACCESS LOG MIDDLEWARE
=============================================================================

A generic handler that times everything registered before it and logs
one line per request.

Because the most recently registered handler runs first, register it
LAST so it wraps every other route:

    app = express()
    app.get("/users/:id", get_user)
    app.use(static_files("./public"))
    app.use(access_log())              # registered last → runs first

    ┌─────────────────────────────────────────────────────────────────────┐
    │   access_log ── next() ──► static_files ── next() ──► get_user      │
    │       │                                                              │
    │       └── after next() returns: log method, path, status, timing    │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
LOG FORMATS
=============================================================================

text (Apache-like):
    127.0.0.1 - - [18/Oct/2026:10:00:00 +0000] "GET /users/42" 200 27 0.41ms

json (one object per line, for log aggregators):
    {"request_id": "1f0c9a2e", "method": "GET", "path": "/users/42", ...}

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional
import logging
import time
import uuid

from .http.request import Request
from .http.response import Response
from .json import serialize


logger = logging.getLogger("expressive.access")


@dataclass
class RequestLog:
    """Structured access log entry. Serialized field by field, in order."""

    request_id: str
    method: str
    path: str
    client_ip: str
    user_agent: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_text(self) -> str:
        return (
            f'{self.client_ip} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )

    def to_json(self) -> str:
        return serialize(self)


class AccessLogMiddleware:
    """
    Request logging handler for Pipeline.use().

    - Times the rest of the pipeline
    - Adds an X-Request-ID header for correlation
    - Logs failures with the exception type and re-raises them
    """

    def __init__(
        self,
        log_format: str = "text",
        include_request_id: bool = True,
        log_level: int = logging.INFO,
        skip_paths: Optional[Iterable[str]] = None,
    ):
        """
        Args:
            log_format: "text" or "json".
            include_request_id: Add X-Request-ID to every response.
            log_level: Level of the access log records.
            skip_paths: Paths not to log, e.g. health checks.
        """
        if log_format not in ("text", "json"):
            raise ValueError(f"Unknown log format: {log_format}")

        self.log_format = log_format
        self.include_request_id = include_request_id
        self.log_level = log_level
        self.skip_paths = set(skip_paths or ())

    def __call__(self, request: Request, response: Response, next: Callable[[], None]) -> None:
        request_id = uuid.uuid4().hex[:8]
        if self.include_request_id:
            response.set_header("X-Request-ID", request_id)

        start_time = time.perf_counter()
        try:
            next()
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.path} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise
        duration_ms = (time.perf_counter() - start_time) * 1000

        if request.path in self.skip_paths:
            return

        entry = RequestLog(
            request_id=request_id,
            method=request.method,
            path=request.path,
            client_ip=request.client_address[0] or "-",
            user_agent=request.header("user-agent") or "-",
            status_code=response.status_code or 0,
            content_length=len(response.body),
            duration_ms=round(duration_ms, 2),
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, entry.to_json())
        else:
            logger.log(self.log_level, entry.to_text())


def access_log(**kwargs) -> AccessLogMiddleware:
    """Create an AccessLogMiddleware; see its __init__ for options."""
    return AccessLogMiddleware(**kwargs)
