"""
=============================================================================
HTTP TRANSPORT
=============================================================================

Puts a Router on the network using the standard library's
ThreadingHTTPServer: one thread per request, each running its dispatch
to completion.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. ACCEPT
       └── ThreadingHTTPServer accepts the connection, starts a thread
    2. PARSE
       └── http.server parses the request line and headers
    3. BUILD
       └── Request(method, path, headers, body), empty Response
    4. DISPATCH
       └── router.dispatch(request, response)
    5. MAP FAILURES
       └── bad Content-Length     → 400
           body too large         → 413
           uncaught exception     → 500
           response never sent    → 500
    6. WRITE
       └── status line, headers, Content-Length, body

The router is built before the first request is accepted and never
changes afterwards; the only state a request thread touches is its own
Request and Response.

=============================================================================
"""

from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse
import logging
import threading

from .config import ServerConfig
from .http.request import Request
from .http.response import Response
from .routing.pipeline import Router


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging and the package logger level."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("expressive").setLevel(numeric_level)


class Server:
    """
    Handle on a running server.

    Usable as a context manager:

        with app.listen(0) as server:
            urlopen(f"http://127.0.0.1:{server.port}/")
    """

    def __init__(self, httpd: ThreadingHTTPServer, thread: threading.Thread):
        self._httpd = httpd
        self._thread = thread

    @property
    def host(self) -> str:
        return self._httpd.server_address[0]

    @property
    def port(self) -> int:
        """The bound port, useful when listening on port 0."""
        return self._httpd.server_address[1]

    def wait(self) -> None:
        """Block until the server is closed."""
        self._thread.join()

    def close(self) -> None:
        """Stop accepting requests and release the socket."""
        logger.info(f"Shutting down server on port {self.port}")
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join(timeout=5.0)

    def __enter__(self) -> "Server":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _error_response(status: int, message: str) -> Response:
    response = Response()
    response.status(status).send_text(f"<html><h2>{message}</h2></html>")
    return response


def _make_handler_class(router: Router, config: ServerConfig) -> type:
    """Create a request handler class bound to `router`."""

    class RequestHandler(BaseHTTPRequestHandler):
        server_version = config.server_name
        sys_version = ""

        def log_message(self, format: str, *args) -> None:  # noqa: A002
            # http.server's own access lines go to debug
            logger.debug(f"{self.address_string()} - {format % args}")

        def _handle(self) -> None:
            logger.info(f"request {self.command} {self.path}")

            try:
                length = int(self.headers.get("Content-Length") or 0)
            except ValueError:
                length = -1

            if length < 0:
                logger.warning(f"Invalid Content-Length: {self.headers.get('Content-Length')}")
                self.close_connection = True
                self._write(_error_response(400, "Invalid Content-Length"))
                return

            if length > config.max_request_size:
                logger.warning(f"Rejecting body of {length} bytes")
                self._discard(length)
                self._write(_error_response(413, "Payload Too Large"))
                return

            parsed = urlparse(self.path)
            request = Request(
                method=self.command,
                path=unquote(parsed.path),
                headers=dict(self.headers.items()),
                body=self.rfile.read(length) if length else b"",
                query_params=parse_qs(parsed.query),
                client_address=self.client_address,
            )
            response = Response()

            try:
                router.dispatch(request, response)
            except Exception as e:
                logger.exception(f"Handler error for {request.method} {request.path}: {e}")
                response = _error_response(500, "Internal Server Error")
            else:
                if not response.committed:
                    logger.warning(f"No response sent for {request.method} {request.path}")
                    response = _error_response(500, "Internal Server Error")

            self._write(response)

        def _discard(self, length: int) -> None:
            # Unread input would make the close reset the connection
            # before the client sees the response
            while length > 0:
                chunk = self.rfile.read(min(length, 64 * 1024))
                if not chunk:
                    break
                length -= len(chunk)

        def _write(self, response: Response) -> None:
            self.send_response(response.status_code or 200)
            for name, value in response.headers:
                self.send_header(name, value)
            if response.get_header("Content-Length") is None:
                self.send_header("Content-Length", str(len(response.body)))
            self.end_headers()

            if self.command != "HEAD":
                self.wfile.write(response.body)

        do_GET = do_POST = do_PUT = do_DELETE = _handle
        do_PATCH = do_HEAD = do_OPTIONS = _handle

    return RequestHandler


def serve(router: Router, config: Optional[ServerConfig] = None) -> Server:
    """
    Start serving `router` in a background thread.

    Returns immediately; call close() on the result to stop.
    """
    config = config or ServerConfig()
    handler_class = _make_handler_class(router, config)
    httpd = ThreadingHTTPServer((config.host, config.port), handler_class)

    thread = threading.Thread(
        target=httpd.serve_forever,
        name=f"expressive-{httpd.server_address[1]}",
        daemon=True,
    )
    thread.start()

    logger.info(f"Listening on http://{config.host}:{httpd.server_address[1]}")
    return Server(httpd, thread)
