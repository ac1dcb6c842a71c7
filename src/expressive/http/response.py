"""
=============================================================================
RESPONSE
=============================================================================

Transport-agnostic response that handlers write to.

Handlers set the status and headers, then call exactly one of the send
methods, which commits the response. After dispatch the transport reads
`status_code`, `headers` and `body` and puts them on the wire.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      RESPONSE LIFECYCLE                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   handler                      Response                 transport   │
    │   ───────                      ────────                 ─────────   │
    │   response.status(201)   ──►   status_code = 201                    │
    │   .set_header(...)       ──►   headers += (name, value)             │
    │   .send_json({...})      ──►   body = b'{...}'                      │
    │                                committed = True   ──►   write bytes  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
DEFAULTS
=============================================================================

    send_text(body)    status 200 if none was set,
                       Content-Type text/html; charset=utf-8 if none was set
    send_json(value)   Content-Type application/json; charset=utf-8
    send_file(path)    status 200, Content-Type sniffed from the extension
                       unless already set; 404 page if the file is missing

=============================================================================
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union
import logging

from ..json import serialize
from .static import load_file


logger = logging.getLogger(__name__)


class ResponseAlreadySentError(RuntimeError):
    """Raised when a send method is called on a committed response."""


@dataclass
class Response:
    """
    An HTTP response under construction.

    Headers are kept as an ordered list of (name, value) pairs so that
    append_header() can repeat a header such as Set-Cookie. Lookups are
    case-insensitive.

    All setters return the response for chaining:

        response.status(404).content_type("text/plain").send_text("gone")
    """

    status_code: Optional[int] = None
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    committed: bool = False

    # =========================================================================
    # STATUS AND HEADERS
    # =========================================================================

    def status(self, code: int) -> "Response":
        """Set the HTTP status code (200, 404, ...)."""
        self.status_code = int(code)
        return self

    def set_header(self, name: str, value: str) -> "Response":
        """Set a header, replacing every existing value of it."""
        lowered = name.lower()
        self.headers = [(n, v) for n, v in self.headers if n.lower() != lowered]
        self.headers.append((name, value))
        return self

    def append_header(self, name: str, value: str) -> "Response":
        """Add a value to a header, keeping the existing ones."""
        self.headers.append((name, value))
        return self

    def get_header(self, name: str) -> Optional[str]:
        """First value of a header, or None."""
        lowered = name.lower()
        for n, v in self.headers:
            if n.lower() == lowered:
                return v
        return None

    def get_headers(self, name: str) -> List[str]:
        """All values of a header, in the order they were added."""
        lowered = name.lower()
        return [v for n, v in self.headers if n.lower() == lowered]

    def content_type(self, mime_type: str, charset: Optional[str] = None) -> "Response":
        """
        Set the Content-Type header.

        Example:
            response.content_type("text/plain", "utf-8")
            # Content-Type: text/plain; charset=utf-8
        """
        if charset:
            mime_type = f"{mime_type}; charset={charset}"
        return self.set_header("Content-Type", mime_type)

    # =========================================================================
    # SENDING
    # =========================================================================

    def _ensure_open(self) -> None:
        if self.committed:
            raise ResponseAlreadySentError("response has already been sent")

    def _commit(self, content: bytes) -> None:
        self._ensure_open()
        if self.status_code is None:
            self.status_code = 200
        self.body = content
        self.committed = True
        logger.debug(f"send {self.status_code} content-length {len(content)}")

    def send_text(self, body: str) -> None:
        """
        Send a text response.

        Uses status 200 and Content-Type text/html; charset=utf-8 unless
        they were set before.
        """
        self._ensure_open()
        if self.get_header("Content-Type") is None:
            self.content_type("text/html", "utf-8")
        self._commit(body.encode("utf-8"))

    def send_json(self, value: Any) -> None:
        """
        Send a JSON response.

        Args:
            value: A string, sent as-is because it is assumed to already
                   be JSON, or anything serialize() accepts.

        Raises:
            UnsupportedValueError: If `value` cannot be serialized.
        """
        self._ensure_open()
        text = value if isinstance(value, str) else serialize(value)
        self.content_type("application/json", "utf-8")
        self.send_text(text)

    def send_file(self, path: Union[str, Path]) -> None:
        """
        Send a file from disk.

        Reading the file and guessing its type is delegated to
        static.load_file(). A Content-Type set beforehand is kept.
        """
        self._ensure_open()
        try:
            content, sniffed_type = load_file(path)
        except FileNotFoundError:
            message = f"Not Found {path}"
            logger.debug(message)
            self.status(404).send_text(f"<html><h2>{message}</h2></html>")
            return

        if self.get_header("Content-Type") is None:
            self.set_header("Content-Type", sniffed_type)
        self.status(200)._commit(content)
