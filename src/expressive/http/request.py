"""
=============================================================================
REQUEST
=============================================================================

Transport-agnostic view of an incoming HTTP request.

The transport (see server.py) fills in the method, path, headers and
body; the router fills in `params`; handlers read everything through
the accessors below.

=============================================================================
ATTRIBUTES
=============================================================================

    method:         Upper-cased HTTP method ("GET", "POST", ...)

    path:           Request path WITHOUT the query string
                    "/api/users" not "/api/users?page=1"

    headers:        Dict with LOWERCASE keys. HTTP header names are
                    case-insensitive, so they are normalized once here.

    query_params:   Parsed query string as dict of lists
                    "?a=1&a=2&b=3" → {"a": ["1", "2"], "b": ["3"]}

    params:         Route parameters set by the router
                    "/users/:id" matched on "/users/42" → {"id": "42"}

    body / stream:  The body, either already read (bytes) or as a
                    binary stream the transport has not consumed yet.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional
import io

from ..json import parse, parse_array, parse_object


JSON_MEDIA_TYPE = "application/json"


class ContentTypeMismatchError(Exception):
    """
    Raised when a body is read as JSON but the request is not JSON.

    Carries the Content-Type actually received (None if the header was
    missing) so a handler can report it.
    """

    def __init__(self, content_type: Optional[str], expected: str = JSON_MEDIA_TYPE):
        super().__init__(
            f"Content-Type is not '{expected}' (got {content_type!r})"
        )
        self.content_type = content_type
        self.expected = expected


@dataclass
class Request:
    """
    An HTTP request as seen by handlers.

    Example:
        request = Request(
            method="POST",
            path="/users",
            headers={"content-type": "application/json"},
            body=b'{"name": "Ada"}',
        )
        request.body_as_json_object()   # {'name': 'Ada'}
    """

    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    stream: Optional[BinaryIO] = field(default=None, repr=False)
    query_params: Dict[str, List[str]] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    client_address: tuple = ("", 0)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        # Normalize header names once so lookups can be case-insensitive
        self.headers = {name.lower(): value for name, value in self.headers.items()}

    # =========================================================================
    # HEADERS AND PARAMETERS
    # =========================================================================

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value, case-insensitively."""
        return self.headers.get(name.lower(), default)

    def param(self, name: str, default: str = "") -> str:
        """
        Get a route parameter.

        Example:
            # Route "/users/:id", request "/users/42"
            request.param("id")       # "42"
            request.param("missing")  # ""
        """
        return self.params.get(name, default)

    def query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first value of a query parameter."""
        values = self.query_params.get(name, [])
        return values[0] if values else default

    @property
    def content_type(self) -> Optional[str]:
        """
        The media type of the body, without parameters.

        "application/json; charset=utf-8" → "application/json"
        """
        value = self.headers.get("content-type")
        if value is None:
            return None
        return value.split(";")[0].strip().lower() or None

    @property
    def is_json(self) -> bool:
        return self.content_type == JSON_MEDIA_TYPE

    # =========================================================================
    # BODY
    # =========================================================================

    def body_stream(self) -> BinaryIO:
        """
        The body as a binary stream.

        If the body was already read into memory, a fresh in-memory
        stream over it is returned.
        """
        if self.body is not None:
            return io.BytesIO(self.body)
        if self.stream is not None:
            return self.stream
        return io.BytesIO(b"")

    def body_bytes(self) -> bytes:
        """
        The whole body as bytes.

        Reading from `stream` consumes it; the bytes are kept in `body`
        so later calls see the same content.
        """
        if self.body is None:
            self.body = self.stream.read() if self.stream is not None else b""
        return self.body

    def body_text(self, encoding: str = "utf-8") -> str:
        """The whole body decoded as text."""
        return self.body_bytes().decode(encoding)

    def _require_json(self) -> str:
        if not self.is_json:
            raise ContentTypeMismatchError(self.header("content-type"))
        return self.body_text()

    def body_as_json(self) -> Any:
        """
        Parse the body as a JSON object or array.

        Raises:
            ContentTypeMismatchError: If Content-Type is not application/json.
            LexError, ParseError: If the body is not valid JSON.
        """
        return parse(self._require_json())

    def body_as_json_object(self) -> Dict[str, Any]:
        """Parse the body as a JSON object (a dict)."""
        return parse_object(self._require_json())

    def body_as_json_array(self) -> List[Any]:
        """Parse the body as a JSON array (a list)."""
        return parse_array(self._require_json())
