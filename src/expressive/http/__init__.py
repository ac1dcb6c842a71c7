"""
=============================================================================
HTTP LAYER
=============================================================================

The request/response surface handlers work with. None of it touches a
socket: the transport in server.py builds a Request, hands both objects
to the router, then writes whatever the Response holds.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST (request.py)                                                │
    │ ─────────────────────────────────────────────────────────────────── │
    │ method, path, headers, params, query_params                        │
    │ body_text(), body_as_json_object(), body_as_json_array()           │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE (response.py)                                              │
    │ ─────────────────────────────────────────────────────────────────── │
    │ status(), set_header(), append_header(), content_type()            │
    │ send_text(), send_json(), send_file()                              │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ STATIC FILES (static.py, mime_types.py)                             │
    │ ─────────────────────────────────────────────────────────────────── │
    │ load_file() for send_file(), static_files(root) handler            │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import JSON_MEDIA_TYPE, ContentTypeMismatchError, Request
from .response import Response, ResponseAlreadySentError
from .static import load_file, static_files
from .mime_types import get_content_type, get_mime_type

__all__ = [
    # Request
    "Request",
    "ContentTypeMismatchError",
    "JSON_MEDIA_TYPE",

    # Response
    "Response",
    "ResponseAlreadySentError",

    # Static files
    "load_file",
    "static_files",

    # MIME types
    "get_mime_type",
    "get_content_type",
]
