"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps file extensions to MIME types for the Content-Type of files sent
with Response.send_file().

    style.css   → text/css; charset=utf-8
    app.js      → text/javascript; charset=utf-8
    data.json   → application/json
    logo.png    → image/png
    unknown.xyz → application/octet-stream

Only text/* types get a charset parameter. Everything else is sent as
the bare MIME type, including JSON (always UTF-8 per RFC 8259).

=============================================================================
"""

from pathlib import Path
from typing import Optional, Union


MIME_TYPES = {
    # -------------------------------------------------------------------------
    # TEXT
    # -------------------------------------------------------------------------
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",

    # -------------------------------------------------------------------------
    # DATA
    # -------------------------------------------------------------------------
    ".json": "application/json",
    ".map": "application/json",
    ".xml": "application/xml",
    ".wasm": "application/wasm",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".gz": "application/gzip",

    # -------------------------------------------------------------------------
    # IMAGES
    # -------------------------------------------------------------------------
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",

    # -------------------------------------------------------------------------
    # FONTS
    # -------------------------------------------------------------------------
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
}

# Unknown extension: "treat as binary"
DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(path: Union[str, Path], default: Optional[str] = None) -> str:
    """
    Get the MIME type for a file from its extension.

    Examples:
        >>> get_mime_type("style.CSS")
        'text/css'
        >>> get_mime_type("unknown.xyz")
        'application/octet-stream'
    """
    extension = Path(path).suffix.lower()
    return MIME_TYPES.get(extension, default or DEFAULT_MIME_TYPE)


def get_content_type(path: Union[str, Path], charset: str = "utf-8") -> str:
    """
    Get the Content-Type header value for a file.

    Examples:
        >>> get_content_type("page.html")
        'text/html; charset=utf-8'
        >>> get_content_type("data.json")
        'application/json'
    """
    mime_type = get_mime_type(path)
    if mime_type.startswith("text/"):
        return f"{mime_type}; charset={charset}"
    return mime_type
