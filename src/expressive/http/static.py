"""
=============================================================================
STATIC FILES
=============================================================================

Reads files from disk for Response.send_file(), and provides the
static_files() handler that maps request paths onto a directory.

    app.use(static_files("./public"))

    GET /css/site.css   →  ./public/css/site.css
    GET /               →  ./public/index.html
    GET /../etc/passwd  →  403 Forbidden

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

The request path comes from the client. Joining it onto the root
directory and resolving the result follows any ".." components and
symlinks; the resolved path must still be inside the root:

    full_path = (root / request_path).resolve()
    full_path.relative_to(root)        # Raises ValueError if outside

=============================================================================
"""

from pathlib import Path
from typing import TYPE_CHECKING, Callable, Tuple, Union
import logging

from .mime_types import get_content_type

if TYPE_CHECKING:
    from .request import Request
    from .response import Response


logger = logging.getLogger(__name__)


def load_file(path: Union[str, Path]) -> Tuple[bytes, str]:
    """
    Read a file and sniff its content type.

    Returns:
        (content, content_type)

    Raises:
        FileNotFoundError: If `path` does not exist or is not a file.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(str(path))

    content = path.read_bytes()
    logger.debug(f"Loaded {path} ({len(content)} bytes)")
    return content, get_content_type(path)


def static_files(
    root: Union[str, Path],
    index_file: str = "index.html",
) -> Callable[["Request", "Response", Callable[[], None]], None]:
    """
    Create a handler serving files below `root`.

    Missing files are answered with a 404 page by send_file(); they do
    not fall through to next().

    Args:
        root: Directory to serve files from.
        index_file: File served for directory requests.

    Returns:
        A handler for Pipeline.use().
    """
    root_dir = Path(root).resolve()

    def serve(request: "Request", response: "Response", next: Callable[[], None]) -> None:
        relative = request.path.lstrip("/")

        try:
            # resolve() also rejects paths with a NUL byte
            full_path = (root_dir / relative).resolve()
            full_path.relative_to(root_dir)
        except ValueError:
            logger.warning(f"Path traversal attempt: {request.path}")
            response.status(403).send_text("<html><h2>Forbidden</h2></html>")
            return

        if full_path.is_dir():
            full_path = full_path / index_file

        response.send_file(full_path)

    return serve
