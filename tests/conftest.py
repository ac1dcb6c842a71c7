"""
pytest configuration and fixtures.
"""

import io
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from expressive import Express, Request, Response, Server, ServerConfig, express


def make_request(
    method: str = "GET",
    path: str = "/",
    body: bytes = None,
    content_type: str = None,
    **kwargs,
) -> Request:
    """Helper to create a request for testing."""
    headers = dict(kwargs.pop("headers", {}))
    if content_type is not None:
        headers["Content-Type"] = content_type
    return Request(method=method, path=path, headers=headers, body=body, **kwargs)


def dispatch(app, method: str, path: str, **kwargs) -> Response:
    """Run one request through `app` and return the response."""
    response = Response()
    app.dispatch(make_request(method, path, **kwargs), response)
    return response


@pytest.fixture
def json_request() -> Request:
    """Sample POST request with a JSON body."""
    return make_request(
        "POST",
        "/users",
        body=b'{"name": "Ada", "age": 36}',
        content_type="application/json",
    )


@pytest.fixture
def streamed_request() -> Request:
    """Request whose body has not been read yet."""
    return Request(
        method="POST",
        path="/upload",
        headers={"Content-Type": "application/json"},
        stream=io.BytesIO(b"[1, 2, 3]"),
    )


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """A directory with a few static files."""
    (tmp_path / "index.html").write_text("<html><h1>home</h1></html>")
    (tmp_path / "data.json").write_text('{"ok": true}')
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "index.html").write_text("<html>docs</html>")
    (tmp_path / "docs" / "notes.txt").write_text("plain notes")
    return tmp_path


@pytest.fixture
def app() -> Express:
    """Application with a few test routes."""
    application = express(ServerConfig(log_level="WARNING"))

    @application.get("/test")
    def test_route(request: Request, response: Response) -> None:
        response.send_json({"status": "ok"})

    @application.post("/echo")
    def echo_route(request: Request, response: Response) -> None:
        response.send_json({"received": request.body_as_json()})

    @application.get("/users/:id")
    def get_user(request: Request, response: Response) -> None:
        response.send_json({"id": request.param("id")})

    @application.get("/boom")
    def boom(request: Request, response: Response) -> None:
        raise RuntimeError("handler failed")

    @application.get("/silent")
    def silent(request: Request, response: Response) -> None:
        pass

    return application


@pytest.fixture
def test_server(app: Express) -> Generator[Server, None, None]:
    """Run `app` on a free port in a background thread."""
    server = app.listen(port=0, host="127.0.0.1")
    yield server
    server.close()
