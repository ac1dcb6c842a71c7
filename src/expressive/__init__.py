"""
=============================================================================
EXPRESSIVE - Express-style Routing with a Minimal JSON Codec
=============================================================================

A small web framework in the style of Node's Express: register handlers
against path patterns, then let the pipeline find the one that answers.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     EXPRESSIVE ARCHITECTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. PATH MATCHING (routing/matcher.py)                             │
    │      - "/users/:id" literal and parameter segments                  │
    │                                                                      │
    │   2. PIPELINE (routing/pipeline.py)                                 │
    │      - Last registered route is tried first                         │
    │      - next() continues with earlier registrations                  │
    │                                                                      │
    │   3. JSON CODEC (json/)                                             │
    │      - Regex tokenizer, recursive descent parser, serializer        │
    │                                                                      │
    │   4. HTTP LAYER (http/, server.py)                                  │
    │      - Request/Response objects, static files                       │
    │      - ThreadingHTTPServer transport                                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    expressive/
    ├── __init__.py         # This file - public API
    ├── app.py              # Express application facade
    ├── config.py           # ServerConfig
    ├── middleware.py       # Access logging
    ├── server.py           # Transport and logging setup
    ├── routing/
    │   ├── matcher.py      # Path patterns
    │   └── pipeline.py     # Pipeline, Router, next()
    ├── http/
    │   ├── request.py      # Request
    │   ├── response.py     # Response
    │   ├── static.py       # load_file, static_files
    │   └── mime_types.py   # Extension → content type
    └── json/
        ├── tokenizer.py
        ├── parser.py
        ├── serializer.py
        └── errors.py

=============================================================================
QUICK START
=============================================================================

    from expressive import express

    app = express()

    @app.get("/hello/:name")
    def hello(request, response):
        response.send_json({"hello": request.param("name")})

    with app.listen(8080) as server:
        server.wait()

=============================================================================
"""

__version__ = "1.0.0"

from .app import Express, express
from .config import ServerConfig
from .http import (
    ContentTypeMismatchError,
    Request,
    Response,
    ResponseAlreadySentError,
    load_file,
    static_files,
)
from .json import (
    JSONError,
    LexError,
    ParseError,
    UnsupportedValueError,
    parse,
    serialize,
)
from .middleware import access_log
from .routing import Pipeline, Router, compile_pattern, split_path
from .server import Server, configure_logging, serve

__all__ = [
    # Application
    "Express",
    "express",
    "ServerConfig",
    "Server",
    "serve",
    "configure_logging",

    # Routing
    "Pipeline",
    "Router",
    "compile_pattern",
    "split_path",

    # HTTP
    "Request",
    "Response",
    "ContentTypeMismatchError",
    "ResponseAlreadySentError",
    "load_file",
    "static_files",
    "access_log",

    # JSON
    "parse",
    "serialize",
    "JSONError",
    "LexError",
    "ParseError",
    "UnsupportedValueError",
]
