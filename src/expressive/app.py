"""
=============================================================================
APPLICATION
=============================================================================

The Express-like facade: register routes during setup, then listen().

    from expressive import express, static_files

    app = express()

    @app.get("/users/:id")
    def get_user(request, response):
        response.send_json({"id": request.param("id")})

    @app.post("/users")
    def create_user(request, response):
        user = request.body_as_json_object()
        response.status(201).send_json(user)

    app.use(static_files("./public"))

    server = app.listen(8080)
    ...
    server.close()

Remember the resolution order: the LAST registration is tried FIRST
(see routing/pipeline.py).

=============================================================================
"""

from dataclasses import replace
from typing import Optional
import logging

from .config import ServerConfig
from .http.request import Request
from .http.response import Response
from .http.static import static_files
from .routing.matcher import compile_pattern
from .routing.pipeline import Pipeline, Route, Router
from .server import Server, configure_logging, serve


logger = logging.getLogger(__name__)


class Express:
    """
    An application: a Pipeline plus the means to serve it.

    All registration must happen before listen(). The router is frozen
    when listen() is called; registrations made afterwards are not seen
    by the running server.
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self._pipeline = Pipeline()

    @property
    def pipeline(self) -> Pipeline:
        return self._pipeline

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def use(self, pattern, handler=None):
        """Register a generic handler; see Pipeline.use()."""
        return self._pipeline.use(pattern, handler)

    def get(self, pattern: str, callback=None):
        """Register a GET callback."""
        return self._pipeline.get(pattern, callback)

    def post(self, pattern: str, callback=None):
        """Register a POST callback."""
        return self._pipeline.post(pattern, callback)

    def put(self, pattern: str, callback=None):
        """Register a PUT callback."""
        return self._pipeline.put(pattern, callback)

    def delete(self, pattern: str, callback=None):
        """Register a DELETE callback."""
        return self._pipeline.delete(pattern, callback)

    def patch(self, pattern: str, callback=None):
        """Register a PATCH callback."""
        return self._pipeline.patch(pattern, callback)

    # =========================================================================
    # DISPATCH AND SERVING
    # =========================================================================

    def dispatch(self, request: Request, response: Response) -> None:
        """Run one request through the registered routes."""
        self._pipeline.dispatch(request, response)

    __call__ = dispatch

    def build(self) -> Router:
        """
        Freeze the routes for serving.

        When config.static_dir is set, a static_files() handler is added
        behind every registered route.
        """
        router = self._pipeline.build()
        if self.config.static_dir:
            static_route = Route(compile_pattern("/"), static_files(self.config.static_dir))
            router = Router(routes=router.routes + (static_route,), fallback=router.fallback)
        return router

    def listen(self, port: Optional[int] = None, host: Optional[str] = None) -> Server:
        """
        Start serving in the background and return the running Server.

        Args:
            port: Override config.port (0 picks a free port).
            host: Override config.host.

        Raises:
            ValueError: If the configuration is invalid.
            OSError: If the address cannot be bound.
        """
        overrides = {}
        if port is not None:
            overrides["port"] = port
        if host is not None:
            overrides["host"] = host
        config = replace(self.config, **overrides)
        config.validate()

        configure_logging(config.log_level)
        logger.info(f"Starting with {len(self._pipeline)} registered routes")

        # validate() ran on the overridden copy; build() only reads static_dir
        return serve(self.build(), config)


def express(config: Optional[ServerConfig] = None) -> Express:
    """Create an application."""
    return Express(config)
