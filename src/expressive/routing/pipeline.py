"""
=============================================================================
PIPELINE / MIDDLEWARE ENGINE
=============================================================================

Registers (pattern, handler) pairs and dispatches each request through
them, Express style: a handler either answers or calls next() to let an
earlier registration have a go.

=============================================================================
RESOLUTION ORDER: LAST REGISTERED, FIRST TRIED
=============================================================================

Every registration is placed IN FRONT of the previous ones. The most
recently registered route is attempted first, and next() falls back to
the routes registered before it:

    app.use("/a", h1)          # registered first
    app.use("/a", h2)          # registered second

    ┌─────────────────────────────────────────────────────────────────────┐
    │   GET /a                                                             │
    │     │                                                                │
    │     ▼                                                                │
    │   [0] h2  "/a"  ── next() ──►  [1] h1  "/a"  ── next() ──►  no_match │
    │                                                              (404)   │
    └─────────────────────────────────────────────────────────────────────┘

This is the opposite of a first-match router. Register catch-all
handlers (static files, access logging) with that in mind: a handler
registered last wraps everything registered before it.

=============================================================================
BUILDER AND ROUTER
=============================================================================

    Pipeline  (setup, single thread)      Router  (serving, shared)
    ─────────────────────────────────     ─────────────────────────────
    use / get / post / put / delete  ──►  tuple of Route, newest first
    build()                               dispatch(request, response)

The Router is immutable. Dispatch walks its tuple with an index cursor;
the next() handed to a handler is a Chain holding the position where
the walk resumes. Nothing is shared between requests except the Router.

Registering routes while requests are being served is a precondition
violation: there is no lock around the builder.

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union
import logging

from ..http.request import Request
from ..http.response import Response
from .matcher import PathMatcher, compile_pattern, split_path


logger = logging.getLogger(__name__)


# =============================================================================
# TYPE ALIASES
# =============================================================================

# next() - continue with the routes registered before the current one
NextHandler = Callable[[], None]

# Generic handler registered with use(): may answer or call next()
Handler = Callable[[Request, Response, NextHandler], None]

# Callback registered with get()/post()/...: always answers
Callback = Callable[[Request, Response], None]

# Terminal handler run when nothing matched
Fallback = Callable[[Request, Response], None]


def no_match(request: Request, response: Response) -> None:
    """Default terminal handler: nothing matched, answer 404."""
    message = f"no match {request.method} {request.path}"
    logger.debug(message)
    response.status(404).send_text(f"<html><h2>{message}</h2></html>")


@dataclass(frozen=True)
class Route:
    """
    One registration.

    `method` is None for handlers registered with use(); those receive
    next(). Method routes receive only (request, response) and are
    skipped, exactly like a path mismatch, when the method differs.
    """

    matcher: PathMatcher
    handler: Union[Handler, Callback]
    method: Optional[str] = None

    @property
    def pattern(self) -> str:
        return self.matcher.pattern

    def accepts(self, method: str) -> bool:
        return self.method is None or self.method == method.upper()


class Chain:
    """
    The next() callable given to a handler.

    Calling it resumes the route scan right after the handler's own
    route, for the same request and response.
    """

    __slots__ = ("_router", "_index", "_segments", "_request", "_response")

    def __init__(
        self,
        router: "Router",
        index: int,
        segments: Sequence[str],
        request: Request,
        response: Response,
    ):
        self._router = router
        self._index = index
        self._segments = segments
        self._request = request
        self._response = response

    @property
    def index(self) -> int:
        """Position in Router.routes where the scan resumes."""
        return self._index

    def __call__(self) -> None:
        self._router._run(self._index, self._segments, self._request, self._response)


@dataclass(frozen=True)
class Router:
    """
    Immutable dispatch table built by Pipeline.build().

    `routes` is in attempt order: newest registration first.
    """

    routes: Tuple[Route, ...] = ()
    fallback: Fallback = no_match

    def dispatch(self, request: Request, response: Response) -> None:
        """
        Run the request through the routes.

        Handlers write to `response`; the router itself does no I/O.
        Exceptions raised by handlers propagate to the caller.
        """
        self._run(0, split_path(request.path), request, response)

    def _run(
        self,
        index: int,
        segments: Sequence[str],
        request: Request,
        response: Response,
    ) -> None:
        routes = self.routes

        while index < len(routes):
            route = routes[index]
            params = route.matcher.match(segments)
            if params is not None and route.accepts(request.method):
                break
            index += 1
        else:
            self.fallback(request, response)
            return

        # Fresh dict per match, owned by this request
        request.params = params

        if route.method is None:
            route.handler(request, response, Chain(self, index + 1, segments, request, response))
        else:
            route.handler(request, response)


class Pipeline:
    """
    Route registration during application setup.

    ==========================================================================
    USAGE
    ==========================================================================

        pipeline = Pipeline()

        # Plain call
        pipeline.get("/users/:id", get_user)

        # Decorator
        @pipeline.post("/users")
        def create_user(request, response):
            response.status(201).send_json(request.body_as_json_object())

        # Generic handler with next()
        @pipeline.use("/admin")
        def guard(request, response, next):
            if request.header("Authorization") is None:
                response.status(401).send_text("unauthorized")
            else:
                next()

        pipeline.dispatch(request, response)

    ==========================================================================
    """

    def __init__(self, fallback: Fallback = no_match):
        """
        Args:
            fallback: Terminal handler run when no route answers.
                      Defaults to a 404 page.
        """
        self._routes: List[Route] = []
        self._fallback = fallback
        self._router: Optional[Router] = None

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def add_route(
        self,
        pattern: str,
        handler: Union[Handler, Callback],
        method: Optional[str] = None,
    ) -> Route:
        """
        Register a route in front of all existing ones.

        This is the core registration method; use() and the method
        helpers are wrappers around it.
        """
        route = Route(
            matcher=compile_pattern(pattern),
            handler=handler,
            method=method.upper() if method else None,
        )
        self._routes.append(route)
        self._router = None  # Invalidate the cached build

        logger.debug(f"Registered route: {route.method or 'USE'} {pattern}")
        return route

    def use(self, pattern: Union[str, Handler], handler: Optional[Handler] = None):
        """
        Register a generic handler for a path pattern.

        `use(handler)` is the same as `use("/", handler)`: it sees every
        request. Without a handler, returns a decorator.

        Args:
            pattern: Path pattern, e.g. "/users/:id"
            handler: Called as handler(request, response, next)
        """
        if callable(pattern):
            pattern, handler = "/", pattern

        if handler is None:
            def decorator(func: Handler) -> Handler:
                self.add_route(pattern, func)
                return func
            return decorator

        self.add_route(pattern, handler)
        return handler

    def route(self, method: str, pattern: str, callback: Optional[Callback] = None):
        """
        Register a callback for one HTTP method.

        A request with another method falls through to earlier routes.
        Without a callback, returns a decorator.
        """
        if callback is None:
            def decorator(func: Callback) -> Callback:
                self.add_route(pattern, func, method)
                return func
            return decorator

        self.add_route(pattern, callback, method)
        return callback

    def get(self, pattern: str, callback: Optional[Callback] = None):
        """Register a GET callback."""
        return self.route("GET", pattern, callback)

    def post(self, pattern: str, callback: Optional[Callback] = None):
        """Register a POST callback."""
        return self.route("POST", pattern, callback)

    def put(self, pattern: str, callback: Optional[Callback] = None):
        """Register a PUT callback."""
        return self.route("PUT", pattern, callback)

    def delete(self, pattern: str, callback: Optional[Callback] = None):
        """Register a DELETE callback."""
        return self.route("DELETE", pattern, callback)

    def patch(self, pattern: str, callback: Optional[Callback] = None):
        """Register a PATCH callback."""
        return self.route("PATCH", pattern, callback)

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def build(self) -> Router:
        """Freeze the current registrations into a Router."""
        if self._router is None:
            self._router = Router(
                routes=tuple(reversed(self._routes)),
                fallback=self._fallback,
            )
        return self._router

    def dispatch(self, request: Request, response: Response) -> None:
        """Dispatch one request through the current registrations."""
        self.build().dispatch(request, response)

    def __len__(self) -> int:
        return len(self._routes)
