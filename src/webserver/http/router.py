"""
=============================================================================
REQUEST ROUTER
=============================================================================

Maps (method, path) to a handler by LITERAL PREFIX, checked in the order
the routes were registered. The server registers exactly three:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING TABLE                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   method != "GET"           → not found                              │
    │                                                                      │
    │   GET  /static...           → StaticFileHandler.handle              │
    │   GET  /calc...             → handle_calc                            │
    │   GET  /sleep...            → SleepHandler.handle                    │
    │                                                                      │
    │   anything else             → not found                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PREFIX, NOT SEGMENT
=============================================================================

Matching is str.startswith(), not a path-segment comparison:

    /static/rex.png    → static     (obviously)
    /staticfoo         → static     (file "static/foo")
    /calculator        → calc       (then fails calc's own parse → 404 body)
    /sleepy/3          → sleep      (then fails sleep's own parse → 404 body)

Handlers do their own, stricter parsing of the rest of the path and
answer not-found when it does not fit.

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .request import Request, parse_request_line
from .response import Response, not_found


logger = logging.getLogger(__name__)

# A handler receives the parsed request and returns the response to write
Handler = Callable[[Request], Response]


@dataclass
class Route:
    """A (method, path-prefix) rule bound to a handler."""

    prefix: str
    handler: Handler
    method: str = "GET"
    name: Optional[str] = None

    def matches(self, method: str, path: str) -> bool:
        return method == self.method and path.startswith(self.prefix)


class Router:
    """
    Ordered prefix router.

    Usage:
        router = Router()

        @router.get("/calc")
        def calc(request):
            return text("Result: 0\\n")

        response = router.dispatch(b"GET /calc/add/1/2 HTTP/1.1\\r\\n\\r\\n")

    Method comparison is exact and case-sensitive: "get" is not "GET".
    """

    def __init__(self):
        self._routes: List[Route] = []

    @property
    def routes(self) -> List[Route]:
        """Registered routes in match order."""
        return list(self._routes)

    def add_route(
        self,
        prefix: str,
        handler: Handler,
        method: str = "GET",
        name: Optional[str] = None,
    ) -> Route:
        """
        Register a route. First registered, first matched.

        Args:
            prefix: Literal path prefix (e.g. "/static").
            handler: Callable taking a Request, returning a Response.
            method: Exact method string required.
            name: Optional label for logs.

        Returns:
            The registered Route.
        """
        route = Route(prefix=prefix, handler=handler, method=method, name=name)
        self._routes.append(route)
        return route

    def route(self, prefix: str, method: str = "GET", name: Optional[str] = None):
        """Decorator form of add_route()."""
        def decorator(handler: Handler) -> Handler:
            self.add_route(prefix, handler, method, name)
            return handler
        return decorator

    def get(self, prefix: str, name: Optional[str] = None):
        """Register a GET route."""
        return self.route(prefix, "GET", name)

    def match(self, method: str, path: str) -> Optional[Route]:
        """Return the first route whose method and prefix fit, or None."""
        for route in self._routes:
            if route.matches(method, path):
                return route
        return None

    def handle(self, request: Request) -> Response:
        """Route a parsed request; unmatched requests get the not-found page."""
        route = self.match(request.method, request.path)
        if route is None:
            logger.debug(f"No route for {request.method!r} {request.path!r}")
            return not_found()
        return route.handler(request)

    def dispatch(self, data: bytes) -> Response:
        """Parse the request line out of raw bytes and route it."""
        return self.handle(parse_request_line(data))
