"""Route table with ranked argv matching.

Routes are registered during setup. Dispatch scans the whole table,
ranks every matching route, and runs the most specific one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import IO, TYPE_CHECKING, Any

from argroute._internal.types import Handler
from argroute.config import RouterConfig
from argroute.context import background, request_var
from argroute.errors import ConfigurationError, NoMatchingCommand
from argroute.request import Request
from argroute.routing.match import match_segments
from argroute.routing.pattern import parse_pattern
from argroute.routing.route import Route, RouteMatch

if TYPE_CHECKING:
    from argroute.builder import Builder

logger = logging.getLogger("argroute.router")


class Router:
    """Registered commands and the dispatch entry point.

    Usage::

        router = Router()
        router.register("version", "Show version", show_version)
        router.register("users <id>", "Show a user", show_user)
        router.register("users me", "Show the current user", show_me)
        router.dispatch(["users", "me"])  # runs show_me

    Thread safety:
        Registration is not synchronized and belongs at startup. Once
        the table stops changing, concurrent ``dispatch()`` calls are
        safe: dispatch only reads the table and allocates its own
        params, extra and request.
    """

    __slots__ = ("_routes", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.config.validate()
        self._routes: list[Route] = []

    # -- Registration --

    def register(self, pattern: str, description: str, handler: Handler) -> Route:
        """Register a full pattern, its description and handler.

        Pattern tokens are whitespace-separated: literal words match
        themselves, ``<name>`` binds a parameter, and a bare integer is
        a help-ordering hint for the next token::

            router.register("comp <component> image build", "Build images", build)

        Raises ``ConfigurationError`` if the pattern has more segments
        than ``config.max_segments``. Duplicate patterns are allowed;
        the first one registered wins dispatch.
        """
        segments = parse_pattern(pattern)
        if len(segments) > self.config.max_segments:
            msg = (
                f"Pattern {pattern!r} has {len(segments)} segments; "
                f"at most {self.config.max_segments} are supported."
            )
            raise ConfigurationError(msg)

        route = Route(segments=segments, handler=handler, description=description)
        self._routes.append(route)
        logger.debug("registered %r", route.pattern)
        return route

    def build(self, fn: Callable[[Builder], None]) -> None:
        """Build routes with a nested ``Builder``.

        Example::

            def routes(b: Builder) -> None:
                b.route("comp <component>", lambda b: b.handle("info", "Show info", info))

            router.build(routes)
        """
        from argroute.builder import Builder

        fn(Builder(self))

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    # -- Dispatch --

    def match(self, argv: Sequence[str]) -> RouteMatch:
        """Find the most specific route matching *argv*.

        Every route is evaluated. Ties go to the earliest registered
        route. Raises ``NoMatchingCommand`` if nothing matches.
        """
        best: RouteMatch | None = None
        for route in self._routes:
            result = match_segments(route.segments, argv)
            if result is None:
                continue
            params, rank = result
            if best is None or rank > best.rank:
                best = RouteMatch(
                    route=route,
                    params=params,
                    extra=tuple(argv[len(route.segments) :]),
                    rank=rank,
                )

        if best is None:
            logger.debug("no route matches %r", list(argv))
            raise NoMatchingCommand(tuple(argv))

        logger.debug("matched %r for %r", best.route.pattern, list(argv))
        return best

    def dispatch(self, argv: Sequence[str], context: Any = None) -> Any:
        """Run the command matching *argv* and return its handler's result.

        *context* is carried on ``Request.context`` untouched; ``None``
        means ``background()``. Raises ``NoMatchingCommand`` when no
        route matches. Anything raised by middleware, a context resolver
        or the handler propagates unchanged.
        """
        found = self.match(argv)
        request = Request(
            args=tuple(argv),
            params=found.params,
            extra=found.extra,
            context=background() if context is None else context,
        )
        token = request_var.set(request)
        try:
            return found.route.handler(request)
        finally:
            request_var.reset(token)

    # -- Help --

    def print_help(self, file: IO[str] | None = None, *, color: bool | None = None) -> None:
        """Print every registered pattern with its description."""
        from argroute.help import print_help

        print_help(self, file, color=color)
