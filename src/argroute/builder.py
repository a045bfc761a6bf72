"""Nested route-tree construction.

A ``Builder`` carries a pattern prefix and a middleware stack. Both are
tuples: every ``route()`` and ``with_middleware()`` call produces a new
builder with new tuples, so additions made inside one branch are never
visible to its siblings or its parent.

Usage::

    def routes(b: Builder) -> None:
        b.with_middleware(CommandLogMiddleware()).handle("version", "Show version", version)

        def comp(b: Builder) -> None:
            b.handle("info", "Show component info", info)
            b.route("image", lambda b: b.handle("build", "Build images", build))

        b.route("comp <component>", comp)

    router.build(routes)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from argroute._internal.types import Handler
from argroute.middleware.protocol import Middleware, chain
from argroute.routing.pattern import split_pattern

if TYPE_CHECKING:
    from argroute.routing.route import Route
    from argroute.routing.router import Router


class Builder:
    """Route-tree builder with prefixes and middleware."""

    __slots__ = ("middleware", "prefix", "router")

    def __init__(
        self,
        router: Router,
        prefix: tuple[str, ...] = (),
        middleware: tuple[Middleware, ...] = (),
    ) -> None:
        self.router = router
        self.prefix = prefix
        self.middleware = middleware

    def route(self, path: str, fn: Callable[[Builder], object]) -> None:
        """Add *path* to the prefix of every route defined in *fn*.

        Example::

            b.route("comp <component>", lambda b: b.route(
                "image", lambda b: b.handle("build", "Build images", build),
            ))
            # registers "comp <component> image build"
        """
        fn(Builder(self.router, self.prefix + tuple(split_pattern(path)), self.middleware))

    def group(self, fn: Callable[[Builder], object]) -> None:
        """Run *fn* with a builder that has this builder's state and no extra prefix.

        Middleware added inside *fn* stays inside it.
        """
        fn(Builder(self.router, self.prefix, self.middleware))

    def with_middleware(self, *middleware: Middleware) -> Builder:
        """Return a builder whose routes also run through *middleware*.

        This builder is unchanged::

            b.with_middleware(log).with_middleware(auth).handle("do", "Do it", do)
            # log runs first, then auth, then do
        """
        return Builder(self.router, self.prefix, self.middleware + middleware)

    def pattern(self, path: str) -> str:
        """Full pattern for *path* under this builder's prefix."""
        return " ".join(self.prefix + tuple(split_pattern(path)))

    def handle(self, path: str, description: str, handler: Handler) -> Route:
        """Register *handler* at the current prefix plus *path*."""
        return self.router.register(
            self.pattern(path), description, chain(handler, self.middleware)
        )
