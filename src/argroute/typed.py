"""Typed, per-request context objects for handlers.

A resolver turns a ``Request`` into a value (an app config, a client, a
component adapter). ``with_context`` attaches one to a ``Builder``;
handlers registered through the resulting ``ContextBuilder`` receive the
resolved value next to the request::

    def resolve_app(request: Request) -> App:
        return App.load()

    def resolve_component(app: App, request: Request) -> Component:
        return app.component(request.params["component"])

    def routes(b: Builder) -> None:
        app = with_context(b, resolve_app)

        def comp(b: ContextBuilder[App]) -> None:
            c = with_child_context(b, resolve_component)
            c.handle("image build", "Build images", lambda req, comp: comp.build())

        app.route("comp <component>", comp)

Resolution is lazy. Nothing runs at registration time; on every
dispatch of a matching command the chain runs parent first, then each
child, then the handler. The first resolver that raises stops the
chain and its exception reaches the caller of ``dispatch()`` as-is.
Values are never cached between dispatches.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from argroute.builder import Builder
from argroute.middleware.protocol import Middleware
from argroute.request import Request
from argroute.routing.route import Route

# Produce a typed value from the request
type Resolver[T] = Callable[[Request], T]

# Handler that receives the request and a resolved value
type ContextHandler[T] = Callable[[Request, T], Any]


class ContextBuilder[T]:
    """A ``Builder`` whose handlers receive a resolved ``T``.

    Shares the prefix and middleware machinery of ``Builder``. Context
    resolution runs inside the middleware chain, immediately before the
    handler.
    """

    __slots__ = ("base", "resolve")

    def __init__(self, base: Builder, resolve: Resolver[T]) -> None:
        self.base = base
        self.resolve = resolve

    def route(self, path: str, fn: Callable[[ContextBuilder[T]], object]) -> None:
        """Add *path* to the prefix of every route defined in *fn*, keeping ``T``."""
        self.base.route(path, lambda b: fn(ContextBuilder(b, self.resolve)))

    def group(self, fn: Callable[[ContextBuilder[T]], object]) -> None:
        """Run *fn* on a typed builder with the same prefix, keeping ``T``."""
        self.base.group(lambda b: fn(ContextBuilder(b, self.resolve)))

    def with_middleware(self, *middleware: Middleware) -> ContextBuilder[T]:
        """Return a typed builder whose routes also run through *middleware*."""
        return ContextBuilder(self.base.with_middleware(*middleware), self.resolve)

    def handle(self, path: str, description: str, handler: ContextHandler[T]) -> Route:
        """Register a typed handler at the current prefix plus *path*."""
        return self.base.handle(path, description, context_handler(self.resolve, handler))


def context_handler[T](resolve: Resolver[T], handler: ContextHandler[T]) -> Callable[[Request], Any]:
    """Lift a resolver and a typed handler into a plain handler.

    For call sites that register directly on the router::

        router.register(
            "comp <component> info", "Component info",
            context_handler(resolve_component, show_info),
        )
    """

    def resolved(request: Request) -> Any:
        value = resolve(request)
        return handler(request, value)

    return resolved


def with_context[T](builder: Builder, resolve: Resolver[T]) -> ContextBuilder[T]:
    """Lift an untyped builder into a ``ContextBuilder[T]``."""
    return ContextBuilder(builder, resolve)


def with_child_context[T, U](
    builder: ContextBuilder[T],
    resolve: Callable[[T, Request], U],
) -> ContextBuilder[U]:
    """Derive a ``ContextBuilder[U]`` whose value is computed from the parent ``T``.

    The parent resolver runs first; if it raises, *resolve* is never
    called.
    """
    parent_resolve = builder.resolve

    def resolve_child(request: Request) -> U:
        parent = parent_resolve(request)
        return resolve(parent, request)

    return ContextBuilder(builder.base, resolve_child)


@dataclass(frozen=True)
class ParentChild[T, U]:
    """A resolved child value together with the parent it was derived from."""

    parent: T
    child: U


def with_parent_child_context[T, U](
    builder: ContextBuilder[T],
    resolve: Callable[[T, Request], U],
) -> ContextBuilder[ParentChild[T, U]]:
    """Like ``with_child_context``, but handlers receive both values.

    Example::

        pc = with_parent_child_context(app, resolve_component)
        pc.handle("info", "Info", lambda req, v: print(v.parent.name, v.child.name))
    """

    def pair(parent: T, request: Request) -> ParentChild[T, U]:
        return ParentChild(parent, resolve(parent, request))

    return with_child_context(builder, pair)
