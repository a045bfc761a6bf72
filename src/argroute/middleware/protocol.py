"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    def my_mw(request: Request, next: Next) -> Any: ...

No base class required. The router checks the shape, not the lineage.

Whatever ``next`` returns (or raises) is the handler's result. A
middleware passes it through, replaces it, or catches and transforms
the exception; the router itself does none of these.
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from argroute._internal.types import Handler
from argroute.request import Request

# The next handler in the middleware chain
type Next = Callable[[Request], Any]


class Middleware(Protocol):
    """Protocol for argroute middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def timing(request: Request, next: Next) -> Any:
            start = time.monotonic()
            try:
                return next(request)
            finally:
                print(f"took {time.monotonic() - start:.3f}s")

        # Class middleware
        class RequireConfirm:
            def __call__(self, request: Request, next: Next) -> Any:
                ...
    """

    def __call__(self, request: Request, next: Next) -> Any: ...


def chain(handler: Handler, middleware: Sequence[Middleware]) -> Handler:
    """Wrap *handler* so *middleware* runs in order, first one outermost.

    With ``[A, B]`` the call order is
    ``A-before, B-before, handler, B-after, A-after``.
    """
    wrapped = handler
    for mw in reversed(middleware):
        outer = wrapped

        def wrapped_handler(
            request: Request, _mw: Middleware = mw, _next: Next = outer
        ) -> Any:
            return _mw(request, _next)

        wrapped = wrapped_handler
    return wrapped
