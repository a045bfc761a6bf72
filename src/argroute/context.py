"""Dispatch-scoped context via ContextVar.

Provides:
- ``request_var``: The ``Request`` currently being dispatched.
- ``background()``: The default context value for requests dispatched
  without one.

``request_var`` is set by ``Router.dispatch()`` around the handler chain
and reset afterwards. Accessing it outside a dispatch raises
``LookupError``.

Thread safety:
    ``ContextVar`` is thread-local and task-local. Concurrent dispatches
    against the same router each see their own request.
"""

import contextvars
from contextvars import ContextVar

from argroute.request import Request

request_var: ContextVar[Request] = ContextVar("argroute_request")
"""The current request. Set by the router before invoking the handler."""


def get_request() -> Request:
    """Return the request being dispatched.

    Raises ``LookupError`` if called outside a dispatch.
    """
    return request_var.get()


def background() -> contextvars.Context:
    """Return the empty context used when a caller supplies none.

    A fresh snapshot of the current ``contextvars`` state, so values the
    caller set before dispatching stay readable through
    ``request.context.get(var)``, and nothing written through it leaks
    into other dispatches.
    """
    return contextvars.copy_context()
