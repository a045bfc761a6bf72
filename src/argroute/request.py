"""Immutable command request.

One CLI invocation: the argv it came from, the parameters bound by the
matched pattern, the tokens beyond the pattern, and an opaque context
value supplied by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

# Parameter name -> the argv token bound to it
type Params = dict[str, str]


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable command request.

    ``extra`` holds the argv tokens past the matched pattern, in their
    original order. Flags and options are never interpreted here; they
    arrive in ``extra`` untouched.

    ``context`` is whatever the caller passed to ``Router.dispatch()``
    (for cancellation, deadlines, or value propagation). The router
    never inspects it. When the caller passes nothing, it is a fresh
    ``contextvars.Context`` snapshot (see ``argroute.context.background``).
    """

    args: tuple[str, ...]
    params: Params
    extra: tuple[str, ...]
    context: Any

    def param(self, name: str, default: str | None = None) -> str | None:
        """Return a bound parameter, or *default* if the pattern has none."""
        return self.params.get(name, default)

    def with_context(self, context: Any) -> Request:
        """Return a copy with *context* replaced.

        The copy gets its own params dict, so a middleware that mutates
        the copy cannot leak into the original request.
        """
        if context is None:
            msg = "Request context cannot be None"
            raise ValueError(msg)
        return replace(self, params=dict(self.params), context=context)
