"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(request: Request, next: Next) -> Any

Built-in middleware:
    CommandLogMiddleware -- Log command start, duration, and failures
"""

from argroute.middleware.builtin import CommandLogConfig, CommandLogMiddleware
from argroute.middleware.protocol import Middleware, Next, chain

__all__ = [
    "CommandLogConfig",
    "CommandLogMiddleware",
    "Middleware",
    "Next",
    "chain",
]
