"""argroute exception hierarchy.

Shared across Router, Builder, and middleware so every module raises
and catches the same types. Errors raised by user handlers and context
resolvers are never wrapped in these types; they reach the caller of
``Router.dispatch()`` unchanged.
"""

from dataclasses import dataclass


class ArgrouteError(Exception):
    """Base for all argroute-specific errors."""


class ConfigurationError(ArgrouteError):
    """Raised when a router or route definition is invalid.

    Surfaces at registration time (startup), never during dispatch.
    """


@dataclass(frozen=True, slots=True)
class NoMatchingCommand(ArgrouteError):  # noqa: N818 — mirrors the user-facing message
    """No registered pattern matched the argv.

    Carries the argv that failed to match and nothing else: there is no
    "closest match" information.
    """

    argv: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.argv:
            return f"no matching command: {' '.join(self.argv)}"
        return "no matching command"
