"""Help listing for registered commands.

Produces a two-column listing of patterns and descriptions, ordered by
each route's sort key (sort hints plus literal text). Respects TTY
detection — no ANSI codes when piped or redirected.

Example output::

    Available commands:
      comp <component> info         Show component info
      comp <component> image build  Build images
      version                       Show version
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from argroute.routing.router import Router


@dataclass(frozen=True, slots=True)
class HelpEntry:
    """One line of the help listing."""

    pattern: str
    sort_key: str
    description: str


def _use_color(stream: object | None = None) -> bool:
    """True if the output stream supports ANSI color."""
    s = stream or sys.stdout
    try:
        return s.isatty()  # type: ignore[union-attr]
    except (AttributeError, ValueError):
        return False


class _Palette:
    """ANSI escape sequences — empty strings when color is disabled."""

    __slots__ = ("bold", "reset")

    def __init__(self, *, enabled: bool) -> None:
        if enabled:
            self.reset = "\033[0m"
            self.bold = "\033[1m"
        else:
            self.reset = ""
            self.bold = ""


def help_entries(router: Router) -> list[HelpEntry]:
    """Help entries for every route, sorted by sort key.

    The sort is stable: routes with equal keys keep registration order.
    """
    entries = [
        HelpEntry(pattern=route.pattern, sort_key=route.sort_key, description=route.description)
        for route in router.routes
    ]
    entries.sort(key=lambda e: e.sort_key)
    return entries


def format_help(router: Router, *, color: bool | None = None) -> str:
    """Render the help listing as a string.

    *color* overrides ``router.config.color``; when both are ``None``
    color is off (there is no stream to inspect).
    """
    cfg = router.config
    if not len(router):
        return cfg.empty_help + "\n"

    if color is None:
        color = bool(cfg.color)
    c = _Palette(enabled=color)

    entries = help_entries(router)
    width = max(len(e.pattern) for e in entries)

    lines = [f"{c.bold}{cfg.help_header}{c.reset}"]
    for e in entries:
        pattern = f"{c.bold}{e.pattern}{c.reset}" + " " * (width - len(e.pattern))
        lines.append(f"  {pattern}  {e.description}".rstrip())
    return "\n".join(lines) + "\n"


def print_help(router: Router, file: IO[str] | None = None, *, color: bool | None = None) -> None:
    """Write the help listing to *file* (default ``sys.stdout``)."""
    out = file or sys.stdout
    if color is None:
        color = router.config.color
    if color is None:
        color = _use_color(out)
    out.write(format_help(router, color=color))
