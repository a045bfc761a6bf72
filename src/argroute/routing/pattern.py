"""Command pattern parsing.

A pattern is a whitespace-separated list of tokens:

- ``<name>`` is a named parameter,
- a bare integer is a sort hint for the next segment (not a segment),
- anything else is a literal.
"""

import re
from collections.abc import Iterable

from argroute.routing.route import Segment


def split_pattern(pattern: str) -> list[str]:
    """Split pattern text into raw tokens."""
    return pattern.split()


# ASCII digits with an optional sign; anything else is a literal
_HINT_RE = re.compile(r"[+-]?[0-9]+")
_HINT_MIN = -(2**63)
_HINT_MAX = 2**63 - 1


def _sort_hint(token: str) -> int | None:
    if _HINT_RE.fullmatch(token) is None:
        return None
    value = int(token)
    if not _HINT_MIN <= value <= _HINT_MAX:
        return None
    return value


def parse_pattern(pattern: str | Iterable[str]) -> tuple[Segment, ...]:
    """Parse a pattern into segments.

    Examples::

        "version"                     -> (Segment("version"),)
        "comp <component> info"       -> (Segment("comp"),
                                          Segment("component", is_param=True),
                                          Segment("info"))
        "1 comp <component> 2 image"  -> (Segment("comp", sort=1),
                                          Segment("component", is_param=True),
                                          Segment("image", sort=2))

    A sort hint applies to the next segment only. A trailing hint with
    nothing after it is dropped.
    """
    tokens = split_pattern(pattern) if isinstance(pattern, str) else list(pattern)
    segments: list[Segment] = []
    pending_sort = 0

    for token in tokens:
        hint = _sort_hint(token)
        if hint is not None:
            pending_sort = hint
            continue

        if len(token) >= 2 and token.startswith("<") and token.endswith(">"):
            segments.append(Segment(value=token[1:-1], is_param=True, sort=pending_sort))
        else:
            segments.append(Segment(value=token, sort=pending_sort))
        pending_sort = 0

    return tuple(segments)
