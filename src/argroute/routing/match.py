"""Positional matching and specificity ranking.

Every route is tested against the argv independently. A match yields a
rank: two bits per segment, first segment in the most significant
position::

    literal   -> 0b10
    parameter -> 0b01

    "users me"    against ["users", "me"]  -> 0b1010
    "users <id>"  against ["users", "me"]  -> 0b1001

Comparing ranks as integers gives "most specific wins":

- for equal segment counts, the first position where one route has a
  literal and the other a parameter decides, whatever follows;
- a route with more segments always outranks a shorter one, because
  its lowest possible rank (``0b0101...01``) exceeds the highest rank
  of any shorter route (``0b1010...10``).
"""

from collections.abc import Sequence

from argroute.request import Params
from argroute.routing.route import Route, Segment

LITERAL = 0b10
PARAM = 0b01


def match_segments(
    segments: Sequence[Segment],
    argv: Sequence[str],
) -> tuple[Params, int] | None:
    """Match *argv* positionally against *segments*.

    Returns ``(params, rank)`` on a match, ``None`` otherwise. Tokens
    beyond the last segment are ignored here; the caller slices them
    off as ``extra``.
    """
    if len(argv) < len(segments):
        return None

    params: Params = {}
    rank = 0
    for seg, arg in zip(segments, argv, strict=False):
        if seg.is_param:
            params[seg.value] = arg
            rank = (rank << 2) | PARAM
        elif arg == seg.value:
            rank = (rank << 2) | LITERAL
        else:
            return None
    return params, rank


def evaluate(route: Route, argv: Sequence[str]) -> tuple[bool, Params, int]:
    """Test *route* against *argv*.

    Returns ``(matched, params, rank)``. On a miss, params is empty and
    rank is 0.
    """
    result = match_segments(route.segments, argv)
    if result is None:
        return False, {}, 0
    params, rank = result
    return True, params, rank


def rank_of(segments: Sequence[Segment]) -> int:
    """The rank *segments* earn on any argv they match.

    Rank depends only on pattern structure, so two textually identical
    patterns always tie.
    """
    rank = 0
    for seg in segments:
        rank = (rank << 2) | (PARAM if seg.is_param else LITERAL)
    return rank
