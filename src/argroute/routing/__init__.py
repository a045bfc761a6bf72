"""Routing — pattern parsing, ranked matching, and the route table.

Routes are registered during setup. Dispatch ranks every matching
route and runs the most specific one.
"""

from argroute.routing.match import evaluate, rank_of
from argroute.routing.pattern import parse_pattern, split_pattern
from argroute.routing.route import Route, RouteMatch, Segment
from argroute.routing.router import Router

__all__ = [
    "Route",
    "RouteMatch",
    "Router",
    "Segment",
    "evaluate",
    "parse_pattern",
    "rank_of",
    "split_pattern",
]
