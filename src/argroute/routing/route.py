"""Segment, Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from argroute._internal.types import Handler
from argroute.request import Params


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed token position of a command pattern.

    Literal:  ``image``        (is_param=False, value="image")
    Param:    ``<component>``  (is_param=True, value="component")

    ``sort`` only orders help output. Matching never looks at it.
    """

    value: str
    is_param: bool = False
    sort: int = 0

    def __str__(self) -> str:
        if self.is_param:
            return f"<{self.value}>"
        return self.value


@dataclass(frozen=True, slots=True)
class Route:
    """A registered command.

    Created once by ``Router.register()`` and never mutated.
    """

    segments: tuple[Segment, ...]
    handler: Handler
    description: str = ""

    @property
    def pattern(self) -> str:
        """Pattern text with literals bare and parameters as ``<name>``."""
        return " ".join(str(seg) for seg in self.segments)

    @property
    def sort_key(self) -> str:
        """Help ordering key built from sort hints and literal text.

        ``"1 comp <component> 2 image build"`` -> ``"1 comp 2 image 0 build"``
        """
        return " ".join(f"{seg.sort} {seg.value}" for seg in self.segments if not seg.is_param)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(seg.value for seg in self.segments if seg.is_param)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match against an argv."""

    route: Route
    params: Params
    extra: tuple[str, ...]
    rank: int
