"""Route, RouteMatch and PathSegment frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SegmentKind(Enum):
    STATIC = "static"
    PARAM = "param"
    REST = "rest"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``/snippet``       (kind=STATIC, value="snippet")
    Param:   ``/{id}``          (kind=PARAM, param_name="id")
    Rest:    ``/{path...}``     (kind=REST, param_name="path")
    Subtree: trailing ``/``     (kind=REST, param_name=None)
    Anchor:  ``/{$}``           (kind=STATIC, value="")
    """

    value: str
    kind: SegmentKind = SegmentKind.STATIC
    param_name: str | None = None

    @property
    def is_param(self) -> bool:
        return self.kind is SegmentKind.PARAM

    @property
    def is_rest(self) -> bool:
        return self.kind is SegmentKind.REST


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition: one method, one path pattern.

    Created during setup and compiled into the router's trie.
    """

    method: str
    path: str
    handler: Callable[..., Any]
    name: str | None = None

    @property
    def pattern(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
