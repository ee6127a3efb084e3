"""Compiled router with trie-based path matching.

Routes are registered during setup and frozen by ``compile()``.

Pattern syntax::

    /snippet/create        literal segments
    /snippet/view/{id}     one named, non-empty segment
    /files/{path...}       the rest of the path, named (may be empty)
    /static/               trailing slash: /static/ and everything below
    /{$}                   exactly "/" and nothing deeper

Request paths are split on ``/`` keeping the trailing empty segment, so
``/a`` and ``/a/`` are distinct paths.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from snippetbox.errors import ConfigurationError, MethodNotAllowed, NotFound, RedirectSlash
from snippetbox.routing.route import PathSegment, Route, RouteMatch, SegmentKind

_ANCHOR = "{$}"
_REST_SUFFIX = "..."


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/"                  -> [PathSegment("", REST)]
        "/{$}"               -> [PathSegment("")]
        "/snippet/view/{id}" -> [PathSegment("snippet"), PathSegment("view"),
                                 PathSegment("{id}", PARAM, "id")]
        "/static/"           -> [PathSegment("static"), PathSegment("", REST)]
    """
    if not path.startswith("/"):
        msg = f"Route pattern {path!r} must start with '/'."
        raise ConfigurationError(msg)
    if "<" in path and ">" in path:
        msg = (
            f"Route pattern {path!r} uses <param> syntax. "
            "Snippetbox expects {param}, e.g. /snippet/view/{id}."
        )
        raise ConfigurationError(msg)

    parts = path[1:].split("/")
    segments: list[PathSegment] = []
    seen: set[str] = set()

    for index, part in enumerate(parts):
        last = index == len(parts) - 1

        if not part:
            if not last:
                msg = f"Route pattern {path!r} has an empty segment."
                raise ConfigurationError(msg)
            # Trailing slash: match the whole subtree
            segments.append(PathSegment(value="", kind=SegmentKind.REST))
            continue

        if part == _ANCHOR:
            if not last:
                msg = f"{_ANCHOR} must be the final segment of {path!r}."
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=""))
            continue

        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            is_rest = inner.endswith(_REST_SUFFIX)
            name = inner.removesuffix(_REST_SUFFIX)
            if not name.isidentifier():
                msg = f"Invalid parameter name {name!r} in route pattern {path!r}."
                raise ConfigurationError(msg)
            if name in seen:
                msg = f"Duplicate parameter {name!r} in route pattern {path!r}."
                raise ConfigurationError(msg)
            seen.add(name)
            if is_rest and not last:
                msg = f"{{{name}...}} must be the final segment of {path!r}."
                raise ConfigurationError(msg)
            kind = SegmentKind.REST if is_rest else SegmentKind.PARAM
            segments.append(PathSegment(value=part, kind=kind, param_name=name))
            continue

        if "{" in part or "}" in part:
            msg = f"Malformed segment {part!r} in route pattern {path!r}."
            raise ConfigurationError(msg)
        segments.append(PathSegment(value=part))

    return segments


def split_request_path(path: str) -> list[str]:
    """Split a request path into segments, keeping a trailing empty one."""
    return path[1:].split("/")


class _TrieNode:
    """A node in the route trie. Mutable during registration only."""

    __slots__ = ("children", "param_child", "rest_edge", "routes_by_method")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.param_child: _ParamEdge | None = None
        self.rest_edge: _RestEdge | None = None
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """Single-segment capture edge."""

    param_name: str
    node: _TrieNode = field(default_factory=_TrieNode)


@dataclass(slots=True)
class _RestEdge:
    """Edge that consumes the remaining path. Unnamed for subtree patterns."""

    param_name: str | None
    routes_by_method: dict[str, Route] = field(default_factory=dict)


class Router:
    """Route table keyed by method and path pattern.

    Usage::

        router = Router()
        router.handle("GET /snippet/view/{id}", app.snippet_view)
        router.compile()
        match = router.match("GET", "/snippet/view/42")
        match.path_params  # {"id": "42"}

    At each level a literal segment is tried first, then a capture, then
    a subtree; the walk backtracks when a deeper level fails. A ``GET``
    route also answers ``HEAD``.
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._routes: list[Route] = []
        self._compiled = False

    def handle(
        self,
        pattern: str,
        handler: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for a ``"METHOD /path"`` pattern."""
        method, sep, path = pattern.partition(" ")
        if not sep or not method.isalpha() or not method.isupper():
            msg = f"Route pattern {pattern!r} must look like 'GET /path'."
            raise ConfigurationError(msg)
        route = Route(
            method=method,
            path=path.strip(),
            handler=handler,
            name=name or getattr(handler, "__name__", None),
        )
        self.add(route)
        return route

    def add(self, route: Route) -> None:
        """Add a route. Must be called before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        table = self._table_for(parse_path(route.path), route)
        if route.method in table:
            msg = f"Route {route.pattern!r} is registered twice."
            raise ConfigurationError(msg)
        table[route.method] = route
        self._routes.append(route)

    def _table_for(self, segments: list[PathSegment], route: Route) -> dict[str, Route]:
        """Walk (and grow) the trie; return the method table for *segments*."""
        node = self._root
        for seg in segments:
            if seg.is_rest:
                if node.rest_edge is None:
                    node.rest_edge = _RestEdge(param_name=seg.param_name)
                elif node.rest_edge.param_name != seg.param_name:
                    msg = f"Route {route.pattern!r} conflicts with a sibling rest pattern."
                    raise ConfigurationError(msg)
                return node.rest_edge.routes_by_method

            if seg.is_param:
                assert seg.param_name is not None
                if node.param_child is None:
                    node.param_child = _ParamEdge(param_name=seg.param_name)
                elif node.param_child.param_name != seg.param_name:
                    msg = (
                        f"Route {route.pattern!r} names its segment {{{seg.param_name}}}, "
                        f"but a sibling route names it {{{node.param_child.param_name}}}."
                    )
                    raise ConfigurationError(msg)
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())
        return node.routes_by_method

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the table.

        Returns a ``RouteMatch`` on success.
        Raises ``MethodNotAllowed`` if the path is routed for other methods.
        Raises ``RedirectSlash`` if only the slashed path is routed.
        Raises ``NotFound`` otherwise.
        """
        if not path.startswith("/"):
            raise NotFound(f"No route matches {method} {path!r}")

        parts = split_request_path(path)
        allowed: set[str] = set()

        for table, params in self._walk(self._root, parts, 0, {}):
            route = table.get(method)
            if route is None and method == "HEAD":
                route = table.get("GET")
            if route is not None:
                return RouteMatch(route=route, path_params=params)
            allowed.update(table)

        if allowed:
            if "GET" in allowed:
                allowed.add("HEAD")
            raise MethodNotAllowed(frozenset(allowed))

        if parts[-1] and next(self._walk(self._root, [*parts, ""], 0, {}), None):
            raise RedirectSlash(path + "/")

        raise NotFound(f"No route matches {method} {path!r}")

    def _walk(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> Iterator[tuple[dict[str, Route], dict[str, str]]]:
        """Yield every method table that structurally matches, best first."""
        if index == len(parts):
            if node.routes_by_method:
                yield node.routes_by_method, params
            return

        part = parts[index]

        # 1. Literal segment
        child = node.children.get(part)
        if child is not None:
            yield from self._walk(child, parts, index + 1, params)

        # 2. Single-segment capture (never empty)
        if node.param_child is not None and part:
            edge = node.param_child
            yield from self._walk(edge.node, parts, index + 1, {**params, edge.param_name: part})

        # 3. Rest of path
        if node.rest_edge is not None and node.rest_edge.routes_by_method:
            edge = node.rest_edge
            captured = dict(params)
            if edge.param_name is not None:
                captured[edge.param_name] = "/".join(parts[index:])
            yield edge.routes_by_method, captured
