"""Routing — a frozen route table keyed by method and path pattern."""

from snippetbox.routing.route import PathSegment, Route, RouteMatch, SegmentKind
from snippetbox.routing.router import Router, parse_path

__all__ = ["PathSegment", "Route", "RouteMatch", "Router", "SegmentKind", "parse_path"]
