"""Shared type definitions for prowl."""

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prowl.routes.resolver import Route

# Route source path relative to the routes directory (e.g., "/posts/[post].py")
type RouteKey = str

# Relative route path -> derived Route, one entry per discovered file
type RouteTable = dict[RouteKey, Route]

# Traversal service: glob pattern -> absolute file paths
type TraversalFunc = Callable[[str], Iterable[str]]
