"""File-system route discovery and resolution.

Scans ``src/routes/`` for route source files and derives a URL pattern and a
module binding name for each one.

Public API::

    from prowl.routes import collect_routes, resolve_route

    table = collect_routes(Path("my-app"))
    route = resolve_route("/posts/[post].py")   # Route("posts_dyn_post", "/posts/:post")
"""

from prowl.routes.collector import collect_routes, discover_route_files, route_key
from prowl.routes.resolver import Route, Segment, has_dynamic_path, parse_segment, resolve_route

__all__ = [
    "Route",
    "Segment",
    "collect_routes",
    "discover_route_files",
    "has_dynamic_path",
    "parse_segment",
    "resolve_route",
    "route_key",
]
