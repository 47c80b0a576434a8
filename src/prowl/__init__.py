"""Prowl — a build-time route compiler for file-system routing.

Place a file under ``src/routes/``, get a route.  Prowl scans the routes
tree, derives a URL pattern and module binding for every file, and writes a
generated server entry point that imports each handler module and registers
its page and data endpoints.

Quick start::

    import prowl

    result = prowl.bundle("my-app/")     # writes my-app/.prowl/main.py

File-path convention::

    src/routes/index.py          ->  /
    src/routes/about.py          ->  /about
    src/routes/posts/index.py    ->  /posts
    src/routes/posts/[post].py   ->  /posts/:post

"""

__version__ = "0.1.0-dev"
__all__ = [
    "ProwlConfig",
    "Route",
    "__version__",
    "bundle",
    "collect_routes",
    "generate",
    "resolve_route",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import prowl`` fast while providing a clean top-level API.
    """
    if name == "ProwlConfig":
        from prowl.config import ProwlConfig

        return ProwlConfig

    if name == "bundle":
        from prowl.app import bundle

        return bundle

    if name == "generate":
        from prowl.codegen import generate

        return generate

    if name in {"Route", "collect_routes", "resolve_route"}:
        import prowl.routes

        return getattr(prowl.routes, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
