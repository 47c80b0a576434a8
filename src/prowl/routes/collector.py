"""Route collector — discover route files and build the route table.

Walks ``<root>/src/routes`` for ``*.py`` files and resolves each match into a
:class:`~prowl.routes.resolver.Route`, keyed by its path relative to the
routes directory::

    /home/me/site/src/routes/posts/[post].py -> "/posts/[post].py"

Collection is all-or-nothing: the first traversal or encoding failure
aborts with an error and no table is returned.
"""

from __future__ import annotations

import fnmatch
import glob
import logging
import os
import re
import sys
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from prowl._errors import FatalIOError, PathEncodingError, RouteConflictError
from prowl.routes.resolver import resolve_route

if TYPE_CHECKING:
    from collections.abc import Iterable

    from prowl._types import RouteTable, TraversalFunc

logger = logging.getLogger("prowl.routes")

DEFAULT_ROUTES_DIR = "src/routes"
DEFAULT_EXTENSION = "py"

# Single escaped glob metacharacter, as produced by glob.escape
_ESCAPED_RE = re.compile(r"\[(.)\]")


def discover_route_files(pattern: str) -> Iterable[str]:
    """Default traversal service: recursive walk, skipping private files.

    *pattern* has the form ``<escaped root>/**/<name glob>``.  Hidden files
    and directories are included.  Files whose name starts with ``_``
    (``__init__.py``, shared helpers) are not routes.  A missing root
    yields nothing; any directory that cannot be read raises ``OSError``.

    """
    prefix, _, name_glob = pattern.partition("/**/")
    root = _unescape(prefix)
    if not os.path.isdir(root):
        return

    for dirpath, dirnames, filenames in os.walk(root, onerror=_reraise):
        dirnames.sort()
        for name in sorted(filenames):
            if name.startswith("_"):
                continue
            if fnmatch.fnmatchcase(name, name_glob):
                yield os.path.join(dirpath, name)


def _unescape(escaped: str) -> str:
    """Undo :func:`glob.escape` (``[[]`` -> ``[``)."""
    return _ESCAPED_RE.sub(r"\1", escaped)


def _reraise(exc: OSError) -> None:
    raise exc


def route_glob(base_dir: Path, routes_dir: str, extension: str) -> str:
    """Build the traversal pattern for *base_dir*.

    The base directory is escaped so that bracketed directory names above
    the routes tree are matched literally.

    """
    prefix = glob.escape(str(base_dir / routes_dir))
    return f"{prefix}/**/*.{extension}"


def collect_routes(
    base_dir: str | Path,
    *,
    routes_dir: str = DEFAULT_ROUTES_DIR,
    extension: str = DEFAULT_EXTENSION,
    traverse: TraversalFunc | None = None,
) -> RouteTable:
    """Discover route files under *base_dir* and return the route table.

    Entries are inserted in sorted key order so the generated output is
    reproducible for identical inputs.

    Args:
        base_dir: Project root containing the routes directory.
        routes_dir: Routes directory relative to *base_dir*.
        extension: Route source extension without the dot.
        traverse: Traversal service mapping a glob pattern to absolute
            paths.  Defaults to :func:`discover_route_files`.

    Raises:
        FatalIOError: If the traversal fails.
        PathEncodingError: If a discovered path is not representable text.

    """
    base = Path(base_dir)
    routes_root = base / routes_dir
    pattern = route_glob(base, routes_dir, extension)
    traverse = traverse or discover_route_files

    try:
        matches = list(traverse(pattern))
    except OSError as exc:
        msg = f"Failed to read route files under {routes_root}: {exc}"
        raise FatalIOError(msg) from exc

    keys = sorted(route_key(match, routes_root) for match in matches)

    table: RouteTable = {}
    for key in keys:
        route = resolve_route(key)
        logger.debug("route %s -> %s (%s)", key, route.url_pattern, route.module_import)
        table[key] = route

    check_module_names(table)
    return table


def check_module_names(table: RouteTable) -> None:
    """Reject tables where two files share a ``module_import``.

    ``/a_b.py`` and ``/a/b.py`` both bind ``a_b``; the generated entry point
    would load one module under both URLs.

    Raises:
        RouteConflictError: Naming both source files.

    """
    seen: dict[str, str] = {}
    for key, route in table.items():
        other = seen.setdefault(route.module_import, key)
        if other != key:
            msg = (
                f"Route files {other} and {key} both resolve to module "
                f"{route.module_import!r}; rename one of them"
            )
            raise RouteConflictError(msg)


def route_key(path: str | os.PathLike[str], routes_root: Path) -> str:
    """Return *path* relative to *routes_root* as ``/a/b.py``.

    Raises:
        PathEncodingError: If *path* cannot be encoded with the filesystem
            encoding (undecodable bytes surface as lone surrogates).
        FatalIOError: If *path* is not inside *routes_root*.

    """
    text = os.fspath(path)
    try:
        text.encode(sys.getfilesystemencoding())
    except UnicodeEncodeError as exc:
        msg = f"Route path is not valid text: {text!r}"
        raise PathEncodingError(msg) from exc

    try:
        relative = Path(text).relative_to(routes_root)
    except ValueError as exc:
        msg = f"Route file {text} is outside the routes directory {routes_root}"
        raise FatalIOError(msg) from exc

    return "/" + str(PurePosixPath(*relative.parts))
