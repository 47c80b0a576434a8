"""Code generator — splice the route table into the entry template.

Produces two blocks for the generated entry point::

    # MODULE_IMPORTS
    _modules['posts_dyn_post'] = _load_route('posts_dyn_post', '../src/routes/posts/[post].py')

    # ROUTE_BUILDER
    route('/posts/:post', _modules['posts_dyn_post'].route)
    route('/__prowl/data/posts/:post', _modules['posts_dyn_post'].api)

Module paths are relative to the generated file's directory, so the entry
point resolves them against its own location at import time.  Generation is
pure: nothing is read or written here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from prowl.codegen.template import DEFAULT_MARKERS, MODULE_IMPORTS, ROUTE_BUILDER, Template
from prowl.routes.collector import check_module_names

if TYPE_CHECKING:
    from prowl._types import RouteTable

logger = logging.getLogger("prowl.codegen")

DATA_PREFIX = "/__prowl/data"

# Handler attributes every route module is expected to define
PAGE_HANDLER = "route"
DATA_HANDLER = "api"


def data_pattern(url_pattern: str, data_prefix: str = DATA_PREFIX) -> str:
    """``/posts/:post`` -> ``/__prowl/data/posts/:post``."""
    return data_prefix.rstrip("/") + url_pattern


def route_registrations(table: RouteTable, data_prefix: str = DATA_PREFIX) -> list[str]:
    """Two registrations per entry: the page handler, then the data handler."""
    lines: list[str] = []
    for route in table.values():
        module = f"_modules[{route.module_import!r}]"
        lines.append(f"route({route.url_pattern!r}, {module}.{PAGE_HANDLER})")
        lines.append(
            f"route({data_pattern(route.url_pattern, data_prefix)!r}, {module}.{DATA_HANDLER})"
        )
    return lines


def module_imports(table: RouteTable, source_root: Path, output_dir: Path) -> list[str]:
    """One import declaration per entry, relative to *output_dir*."""
    lines: list[str] = []
    for key, route in table.items():
        relative = import_path(source_root / key.lstrip("/"), output_dir)
        lines.append(
            f"_modules[{route.module_import!r}] = "
            f"_load_route({route.module_import!r}, {relative!r})"
        )
    return lines


def import_path(source: Path, output_dir: Path) -> str:
    """POSIX path of *source* relative to *output_dir* (``../src/routes/a.py``)."""
    relative = os.path.relpath(source, output_dir)
    return str(PurePosixPath(*Path(relative).parts))


def generate(
    table: RouteTable,
    template: Template | str,
    *,
    source_root: Path,
    output_dir: Path,
    data_prefix: str = DATA_PREFIX,
) -> str:
    """Assemble the entry-point source for *table*.

    Args:
        table: Route table from :func:`~prowl.routes.collect_routes`.
        template: Parsed template, or raw template text.
        source_root: Directory the table keys are relative to.
        output_dir: Directory the generated file will be written to.
        data_prefix: URL prefix for the data-endpoint registrations.

    Returns:
        The template with both blocks spliced in.  A block whose marker is
        missing from the template is omitted.

    Raises:
        RouteConflictError: If two entries share a module binding name.

    """
    check_module_names(table)

    if isinstance(template, str):
        template = Template.parse(template, DEFAULT_MARKERS)

    for marker in DEFAULT_MARKERS:
        if marker not in template.markers:
            logger.warning("template has no %r marker; block omitted", marker)

    return template.render({
        ROUTE_BUILDER: route_registrations(table, data_prefix),
        MODULE_IMPORTS: module_imports(table, source_root, output_dir),
    })
