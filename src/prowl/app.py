"""Bundle pipeline — collect routes, generate the entry point, write output.

Linear, four stages, no retries::

    collect -> generate -> ensure_dir -> write

Any error aborts the run.  The route table and generated source are fully
computed before the output directory is touched.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from prowl.codegen import Template, generate
from prowl.config_loader import load_config
from prowl.output import ensure_output_dir, read_static, read_template, write_outputs
from prowl.output.static_files import CLIENT_ENTRY, SERVER_ENTRY
from prowl.routes import collect_routes

if TYPE_CHECKING:
    from prowl._types import RouteTable
    from prowl.config import ProwlConfig
    from prowl.output import WrittenFile

logger = logging.getLogger("prowl")


@dataclass(frozen=True, slots=True)
class BundleResult:
    """Aggregate result of one bundle run.

    Attributes:
        routes: The route table the entry point was generated from.
        files: All files written, in write order.
        output_dir: Absolute path to the output directory.
        duration_ms: Total wall-clock time for the run.

    """

    routes: RouteTable
    files: tuple[WrittenFile, ...]
    output_dir: Path
    duration_ms: float

    @property
    def route_count(self) -> int:
        return len(self.routes)


def collect(config: ProwlConfig) -> RouteTable:
    """Stage 1: build the route table for *config*."""
    return collect_routes(
        config.root,
        routes_dir=config.routes_dir,
        extension=config.extension,
    )


def bundle_config(config: ProwlConfig) -> BundleResult:
    """Run the full pipeline for an already-loaded config."""
    t0 = time.perf_counter()

    table = collect(config)
    logger.info("collected %d route%s from %s", len(table), _plural(len(table)), config.routes_path)

    template = Template.parse(read_template(config.template_path))
    source = generate(
        table,
        template,
        source_root=config.routes_path,
        output_dir=config.output_path,
        data_prefix=config.data_prefix,
    )

    output_dir = ensure_output_dir(config.root, config.output_dir)
    files = write_outputs(
        output_dir,
        source,
        read_static(CLIENT_ENTRY),
        read_static(SERVER_ENTRY),
        entry_name=config.entry_name,
    )

    duration_ms = (time.perf_counter() - t0) * 1000
    return BundleResult(routes=table, files=files, output_dir=output_dir, duration_ms=duration_ms)


def bundle(root: str | Path = ".", **kwargs: object) -> BundleResult:
    """Compile the routes under *root* into ``.prowl/main.py``.

    Args:
        root: Path to the project root directory.
        **kwargs: Override ProwlConfig fields.

    Raises:
        ProwlError: If any stage fails.

    """
    config = load_config(Path(root), **kwargs)
    return bundle_config(config)


def print_bundle_summary(result: BundleResult) -> None:
    """Print bundle completion summary to stderr."""
    lines = [
        "",
        "─" * 41,
        f"  Bundled {result.route_count} route{_plural(result.route_count)}",
        f"  Wrote {len(result.files)} file{_plural(len(result.files))}",
        f"  Output: {result.output_dir}",
        f"  Done in {result.duration_ms:.0f}ms",
    ]
    print("\n".join(lines), file=sys.stderr)


def _plural(count: int) -> str:
    return "" if count == 1 else "s"
