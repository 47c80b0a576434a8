"""Prowl CLI — prowl bundle / prowl routes / prowl watch.

Entry point for the ``prowl`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from prowl._errors import ProwlError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the prowl CLI."""
    parser = argparse.ArgumentParser(
        prog="prowl",
        description="Compile a src/routes/ tree into a server entry point.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # prowl bundle
    bundle_parser = subparsers.add_parser(
        "bundle",
        help="Generate .prowl/main.py and the entry shims",
    )
    bundle_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    bundle_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # prowl routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="List discovered routes",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")

    # prowl watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Bundle, then rebundle when routes are added or removed",
    )
    watch_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    watch_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def _get_version() -> str:
    """Get the package version."""
    from prowl import __version__

    return __version__


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_routes(root: str) -> None:
    """Print the route table for the project at *root*."""
    from prowl.app import collect
    from prowl.config_loader import load_config

    table = collect(load_config(Path(root)))
    if not table:
        print("No routes found.")
        return

    rows = [(route.url_pattern, route.module_import, key) for key, route in table.items()]
    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    max_module = max(max(len(r[1]) for r in rows), 6)  # "MODULE" header

    fmt = f"{{:<{max_pattern}}}  {{:<{max_module}}}  {{}}"
    print(fmt.format("PATTERN", "MODULE", "SOURCE"))
    sep_len = max_pattern + max_module + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for pattern, module, source in rows:
        print(fmt.format(pattern, module, source))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from prowl.app import bundle, print_bundle_summary

    _configure_logging(getattr(args, "verbose", False))

    try:
        if args.command == "bundle":
            print_bundle_summary(bundle(args.root))
        elif args.command == "routes":
            run_routes(args.root)
        elif args.command == "watch":
            from prowl.config_loader import load_config
            from prowl.routes.watcher import watch

            watch(load_config(Path(args.root)), on_bundle=print_bundle_summary)
    except ProwlError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
