"""Shared test fixtures for prowl."""

from __future__ import annotations

from pathlib import Path

import pytest

ROUTE_FILES: tuple[str, ...] = (
    "index.py",
    "about.py",
    "posts/index.py",
    "posts/any-post.py",
    "posts/[post].py",
)


def write_route(routes_dir: Path, name: str, content: str = "") -> Path:
    """Write a route module and return its path."""
    p = routes_dir / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project with a src/routes/ tree.

    Every route module defines the ``route`` and ``api`` handlers the
    generated entry point registers.
    """
    routes = tmp_path / "src" / "routes"
    routes.mkdir(parents=True)
    for name in ROUTE_FILES:
        write_route(
            routes,
            name,
            f"def route(request):\n    return {name!r}\n\n\n"
            f"def api(request):\n    return {{'source': {name!r}}}\n",
        )
    return tmp_path
