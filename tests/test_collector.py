"""Tests for prowl.routes.collector — route discovery and table building."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from prowl._errors import FatalIOError, PathEncodingError, RouteConflictError
from prowl.routes.collector import (
    check_module_names,
    collect_routes,
    discover_route_files,
    route_glob,
    route_key,
)
from prowl.routes.resolver import Route

BASE = Path("/home/user/Documents/app")


def _fake_traversal(paths: list[str]):
    """Traversal service returning a fixed list of absolute paths."""

    def traverse(pattern: str) -> list[str]:
        return list(paths)

    return traverse


# ---------------------------------------------------------------------------
# collect_routes with an injected traversal
# ---------------------------------------------------------------------------


class TestCollectRoutes:
    """Table building from traversal results."""

    def test_module_imports(self) -> None:
        table = collect_routes(BASE, traverse=_fake_traversal([
            "/home/user/Documents/app/src/routes/about.py",
            "/home/user/Documents/app/src/routes/index.py",
            "/home/user/Documents/app/src/routes/posts/index.py",
            "/home/user/Documents/app/src/routes/posts/[post].py",
        ]))

        assert table["/index.py"].module_import == "index"
        assert table["/about.py"].module_import == "about"
        assert table["/posts/index.py"].module_import == "posts_index"
        assert table["/posts/[post].py"].module_import == "posts_dyn_post"

    def test_multi_level_patterns(self) -> None:
        table = collect_routes(BASE, traverse=_fake_traversal([
            "/home/user/Documents/app/src/routes/about.py",
            "/home/user/Documents/app/src/routes/index.py",
            "/home/user/Documents/app/src/routes/posts/index.py",
            "/home/user/Documents/app/src/routes/posts/any-post.py",
            "/home/user/Documents/app/src/routes/posts/[post].py",
        ]))

        assert {key: route.url_pattern for key, route in table.items()} == {
            "/index.py": "/",
            "/about.py": "/about",
            "/posts/index.py": "/posts",
            "/posts/any-post.py": "/posts/any-post",
            "/posts/[post].py": "/posts/:post",
        }

    def test_entries_sorted_by_key(self) -> None:
        table = collect_routes(BASE, traverse=_fake_traversal([
            "/home/user/Documents/app/src/routes/zeta.py",
            "/home/user/Documents/app/src/routes/alpha.py",
            "/home/user/Documents/app/src/routes/mid/index.py",
        ]))
        assert list(table) == ["/alpha.py", "/mid/index.py", "/zeta.py"]

    def test_pattern_passed_to_traversal(self) -> None:
        seen: list[str] = []

        def traverse(pattern: str) -> list[str]:
            seen.append(pattern)
            return []

        collect_routes(BASE, extension="rs", traverse=traverse)
        assert seen == ["/home/user/Documents/app/src/routes/**/*.rs"]

    def test_empty_traversal_gives_empty_table(self) -> None:
        assert collect_routes(BASE, traverse=_fake_traversal([])) == {}

    def test_traversal_error_is_fatal(self) -> None:
        def traverse(pattern: str) -> list[str]:
            raise PermissionError("denied")

        with pytest.raises(FatalIOError, match="denied"):
            collect_routes(BASE, traverse=traverse)

    def test_unencodable_path_aborts_collection(self) -> None:
        traverse = _fake_traversal([
            "/home/user/Documents/app/src/routes/about.py",
            "/home/user/Documents/app/src/routes/caf\udce9.py",
        ])
        with pytest.raises(PathEncodingError):
            collect_routes(BASE, traverse=traverse)

    def test_flattened_module_name_collision(self) -> None:
        traverse = _fake_traversal([
            "/home/user/Documents/app/src/routes/a_b.py",
            "/home/user/Documents/app/src/routes/a/b.py",
        ])
        with pytest.raises(RouteConflictError, match=r"/a/b\.py and /a_b\.py") as exc_info:
            collect_routes(BASE, traverse=traverse)
        assert "'a_b'" in str(exc_info.value)

    def test_dynamic_module_name_collision(self) -> None:
        traverse = _fake_traversal([
            "/home/user/Documents/app/src/routes/posts/[post].py",
            "/home/user/Documents/app/src/routes/posts/dyn_post.py",
        ])
        with pytest.raises(RouteConflictError, match="posts_dyn_post"):
            collect_routes(BASE, traverse=traverse)


class TestCheckModuleNames:
    """Module binding names must be unique across the table."""

    def test_distinct_names_pass(self) -> None:
        check_module_names({
            "/about.py": Route("about", "/about"),
            "/posts/index.py": Route("posts_index", "/posts"),
        })

    def test_duplicate_names_raise(self) -> None:
        with pytest.raises(RouteConflictError, match="/x.py and /y.py"):
            check_module_names({
                "/x.py": Route("same", "/x"),
                "/y.py": Route("same", "/y"),
            })


# ---------------------------------------------------------------------------
# route_key / route_glob
# ---------------------------------------------------------------------------


class TestRouteKey:
    """Prefix stripping for absolute paths."""

    def test_strips_routes_prefix(self) -> None:
        key = route_key("/home/user/Documents/app/src/routes/posts/[post].py", BASE / "src/routes")
        assert key == "/posts/[post].py"

    def test_outside_routes_dir(self) -> None:
        with pytest.raises(FatalIOError, match="outside"):
            route_key("/elsewhere/about.py", BASE / "src/routes")


class TestRouteGlob:
    """Traversal pattern construction."""

    def test_escapes_brackets_in_base(self) -> None:
        pattern = route_glob(Path("/srv/[site]"), "src/routes", "py")
        assert pattern == "/srv/[[]site]/src/routes/**/*.py"


# ---------------------------------------------------------------------------
# Default traversal against a real tree
# ---------------------------------------------------------------------------


class TestDiscoverRouteFiles:
    """The os.walk-backed traversal service."""

    def test_collects_real_tree(self, tmp_project: Path) -> None:
        table = collect_routes(tmp_project)
        assert list(table) == [
            "/about.py",
            "/index.py",
            "/posts/[post].py",
            "/posts/any-post.py",
            "/posts/index.py",
        ]
        assert table["/posts/[post].py"] == Route("posts_dyn_post", "/posts/:post")

    def test_skips_private_files(self, tmp_project: Path) -> None:
        routes = tmp_project / "src" / "routes"
        (routes / "__init__.py").write_text("")
        (routes / "posts" / "_helpers.py").write_text("")
        table = collect_routes(tmp_project)
        assert "/__init__.py" not in table
        assert "/posts/_helpers.py" not in table

    def test_ignores_other_extensions(self, tmp_project: Path) -> None:
        (tmp_project / "src" / "routes" / "notes.txt").write_text("")
        assert "/notes.txt" not in collect_routes(tmp_project)

    def test_missing_routes_dir(self, tmp_path: Path) -> None:
        assert collect_routes(tmp_path) == {}

    def test_yields_only_files(self, tmp_path: Path) -> None:
        routes = tmp_path / "src" / "routes"
        (routes / "odd.py").mkdir(parents=True)
        (routes / "real.py").write_text("")
        found = list(discover_route_files(route_glob(tmp_path, "src/routes", "py")))
        assert found == [str(routes / "real.py")]

    def test_includes_hidden_entries(self, tmp_project: Path) -> None:
        routes = tmp_project / "src" / "routes"
        (routes / ".well-known").mkdir()
        (routes / ".well-known" / "security.py").write_text("")
        (routes / ".draft.py").write_text("")
        table = collect_routes(tmp_project)
        assert "/.well-known/security.py" in table
        assert "/.draft.py" in table

    def test_unreadable_subdirectory_is_fatal(
        self, tmp_project: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        posts = tmp_project / "src" / "routes" / "posts"
        real_scandir = os.scandir

        def scandir(path=None):
            if os.fspath(path) == str(posts):
                raise PermissionError(13, "Permission denied", str(posts))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        with pytest.raises(FatalIOError, match="Permission denied"):
            collect_routes(tmp_project)
