"""Bundled static resources — entry template and client/server shims.

The files live in ``prowl/static/`` and are written to the output
directory verbatim (shims) or after splicing (entry template).
"""

from __future__ import annotations

from pathlib import Path

from prowl._errors import ConfigError

ENTRY_TEMPLATE = "main.py.tmpl"
CLIENT_ENTRY = "client-main.tsx"
SERVER_ENTRY = "server-main.tsx"


def _bundled_static_path() -> Path:
    """Return the absolute path to the bundled static resources."""
    return Path(__file__).parent.parent / "static"


def read_static(name: str) -> str:
    """Return the text of a bundled static resource."""
    return (_bundled_static_path() / name).read_text(encoding="utf-8")


def read_template(path: Path | None = None) -> str:
    """Return the entry template text.

    Uses the project template at *path* when given, otherwise the bundled
    default.

    Raises:
        ConfigError: If *path* is given but cannot be read.

    """
    if path is None:
        return read_static(ENTRY_TEMPLATE)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read entry template {path}: {exc}"
        raise ConfigError(msg) from exc
