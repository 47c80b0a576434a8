"""Bundle output — create the staging directory and write entry files.

Writes three files into the hidden output directory (``.prowl/``):

- ``client-main.tsx`` and ``server-main.tsx``, copied verbatim
- ``main.py``, the generated server entry point

The shims are written first.  A failure while writing the entry point
leaves the shims in place; nothing is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from prowl._errors import FatalIOError
from prowl.output.static_files import CLIENT_ENTRY, SERVER_ENTRY

logger = logging.getLogger("prowl.output")

DEFAULT_OUTPUT_DIR = ".prowl"
DEFAULT_ENTRY_NAME = "main.py"


@dataclass(frozen=True, slots=True)
class WrittenFile:
    """Record of a single file written during a bundle.

    Attributes:
        path: Absolute filesystem path to the written file.
        kind: ``"entry"`` for the generated file, ``"shim"`` for static shims.
        size_bytes: Size of the written file in bytes.

    """

    path: Path
    kind: Literal["entry", "shim"]
    size_bytes: int


def ensure_output_dir(root: Path, name: str = DEFAULT_OUTPUT_DIR) -> Path:
    """Create ``root/name`` if it does not exist and return it.

    Idempotent: an existing directory is left untouched.

    Raises:
        FatalIOError: If the directory cannot be created.

    """
    output_dir = root / name
    try:
        output_dir.mkdir(exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create output directory {output_dir}: {exc}"
        raise FatalIOError(msg) from exc
    return output_dir


def write_outputs(
    output_dir: Path,
    generated_source: str,
    client_shim: str,
    server_shim: str,
    *,
    entry_name: str = DEFAULT_ENTRY_NAME,
) -> tuple[WrittenFile, ...]:
    """Write both shims and the generated entry point, overwriting.

    Raises:
        FatalIOError: On the first write failure.  Files written before the
            failure are left in place.

    """
    return (
        _write(output_dir / CLIENT_ENTRY, client_shim, "shim"),
        _write(output_dir / SERVER_ENTRY, server_shim, "shim"),
        _write(output_dir / entry_name, generated_source, "entry"),
    )


def _write(path: Path, text: str, kind: Literal["entry", "shim"]) -> WrittenFile:
    data = text.encode("utf-8")
    try:
        path.write_bytes(data)
    except OSError as exc:
        msg = f"Failed to write {path}: {exc}"
        raise FatalIOError(msg) from exc
    logger.debug("wrote %s (%d bytes)", path, len(data))
    return WrittenFile(path=path, kind=kind, size_bytes=len(data))
