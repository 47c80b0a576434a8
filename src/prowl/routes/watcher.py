"""Route watcher — rebundle when the route table may have changed.

Adding or deleting a route file changes the table; editing one does not,
since the generated entry point only records paths.  Changes to the
config file or the custom entry template always trigger a rebundle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

from prowl._errors import ProwlError
from prowl.app import bundle_config
from prowl.config_loader import CONFIG_FILES, load_config

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable

    from prowl.app import BundleResult
    from prowl.config import ProwlConfig

logger = logging.getLogger("prowl.watch")

type ChangeKind = Literal["created", "modified", "deleted"]

# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def categorize_change(path: Path, kind: ChangeKind, config: ProwlConfig) -> str | None:
    """Return why *path* needs a rebundle, or None if it does not.

    Categories are ``"config"``, ``"template"`` and ``"route"``.

    """
    try:
        rel = path.relative_to(config.root)
    except ValueError:
        return None

    parts = rel.parts
    if not parts:
        return None

    if len(parts) == 1 and parts[0] in CONFIG_FILES:
        return "config"

    if config.template_path is not None and path == config.template_path:
        return "template"

    try:
        path.relative_to(config.routes_path)
    except ValueError:
        return None

    if kind == "modified":
        return None
    if path.name.startswith("_"):
        return None
    # A renamed or moved directory arrives as one event for the directory
    if not path.suffix or path.is_dir():
        return "route"
    if path.suffix != f".{config.extension}":
        return None
    return "route"


def watch(
    config: ProwlConfig,
    *,
    stop_event: threading.Event | None = None,
    on_bundle: Callable[[BundleResult], None] | None = None,
) -> None:
    """Bundle once, then rebundle after every relevant change batch.

    Blocks until *stop_event* is set (or the process is interrupted).  A
    failed rebundle is logged and watching continues; the first bundle is
    not guarded and propagates its error.  A config file change reloads the
    config from disk, dropping any keyword overrides.

    """
    from watchfiles import watch as watch_files

    result = bundle_config(config)
    if on_bundle is not None:
        on_bundle(result)

    for raw_changes in watch_files(
        config.root,
        stop_event=stop_event,
        debounce=300,
        step=100,
    ):
        reasons = set()
        for change_type, path_str in raw_changes:
            kind = _CHANGE_KIND_MAP.get(change_type, "modified")
            category = categorize_change(Path(path_str), kind, config)
            if category is not None:
                reasons.add(category)

        if not reasons:
            continue

        logger.info("rebundling (%s changed)", ", ".join(sorted(reasons)))
        try:
            if "config" in reasons:
                config = load_config(config.root)
            result = bundle_config(config)
        except ProwlError as exc:
            logger.error("rebundle failed: %s", exc)
            continue
        if on_bundle is not None:
            on_bundle(result)
