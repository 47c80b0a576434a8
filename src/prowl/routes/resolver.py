"""Route resolver — derive a Route from a route file's relative path.

File-path convention (paths are relative to ``src/routes``)::

    /index.py            -> /               (module: index)
    /about.py            -> /about          (module: about)
    /posts/index.py      -> /posts          (module: posts_index)
    /posts/[post].py     -> /posts/:post    (module: posts_dyn_post)

A path segment containing ``[name]`` is a dynamic segment and becomes the
URL parameter ``:name``.  A trailing ``index`` segment names its parent
directory's own URL and is dropped from the pattern.
"""

import re
from dataclasses import dataclass

# Reserved file stem for a directory's own URL
INDEX_SEGMENT = "index"

# Non-greedy bracket pair; empty brackets count as dynamic
_DYNAMIC_RE = re.compile(r"\[(.*?)\]")


@dataclass(frozen=True, slots=True)
class Segment:
    """One component of a route path.

    Attributes:
        text: The raw component as it appears on disk (e.g., ``[post]``).
        params: Names captured from each bracket pair, in order.  Empty for
            static segments.

    """

    text: str
    params: tuple[str, ...] = ()

    @property
    def is_dynamic(self) -> bool:
        return _DYNAMIC_RE.search(self.text) is not None

    def to_url(self) -> str:
        """Render the segment for a URL pattern (``[post]`` -> ``:post``)."""
        if not self.is_dynamic:
            return self.text
        return self.text.replace("[", ":").replace("]", "")


@dataclass(frozen=True, slots=True)
class Route:
    """A route derived from one source file.

    Attributes:
        module_import: Binding name for the handler module; separators are
            underscores and brackets are rewritten (``posts_dyn_post``).
        url_pattern: URL pattern starting with ``/`` (``/posts/:post``).

    """

    module_import: str
    url_pattern: str

    @property
    def is_dynamic(self) -> bool:
        return any(part.startswith(":") for part in self.url_pattern.split("/"))

    @property
    def params(self) -> tuple[str, ...]:
        """Names of the dynamic URL parameters, in path order."""
        return tuple(
            part[1:] for part in self.url_pattern.split("/") if part.startswith(":")
        )


def has_dynamic_path(path: str) -> bool:
    """Return True if *path* contains at least one ``[...]`` pair."""
    return _DYNAMIC_RE.search(path) is not None


def parse_segment(text: str) -> Segment:
    """Parse a single path component into a :class:`Segment`."""
    return Segment(text=text, params=tuple(_DYNAMIC_RE.findall(text)))


def resolve_route(relative_path: str) -> Route:
    """Derive the :class:`Route` for *relative_path*.

    *relative_path* is the route file's path below the routes directory with
    a leading ``/`` (``/posts/[post].py``).  Total: every input yields a
    Route.

    """
    route_name = _strip_extension(relative_path)
    module_import = _module_import(route_name)

    segments = [parse_segment(part) for part in route_name.split("/") if part]
    if segments and segments[-1].text == INDEX_SEGMENT:
        segments.pop()

    if not segments:
        return Route(module_import=module_import, url_pattern="/")

    url_pattern = "/" + "/".join(segment.to_url() for segment in segments)
    return Route(module_import=module_import, url_pattern=url_pattern)


def _strip_extension(path: str) -> str:
    """Remove the file extension from the last component of *path*."""
    head, sep, last = path.rpartition("/")
    stem, dot, _ext = last.rpartition(".")
    if not dot or not stem:
        return path
    return head + sep + stem


def _module_import(route_name: str) -> str:
    """``/posts/[post]`` -> ``posts_dyn_post``."""
    return (
        route_name.removeprefix("/")
        .replace("/", "_")
        .replace("[", "dyn_")
        .replace("]", "")
    )
