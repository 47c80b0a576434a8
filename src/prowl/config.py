"""Prowl configuration.

ProwlConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ProwlConfig:
    """Configuration for a prowl bundle.

    Attributes:
        root: Path to the project root (contains src/routes/).
              Always resolved to an absolute path on construction.
        routes_dir: Directory containing route source files, relative to root.
        output_dir: Hidden staging directory for generated files.
        extension: Route source file extension, without the dot.
        entry_name: File name of the generated entry point.
        data_prefix: URL prefix for data-endpoint registrations.
        template: Project-relative path to a custom entry template, or
            *None* for the bundled default.

    """

    root: Path = field(default_factory=Path.cwd)
    routes_dir: str = "src/routes"
    output_dir: str = ".prowl"
    extension: str = "py"
    entry_name: str = "main.py"
    data_prefix: str = "/__prowl/data"
    template: str | None = None

    def __post_init__(self) -> None:
        # Collected paths are made relative to root, so it must be absolute.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        object.__setattr__(self, "extension", self.extension.lstrip("."))

    @property
    def routes_path(self) -> Path:
        """Absolute path to the routes directory."""
        return self.root / self.routes_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to the output directory."""
        return self.root / self.output_dir

    @property
    def template_path(self) -> Path | None:
        """Absolute path to the custom template, if one is configured."""
        if self.template is None:
            return None
        return self.root / self.template
