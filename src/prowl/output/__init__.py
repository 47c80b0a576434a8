"""Bundle output — staging directory, static resources, and file writes."""

from prowl.output.static_files import read_static, read_template
from prowl.output.writer import WrittenFile, ensure_output_dir, write_outputs

__all__ = [
    "WrittenFile",
    "ensure_output_dir",
    "read_static",
    "read_template",
    "write_outputs",
]
