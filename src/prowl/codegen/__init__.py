"""Entry-point code generation.

Public API::

    from prowl.codegen import Template, generate

    source = generate(table, Template.parse(text), source_root=..., output_dir=...)
"""

from prowl.codegen.generator import (
    DATA_PREFIX,
    data_pattern,
    generate,
    import_path,
    module_imports,
    route_registrations,
)
from prowl.codegen.template import (
    MODULE_IMPORTS,
    ROUTE_BUILDER,
    Slot,
    StaticSegment,
    Template,
)

__all__ = [
    "DATA_PREFIX",
    "MODULE_IMPORTS",
    "ROUTE_BUILDER",
    "Slot",
    "StaticSegment",
    "Template",
    "data_pattern",
    "generate",
    "import_path",
    "module_imports",
    "route_registrations",
]
