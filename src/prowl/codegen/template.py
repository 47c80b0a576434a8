"""Entry-point template model.

A template is parsed once into an ordered tuple of parts: static text and
slots.  A slot stands where a marker line was found and is filled with a
generated block at render time.

Marker policy:

- A marker line is any line whose stripped text equals the marker.
- Only the first occurrence of each marker becomes a slot.  Later
  occurrences are kept verbatim as static text.
- A marker that never occurs yields no slot; rendering simply omits that
  block.
- A rendered slot repeats the marker line, then the block's lines, all
  indented like the marker.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

ROUTE_BUILDER = "# ROUTE_BUILDER"
MODULE_IMPORTS = "# MODULE_IMPORTS"

DEFAULT_MARKERS: tuple[str, ...] = (MODULE_IMPORTS, ROUTE_BUILDER)


@dataclass(frozen=True, slots=True)
class StaticSegment:
    """Template text copied to the output unchanged."""

    text: str


@dataclass(frozen=True, slots=True)
class Slot:
    """Position of a marker line in the template.

    Attributes:
        marker: The marker text (e.g., ``# ROUTE_BUILDER``).
        indent: Leading whitespace of the marker line.
        newline: Line terminator of the marker line (empty at end of file).

    """

    marker: str
    indent: str = ""
    newline: str = "\n"

    def render(self, lines: Sequence[str]) -> str:
        out = [f"{self.indent}{self.marker}"]
        out.extend(f"{self.indent}{line}" for line in lines)
        # Keep the marker's own terminator after the last generated line
        return (self.newline or "\n").join(out) + self.newline


type TemplatePart = StaticSegment | Slot


@dataclass(frozen=True, slots=True)
class Template:
    """A parsed template: static text interleaved with slots."""

    parts: tuple[TemplatePart, ...]

    @classmethod
    def parse(cls, text: str, markers: Iterable[str] = DEFAULT_MARKERS) -> Template:
        """Split *text* into static segments and marker slots."""
        pending = set(markers)
        parts: list[TemplatePart] = []
        buffer: list[str] = []

        for line in text.splitlines(keepends=True):
            body = line.rstrip("\r\n")
            marker = body.strip()
            if marker in pending:
                pending.discard(marker)
                if buffer:
                    parts.append(StaticSegment("".join(buffer)))
                    buffer = []
                indent = body[: len(body) - len(body.lstrip())]
                parts.append(Slot(marker=marker, indent=indent, newline=line[len(body):]))
                continue
            buffer.append(line)

        if buffer:
            parts.append(StaticSegment("".join(buffer)))
        return cls(tuple(parts))

    @property
    def markers(self) -> tuple[str, ...]:
        """Markers that were found, in template order."""
        return tuple(part.marker for part in self.parts if isinstance(part, Slot))

    def render(self, blocks: Mapping[str, Sequence[str]]) -> str:
        """Fill each slot with the lines in ``blocks[marker]``.

        Slots without a block render as the bare marker line.  Blocks without
        a slot are dropped.

        """
        out: list[str] = []
        for part in self.parts:
            if isinstance(part, Slot):
                out.append(part.render(blocks.get(part.marker, ())))
            else:
                out.append(part.text)
        return "".join(out)
