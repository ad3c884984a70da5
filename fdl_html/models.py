"""Data models for fdl-html."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path


@dataclass(frozen=True)
class ParserState:
    """Block state threaded through the line parser.

    A fresh, all-false state is used at the start of every file. The record is
    immutable; transitions produce a new value.

    Attributes:
        in_code_block: Inside an ``@code`` ... ``@endcode`` region.
        in_table: Inside an ``@table`` ... ``@endtable`` region.
        in_list: Inside an ``@list`` ... ``@endlist`` region.
        in_example_or_usecase: Inside an ``@example`` or ``@usecase`` region.
    """

    in_code_block: bool = False
    in_table: bool = False
    in_list: bool = False
    in_example_or_usecase: bool = False

    def toggled(self, flag: str) -> ParserState:
        """Return a copy with `flag` inverted."""
        return replace(self, **{flag: not getattr(self, flag)})

    def open_blocks(self) -> list[str]:
        """Names of the flags that are still set."""
        return [item.name for item in fields(self) if getattr(self, item.name)]


@dataclass
class ParseResult:
    """Structured result of parsing one FDL document.

    Attributes:
        body: Emitted fragments, each followed by a newline, before the TOC
            splice and the style block.
        sections: Section ids mapped to their titles, in encounter order.
        state: Parser state after the last line.
    """

    body: str
    sections: dict[str, str]
    state: ParserState = field(default_factory=ParserState)


@dataclass
class BuildResult:
    """Outcome of a documentation run.

    Attributes:
        output_dir: Absolute path of the directory that received the pages.
        pages: Output filenames in discovery order (the main table of content).
        sources: Input files in discovery order.
    """

    output_dir: Path
    pages: list[str] = field(default_factory=list)
    sources: list[Path] = field(default_factory=list)
