"""FDL line parsing.

Every source line is escaped and then dispatched through `TAG_RULES`, an
ordered table of tag prefixes. The first rule whose prefix matches and whose
guard accepts the current `ParserState` renders the line; lines matching no
rule fall back to `default_line`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

from .config import ConfigError, FdlConfig, validate_config
from .constants import BOX_CLOSE, BOX_OPEN
from .exceptions import LineTooLongError, ParseError, ParseFileError
from .filesystem import safe_read
from .formatters import (
    escape_html,
    format_info,
    format_paragraphs,
    format_row,
    format_section,
    format_tip,
    format_warning,
)
from .models import ParseResult, ParserState

TagHandler = Callable[[str, ParserState, dict[str, str]], tuple[str, ParserState]]
LineTransformer = Callable[[str, ParserState], str]

CODE_OPEN = "<pre><code>"
CODE_CLOSE = "</code></pre>"


@dataclass(frozen=True)
class TagRule:
    """One entry of the dispatch table.

    Attributes:
        tag: Prefix the escaped line must start with.
        handler: Renders the trimmed remainder of the line and returns the
            fragment together with the next state.
        guard: Optional predicate on the current state; when it rejects the
            state the rule is skipped and dispatch continues.
    """

    tag: str
    handler: TagHandler
    guard: Callable[[ParserState], bool] | None = None

    def matches(self, line: str, state: ParserState) -> bool:
        if not line.startswith(self.tag):
            return False
        return self.guard is None or self.guard(state)


def _emit(template: str) -> TagHandler:
    def handler(rest, state, sections):
        return template.format(rest=rest), state

    return handler


def _toggle(flag: str, html: str) -> TagHandler:
    def handler(rest, state, sections):
        return html, state.toggled(flag)

    return handler


def _render(formatter: Callable[[str], str]) -> TagHandler:
    def handler(rest, state, sections):
        return formatter(rest), state

    return handler


def _section(rest, state, sections):
    return format_section(rest, sections), state


def _row(rest, state, sections):
    return format_row(rest), state


def _parameters(rest, state, sections):
    return format_paragraphs("Parameters", rest), state


def _returns(rest, state, sections):
    return format_paragraphs("Return:", rest), state


def _open_code(rest, state, sections):
    if state.in_example_or_usecase:
        html = CODE_OPEN
    else:
        html = BOX_OPEN.format(title="Code") + CODE_OPEN
    return html, replace(state, in_code_block=True)


def _close_code(rest, state, sections):
    if state.in_example_or_usecase:
        html = CODE_CLOSE
    else:
        html = CODE_CLOSE + BOX_CLOSE
    return html, replace(state, in_code_block=False)


def _open_list(rest, state, sections):
    html = "<ol>" if rest.startswith("-n") else "<ul>"
    return html, state.toggled("in_list")


def _outside_code(state: ParserState) -> bool:
    return not state.in_code_block


def _inside_code(state: ParserState) -> bool:
    return state.in_code_block


def _section_allowed(state: ParserState) -> bool:
    return not state.in_code_block and not state.in_example_or_usecase


def _inside_list(state: ParserState) -> bool:
    return state.in_list


# Order matters: prefixes are tested top to bottom.
TAG_RULES: tuple[TagRule, ...] = (
    TagRule("@title", _emit("<h1>{rest}</h1>"), _outside_code),
    TagRule("@author", _emit("<p>Author: {rest}</p>"), _outside_code),
    TagRule("@date", _emit("<p>Date: {rest}</p>"), _outside_code),
    TagRule("@abstract", _emit("<h2>Abstract</h2><p>"), _outside_code),
    TagRule("@info", _render(format_info)),
    TagRule("@warning", _render(format_warning)),
    TagRule("@section", _section, _section_allowed),
    TagRule("@note", _emit("<p><em>Note:</em> {rest}</p>")),
    TagRule("@code", _open_code, _outside_code),
    TagRule("@endcode", _close_code, _inside_code),
    TagRule("@tbc", _emit("")),
    TagRule("@table", _toggle("in_table", "<table border='1'>")),
    TagRule("@row", _row),
    TagRule("@endtable", _toggle("in_table", "</table>")),
    TagRule("@version", _emit("<p><em>Version:</em> {rest}</p>")),
    TagRule("@since", _emit("<p><em>Since:</em> {rest}</p>")),
    TagRule("@deprecated", _emit("<strong><em style='color:red;'>Deprecated!</em></strong>")),
    TagRule("@param", _parameters),
    TagRule("@return", _returns),
    TagRule("@list", _open_list),
    TagRule("@item", _emit("<li>{rest}</li>"), _inside_list),
    # Closes both list kinds whichever one was opened.
    TagRule("@endlist", _toggle("in_list", "</ul></ol>")),
    TagRule("@tip", _render(format_tip)),
    TagRule("@todo", _emit("<p><em>TODO:</em> {rest}</p>")),
    TagRule("@example", _toggle("in_example_or_usecase", BOX_OPEN.format(title="Example"))),
    TagRule("@endexample", _toggle("in_example_or_usecase", BOX_CLOSE)),
    TagRule("@usecase", _toggle("in_example_or_usecase", BOX_OPEN.format(title="UseCase"))),
    TagRule("@endusecase", _toggle("in_example_or_usecase", BOX_CLOSE)),
)


def default_line(line: str, state: ParserState) -> str:
    """Render a line that matched no tag rule.

    Code lines keep a trailing newline, non-row content inside a table is
    dropped, and anything else (unknown tags included) passes through.

    Examples:
        default_line("plain", ParserState())  # "plain"
        default_line("x = 1", ParserState(in_code_block=True))  # "x = 1\\n"
    """
    if state.in_code_block:
        return f"{line}\n"
    if state.in_table:
        return ""
    return line


def parse_line(
    line: str, state: ParserState, sections: dict[str, str]
) -> tuple[str, ParserState]:
    """Render one escaped FDL line.

    Args:
        line: Source line with HTML already escaped and no line ending.
        state: Block state before the line.
        sections: Section map of the current document; ``@section`` lines
            add to it.

    Returns:
        tuple[str, ParserState]: The emitted fragment (possibly empty) and
            the state after the line.

    Examples:
        parse_line("@title Guide", ParserState(), {})  # ("<h1>Guide</h1>", ParserState())
        parse_line("@table", ParserState(), {})[1].in_table  # True
    """
    for rule in TAG_RULES:
        if rule.matches(line, state):
            rest = line[len(rule.tag) :].strip()
            return rule.handler(rest, state, sections)

    return default_line(line, state), state


def split_lines(content: str) -> list[str]:
    """Split text on ``\\n``, dropping one trailing ``\\r`` per line.

    A trailing newline does not produce an extra empty line.

    Examples:
        split_lines("a\\r\\nb\\n")  # ["a", "b"]
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_fdl(
    content: str,
    max_line_length: int | None = None,
    config: FdlConfig | None = None,
    transformers: Sequence[LineTransformer] = (),
) -> ParseResult:
    """Parse FDL content into HTML fragments and collected sections.

    Args:
        content: The FDL source text.
        max_line_length: Optional override for the maximum allowed line length
            (excluding line endings).
        config: Configuration controlling parsing limits. Defaults to a new
            `FdlConfig` when omitted.
        transformers: Callables applied in order to every non-empty fragment
            after the core parser, with the state following that line. A
            transformer returning an empty string drops the fragment.

    Returns:
        ParseResult: Joined fragments, the section map, and the final state.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds the effective line length limit.

    Examples:
        parse_fdl("@title Guide\\n@section Intro\\n").sections  # {"intro": "Intro"}
    """
    config = config or FdlConfig()
    validate_config(config)
    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )

    sections: dict[str, str] = {}
    state = ParserState()
    fragments: list[str] = []

    for line_number, line in enumerate(split_lines(content), start=1):
        if len(line) > effective_max_line_length:
            raise LineTooLongError(line_number, effective_max_line_length)

        html, state = parse_line(escape_html(line), state, sections)
        for transform in transformers:
            if not html:
                break
            html = transform(html, state)

        if html:
            fragments.append(f"{html}\n")

    return ParseResult(body="".join(fragments), sections=sections, state=state)


def parse_file(
    filepath: Path,
    max_line_length: int | None = None,
    config: FdlConfig | None = None,
    transformers: Sequence[LineTransformer] = (),
) -> ParseResult:
    """Read and parse an FDL file.

    Args:
        filepath: Path to the FDL file to parse.
        max_line_length: Optional override for the maximum allowed line length.
        config: Configuration controlling parsing limits; defaults to a new
            `FdlConfig` when omitted.
        transformers: Fragment transformers, see `parse_fdl`.

    Returns:
        ParseResult: Parsed document for `filepath`.

    Raises:
        ParseFileError: If configuration is invalid, a limit is exceeded, or
            the file cannot be read.

    Examples:
        result = parse_file(Path("guide.fdl"))
    """
    config = config or FdlConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    if effective_max_line_length <= 0:
        raise ParseFileError("`max_line_length` override must be a positive integer")

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except IOError as error:
        raise ParseFileError(str(error)) from error

    try:
        return parse_fdl(content, effective_max_line_length, config, transformers)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ParseFileError(error_message) from error
    except ParseError as error:
        raise ParseFileError(f"{filepath}: {error}") from error
