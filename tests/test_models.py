from pathlib import Path

import pytest

from fdl_html.models import BuildResult, ParseResult, ParserState


def test_parser_state_defaults():
    state = ParserState()

    assert state.in_code_block is False
    assert state.in_table is False
    assert state.in_list is False
    assert state.in_example_or_usecase is False
    assert state.open_blocks() == []


def test_parser_state_is_immutable():
    state = ParserState()

    with pytest.raises(AttributeError):
        state.in_table = True  # type: ignore[misc]


def test_parser_state_toggled_returns_new_value():
    state = ParserState()

    toggled = state.toggled("in_table")

    assert toggled == ParserState(in_table=True)
    assert state == ParserState()
    assert toggled.toggled("in_table") == state


def test_parser_state_open_blocks_lists_set_flags():
    state = ParserState(in_code_block=True, in_example_or_usecase=True)

    assert state.open_blocks() == ["in_code_block", "in_example_or_usecase"]


def test_parse_result_defaults_to_initial_state():
    result = ParseResult(body="", sections={})

    assert result.state == ParserState()


def test_build_result_defaults(tmp_path: Path):
    result = BuildResult(output_dir=tmp_path)

    assert result.pages == []
    assert result.sources == []
