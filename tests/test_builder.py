from __future__ import annotations

import logging
import textwrap
from pathlib import Path

import pytest

from fdl_html.builder import build_documentation
from fdl_html.config import FdlConfig
from fdl_html.constants import STYLE_BLOCK
from fdl_html.exceptions import BuildError


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def test_build_writes_pages_and_index(tmp_path: Path):
    _write(
        tmp_path / "guide.fdl",
        """
        @title Sample Title
        @section Sample Section
        @info This is an info message.
        """,
    )
    _write(tmp_path / "api" / "reference.fdl", "@title Reference\n")

    result = build_documentation(tmp_path)

    # "api" sorts before "guide.fdl", so the nested file is converted first.
    output_dir = tmp_path.resolve() / "documentation"
    assert result.output_dir == output_dir
    assert result.pages == ["reference.html", "guide.html"]
    assert result.sources == [
        tmp_path.resolve() / "api" / "reference.fdl",
        tmp_path.resolve() / "guide.fdl",
    ]
    assert (output_dir / "guide.html").read_text(encoding="utf-8") == (
        "<h1><h2>Table of Contents</h2><ul><li><a href='#sample-section'>Sample Section</a></li></ul>\n"
        "Sample Title</h1>\n"
        "<h2 id='sample-section'>Sample Section</h2>\n"
        "<div style='background-color:#e7f3fe;padding:10px;border-left:6px solid #2196F3;'>"
        "<strong>Info:</strong> This is an info message.</div>\n"
        + STYLE_BLOCK
    )
    assert (output_dir / "index.html").read_text(encoding="utf-8") == (
        "<html><body><h1>Documentation <br> Table Of Content</h1><ul>"
        "<li> <a href='reference.html'>1 reference</a></li>"
        "<li> <a href='guide.html'>2 guide</a></li>"
        "</ul></body></html>"
    )


def test_build_cleans_previous_output(tmp_path: Path):
    stale = _write(tmp_path / "documentation" / "stale.html", "old")
    _write(tmp_path / "doc.fdl", "text\n")

    build_documentation(tmp_path)

    assert not stale.exists()
    assert sorted(path.name for path in (tmp_path / "documentation").iterdir()) == [
        "doc.html",
        "index.html",
    ]


def test_build_without_sources_writes_empty_index(tmp_path: Path):
    result = build_documentation(tmp_path)

    assert result.pages == []
    index = (tmp_path / "documentation" / "index.html").read_text(encoding="utf-8")
    assert "<ul></ul>" in index


def test_build_respects_config(tmp_path: Path):
    _write(tmp_path / "notes.txt", "@title Notes\n")
    _write(tmp_path / "skipped.fdl", "@title Skipped\n")

    result = build_documentation(
        tmp_path, FdlConfig(file_extension=".txt", output_dir="/site/html")
    )

    assert result.pages == ["notes.html"]
    assert (tmp_path / "site" / "html" / "notes.html").exists()
    assert not (tmp_path / "documentation").exists()


def test_build_ignores_sources_inside_output_dir(tmp_path: Path):
    _write(tmp_path / "out" / "inner.fdl", "x\n")
    _write(tmp_path / "outer.fdl", "y\n")

    result = build_documentation(tmp_path, FdlConfig(output_dir="out"))

    assert result.pages == ["outer.html"]


def test_build_applies_transformers(tmp_path: Path):
    _write(tmp_path / "doc.fdl", "hello\n")

    build_documentation(tmp_path, transformers=[lambda html, state: html.replace("hello", "bye")])

    assert (tmp_path / "documentation" / "doc.html").read_text(encoding="utf-8").startswith("bye\n")


def test_build_warns_about_unclosed_blocks(tmp_path: Path, caplog):
    _write(tmp_path / "open.fdl", "@table\n@row a\n")

    with caplog.at_level(logging.WARNING, logger="fdl_html.builder"):
        build_documentation(tmp_path)

    assert "unclosed blocks: in_table" in caplog.text
    assert (tmp_path / "documentation" / "open.html").exists()


def test_build_converts_non_utf8_sources(tmp_path: Path):
    _write(tmp_path / "a.fdl", "@title Plain\n")
    (tmp_path / "b.fdl").write_bytes("@title Café\n".encode("latin-1"))

    result = build_documentation(tmp_path)

    output_dir = tmp_path.resolve() / "documentation"
    assert result.pages == ["a.html", "b.html"]
    assert b"<h1>Caf\xe9</h1>" in (output_dir / "b.html").read_bytes()
    assert "<h1>Plain</h1>" in (output_dir / "a.html").read_text(encoding="utf-8")
    assert (output_dir / "index.html").exists()


def test_build_rejects_invalid_config(tmp_path: Path):
    _write(tmp_path / "doc.fdl", "text\n")

    with pytest.raises(BuildError) as exc_info:
        build_documentation(tmp_path, FdlConfig(max_file_size=0))

    assert "max_file_size" in str(exc_info.value)
    assert not (tmp_path / "documentation").exists()


def test_build_fails_on_oversized_source(tmp_path: Path):
    _write(tmp_path / "big.fdl", "x" * 100)

    with pytest.raises(BuildError) as exc_info:
        build_documentation(tmp_path, max_file_size=10)

    assert "exceeds the maximum allowed size" in str(exc_info.value)


def test_build_fails_on_long_line(tmp_path: Path):
    _write(tmp_path / "long.fdl", "x" * 100 + "\n")

    with pytest.raises(BuildError):
        build_documentation(tmp_path, max_line_length=50)


def test_build_rejects_output_dir_outside_root(tmp_path: Path):
    root = tmp_path / "project"
    root.mkdir()

    with pytest.raises(BuildError):
        build_documentation(root, FdlConfig(output_dir="../elsewhere"))

    assert not (tmp_path / "elsewhere").exists()


def test_build_does_not_change_working_directory(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "doc.fdl", "x\n")
    before = Path.cwd()

    build_documentation(tmp_path)

    assert Path.cwd() == before
