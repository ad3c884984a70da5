"""HTML document and index generation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .constants import INDEX_FOOTER, INDEX_HEADER, STYLE_BLOCK, TOC_HEADER
from .models import ParseResult


def generate_toc(sections: Mapping[str, str]) -> str:
    """Render the per-file table of contents.

    Args:
        sections: Section ids mapped to titles, in the order the sections
            appear in the document.

    Returns:
        str: An ``<h2>`` heading followed by a linked ``<ul>``, or an empty
            string when there are no sections.

    Examples:
        generate_toc({"intro": "Intro"})
        # "<h2>Table of Contents</h2><ul><li><a href='#intro'>Intro</a></li></ul>"
    """
    if not sections:
        return ""

    entries = "".join(
        f"<li><a href='#{section_id}'>{title}</a></li>" for section_id, title in sections.items()
    )
    return f"{TOC_HEADER}<ul>{entries}</ul>"


def splice_toc(body: str, toc: str) -> str:
    """Insert `toc` right after the first ``<h1>`` opening tag.

    Only the first ``<h1>`` is touched. Without one the body is returned
    unchanged and the TOC is dropped.
    """
    return body.replace("<h1>", f"<h1>{toc}\n", 1)


def render_document(result: ParseResult) -> str:
    """Assemble the final page for a parsed document.

    Examples:
        render_document(parse_fdl("@title Guide\\n"))
    """
    return splice_toc(result.body, generate_toc(result.sections)) + STYLE_BLOCK


def generate_index(pages: Sequence[str]) -> str:
    """Render ``index.html`` listing `pages` as a numbered table of content.

    Args:
        pages: Output filenames in discovery order.

    Returns:
        str: Complete HTML page.

    Examples:
        generate_index(["guide.html"])
        # "<html><body><h1>Documentation <br> Table Of Content</h1><ul>"
        # "<li> <a href='guide.html'>1 guide</a></li></ul></body></html>"
    """
    entries = []
    for number, page in enumerate(pages, start=1):
        stem = page.split(".", 1)[0]
        entries.append(f"<li> <a href='{page}'>{number} {stem}</a></li>")
    return INDEX_HEADER + "".join(entries) + INDEX_FOOTER
