"""HTML escaping and fixed-template formatters for FDL tags."""

from __future__ import annotations

from .constants import INFO_STYLE, TIP_STYLE, WARNING_STYLE
from .slugify import generate_slug


def escape_html(line: str) -> str:
    """Escape angle brackets in a raw source line.

    Only ``<`` and ``>`` are replaced; ampersands and quotes pass through so
    authors can still write entities by hand.

    Examples:
        escape_html("<b>x</b>")  # "&lt;b&gt;x&lt;/b&gt;"
    """
    return line.replace("<", "&lt;").replace(">", "&gt;")


def _callout(style: str, label: str, text: str) -> str:
    return f"<div style='{style}'><strong>{label}:</strong> {text.strip()}</div>"


def format_info(text: str) -> str:
    """Render an info box around the ``@info`` payload."""
    return _callout(INFO_STYLE, "Info", text)


def format_warning(text: str) -> str:
    """Render a warning box around the ``@warning`` payload."""
    return _callout(WARNING_STYLE, "Warning", text)


def format_tip(text: str) -> str:
    """Render a tip box around the ``@tip`` payload."""
    return _callout(TIP_STYLE, "Tip", text)


def format_section(title: str, sections: dict[str, str]) -> str:
    """Render a section header and record it for the per-file TOC.

    A later section with the same slug replaces the recorded title but keeps
    the position of the first one.

    Args:
        title: Section title following the ``@section`` tag.
        sections: Mapping of slugs to titles, updated in place.

    Returns:
        str: ``<h2>`` element whose ``id`` is the slug of `title`.

    Examples:
        format_section("Introduction", {})  # "<h2 id='introduction'>Introduction</h2>"
    """
    title = title.strip()
    section_id = generate_slug(title)
    sections[section_id] = title
    return f"<h2 id='{section_id}'>{title}</h2>"


def format_row(text: str) -> str:
    """Render one ``@row`` as a table row; cells are ``|`` separated and trimmed."""
    cells = "".join(f"<td>{cell.strip()}</td>" for cell in text.strip().split("|"))
    return f"<tr>{cells}</tr>"


def format_paragraphs(heading: str, text: str) -> str:
    # Items are kept verbatim, surrounding blanks included.
    items = "".join(f"<p>{item}</p>" for item in text.strip().split("|"))
    return f"<p><b>{heading}</b></p>{items}"
