"""Slug generation for section titles."""

from __future__ import annotations


def generate_slug(title: str) -> str:
    """Generate the anchor id for an ``@section`` title.

    Spaces become hyphens and the result is lowercased. Punctuation is kept
    and Unicode is not normalized, so the slug stays predictable for authors
    who link to it by hand.

    Args:
        title: The section title, already trimmed.

    Returns:
        str: Slug used as the ``id`` of the section header and as the TOC
            anchor target. Empty when `title` is empty.

    Examples:
        generate_slug("Getting Started")  # "getting-started"
        generate_slug("What's New?")  # "what's-new?"
    """
    return title.replace(" ", "-").lower()
