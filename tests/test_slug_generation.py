from __future__ import annotations

import pytest

from fdl_html.slugify import generate_slug


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Introduction", "introduction"),
        ("Sample Section", "sample-section"),
        ("What's New?", "what's-new?"),
        ("Two  Spaces", "two--spaces"),
        ("Café Crème", "café-crème"),
        ("", ""),
    ],
)
def test_generate_slug_expected_examples(title: str, expected: str):
    """Only spaces are replaced and the result lowercased."""
    assert generate_slug(title) == expected


def test_generate_slug_keeps_tabs_and_punctuation():
    assert generate_slug("A\tB: C/D") == "a\tb:-c/d"
