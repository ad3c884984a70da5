"""
fdl-html: convert FDL documentation markup into linked HTML pages.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    fdl-html --directory=/documentation

Library Usage:
    from pathlib import Path
    from fdl_html import parse_fdl, render_document

    content = Path("guide.fdl").read_text()
    html = render_document(parse_fdl(content))
"""

from .builder import build_documentation
from .config import ConfigError, FdlConfig
from .exceptions import BuildError, LineTooLongError, ParseError, ParseFileError
from .formatters import escape_html
from .generator import generate_index, generate_toc, render_document, splice_toc
from .models import BuildResult, ParseResult, ParserState
from .parser import LineTransformer, parse_fdl, parse_file, parse_line
from .slugify import generate_slug

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_line",
    "parse_fdl",
    "parse_file",
    "render_document",
    "build_documentation",
    # Generation helpers
    "escape_html",
    "generate_slug",
    "generate_toc",
    "splice_toc",
    "generate_index",
    # Data models
    "ParserState",
    "ParseResult",
    "BuildResult",
    "FdlConfig",
    "LineTransformer",
    # Exceptions
    "BuildError",
    "ConfigError",
    "LineTooLongError",
    "ParseError",
    "ParseFileError",
    # Version
    "__version__",
]
