"""Constants used across the fdl-html package."""

from __future__ import annotations

from .config import FdlConfig

DEFAULT_CONFIG = FdlConfig()

DEFAULT_FILE_EXTENSION = DEFAULT_CONFIG.file_extension
DEFAULT_OUTPUT_DIR = DEFAULT_CONFIG.output_dir
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length

OUTPUT_EXTENSION = ".html"
INDEX_FILENAME = "index.html"

# Callout boxes
INFO_STYLE = "background-color:#e7f3fe;padding:10px;border-left:6px solid #2196F3;"
WARNING_STYLE = "background-color:#ffcccb;padding:10px;border-left:6px solid #f44336;"
TIP_STYLE = "background-color:#8fbc8f;padding:10px;border-left:6px solid #6e8b3d;"

# Example, usecase and standalone code containers
BOX_OPEN = "<div class='example-box'><div class='example-title'>{title}:</div><div class='example-content'>"
BOX_CLOSE = "</div></div>"

TOC_HEADER = "<h2>Table of Contents</h2>"
INDEX_HEADER = "<html><body><h1>Documentation <br> Table Of Content</h1><ul>"
INDEX_FOOTER = "</ul></body></html>"

STYLE_BLOCK = (
    "<style>.example-box {border: 2px solid black;padding: 10px;margin: 20px 0;"
    "border-radius: 5px;background-color: #f9f9f9;position: relative;overflow: hidden;}"
    ".example-title {font-weight: bold;margin: 0;padding: 5px 10px;background-color: #e0e0e0;"
    "border-bottom: 2px solid black;position: absolute;top: 0;left: 0;width: 100%;box-sizing: border-box;}"
    ".example-content {padding-top: 40px;}</style>"
)
