#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/renderers/__init__.py
"""Diff renderers for various output formats.

Renderers consume diff segments in order and apply a treatment keyed only
on the segment type. They never reorder segments or alter their content
beyond escaping.

Available Renderers
-------------------
- HtmlDiffRenderer: Merged HTML view with typed spans
- JsonDiffRenderer: Structured JSON output for programmatic access
- TerminalDiffRenderer: Merged view with ANSI colors or bracket markers
- SideBySideRenderer: Aligned old/new columns using Rich

Examples
--------
Render a comparison as HTML:
    >>> from segdiff import compare_texts
    >>> from segdiff.renderers import HtmlDiffRenderer
    >>> result = compare_texts("one\\ntwo\\n", "one\\nthree\\n")
    >>> html = HtmlDiffRenderer(full_page=True).render(result)

Print with colors for the terminal:
    >>> from segdiff.renderers import TerminalDiffRenderer
    >>> print(TerminalDiffRenderer().render_to_string(result))

"""

from segdiff.renderers.html import HtmlDiffRenderer
from segdiff.renderers.json import JsonDiffRenderer
from segdiff.renderers.side_by_side import SideBySideRenderer
from segdiff.renderers.terminal import TerminalDiffRenderer

__all__ = [
    "HtmlDiffRenderer",
    "JsonDiffRenderer",
    "SideBySideRenderer",
    "TerminalDiffRenderer",
]
