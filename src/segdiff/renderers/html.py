#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/renderers/html.py
"""HTML diff renderer producing a merged inline view.

Every segment is written in order. Changed segments are wrapped in a span
whose class depends only on the segment type; unchanged text is written
without a wrapper. Whitespace is encoded so the merged view keeps the
layout of the source text.
"""

from __future__ import annotations

from html import escape
from io import StringIO
from typing import Any, Iterable

from segdiff.chunks import Segment, SegmentType
from segdiff.constants import DEFAULT_HTML_TAB_WIDTH
from segdiff.exceptions import OutputWriteError
from segdiff.text_diff import DiffResult

SEGMENT_CSS_CLASSES = {
    SegmentType.ADDED: "new",
    SegmentType.REMOVED: "old",
    SegmentType.MOVED_FROM: "from",
    SegmentType.MOVED_TO: "to",
}


def full_html_encode(text: str, tab_width: int = DEFAULT_HTML_TAB_WIDTH) -> str:
    """Escape markup and encode whitespace for display.

    Parameters
    ----------
    text : str
        Raw segment content
    tab_width : int, default 4
        Number of non-breaking spaces written per tab

    Returns
    -------
    str
        HTML-safe text with line breaks as ``<br>`` and spaces as ``&nbsp;``

    """
    encoded = escape(text, quote=False)
    encoded = encoded.replace("\r\n", "\n").replace("\r", "\n")
    encoded = encoded.replace("\n", "<br>")
    encoded = encoded.replace(" ", "&nbsp;")
    return encoded.replace("\t", "&nbsp;" * tab_width)


class HtmlDiffRenderer:
    """Render diff segments as merged HTML.

    Parameters
    ----------
    full_page : bool, default = False
        If True, wrap the fragment in a complete HTML document
    inline_styles : bool, default = True
        If True and ``full_page`` is set, include CSS styles in the output
    tab_width : int, default = 4
        Non-breaking spaces written per tab character

    Examples
    --------
    Render a comparison as an HTML fragment:
        >>> from segdiff import compare_texts
        >>> from segdiff.renderers import HtmlDiffRenderer
        >>> html = HtmlDiffRenderer().render(compare_texts("a\\nb\\n", "a\\nc\\n"))

    """

    def __init__(
        self,
        full_page: bool = False,
        inline_styles: bool = True,
        tab_width: int = DEFAULT_HTML_TAB_WIDTH,
    ):
        """Initialize the HTML diff renderer."""
        self.full_page = full_page
        self.inline_styles = inline_styles
        self.tab_width = tab_width

    def render(self, diff: DiffResult | Iterable[Segment]) -> str:
        """Render segments to an HTML string.

        Parameters
        ----------
        diff : DiffResult or iterable of Segment
            Diff result or its segments

        Returns
        -------
        str
            HTML-formatted diff output

        """
        output = StringIO()
        if self.full_page:
            title = "Document Diff"
            if isinstance(diff, DiffResult):
                title = f"{diff.old_label} vs {diff.new_label}"
            self._write_html_prefix(output, title)

        for segment in diff:
            output.write(self.render_segment(segment))

        if self.full_page:
            self._write_html_suffix(output)
        return output.getvalue()

    def render_segment(self, segment: Segment) -> str:
        """Render one segment, wrapping changed content in a typed span."""
        text = full_html_encode(segment.content, self.tab_width)
        css_class = SEGMENT_CSS_CLASSES.get(segment.type)
        if css_class is None:
            return text
        return f'<span class="{css_class}">{text}</span>'

    def _write_html_prefix(self, output: StringIO, title: str) -> None:
        output.write("<!DOCTYPE html>\n")
        output.write("<html lang='en'>\n")
        output.write("<head>\n")
        output.write("  <meta charset='UTF-8'>\n")
        output.write(f"  <title>{escape(title)}</title>\n")

        if self.inline_styles:
            output.write("  <style>\n")
            output.write(self._get_css())
            output.write("  </style>\n")

        output.write("</head>\n")
        output.write("<body>\n")
        output.write("<div class='all'>")

    def _write_html_suffix(self, output: StringIO) -> None:
        output.write("</div>\n")
        output.write("</body>\n")
        output.write("</html>\n")

    def _get_css(self) -> str:
        return """
        .all { font: 9pt 'Courier New', Courier, monospace; }
        .old { background-color: #ee1111; }
        .new { background-color: #ffff11; }
        .from { background-color: #ee1111; color: #1111ee; }
        .to { background-color: #eeee11; color: #1111ee; }
        """


def render_to_file(diff: DiffResult | Iterable[Segment], output_path: str, **kwargs: Any) -> None:
    """Render a diff to an HTML file.

    Parameters
    ----------
    diff : DiffResult or iterable of Segment
        Diff payload to render
    output_path : str
        Destination path for the generated HTML file.
    **kwargs
        Additional keyword arguments forwarded to :class:`HtmlDiffRenderer`.

    Raises
    ------
    OutputWriteError
        If the file cannot be written

    """
    renderer = HtmlDiffRenderer(**kwargs)
    html = renderer.render(diff)

    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(html)
    except OSError as e:
        raise OutputWriteError(output_path, original_error=e) from e
