#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/renderers/side_by_side.py
"""Two-column terminal view of a diff built with Rich.

The old and new views of a :class:`~segdiff.text_diff.DiffResult` keep line
breaks inside placeholders, so splitting both on newlines yields rows that
line up. Each side is styled per segment type.
"""

from __future__ import annotations

from io import StringIO
from itertools import zip_longest
from typing import Literal

from rich.console import Console
from rich.table import Table
from rich.text import Text

from segdiff.chunks import SegmentType
from segdiff.text_diff import DiffResult, whitespace_equivalent

SEGMENT_STYLES = {
    SegmentType.ADDED: "black on green",
    SegmentType.REMOVED: "black on red",
    SegmentType.MOVED_FROM: "blue on red",
    SegmentType.MOVED_TO: "blue on yellow",
}


class SideBySideRenderer:
    """Render the old and new views of a diff as aligned table columns.

    Parameters
    ----------
    use_color : bool, default = True
        If True, emit ANSI styles when rendering to a string
    width : int, optional
        Console width used by :meth:`render_to_string`
    line_numbers : bool, default = True
        If True, prefix each row with its row number

    """

    def __init__(self, use_color: bool = True, width: int | None = None, line_numbers: bool = True):
        """Initialize the side-by-side renderer."""
        self.use_color = use_color
        self.width = width
        self.line_numbers = line_numbers

    def build_side(self, diff: DiffResult, side: Literal["old", "new"]) -> Text:
        """Build the styled view of one side of the diff."""
        text = Text()
        for segment in diff.segments:
            # CRLF and lone CR become LF so rows split cleanly
            content = segment.content.replace("\r\n", "\n").replace("\r", "\n")
            present = segment.type.in_old if side == "old" else segment.type.in_new
            if present:
                text.append(content, style=SEGMENT_STYLES.get(segment.type))
            else:
                text.append(whitespace_equivalent(content, diff.options.placeholder))
        return text

    def render(self, diff: DiffResult) -> Table:
        """Build a Rich table with one row per aligned line.

        Parameters
        ----------
        diff : DiffResult
            Diff to display

        Returns
        -------
        rich.table.Table
            Table ready to be printed by a Rich console

        """
        table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
        if self.line_numbers:
            table.add_column("#", style="dim", justify="right", no_wrap=True)
        table.add_column(Text(diff.old_label), overflow="fold")
        table.add_column(Text(diff.new_label), overflow="fold")

        old_lines = self.build_side(diff, "old").split("\n")
        new_lines = self.build_side(diff, "new").split("\n")

        for number, (old_line, new_line) in enumerate(zip_longest(old_lines, new_lines, fillvalue=Text()), 1):
            if self.line_numbers:
                table.add_row(str(number), old_line, new_line)
            else:
                table.add_row(old_line, new_line)

        return table

    def render_to_string(self, diff: DiffResult) -> str:
        """Render the table to text, with ANSI styles if color is enabled."""
        buffer = StringIO()
        console = Console(
            file=buffer,
            width=self.width,
            force_terminal=self.use_color,
            no_color=not self.use_color,
            highlight=False,
        )
        console.print(self.render(diff))
        return buffer.getvalue()
