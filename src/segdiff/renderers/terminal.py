#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/renderers/terminal.py
"""Merged diff view for terminals with optional ANSI colors."""

from __future__ import annotations

from typing import Iterable, Iterator

from segdiff.chunks import Segment, SegmentType

RED = "\033[31m"
GREEN = "\033[32m"
BLUE = "\033[34m"
CYAN = "\033[36m"
RESET = "\033[0m"

SEGMENT_COLORS = {
    SegmentType.ADDED: GREEN,
    SegmentType.REMOVED: RED,
    SegmentType.MOVED_FROM: BLUE,
    SegmentType.MOVED_TO: CYAN,
}

# Bracket markers used when color is disabled
SEGMENT_MARKERS = {
    SegmentType.ADDED: ("{+", "+}"),
    SegmentType.REMOVED: ("[-", "-]"),
    SegmentType.MOVED_FROM: ("[<", "<]"),
    SegmentType.MOVED_TO: ("{>", ">}"),
}


class TerminalDiffRenderer:
    """Render segments inline, highlighting every change by its type.

    With color enabled, changed segments are wrapped in ANSI codes:

    - Green for additions
    - Red for removals
    - Blue for content moved away
    - Cyan for content moved in

    Without color, changed segments are wrapped in bracket markers such as
    ``{+added+}`` and ``[-removed-]``.

    Parameters
    ----------
    use_color : bool, default = True
        If True, add ANSI color codes to output

    """

    def __init__(self, use_color: bool = True):
        """Initialize the terminal diff renderer."""
        self.use_color = use_color

    def render(self, segments: Iterable[Segment]) -> Iterator[str]:
        """Yield rendered pieces of the merged view in segment order.

        Parameters
        ----------
        segments : iterable of Segment
            Diff segments or a DiffResult

        Yields
        ------
        str
            Rendered text for each segment

        """
        for segment in segments:
            if segment.type is SegmentType.UNCHANGED:
                yield segment.content
            elif self.use_color:
                yield self._colorize(segment)
            else:
                opener, closer = SEGMENT_MARKERS[segment.type]
                yield f"{opener}{segment.content}{closer}"

    def render_to_string(self, segments: Iterable[Segment]) -> str:
        return "".join(self.render(segments))

    def _colorize(self, segment: Segment) -> str:
        color = SEGMENT_COLORS[segment.type]
        # Color each line separately so terminals do not bleed color across line breaks
        lines = segment.content.split("\n")
        return "\n".join(f"{color}{line}{RESET}" if line else line for line in lines)


def colorize_diff(segments: Iterable[Segment], use_color: bool = True) -> str:
    """Render segments as a single merged string."""
    renderer = TerminalDiffRenderer(use_color=use_color)
    return renderer.render_to_string(segments)
