#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/compress.py
"""Compression of matched chunk sequences into change segments."""

from __future__ import annotations

from typing import Sequence

from segdiff.chunks import Chunk, Segment, SegmentType
from segdiff.constants import UNMATCHED


class SegmentBuilder:
    """Accumulate segments, merging consecutive runs of the same type."""

    def __init__(self) -> None:
        self._segments: list[Segment] = []
        self._current_parts: list[str] = []
        self._current_type: SegmentType | None = None

    def add(self, content: str, segment_type: SegmentType) -> None:
        """Append content, extending the current run when the type matches."""
        if not content:
            return

        if self._current_type is segment_type:
            self._current_parts.append(content)
            return

        self._flush()
        self._current_parts = [content]
        self._current_type = segment_type

    def extend(self, segments: Sequence[Segment]) -> None:
        for segment in segments:
            self.add(segment.content, segment.type)

    def _flush(self) -> None:
        if self._current_type is not None:
            self._segments.append(Segment("".join(self._current_parts), self._current_type))
            self._current_parts = []
            self._current_type = None

    def segments(self) -> list[Segment]:
        """Return all segments built so far."""
        self._flush()
        return list(self._segments)


def _add_matched_pair(builder: SegmentBuilder, old_chunk: Chunk, new_chunk: Chunk) -> None:
    if new_chunk.inner_diff is None:
        builder.add(new_chunk.content, SegmentType.UNCHANGED)
    else:
        builder.extend(new_chunk.inner_diff.segments)

    if old_chunk.delimiter_content == new_chunk.delimiter_content:
        builder.add(new_chunk.delimiter_content, SegmentType.UNCHANGED)
    else:
        builder.add(old_chunk.delimiter_content, SegmentType.REMOVED)
        builder.add(new_chunk.delimiter_content, SegmentType.ADDED)


def compress_to_segments(old: Sequence[Chunk], new: Sequence[Chunk]) -> list[Segment]:
    """Walk both matched sequences and emit coalesced change segments.

    Parameters
    ----------
    old : sequence of Chunk
        Old chunks with matching indexes set
    new : sequence of Chunk
        New chunks with matching indexes set

    Returns
    -------
    list of Segment
        Change runs; no two consecutive runs share a type

    """
    builder = SegmentBuilder()
    old_index = 0
    new_index = 0

    while old_index < len(old) and new_index < len(new):
        old_chunk = old[old_index]
        new_chunk = new[new_index]

        if old_chunk.matching_index == new_index:
            _add_matched_pair(builder, old_chunk, new_chunk)
            old_index += 1
            new_index += 1
        elif old_chunk.matching_index == UNMATCHED:
            builder.add(old_chunk.merged_content, SegmentType.REMOVED)
            old_index += 1
        elif new_chunk.matching_index == UNMATCHED:
            builder.add(new_chunk.merged_content, SegmentType.ADDED)
            new_index += 1
        elif old_chunk.matching_index < new_index:
            # partner already emitted: the old chunk moved up
            builder.add(old_chunk.merged_content, SegmentType.MOVED_FROM)
            old_index += 1
        elif new_chunk.matching_index < old_index:
            builder.add(new_chunk.merged_content, SegmentType.MOVED_TO)
            new_index += 1
        else:
            # Crossing move. Emit on the side that realigns sooner.
            old_side_distance = new_chunk.matching_index - old_index
            new_side_distance = old_chunk.matching_index - new_index
            if old_side_distance < new_side_distance:
                builder.add(old_chunk.merged_content, SegmentType.MOVED_FROM)
                old_index += 1
            else:
                builder.add(new_chunk.merged_content, SegmentType.MOVED_TO)
                new_index += 1

    for chunk in old[old_index:]:
        segment_type = SegmentType.REMOVED if chunk.matching_index == UNMATCHED else SegmentType.MOVED_FROM
        builder.add(chunk.merged_content, segment_type)

    for chunk in new[new_index:]:
        segment_type = SegmentType.ADDED if chunk.matching_index == UNMATCHED else SegmentType.MOVED_TO
        builder.add(chunk.merged_content, segment_type)

    return builder.segments()
