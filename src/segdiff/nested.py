#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/nested.py
"""Nested diffing of chunks that look like edited versions of each other.

After anchor matching, unpaired chunks next to a mutual pair are compared
at the next finer granularity (lines by words, words by characters). When
the resulting :class:`InnerDiff` is similar enough the two chunks are paired
and the inner diff is attached to both, so the compressor can show the edit
inside the unit instead of a whole-unit removal and addition.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from segdiff.chunks import Chunk, Segment, SegmentType, tokenize
from segdiff.compress import compress_to_segments
from segdiff.constants import DEFAULT_SIMILARITY_THRESHOLD, NEXT_GRANULARITY, Granularity
from segdiff.matching import compare_all, is_mutual, pair_chunks

if TYPE_CHECKING:
    from segdiff.options import DiffOptions

logger = logging.getLogger(__name__)


class InnerDiff:
    """Diff of two chunk contents at a finer granularity.

    Parameters
    ----------
    old_content : str
        Content of the old chunk
    new_content : str
        Content of the new chunk
    granularity : {'word', 'char'}
        Tokenization level used for this diff
    depth : int
        Nesting depth of this diff; the top-level diff is depth 0
    options : DiffOptions
        Options controlling further nesting

    Attributes
    ----------
    segments : list of Segment
        Compressed change runs between the two contents

    """

    def __init__(
        self,
        old_content: str,
        new_content: str,
        granularity: Granularity,
        depth: int,
        options: DiffOptions,
    ) -> None:
        self.granularity = granularity
        self.depth = depth

        old_chunks = tokenize(old_content, granularity)
        new_chunks = tokenize(new_content, granularity)

        compare_all(old_chunks, new_chunks)
        if options.nested:
            perform_nested_diff(old_chunks, new_chunks, granularity, depth, options)

        self.segments: list[Segment] = compress_to_segments(old_chunks, new_chunks)

    def __repr__(self) -> str:
        return f"InnerDiff(granularity={self.granularity!r}, depth={self.depth}, segments={self.segments!r})"


def are_similar_enough(segments: Sequence[Segment]) -> bool:
    """Decide whether an inner diff describes an edit of the same unit.

    Unchanged characters count twice since they exist on both sides, while
    every changed character exists on one side only. Whitespace-only
    segments are ignored. The units match when more than half of the
    weight is identical, or when one side only gained or only lost content.

    Parameters
    ----------
    segments : sequence of Segment
        Inner diff segments

    Returns
    -------
    bool
        True if the two units should be paired

    """
    identical_chars = 0
    different_chars = 0
    added_count = 0
    removed_count = 0
    moved_count = 0

    for segment in segments:
        if segment.type is SegmentType.ADDED:
            added_count += 1
        elif segment.type is SegmentType.REMOVED:
            removed_count += 1
        elif segment.type.is_moved:
            moved_count += 1

        if not segment.content.strip():
            continue

        if segment.type is SegmentType.UNCHANGED:
            identical_chars += len(segment.content) * 2
        else:
            different_chars += len(segment.content)

    total_chars = identical_chars + different_chars

    # blank units always match
    if total_chars == 0:
        return True

    # pure additions or pure removals match
    if removed_count == 0 and moved_count == 0:
        return True
    if added_count == 0 and moved_count == 0:
        return True

    return identical_chars / total_chars > DEFAULT_SIMILARITY_THRESHOLD


def try_inner_match(
    old: Sequence[Chunk],
    old_index: int,
    new: Sequence[Chunk],
    new_index: int,
    granularity: Granularity,
    depth: int,
    options: DiffOptions,
) -> bool:
    """Pair two unpaired chunks if their inner diff is similar enough.

    Parameters
    ----------
    old, new : sequence of Chunk
        Chunk sequences being compared
    old_index, new_index : int
        Candidate pair
    granularity : {'line', 'word', 'char'}
        Granularity of ``old`` and ``new``; the inner diff uses the next
        finer level
    depth : int
        Nesting depth of ``old`` and ``new``
    options : DiffOptions
        Nesting options

    Returns
    -------
    bool
        True if the chunks were paired

    """
    old_chunk = old[old_index]
    new_chunk = new[new_index]
    if old_chunk.is_matched or new_chunk.is_matched:
        return False

    inner_granularity = NEXT_GRANULARITY[granularity]
    if inner_granularity is None:
        return False

    difference = InnerDiff(old_chunk.content, new_chunk.content, inner_granularity, depth + 1, options)
    if not are_similar_enough(difference.segments):
        logger.debug(f"Rejected {granularity} pair old[{old_index}]/new[{new_index}] at depth {depth}")
        return False

    old_chunk.inner_diff = difference
    new_chunk.inner_diff = difference
    pair_chunks(old, old_index, new, new_index)
    logger.debug(f"Paired {granularity} old[{old_index}]/new[{new_index}] via {inner_granularity} diff")
    return True


def perform_nested_diff(
    old: Sequence[Chunk],
    new: Sequence[Chunk],
    granularity: Granularity,
    depth: int,
    options: DiffOptions,
) -> None:
    """Pair unmatched chunks adjacent to existing pairs by inner diffing.

    Candidates are the first and last chunks of each side, the chunks after
    every mutual pair and the chunks before every mutual pair, visited in
    that order.

    Parameters
    ----------
    old, new : sequence of Chunk
        Chunk sequences already processed by :func:`segdiff.matching.compare`
    granularity : {'line', 'word', 'char'}
        Granularity of ``old`` and ``new``
    depth : int
        Nesting depth of ``old`` and ``new``
    options : DiffOptions
        Nesting options

    """
    if NEXT_GRANULARITY[granularity] is None:
        return
    if depth >= options.max_nesting_depth:
        logger.debug(f"Nesting depth limit {options.max_nesting_depth} reached at {granularity} level")
        return
    if not old or not new:
        return

    old_last = len(old) - 1
    new_last = len(new) - 1

    try_inner_match(old, 0, new, 0, granularity, depth, options)
    try_inner_match(old, old_last, new, new_last, granularity, depth, options)

    for i in range(new_last):
        j = new[i].matching_index
        if is_mutual(old, new, i) and j < old_last:
            try_inner_match(old, j + 1, new, i + 1, granularity, depth, options)

    for i in range(new_last, 0, -1):
        j = new[i].matching_index
        if is_mutual(old, new, i) and j > 0:
            try_inner_match(old, j - 1, new, i - 1, granularity, depth, options)
