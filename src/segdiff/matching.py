#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/matching.py
"""Anchor-based matching between two chunk sequences.

Pairs are established in four passes over an inclusive index range on each
side:

1. Unique anchors - chunks whose content occurs exactly once on both sides
2. Endpoint check - the first and last chunks of each range
3. Forward propagation - the chunk after every mutual pair
4. Backward propagation - the chunk before every mutual pair

Duplicated content is never anchored directly; it can only be paired by the
endpoint check or by propagation from a genuine anchor.
"""

from __future__ import annotations

import logging
from typing import Sequence

from segdiff.chunks import Chunk
from segdiff.constants import UNMATCHED

logger = logging.getLogger(__name__)


class UniquenessEntry:
    """First occurrence of a piece of content and how often it repeats."""

    __slots__ = ("index", "content", "match_count")

    def __init__(self, index: int, content: str) -> None:
        self.index = index
        self.content = content
        self.match_count = 1

    def increment(self) -> None:
        self.match_count += 1

    @property
    def is_unique(self) -> bool:
        return self.match_count == 1

    def __repr__(self) -> str:
        return f"UniquenessEntry(index={self.index}, content={self.content!r}, match_count={self.match_count})"


UniquenessTable = dict[str, list[UniquenessEntry]]


def build_uniqueness_table(chunks: Sequence[Chunk], start: int, end: int) -> UniquenessTable:
    """Group chunks in ``[start, end]`` by key and count repeated content.

    Parameters
    ----------
    chunks : sequence of Chunk
        Chunks on one side of the comparison
    start : int
        First index to include
    end : int
        Last index to include (inclusive)

    Returns
    -------
    dict of str to list of UniquenessEntry
        Entries per key, one per distinct content

    """
    table: UniquenessTable = {}
    for i in range(start, end + 1):
        chunk = chunks[i]
        entries = table.setdefault(chunk.key, [])

        for entry in entries:
            if entry.content == chunk.content:
                entry.increment()
                break
        else:
            entries.append(UniquenessEntry(i, chunk.content))

    return table


def pair_chunks(old: Sequence[Chunk], old_index: int, new: Sequence[Chunk], new_index: int) -> None:
    """Point two chunks at each other."""
    new[new_index].matching_index = old_index
    old[old_index].matching_index = new_index


def is_mutual(old: Sequence[Chunk], new: Sequence[Chunk], new_index: int) -> bool:
    """Return True if ``new[new_index]`` is paired and its partner points back."""
    j = new[new_index].matching_index
    return j != UNMATCHED and old[j].matching_index == new_index


def try_match(old: Sequence[Chunk], old_index: int, new: Sequence[Chunk], new_index: int) -> bool:
    """Pair two chunks if both are unpaired and have equal content.

    Returns
    -------
    bool
        True if a new pair was established

    """
    new_chunk = new[new_index]
    old_chunk = old[old_index]

    if new_chunk.is_matched or old_chunk.is_matched:
        return False
    if not new_chunk.equals(old_chunk):
        return False

    pair_chunks(old, old_index, new, new_index)
    return True


def _match_unique_anchors(
    old: Sequence[Chunk],
    old_table: UniquenessTable,
    new: Sequence[Chunk],
    new_table: UniquenessTable,
    new_start: int,
    new_end: int,
) -> int:
    anchors = 0
    for i in range(new_start, new_end + 1):
        key = new[i].key
        new_entries = new_table.get(key)
        old_entries = old_table.get(key)
        if not new_entries or not old_entries:
            continue

        found = False
        for new_entry in new_entries:
            for old_entry in old_entries:
                if new_entry.is_unique and old_entry.is_unique and new_entry.content == old_entry.content:
                    pair_chunks(old, old_entry.index, new, i)
                    anchors += 1
                    found = True
                    break
            if found:
                break

    return anchors


def compare(
    old: Sequence[Chunk],
    old_start: int,
    old_end: int,
    new: Sequence[Chunk],
    new_start: int,
    new_end: int,
) -> None:
    """Pair equal chunks between two sequences in place.

    Parameters
    ----------
    old : sequence of Chunk
        Chunks of the old text; ``matching_index`` is updated in place
    old_start, old_end : int
        Inclusive index range on the old side
    new : sequence of Chunk
        Chunks of the new text; ``matching_index`` is updated in place
    new_start, new_end : int
        Inclusive index range on the new side

    """
    old_table = build_uniqueness_table(old, old_start, old_end)
    new_table = build_uniqueness_table(new, new_start, new_end)

    anchors = _match_unique_anchors(old, old_table, new, new_table, new_start, new_end)
    logger.debug(f"Found {anchors} unique anchor(s) among {len(old)} old and {len(new)} new chunk(s)")

    if old_start <= old_end and new_start <= new_end:
        try_match(old, old_start, new, new_start)
        try_match(old, old_end, new, new_end)

    # pair the chunks after each mutual pair
    for i in range(new_start, new_end):
        j = new[i].matching_index
        if j != UNMATCHED and old_start <= j < old_end and old[j].matching_index == i:
            try_match(old, j + 1, new, i + 1)

    # pair the chunks before each mutual pair
    for i in range(new_end, new_start, -1):
        j = new[i].matching_index
        if j != UNMATCHED and old_start < j <= old_end and old[j].matching_index == i:
            try_match(old, j - 1, new, i - 1)


def compare_all(old: Sequence[Chunk], new: Sequence[Chunk]) -> None:
    """Run :func:`compare` over both sequences in full."""
    compare(old, 0, len(old) - 1, new, 0, len(new) - 1)


def find_one_sided_matches(old: Sequence[Chunk], new: Sequence[Chunk]) -> list[tuple[str, int]]:
    """List chunks whose pairing is not mirrored by their partner.

    Returns
    -------
    list of tuple
        ``("old", index)`` or ``("new", index)`` for every broken pairing;
        empty when the mutual-match invariant holds

    """
    broken: list[tuple[str, int]] = []
    for i, chunk in enumerate(old):
        j = chunk.matching_index
        if j != UNMATCHED and (j >= len(new) or new[j].matching_index != i):
            broken.append(("old", i))
    for j, chunk in enumerate(new):
        i = chunk.matching_index
        if i != UNMATCHED and (i >= len(old) or old[i].matching_index != j):
            broken.append(("new", j))
    return broken
