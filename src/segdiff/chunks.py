#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/chunks.py
"""Core data model and tokenizers for the diff pipeline.

Text is split into :class:`Chunk` objects before comparison. Every
tokenizer in this module is lossless: joining ``chunk.merged_content`` over
the returned list reproduces the input string exactly.

Tokenizers
----------
- :func:`split_on_delimiters` - primary content followed by a trailing
  delimiter run (used for line-level diffing)
- :func:`split_separate_delimiters` - alternating delimiter/non-delimiter
  chunks
- :func:`split_category` - character class boundaries, one chunk per
  whitespace character (used for word-level diffing)
- :func:`split_every_char` - one chunk per character
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from segdiff.constants import DEFAULT_LINE_DELIMITERS, UNMATCHED, WHITESPACE_CHARS, Granularity
from segdiff.exceptions import InvalidArgumentError, ValidationError

if TYPE_CHECKING:
    from segdiff.nested import InnerDiff


class SegmentType(Enum):
    """What happened to a segment of text between the old and new versions."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    MOVED_FROM = "moved_from"
    MOVED_TO = "moved_to"

    @property
    def is_moved(self) -> bool:
        """Return True for either side of a move."""
        return self in (SegmentType.MOVED_FROM, SegmentType.MOVED_TO)

    @property
    def in_old(self) -> bool:
        """Return True if content of this type exists in the old text."""
        return self in (SegmentType.UNCHANGED, SegmentType.REMOVED, SegmentType.MOVED_FROM)

    @property
    def in_new(self) -> bool:
        """Return True if content of this type exists in the new text."""
        return self in (SegmentType.UNCHANGED, SegmentType.ADDED, SegmentType.MOVED_TO)


@dataclass(frozen=True, slots=True)
class Segment:
    """A maximal run of text sharing one change type."""

    content: str
    type: SegmentType = SegmentType.UNCHANGED

    def to_dict(self) -> dict[str, str]:
        """Serialize to a JSON-friendly mapping."""
        return {"content": self.content, "type": self.type.value}


@dataclass(frozen=True, slots=True)
class Region:
    """Position of a segment within the merged text of a diff."""

    type: SegmentType
    offset: int
    length: int

    @property
    def end(self) -> int:
        """Offset one past the last character of the region."""
        return self.offset + self.length

    def to_dict(self) -> dict[str, int | str]:
        """Serialize to a JSON-friendly mapping."""
        return {"type": self.type.value, "offset": self.offset, "length": self.length}


class Chunk:
    """A comparable slice of text plus the delimiter run that followed it.

    Parameters
    ----------
    content : str
        Primary content compared by the matcher
    delimiter_content : str, default ""
        Trailing delimiter characters folded into this chunk

    Attributes
    ----------
    key : str
        Lookup key for uniqueness tables, derived from ``content``
    matching_index : int
        Index of the paired chunk in the opposite sequence, or ``UNMATCHED``
    inner_diff : InnerDiff or None
        Finer-grained diff attached when this chunk was paired as an edit

    """

    __slots__ = ("content", "delimiter_content", "key", "matching_index", "inner_diff")

    def __init__(self, content: str, delimiter_content: str = "") -> None:
        self.content = content
        self.delimiter_content = delimiter_content
        self.key = content
        self.matching_index = UNMATCHED
        self.inner_diff: InnerDiff | None = None

    @property
    def merged_content(self) -> str:
        """Content followed by its trailing delimiters."""
        return self.content + self.delimiter_content

    @property
    def is_matched(self) -> bool:
        return self.matching_index != UNMATCHED

    def equals(self, other: Chunk | None) -> bool:
        """Compare primary content with another chunk.

        Raises
        ------
        InvalidArgumentError
            If ``other`` is None

        """
        if other is None:
            raise InvalidArgumentError("Cannot compare chunk against None", parameter_name="other")
        if self.key != other.key:
            return False
        return self.content == other.content

    def __repr__(self) -> str:
        return f"Chunk({self.content!r}, {self.delimiter_content!r}, matching_index={self.matching_index})"


def _is_delimiter(char: str, delimiters: str) -> bool:
    return char in delimiters


def split_on_delimiters(content: str, delimiters: str = DEFAULT_LINE_DELIMITERS) -> list[Chunk]:
    """Split text into chunks that end with a run of delimiter characters.

    Each chunk holds a run of non-delimiters as ``content`` and the run of
    delimiters following it as ``delimiter_content``.

    Parameters
    ----------
    content : str
        Text to split
    delimiters : str, default "\\n\\r"
        Characters treated as delimiters

    Returns
    -------
    list of Chunk
        Chunks in text order

    """
    chunks: list[Chunk] = []
    index = 0
    length = len(content)

    while index < length:
        start = index

        # read until we hit a delimiter
        while index < length and not _is_delimiter(content[index], delimiters):
            index += 1
        content_end = index

        # then consume the whole delimiter run
        while index < length and _is_delimiter(content[index], delimiters):
            index += 1

        chunks.append(Chunk(content[start:content_end], content[content_end:index]))

    return chunks


def split_separate_delimiters(content: str, delimiters: str) -> list[Chunk]:
    """Split text into alternating delimiter-only and non-delimiter chunks."""
    if not content:
        return []

    chunks: list[Chunk] = []
    want_delimiter = _is_delimiter(content[0], delimiters)
    index = 0
    length = len(content)

    while index < length:
        start = index
        while index < length and want_delimiter == _is_delimiter(content[index], delimiters):
            index += 1
        want_delimiter = not want_delimiter
        chunks.append(Chunk(content[start:index]))

    return chunks


def _is_whitespace(char: str) -> bool:
    return char in WHITESPACE_CHARS


def _category_matches(left: str, right: str) -> bool:
    # whitespace never matches, so every whitespace character stands alone
    if _is_whitespace(left) or _is_whitespace(right):
        return False
    return True


def split_category(content: str) -> list[Chunk]:
    """Split text on character class boundaries.

    Characters are classified as whitespace (space, tab, CR, LF) or other.
    Runs of non-whitespace form a single chunk; each whitespace character is
    a chunk of its own so that changes to spacing are isolated.

    Parameters
    ----------
    content : str
        Text to split

    Returns
    -------
    list of Chunk
        Chunks in text order

    """
    if not content:
        return []

    chunks: list[Chunk] = []
    index = 0
    length = len(content)

    while index < length:
        start = index
        index += 1
        while index < length and _category_matches(content[start], content[index]):
            index += 1
        chunks.append(Chunk(content[start:index]))

    return chunks


def split_every_char(content: str) -> list[Chunk]:
    """Split text into one chunk per character."""
    return [Chunk(char) for char in content]


def tokenize(content: str, granularity: Granularity, delimiters: str = DEFAULT_LINE_DELIMITERS) -> list[Chunk]:
    """Split text using the tokenizer for a granularity level.

    Parameters
    ----------
    content : str
        Text to split
    granularity : {'line', 'word', 'char'}
        Tokenization level
    delimiters : str, default "\\n\\r"
        Line delimiters, used only for ``'line'``

    Returns
    -------
    list of Chunk
        Chunks in text order

    Raises
    ------
    ValidationError
        If the granularity is unknown

    """
    if granularity == "line":
        return split_on_delimiters(content, delimiters)
    if granularity == "word":
        return split_category(content)
    if granularity == "char":
        return split_every_char(content)

    raise ValidationError(
        f"Unsupported granularity: {granularity}",
        parameter_name="granularity",
        parameter_value=granularity,
    )


def join_chunks(chunks: Iterable[Chunk]) -> str:
    """Reassemble the original text from a chunk sequence."""
    return "".join(chunk.merged_content for chunk in chunks)
