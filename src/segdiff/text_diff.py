#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/text_diff.py
"""Text comparison entry points and the diff result model.

:func:`compare_texts` runs the full pipeline on two strings: line
tokenization, anchor matching, nested diffing of edited lines and
compression into :class:`~segdiff.chunks.Segment` runs. The returned
:class:`DiffResult` derives positional regions and reconstructed text views
from those segments on first access.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Union

from segdiff.chunks import Region, Segment, SegmentType, tokenize
from segdiff.compress import compress_to_segments
from segdiff.constants import LINE_BREAK_CHARS
from segdiff.exceptions import FileAccessError, FileNotFoundError, ValidationError
from segdiff.matching import compare_all
from segdiff.nested import perform_nested_diff
from segdiff.options import DiffOptions

logger = logging.getLogger(__name__)


def whitespace_equivalent(text: str, placeholder: str = " ", preserve_line_breaks: bool = True) -> str:
    """Replace every character of ``text`` with a placeholder.

    Parameters
    ----------
    text : str
        Text to blank out
    placeholder : str, default " "
        Replacement character
    preserve_line_breaks : bool, default True
        Keep CR and LF characters as they are

    Returns
    -------
    str
        String of the same length as ``text``

    """
    if not preserve_line_breaks:
        return placeholder * len(text)
    return "".join(char if char in LINE_BREAK_CHARS else placeholder for char in text)


class DiffResult:
    """Segments of a text comparison plus views derived from them.

    Views are computed once, the first time any of them is requested.

    Parameters
    ----------
    segments : list of Segment
        Coalesced change runs
    options : DiffOptions, optional
        Options the diff was computed with
    old_label : str, default "old"
        Label of the old text, e.g. its file name
    new_label : str, default "new"
        Label of the new text

    """

    def __init__(
        self,
        segments: list[Segment],
        options: DiffOptions | None = None,
        *,
        old_label: str = "old",
        new_label: str = "new",
    ) -> None:
        self.segments = segments
        self.options = options or DiffOptions()
        self.old_label = old_label
        self.new_label = new_label

        self._views_generated = False
        self._regions: list[Region] = []
        self._merged_text = ""
        self._old_text = ""
        self._new_text = ""

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __repr__(self) -> str:
        return f"DiffResult(old_label={self.old_label!r}, new_label={self.new_label!r}, segments={len(self)})"

    @property
    def has_changes(self) -> bool:
        """True if any segment is not unchanged."""
        return any(segment.type is not SegmentType.UNCHANGED for segment in self.segments)

    @property
    def regions(self) -> list[Region]:
        """Positions of every segment within :attr:`merged_text`."""
        self._generate_views()
        return self._regions

    @property
    def merged_text(self) -> str:
        """Concatenation of all segment contents."""
        self._generate_views()
        return self._merged_text

    @property
    def old_text(self) -> str:
        """Old side view, with new-only content replaced by placeholders."""
        self._generate_views()
        return self._old_text

    @property
    def new_text(self) -> str:
        """New side view, with old-only content replaced by placeholders."""
        self._generate_views()
        return self._new_text

    def _generate_views(self) -> None:
        if self._views_generated:
            return

        placeholder = self.options.placeholder
        preserve = self.options.preserve_line_breaks
        merged_parts: list[str] = []
        old_parts: list[str] = []
        new_parts: list[str] = []
        regions: list[Region] = []
        offset = 0

        for segment in self.segments:
            content = segment.content
            regions.append(Region(segment.type, offset, len(content)))
            offset += len(content)
            merged_parts.append(content)

            if segment.type.in_old:
                old_parts.append(content)
            else:
                old_parts.append(whitespace_equivalent(content, placeholder, preserve))

            if segment.type.in_new:
                new_parts.append(content)
            else:
                new_parts.append(whitespace_equivalent(content, placeholder, preserve))

        self._regions = regions
        self._merged_text = "".join(merged_parts)
        self._old_text = "".join(old_parts)
        self._new_text = "".join(new_parts)
        self._views_generated = True

    def original_old(self) -> str:
        """Rebuild the exact old input from the segments."""
        return "".join(segment.content for segment in self.segments if segment.type.in_old)

    def original_new(self) -> str:
        """Rebuild the exact new input from the segments."""
        return "".join(segment.content for segment in self.segments if segment.type.in_new)

    def iter_segments(self, *types: SegmentType) -> Iterator[Segment]:
        """Yield segments, optionally restricted to the given types."""
        for segment in self.segments:
            if not types or segment.type in types:
                yield segment

    @property
    def stats(self) -> dict[str, int]:
        """Segment counts and character totals per change type."""
        stats: dict[str, int] = {}
        for segment_type in SegmentType:
            stats[f"{segment_type.value}_segments"] = 0
            stats[f"{segment_type.value}_chars"] = 0

        for segment in self.segments:
            stats[f"{segment.type.value}_segments"] += 1
            stats[f"{segment.type.value}_chars"] += len(segment.content)

        stats["total_changes"] = sum(
            stats[f"{segment_type.value}_segments"]
            for segment_type in SegmentType
            if segment_type is not SegmentType.UNCHANGED
        )
        return stats

    def to_dict(self) -> dict[str, Any]:
        """Serialize segments, regions and statistics."""
        return {
            "old_label": self.old_label,
            "new_label": self.new_label,
            "granularity": self.options.granularity,
            "segments": [segment.to_dict() for segment in self.segments],
            "regions": [region.to_dict() for region in self.regions],
            "statistics": self.stats,
        }


def compute_segments(old_content: str, new_content: str, options: DiffOptions) -> list[Segment]:
    """Run the matching pipeline and return the compressed segments.

    Parameters
    ----------
    old_content : str
        Old version of the text
    new_content : str
        New version of the text
    options : DiffOptions
        Pipeline options

    Returns
    -------
    list of Segment
        Coalesced change runs

    """
    old_chunks = tokenize(old_content, options.granularity, options.delimiters)
    new_chunks = tokenize(new_content, options.granularity, options.delimiters)
    logger.debug(
        f"Tokenized {len(old_chunks)} old and {len(new_chunks)} new {options.granularity} chunk(s)"
    )

    compare_all(old_chunks, new_chunks)
    if options.nested:
        perform_nested_diff(old_chunks, new_chunks, options.granularity, 0, options)

    return compress_to_segments(old_chunks, new_chunks)


def compare_texts(
    old_content: str,
    new_content: str,
    options: DiffOptions | None = None,
    *,
    old_label: str = "old",
    new_label: str = "new",
) -> DiffResult:
    """Compare two strings and classify every portion of both.

    Parameters
    ----------
    old_content : str
        Old version of the text
    new_content : str
        New version of the text
    options : DiffOptions, optional
        Pipeline options; defaults to line granularity with nested diffing
    old_label : str, default "old"
        Label carried on the result for renderers
    new_label : str, default "new"
        Label carried on the result for renderers

    Returns
    -------
    DiffResult
        Segments and derived views

    Raises
    ------
    ValidationError
        If either input is not a string

    Examples
    --------
    >>> result = compare_texts("a\\nb\\nc\\n", "b\\nc\\na\\n")
    >>> [(s.type.value, s.content) for s in result]
    [('moved_from', 'a\\n'), ('unchanged', 'b\\nc\\n'), ('moved_to', 'a\\n')]

    """
    for name, value in (("old_content", old_content), ("new_content", new_content)):
        if not isinstance(value, str):
            raise ValidationError(
                f"{name} must be str, got {type(value).__name__}",
                parameter_name=name,
                parameter_value=value,
            )

    options = options or DiffOptions()
    segments = compute_segments(old_content, new_content, options)
    logger.debug(f"Diff produced {len(segments)} segment(s)")

    return DiffResult(segments, options, old_label=old_label, new_label=new_label)


def _read_text(path: Path, encoding: str) -> str:
    if not path.exists():
        raise FileNotFoundError(str(path))
    if not path.is_file():
        raise FileAccessError(str(path), message=f"Not a regular file: {path}")

    try:
        # newline="" keeps CR characters so they take part in the diff
        with open(path, "r", encoding=encoding, newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(str(path), message=f"Cannot decode {path} as {encoding}", original_error=e) from e
    except OSError as e:
        raise FileAccessError(str(path), original_error=e) from e


def compare_files(
    old_path: Union[str, Path],
    new_path: Union[str, Path],
    options: DiffOptions | None = None,
    *,
    old_label: str | None = None,
    new_label: str | None = None,
    encoding: str = "utf-8",
) -> DiffResult:
    """Compare two text files.

    Parameters
    ----------
    old_path : str or Path
        Path to the old version
    new_path : str or Path
        Path to the new version
    options : DiffOptions, optional
        Pipeline options
    old_label : str, optional
        Label for the old version (defaults to the path)
    new_label : str, optional
        Label for the new version (defaults to the path)
    encoding : str, default "utf-8"
        Text encoding of both files

    Returns
    -------
    DiffResult
        Segments and derived views

    Raises
    ------
    FileNotFoundError
        If either file does not exist
    FileAccessError
        If either file cannot be read or decoded

    """
    old_path = Path(old_path)
    new_path = Path(new_path)

    if old_label is None:
        old_label = str(old_path)
    if new_label is None:
        new_label = str(new_path)

    old_content = _read_text(old_path, encoding)
    new_content = _read_text(new_path, encoding)
    logger.info(f"Comparing {old_path} ({len(old_content)} chars) with {new_path} ({len(new_content)} chars)")

    return compare_texts(old_content, new_content, options, old_label=old_label, new_label=new_label)

