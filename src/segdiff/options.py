#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options controlling the diff pipeline.

Options are frozen dataclasses; use :meth:`CloneFrozenMixin.create_updated`
to derive a modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from segdiff.constants import (
    DEFAULT_GRANULARITY,
    DEFAULT_LINE_DELIMITERS,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_NESTED,
    DEFAULT_PLACEHOLDER,
    DEFAULT_PRESERVE_LINE_BREAKS,
    NEXT_GRANULARITY,
    Granularity,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DiffOptions(CloneFrozenMixin):
    """Configuration for :func:`segdiff.text_diff.compare_texts`.

    Parameters
    ----------
    granularity : {'line', 'word', 'char'}, default 'line'
        Tokenization level of the top-level comparison
    delimiters : str, default "\\n\\r"
        Characters ending a unit at line granularity
    nested : bool, default True
        Whether unpaired units next to paired ones are diffed at a finer
        granularity to detect edits
    max_nesting_depth : int, default 2
        Maximum number of finer levels below the top-level comparison
    placeholder : str, default " "
        Character substituted for content missing from one side in the
        reconstructed old/new views
    preserve_line_breaks : bool, default True
        Keep CR/LF characters in placeholders so the views stay line-aligned

    """

    granularity: Granularity = field(
        default=DEFAULT_GRANULARITY,
        metadata={"help": "Top-level tokenization: line, word or char", "choices": ["line", "word", "char"]},
    )
    delimiters: str = field(
        default=DEFAULT_LINE_DELIMITERS,
        metadata={"help": "Characters that end a unit at line granularity"},
    )
    nested: bool = field(
        default=DEFAULT_NESTED,
        metadata={"help": "Detect edits inside units by diffing them at a finer granularity"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum number of nested diff levels", "type": int},
    )
    placeholder: str = field(
        default=DEFAULT_PLACEHOLDER,
        metadata={"help": "Character used for content missing from one side of the text views"},
    )
    preserve_line_breaks: bool = field(
        default=DEFAULT_PRESERVE_LINE_BREAKS,
        metadata={"help": "Keep line breaks inside placeholders"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value has the wrong type or is outside its valid range.

        """
        for name in ("granularity", "delimiters", "placeholder"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value).__name__}")
        for name in ("nested", "preserve_line_breaks"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")
        # bool is an int subclass
        if isinstance(self.max_nesting_depth, bool) or not isinstance(self.max_nesting_depth, int):
            raise ValueError(f"max_nesting_depth must be an integer, got {self.max_nesting_depth!r}")

        if self.granularity not in NEXT_GRANULARITY:
            raise ValueError(f"granularity must be one of {sorted(NEXT_GRANULARITY)}, got {self.granularity!r}")
        if not self.delimiters:
            raise ValueError("delimiters must not be empty")
        if self.max_nesting_depth < 0:
            raise ValueError(f"max_nesting_depth must be non-negative, got {self.max_nesting_depth}")
        if len(self.placeholder) != 1:
            raise ValueError(f"placeholder must be a single character, got {self.placeholder!r}")

    @classmethod
    def field_names(cls) -> list[str]:
        """Names of all configurable fields."""
        return [f.name for f in fields(cls)]
