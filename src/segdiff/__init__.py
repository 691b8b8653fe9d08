#  Copyright (c) 2025 Tom Villani, Ph.D.
"""segdiff - structured text comparison with move and edit detection.

segdiff classifies every portion of two versions of a text as unchanged,
added, removed or moved. Lines that were rewritten rather than replaced are
diffed again word by word (and words character by character), so small
edits show up inside the line instead of as a removed line followed by an
added one.

Pipeline
--------
1. Tokenize both texts into chunks (lines by default)
2. Pair chunks with unique content, then extend pairs to their neighbours
3. Diff unpaired neighbours of pairs at a finer granularity and pair them
   when enough of their content is identical
4. Walk both sequences and emit coalesced change segments

Examples
--------
Compare two strings:

    >>> from segdiff import compare_texts
    >>> result = compare_texts("a\\nb\\nc\\n", "a\\nx\\nc\\n")
    >>> [(s.type.value, s.content) for s in result]
    [('unchanged', 'a\\n'), ('removed', 'b\\n'), ('added', 'x\\n'), ('unchanged', 'c\\n')]

Aligned views for side-by-side display:

    >>> result.old_text
    'a\\nb\\n \\nc\\n'

"""

from segdiff.chunks import Chunk, Region, Segment, SegmentType
from segdiff.exceptions import SegDiffError
from segdiff.options import DiffOptions
from segdiff.text_diff import DiffResult, compare_files, compare_texts

__version__ = "0.1.0"

__all__ = [
    "Chunk",
    "DiffOptions",
    "DiffResult",
    "Region",
    "SegDiffError",
    "Segment",
    "SegmentType",
    "compare_files",
    "compare_texts",
    "__version__",
]
