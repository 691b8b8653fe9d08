#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for segdiff.

This module centralizes the hardcoded values used across the diff pipeline
so tokenizer policies, matching thresholds and output defaults can be found
in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Tokenization - Delimiters and character classes
3. Matching - Similarity policy and recursion limits
4. Output - Placeholder and rendering defaults
5. Configuration - Config file discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Granularity = Literal["line", "word", "char"]
OutputFormat = Literal["terminal", "html", "json", "side-by-side"]
ColorMode = Literal["auto", "always", "never"]

# Finer granularity used for the inner diff of a unit at each level
NEXT_GRANULARITY: dict[str, str | None] = {
    "line": "word",
    "word": "char",
    "char": None,
}

# =============================================================================
# Tokenization
# =============================================================================

DEFAULT_LINE_DELIMITERS = "\n\r"

# Characters that form their own single-character unit in category splits
WHITESPACE_CHARS = frozenset(" \t\r\n")

# =============================================================================
# Matching
# =============================================================================

UNMATCHED = -1

DEFAULT_SIMILARITY_THRESHOLD = 0.5

# line -> word -> char
DEFAULT_MAX_NESTING_DEPTH = 2

DEFAULT_GRANULARITY: Granularity = "line"

DEFAULT_NESTED = True

# =============================================================================
# Output
# =============================================================================

DEFAULT_PLACEHOLDER = " "

DEFAULT_PRESERVE_LINE_BREAKS = True

LINE_BREAK_CHARS = frozenset("\r\n")

DEFAULT_JSON_INDENT = 2

DEFAULT_HTML_TAB_WIDTH = 4

# =============================================================================
# Configuration
# =============================================================================

CONFIG_FILENAMES = [".segdiff.toml", ".segdiff.yaml", ".segdiff.yml", ".segdiff.json"]

PYPROJECT_SECTION = "segdiff"
