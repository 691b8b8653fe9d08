#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/segdiff/renderers/json.py
"""JSON diff renderer for structured output."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Union

from segdiff.chunks import Segment
from segdiff.constants import DEFAULT_JSON_INDENT
from segdiff.exceptions import OutputWriteError
from segdiff.text_diff import DiffResult


class JsonDiffRenderer:
    """Render diff segments as machine-readable JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)
    include_regions : bool, default = True
        If True, include the offset-based region list

    Examples
    --------
    Render a comparison as JSON:
        >>> from segdiff import compare_texts
        >>> from segdiff.renderers import JsonDiffRenderer
        >>> payload = JsonDiffRenderer().render(compare_texts("a\\n", "b\\n"))

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = DEFAULT_JSON_INDENT,
        include_regions: bool = True,
    ):
        """Initialize the JSON diff renderer."""
        self.pretty_print = pretty_print
        self.indent = indent
        self.include_regions = include_regions

    def render(self, diff: Union[DiffResult, Iterable[Segment]]) -> str:
        """Render a diff to a JSON string.

        Parameters
        ----------
        diff : DiffResult or iterable of Segment
            Diff result or its segments

        Returns
        -------
        str
            JSON-formatted diff output

        """
        if not isinstance(diff, DiffResult):
            diff = DiffResult(list(diff))

        data: Dict[str, Any] = diff.to_dict()
        if not self.include_regions:
            del data["regions"]

        if self.pretty_print:
            return json.dumps(data, indent=self.indent, ensure_ascii=False)
        return json.dumps(data, ensure_ascii=False)


def render_to_file(diff: DiffResult | Iterable[Segment], output_path: str, **kwargs: Any) -> None:
    """Render a diff to a JSON file.

    Parameters
    ----------
    diff : DiffResult or iterable of Segment
        Diff payload to serialise
    output_path : str
        Destination path for the generated JSON file.
    **kwargs
        Additional keyword arguments forwarded to :class:`JsonDiffRenderer`.

    Raises
    ------
    OutputWriteError
        If the file cannot be written

    """
    renderer = JsonDiffRenderer(**kwargs)
    json_output = renderer.render(diff)

    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(json_output)
    except OSError as e:
        raise OutputWriteError(output_path, original_error=e) from e
