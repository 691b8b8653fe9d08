"""Unit tests for text comparison entry points and DiffResult."""

import pytest

from segdiff.chunks import Region, Segment, SegmentType
from segdiff.exceptions import FileAccessError, FileNotFoundError, ValidationError
from segdiff.options import DiffOptions
from segdiff.text_diff import DiffResult, compare_files, compare_texts, compute_segments, whitespace_equivalent

U = SegmentType.UNCHANGED
A = SegmentType.ADDED
R = SegmentType.REMOVED
MF = SegmentType.MOVED_FROM
MT = SegmentType.MOVED_TO


def _pairs(result):
    return [(segment.type, segment.content) for segment in result]


@pytest.mark.unit
class TestCompareTexts:
    """Tests for compare_texts."""

    def test_identical_input(self):
        """Test that identical text is one unchanged segment."""
        result = compare_texts("a\nb\n", "a\nb\n")

        assert _pairs(result) == [(U, "a\nb\n")]
        assert not result.has_changes

    def test_single_line_replaced(self):
        """Test a replaced middle line."""
        result = compare_texts("a\nb\nc\n", "a\nx\nc\n")

        assert _pairs(result) == [(U, "a\n"), (R, "b\n"), (A, "x\n"), (U, "c\n")]
        assert result.has_changes

    def test_line_moved(self):
        """Test a line moved from the top to the bottom."""
        result = compare_texts("a\nb\nc\n", "b\nc\na\n")

        assert _pairs(result) == [(MF, "a\n"), (U, "b\nc\n"), (MT, "a\n")]

    def test_both_empty(self):
        """Test comparing two empty strings."""
        result = compare_texts("", "")

        assert len(result) == 0
        assert result.merged_text == ""
        assert result.regions == []

    def test_old_empty(self):
        """Test that everything is added when the old text is empty."""
        assert _pairs(compare_texts("", "x\ny\n")) == [(A, "x\ny\n")]

    def test_new_empty(self):
        """Test that everything is removed when the new text is empty."""
        assert _pairs(compare_texts("x\ny\n", "")) == [(R, "x\ny\n")]

    def test_missing_trailing_newline(self):
        """Test a final line gaining a newline."""
        result = compare_texts("a\nb", "a\nb\n")

        assert _pairs(result) == [(U, "a\nb"), (A, "\n")]

    def test_char_granularity(self):
        """Test comparing at character level from the top."""
        result = compare_texts("cat", "cut", DiffOptions(granularity="char"))

        assert _pairs(result) == [(U, "c"), (R, "a"), (A, "u"), (U, "t")]

    def test_labels(self):
        """Test that labels are carried on the result."""
        result = compare_texts("a", "b", old_label="v1.txt", new_label="v2.txt")

        assert result.old_label == "v1.txt"
        assert result.new_label == "v2.txt"
        assert "v1.txt" in repr(result)

    @pytest.mark.parametrize("old,new", [(None, "a"), ("a", b"a"), (1, 2)])
    def test_non_string_input(self, old, new):
        """Test that non-string input is rejected."""
        with pytest.raises(ValidationError):
            compare_texts(old, new)

    def test_compute_segments_matches_compare_texts(self):
        """Test the lower level segment entry point."""
        options = DiffOptions()
        assert compute_segments("a\nb\n", "b\n", options) == compare_texts("a\nb\n", "b\n", options).segments

    def test_reconstructs_inputs(self, edited_document):
        """Test that both inputs can be rebuilt from the segments."""
        old, new = edited_document
        result = compare_texts(old, new)

        assert result.original_old() == old
        assert result.original_new() == new

    def test_edited_document_segments(self, edited_document):
        """Test the classification of a realistic edit."""
        old, new = edited_document
        result = compare_texts(old, new)

        assert _pairs(result) == [
            (U, "# Release notes\n"),
            (R, "The parser now handles nested lists.\n"),
            (U, "Fixed a crash when reading empty files.\n"),
            (A, "The parser now handles deeply nested lists.\nAdded a --quiet flag.\n"),
            (U, "Thanks to all contributors.\n"),
        ]


@pytest.mark.unit
class TestWhitespaceEquivalent:
    """Tests for placeholder generation."""

    def test_keeps_line_breaks(self):
        """Test that CR and LF survive by default."""
        assert whitespace_equivalent("ab\r\ncd\n") == "  \r\n  \n"

    def test_replaces_everything(self):
        """Test replacing line breaks as well."""
        assert whitespace_equivalent("ab\n", ".", preserve_line_breaks=False) == "..."

    def test_preserves_length(self):
        """Test that the placeholder has the length of the input."""
        text = "tab\there\n"
        assert len(whitespace_equivalent(text, "_")) == len(text)


@pytest.mark.unit
class TestDiffResultViews:
    """Tests for derived views on DiffResult."""

    @pytest.fixture
    def replaced(self):
        """Provide a diff with a replaced middle line."""
        return compare_texts("a\nb\nc\n", "a\nx\nc\n")

    def test_regions(self, replaced):
        """Test region offsets within the merged text."""
        assert replaced.regions == [
            Region(U, 0, 2),
            Region(R, 2, 2),
            Region(A, 4, 2),
            Region(U, 6, 2),
        ]

    def test_regions_tile_merged_text(self, replaced):
        """Test that regions index the merged text exactly."""
        merged = replaced.merged_text
        for region, segment in zip(replaced.regions, replaced.segments):
            assert merged[region.offset : region.end] == segment.content
        assert replaced.regions[-1].end == len(merged)

    def test_old_and_new_views(self, replaced):
        """Test placeholder substitution in the aligned views."""
        assert replaced.old_text == "a\nb\n \nc\n"
        assert replaced.new_text == "a\n \nx\nc\n"
        assert len(replaced.old_text) == len(replaced.new_text) == len(replaced.merged_text)

    def test_views_use_options(self):
        """Test a custom placeholder without preserved line breaks."""
        options = DiffOptions(placeholder=".", preserve_line_breaks=False)
        result = compare_texts("a\nb\nc\n", "a\nx\nc\n", options)

        assert result.old_text == "a\nb\n..c\n"
        assert result.new_text == "a\n..x\nc\n"

    def test_views_are_cached(self, replaced):
        """Test that views are computed once."""
        first = replaced.regions
        assert replaced.regions is first
        assert replaced.merged_text is replaced.merged_text

    def test_moved_segments_in_views(self):
        """Test that moved content appears only on its own side."""
        result = compare_texts("a\nb\nc\n", "b\nc\na\n")

        assert result.old_text == "a\nb\nc\n \n"
        assert result.new_text == " \nb\nc\na\n"

    def test_iter_segments_filters(self, replaced):
        """Test filtering segments by type."""
        assert list(replaced.iter_segments(A, R)) == [Segment("b\n", R), Segment("x\n", A)]
        assert len(list(replaced.iter_segments())) == 4

    def test_stats(self, replaced):
        """Test segment statistics."""
        stats = replaced.stats

        assert stats["unchanged_segments"] == 2
        assert stats["unchanged_chars"] == 4
        assert stats["removed_segments"] == 1
        assert stats["added_chars"] == 2
        assert stats["moved_from_segments"] == 0
        assert stats["total_changes"] == 2

    def test_to_dict(self, replaced):
        """Test serialization of a result."""
        data = replaced.to_dict()

        assert data["old_label"] == "old"
        assert data["granularity"] == "line"
        assert data["segments"][1] == {"content": "b\n", "type": "removed"}
        assert data["regions"][2] == {"type": "added", "offset": 4, "length": 2}
        assert data["statistics"]["total_changes"] == 2

    def test_result_from_plain_segments(self):
        """Test building a result around existing segments."""
        result = DiffResult([Segment("x", A)])

        assert result.options == DiffOptions()
        assert result.new_text == "x"
        assert result.old_text == " "


@pytest.mark.unit
class TestCompareFiles:
    """Tests for compare_files."""

    def test_compares_files(self, tmp_path):
        """Test comparing two files on disk."""
        old_file = tmp_path / "old.txt"
        new_file = tmp_path / "new.txt"
        old_file.write_text("a\nb\n", encoding="utf-8")
        new_file.write_text("a\nc\n", encoding="utf-8")

        result = compare_files(old_file, new_file)

        assert _pairs(result) == [(U, "a\n"), (R, "b\n"), (A, "c\n")]
        assert result.old_label == str(old_file)
        assert result.new_label == str(new_file)

    def test_keeps_crlf(self, tmp_path):
        """Test that CR characters are not translated on read."""
        old_file = tmp_path / "old.txt"
        new_file = tmp_path / "new.txt"
        old_file.write_bytes(b"a\r\nb\r\n")
        new_file.write_bytes(b"a\nb\r\n")

        result = compare_files(old_file, new_file)

        assert _pairs(result) == [(U, "a"), (R, "\r\n"), (A, "\n"), (U, "b\r\n")]

    def test_custom_labels(self, tmp_path):
        """Test overriding labels."""
        path = tmp_path / "same.txt"
        path.write_text("x\n", encoding="utf-8")

        result = compare_files(path, path, old_label="before", new_label="after")

        assert (result.old_label, result.new_label) == ("before", "after")
        assert not result.has_changes

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        existing = tmp_path / "exists.txt"
        existing.write_text("x", encoding="utf-8")

        with pytest.raises(FileNotFoundError) as exc_info:
            compare_files(existing, tmp_path / "missing.txt")

        assert exc_info.value.file_path == str(tmp_path / "missing.txt")

    def test_directory_rejected(self, tmp_path):
        """Test that a directory cannot be compared."""
        existing = tmp_path / "exists.txt"
        existing.write_text("x", encoding="utf-8")

        with pytest.raises(FileAccessError):
            compare_files(tmp_path, existing)

    def test_undecodable_file(self, tmp_path):
        """Test that decoding errors raise FileAccessError."""
        bad = tmp_path / "bad.txt"
        bad.write_bytes(b"\xff\xfe\xfa")
        good = tmp_path / "good.txt"
        good.write_text("x", encoding="utf-8")

        with pytest.raises(FileAccessError) as exc_info:
            compare_files(bad, good)

        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)

    def test_encoding(self, tmp_path):
        """Test reading files in another encoding."""
        old_file = tmp_path / "old.txt"
        new_file = tmp_path / "new.txt"
        old_file.write_bytes("caf\xe9\n".encode("latin-1"))
        new_file.write_bytes("caf\xe9\n".encode("latin-1"))

        result = compare_files(old_file, new_file, encoding="latin-1")

        assert _pairs(result) == [(U, "caf\xe9\n")]
