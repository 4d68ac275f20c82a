import io

import pytest

from trace_log_comparer.line_accessor import LineAccessor
from trace_log_comparer.line_indexer import (
    EQUAL,
    FILE1_LONGER,
    FILE2_LONGER,
    LENGTH_SUMMARIES,
    DiffPosition,
    LineIndexer,
    first_mismatch,
)


def index_bytes(data1: bytes, data2: bytes, **kwargs):
    accessor = LineAccessor(io.BytesIO(data1), io.BytesIO(data2))
    return LineIndexer(accessor, **kwargs).run()

# --- first_mismatch ---

def test_first_mismatch():
    assert first_mismatch("hello", "helXo") == 3
    assert first_mismatch("abc", "abcdef") == 3
    assert first_mismatch("abcdef", "abc") == 3
    assert first_mismatch("", "x") == 0
    assert first_mismatch(b"ab\n", b"aX\n") == 1

# --- LineIndexer ---

def test_identical_files():
    data = b"one\ntwo\nthree\n"
    result = index_bytes(data, data)

    assert result.first_diff is None
    assert result.file1_offsets == [0, 4, 8]
    assert result.file2_offsets == [0, 4, 8]
    assert result.length_comparison == EQUAL

def test_single_changed_line():
    result = index_bytes(b"a\nb\nc\n", b"a\nx\nc\n")

    assert result.first_diff == DiffPosition(line_index=1, char_offset=0, file1_offset=2, file2_offset=2)
    assert result.length_comparison == EQUAL

def test_diff_line_and_column():
    # Line 2, column 3 (1-based) differs.
    result = index_bytes(b"hello\nworld\nend\n", b"hello\nwoXld\nend\n")

    assert result.first_diff.line_index == 1
    assert result.first_diff.char_offset == 2

def test_only_first_divergence_is_recorded():
    result = index_bytes(b"a\nb\nc\n", b"a\nB\nC\n")
    assert result.first_diff.line_index == 1

def test_prefix_truncated_mid_line():
    result = index_bytes(b"one\ntw", b"one\ntwo\nthree\n")

    assert result.first_diff == DiffPosition(1, 2, 4, 4)
    assert result.file1_offsets == [0, 4]
    assert result.file2_offsets == [0, 4, 8]
    assert result.length_comparison == FILE2_LONGER

def test_missing_final_newline():
    result = index_bytes(b"a\nb", b"a\nb\n")

    assert result.first_diff == DiffPosition(1, 1, 2, 2)
    assert result.length_comparison == EQUAL

def test_second_file_longer():
    result = index_bytes(b"a\nb\nc\n", b"a\nb\nc\nd\ne\n")

    assert len(result.file1_offsets) == 3
    assert len(result.file2_offsets) == 5
    assert result.first_diff == DiffPosition(3, 0, 6, 6)
    assert result.length_comparison == FILE2_LONGER
    assert LENGTH_SUMMARIES[result.length_comparison] == "File 2 is longer"

def test_first_file_longer():
    result = index_bytes(b"a\nb\nc\nd\n", b"a\nb\n")

    assert result.file1_offsets == [0, 2, 4, 6]
    assert result.file2_offsets == [0, 2]
    assert result.length_comparison == FILE1_LONGER

def test_extra_lines_budget_limits_trailing_lines():
    data2 = b"".join(f"line {i}\n".encode() for i in range(10))
    result = index_bytes(b"line 0\n", data2, extra_lines=2)

    assert result.file1_offsets == [0]
    assert len(result.file2_offsets) == 3
    assert result.length_comparison == FILE2_LONGER

def test_zero_budget_stops_at_shorter_file():
    result = index_bytes(b"a\nb\n", b"a\n", extra_lines=0)

    assert result.file1_offsets == [0]
    assert result.file2_offsets == [0]
    # The loop stops before the unmatched line is compared.
    assert result.first_diff is None
    assert result.length_comparison == FILE1_LONGER

def test_empty_files():
    result = index_bytes(b"", b"")

    assert result.file1_offsets == []
    assert result.file2_offsets == []
    assert result.first_diff is None
    assert result.length_comparison == EQUAL

def test_multibyte_column():
    result = index_bytes("café au lait\n".encode(), "cafè au lait\n".encode())
    assert result.first_diff.char_offset == 3

def test_invalid_utf8_does_not_stop_indexing():
    result = index_bytes(b"a\xff\nok\n", b"a\xfe\nok\n")

    assert result.first_diff == DiffPosition(0, 1, 0, 0)
    assert result.file1_offsets == [0, 3]

def test_offsets_are_loaded_into_accessor():
    accessor = LineAccessor(io.BytesIO(b"a\nbb\n"), io.BytesIO(b"a\n"))
    LineIndexer(accessor).run()

    assert accessor.offsets(1) == [0, 2]
    assert accessor.offsets(2) == [0]

def test_indexing_rewinds_streams():
    stream1 = io.BytesIO(b"a\nb\n")
    stream2 = io.BytesIO(b"a\nb\n")
    stream1.read()
    accessor = LineAccessor(stream1, stream2)

    result = LineIndexer(accessor).run()
    assert result.file1_offsets == [0, 2]

def test_negative_budget_is_rejected():
    accessor = LineAccessor(io.BytesIO(b""), io.BytesIO(b""))
    with pytest.raises(ValueError):
        LineIndexer(accessor, extra_lines=-1)
