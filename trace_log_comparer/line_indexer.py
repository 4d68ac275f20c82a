import logging
from collections import namedtuple
from itertools import zip_longest

from trace_log_comparer.line_accessor import FILE1, FILE2, LineAccessor


logger = logging.getLogger(__name__)

DEFAULT_EXTRA_LINES = 20

EQUAL = 'equal'
FILE1_LONGER = 'file1_longer'
FILE2_LONGER = 'file2_longer'

LENGTH_SUMMARIES = {
    EQUAL: "Both files are the same length",
    FILE1_LONGER: "File 1 is longer",
    FILE2_LONGER: "File 2 is longer",
}

DiffPosition = namedtuple('DiffPosition', 'line_index char_offset file1_offset file2_offset')

LineIndex = namedtuple('LineIndex', 'file1_offsets file2_offsets first_diff length_comparison')


def first_mismatch(line1: str | bytes, line2: str | bytes) -> int:
    """
    Index of the first differing item (character or byte) of two lines.

    When one line is a strict prefix of the other this is the length of the
    shorter one.
    """
    for offset, (item1, item2) in enumerate(zip_longest(line1, line2)):
        if item1 != item2:
            return offset
    return 0


class LineIndexer:
    """
    Scans both files of a LineAccessor once, in lockstep.

    Every iteration reads one line from each file and records where it
    started, so later lookups can seek straight to any line. The files are
    compared by position only: line N of file 1 is always paired with line N
    of file 2.

    Once the shorter file ends, up to `extra_lines` more iterations are run so
    a viewer can show some context past the end of it.
    """

    def __init__(self, accessor: LineAccessor, extra_lines: int = DEFAULT_EXTRA_LINES) -> None:
        if extra_lines < 0:
            raise ValueError(f"extra_lines must be non-negative, got {extra_lines}")
        self.accessor = accessor
        self.extra_lines = extra_lines

    def run(self) -> LineIndex:  # noqa: C901
        stream1 = self.accessor.stream(FILE1)
        stream2 = self.accessor.stream(FILE2)
        stream1.seek(0)
        stream2.seek(0)

        encoding = self.accessor.encoding

        file1_offsets: list[int] = []
        file2_offsets: list[int] = []
        file1_offset = 0
        file2_offset = 0

        first_diff = None
        extra_lines = self.extra_lines
        budget_exhausted = False
        line_index = 0

        while True:
            line1 = stream1.readline()
            line2 = stream2.readline()

            if not line1 and not line2:
                break

            if not line1 or not line2:
                if extra_lines == 0:
                    budget_exhausted = True
                    break
                extra_lines -= 1

            if first_diff is None and line1 != line2:
                # Only the matching prefix is decoded; bad bytes must not stop the scan.
                byte_offset = first_mismatch(line1, line2)
                char_offset = len(line1[:byte_offset].decode(encoding, errors="ignore"))
                first_diff = DiffPosition(line_index, char_offset, file1_offset, file2_offset)
                logger.debug(f"First difference at line {line_index}, char {char_offset}")

            if line1:
                file1_offsets.append(file1_offset)
            if line2:
                file2_offsets.append(file2_offset)

            file1_offset += len(line1)
            file2_offset += len(line2)
            line_index += 1

        if budget_exhausted:
            # The stop was triggered by the file that still had data.
            length_comparison = FILE1_LONGER if line1 else FILE2_LONGER
        elif len(file1_offsets) > len(file2_offsets):
            length_comparison = FILE1_LONGER
        elif len(file2_offsets) > len(file1_offsets):
            length_comparison = FILE2_LONGER
        else:
            length_comparison = EQUAL

        logger.debug(f"Indexed {len(file1_offsets)} lines of file 1 and {len(file2_offsets)} lines of file 2")

        self.accessor.load_offsets(file1_offsets, file2_offsets)
        return LineIndex(file1_offsets, file2_offsets, first_diff, length_comparison)
