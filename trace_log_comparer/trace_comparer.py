import logging
from typing import BinaryIO

from trace_log_comparer.chardiff import DiffSection, diff_line_pairs
from trace_log_comparer.line_accessor import LineAccessor, LineWindow
from trace_log_comparer.line_indexer import DEFAULT_EXTRA_LINES, LENGTH_SUMMARIES, LineIndex, LineIndexer
from trace_log_comparer.navigator import DiffNavigator


logger = logging.getLogger(__name__)


class TraceComparer:
    """
    Positional comparison of two trace/log files.

    Ties the pieces together:
    1.  `index()` scans both files once, recording line offsets and the first
        divergence (cached, the files are only scanned once per instance).
    2.  `window()` / `diff_window()` load a handful of lines around a line
        index through the recorded offsets and diff them character by
        character.
    3.  `next_diff()` / `prev_diff()` move an absolute (line, char) cursor to
        the neighbouring change inside the window centred on that cursor.

    Nothing but the requested window is ever held in memory.
    """

    def __init__(
        self,
        file1: str | BinaryIO,
        file2: str | BinaryIO,
        extra_lines: int = DEFAULT_EXTRA_LINES,
        encoding: str = 'utf-8',
    ) -> None:
        self.accessor = LineAccessor(file1, file2, encoding=encoding)
        self.indexer = LineIndexer(self.accessor, extra_lines=extra_lines)
        self._line_index: LineIndex | None = None

    def __enter__(self) -> "TraceComparer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.accessor.close()

    def index(self) -> LineIndex:
        if self._line_index is None:
            self._line_index = self.indexer.run()
            logger.info(self.summary())
        return self._line_index

    @property
    def first_diff(self):
        return self.index().first_diff

    def summary(self) -> str:
        """One-line description of which file is longer."""
        return LENGTH_SUMMARIES[self.index().length_comparison]

    def window(self, center_line: int, line_count: int) -> LineWindow:
        self.index()
        return self.accessor.get_window(center_line, line_count)

    def diff_window(self, center_line: int, line_count: int) -> tuple[LineWindow, list[list[DiffSection]]]:
        window = self.window(center_line, line_count)
        return window, diff_line_pairs(window.lines1, window.lines2)

    def next_diff(self, cursor: tuple[int, int], line_count: int) -> tuple[int, int] | None:
        """Position of the next change after `cursor`, or None."""
        line, char_offset = cursor
        window, table = self.diff_window(line, line_count)
        found = DiffNavigator(table).find_next_diff(line - window.first_line, char_offset)
        if found is None:
            return None
        return found[0] + window.first_line, found[1]

    def prev_diff(self, cursor: tuple[int, int], line_count: int) -> tuple[int, int] | None:
        """Position of the previous change before `cursor`, or None."""
        line, char_offset = cursor
        window, table = self.diff_window(line, line_count)
        found = DiffNavigator(table).find_prev_diff(line - window.first_line, char_offset)
        if found is None:
            return None
        return found[0] + window.first_line, found[1]
