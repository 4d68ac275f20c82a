import logging
from collections import namedtuple
from typing import BinaryIO


logger = logging.getLogger(__name__)

FILE1 = 1
FILE2 = 2

LineWindow = namedtuple('LineWindow', 'first_line lines1 lines2')


class LineReadError(OSError):
    """A line could not be read back from a previously recorded offset."""


class LineAccessor:
    """
    Random access to single lines of two files through recorded byte offsets.

    Each input can be a path (opened in binary mode and owned by the accessor)
    or an already open, seekable binary stream (borrowed, never closed here).
    Lines are only decoded when they are materialized, so indexing can run over
    files of any size without holding their content.
    """

    def __init__(
        self,
        file1: str | BinaryIO,
        file2: str | BinaryIO,
        encoding: str = 'utf-8',
    ) -> None:
        self.encoding = encoding
        self._streams: dict[int, BinaryIO] = {}
        self._owned: list[BinaryIO] = []
        self._offsets: dict[int, list[int]] = {FILE1: [], FILE2: []}

        try:
            self._streams[FILE1] = self._open(file1)
            self._streams[FILE2] = self._open(file2)
        except BaseException:
            self.close()
            raise

    def _open(self, source: str | BinaryIO) -> BinaryIO:
        if isinstance(source, str):
            stream = open(source, 'rb')
            self._owned.append(stream)
            return stream
        if hasattr(source, 'readline') and hasattr(source, 'seek'):
            return source
        raise ValueError("Invalid input type. Expected file path or seekable binary stream.")

    def __enter__(self) -> "LineAccessor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Closes the streams this accessor opened itself."""
        while self._owned:
            stream = self._owned.pop()
            if not stream.closed:
                stream.close()

    def stream(self, file_selector: int) -> BinaryIO:
        self._check_selector(file_selector)
        return self._streams[file_selector]

    def offsets(self, file_selector: int) -> list[int]:
        self._check_selector(file_selector)
        return self._offsets[file_selector]

    def load_offsets(self, offsets1: list[int], offsets2: list[int]) -> None:
        """Installs the line offset indices produced by a LineIndexer."""
        self._offsets = {FILE1: list(offsets1), FILE2: list(offsets2)}

    @staticmethod
    def _check_selector(file_selector: int) -> None:
        if file_selector not in (FILE1, FILE2):
            raise ValueError(f"Unknown file selector {file_selector!r}, expected FILE1 or FILE2")

    def read_line_at(self, file_selector: int, byte_offset: int) -> str:
        """
        Reads the line starting at `byte_offset`, terminator included.

        Offsets are expected to come from the indexer, so any failure here
        means the file changed underneath us and is raised as LineReadError.
        """
        stream = self.stream(file_selector)
        try:
            stream.seek(byte_offset)
            raw = stream.readline()
        except OSError as e:
            raise LineReadError(f"Could not read file {file_selector} at offset {byte_offset}: {e}") from e

        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise LineReadError(
                f"Line at offset {byte_offset} of file {file_selector} is not valid {self.encoding}") from e

    def get_window(self, center_line_index: int, desired_line_count: int) -> LineWindow:
        """
        Loads up to `desired_line_count` lines of each file around a line.

        Each file contributes only the lines it has, so near either end the
        two sequences can be shorter than requested and of different lengths.
        """
        if desired_line_count < 0:
            raise ValueError(f"Line count must be non-negative, got {desired_line_count}")

        bottom = max(0, center_line_index - desired_line_count // 2)
        top = bottom + desired_line_count

        lines1 = []
        lines2 = []
        for i in range(bottom, top):
            if i < len(self._offsets[FILE1]):
                lines1.append(self.read_line_at(FILE1, self._offsets[FILE1][i]))
            if i < len(self._offsets[FILE2]):
                lines2.append(self.read_line_at(FILE2, self._offsets[FILE2][i]))

        logger.debug(f"Loaded window [{bottom}, {top}): {len(lines1)} / {len(lines2)} lines")
        return LineWindow(bottom, lines1, lines2)
