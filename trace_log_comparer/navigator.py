from trace_log_comparer.chardiff import DiffSection


class DiffNavigator:
    """
    Finds changed sections in a diff table relative to a cursor.

    Positions are (line, char_offset) pairs where line indexes the table and
    char_offset is the left-side column at which a section starts. The
    navigator keeps no state between calls; the caller owns the cursor and
    should leave it untouched when a lookup returns None.
    """

    def __init__(self, table: list[list[DiffSection]]) -> None:
        self.table = table

    def find_next_diff(self, from_line: int, from_char_offset: int) -> tuple[int, int] | None:
        """First change after the cursor, scanning forward."""
        for line in range(max(from_line, 0), len(self.table)):
            running_offset = 0
            for section in self.table[line]:
                if section.is_change and (line > from_line or running_offset > from_char_offset):
                    return line, running_offset
                running_offset += len(section.left)
        return None

    def find_prev_diff(self, from_line: int, from_char_offset: int) -> tuple[int, int] | None:
        """Last change before the cursor, scanning backward."""
        start = min(from_line, len(self.table) - 1)
        for line in range(start, -1, -1):
            sections = self.table[line]
            running_offset = sum(len(section.left) for section in sections)
            for section in reversed(sections):
                running_offset -= len(section.left)
                if section.is_change and (line < from_line or running_offset < from_char_offset):
                    return line, running_offset
        return None
