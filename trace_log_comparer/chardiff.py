from collections import namedtuple
from collections.abc import Iterable, Iterator
from itertools import zip_longest


SAME = 'same'
ADDED = 'added'
REMOVED = 'removed'
MODIFIED = 'modified'

CHANGE_KINDS = (ADDED, REMOVED, MODIFIED)


class DiffSection(namedtuple('DiffSection', 'kind left right')):
    """
    A run of one classification between two line strings.

    Both sides are always stored as owned strings:
        same      left == right
        added     left == ''            (text present only in file 2)
        removed   right == ''           (text present only in file 1)
        modified  left != right, both non-empty
    """

    __slots__ = ()

    @classmethod
    def same(cls, text: str) -> "DiffSection":
        return cls(SAME, text, text)

    @classmethod
    def added(cls, text: str) -> "DiffSection":
        return cls(ADDED, '', text)

    @classmethod
    def removed(cls, text: str) -> "DiffSection":
        return cls(REMOVED, text, '')

    @classmethod
    def modified(cls, left: str, right: str) -> "DiffSection":
        return cls(MODIFIED, left, right)

    @property
    def width(self) -> int:
        """Number of character columns the section covers."""
        return max(len(self.left), len(self.right))

    @property
    def is_change(self) -> bool:
        return self.kind != SAME

    def truncate(self, count: int) -> "DiffSection":
        """Drops the first `count` characters from both sides."""
        return DiffSection(self.kind, self.left[count:], self.right[count:])


def merge_step(
    pending: DiffSection | None,
    section: DiffSection,
) -> tuple[DiffSection, DiffSection | None]:
    """
    One step of the section merge fold.

    Returns (new_pending, completed). When `section` has the same kind as
    `pending` both sides are concatenated and nothing is completed; otherwise
    `pending` is completed and `section` becomes the new pending one.
    """
    if pending is None:
        return section, None

    if pending.kind == section.kind:
        merged = DiffSection(pending.kind, pending.left + section.left, pending.right + section.right)
        return merged, None

    return section, pending


def merge_sections(sections: Iterable[DiffSection]) -> list[DiffSection]:
    """Collapses neighbouring sections of the same kind."""
    merged = []
    pending = None
    for section in sections:
        pending, completed = merge_step(pending, section)
        if completed is not None:
            merged.append(completed)

    if pending is not None:
        merged.append(pending)
    return merged


def _classify(line1: str, line2: str) -> Iterator[DiffSection]:
    # Positional zipper: no alignment, an inserted char shifts every later pair.
    for char1, char2 in zip_longest(line1, line2):
        if char2 is None:
            yield DiffSection.removed(char1)
        elif char1 is None:
            yield DiffSection.added(char2)
        elif char1 == char2:
            yield DiffSection.same(char1)
        else:
            yield DiffSection.modified(char1, char2)


def diff_lines(line1: str, line2: str) -> list[DiffSection]:
    """
    Positional character diff of two lines.

    >>> diff_lines("b\\n", "x\\n")
    [DiffSection(kind='modified', left='b', right='x'), DiffSection(kind='same', left='\\n', right='\\n')]
    """
    return merge_sections(_classify(line1, line2))


def diff_line_pairs(lines1: list[str], lines2: list[str]) -> list[list[DiffSection]]:
    """
    Pairs two line sequences by position and diffs every pair.

    A line present on one side only becomes a single removed/added section
    covering the whole line.
    """
    table = []
    for line1, line2 in zip_longest(lines1, lines2):
        if line2 is None:
            table.append([DiffSection.removed(line1)])
        elif line1 is None:
            table.append([DiffSection.added(line2)])
        else:
            table.append(diff_lines(line1, line2))
    return table


def left_text(sections: Iterable[DiffSection]) -> str:
    return ''.join(section.left for section in sections)


def right_text(sections: Iterable[DiffSection]) -> str:
    return ''.join(section.right for section in sections)


def inline_text(sections: Iterable[DiffSection]) -> str:
    """
    Plain-text rendering of a line diff in wdiff style.

    Removed text is wrapped in [-...-] and added text in {+...+}; a modified
    run shows both. Line terminators are dropped.
    """
    parts = []
    for section in sections:
        left = section.left.rstrip('\r\n')
        right = section.right.rstrip('\r\n')
        if section.kind == SAME:
            parts.append(left)
            continue
        if left:
            parts.append(f"[-{left}-]")
        if right:
            parts.append(f"{{+{right}+}}")
    return ''.join(parts)


def slice_sections(sections: Iterable[DiffSection], offset: int) -> list[DiffSection]:
    """
    Returns the sections visible from character column `offset` onwards.

    Sections lying entirely before the offset are dropped and the first
    partially visible one is truncated on both sides.
    """
    if offset < 0:
        raise ValueError(f"Horizontal offset must be non-negative, got {offset}")

    visible = []
    remaining = offset
    for section in sections:
        if remaining == 0:
            visible.append(section)
        elif remaining < section.width:
            visible.append(section.truncate(remaining))
            remaining = 0
        else:
            remaining -= section.width
    return visible
