"""
Side-by-side terminal viewer.

A thin Textual front end over TraceComparer: every redraw asks the comparer
for the window around the cursor line and renders its diff table, so only
`window_height` lines per file are ever read from disk.

Keys:
    up/down      move the cursor line
    left/right   scroll horizontally (held keys speed up after a few repeats)
    n/p          jump to the next/previous change
    escape/q     quit
"""

import logging
import time
from collections.abc import Iterable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Static

from trace_log_comparer.chardiff import ADDED, MODIFIED, REMOVED, SAME, DiffSection, slice_sections
from trace_log_comparer.line_accessor import FILE1, FILE2
from trace_log_comparer.trace_comparer import TraceComparer


logger = logging.getLogger(__name__)

DEFAULT_WINDOW_HEIGHT = 20
OFFSCREEN_PLACEHOLDER = "<=="
HIGHLIGHT_SYMBOL = ">> "
SCROLL_MARGIN = 10

SIDE_STYLES = {
    SAME: "",
    ADDED: "on green",
    REMOVED: "on red",
    MODIFIED: "bold",
}
HIGHLIGHT_STYLE = "bold on bright_green"


class KeyRepeat:
    """
    Tracks how often the same key arrives back to back.

    After `threshold` quick repeats of one key the step grows from 1 to
    `fast_step`. A different key or a pause longer than `gap` seconds resets it.
    """

    def __init__(self, threshold: int = 5, gap: float = 0.1, fast_step: int = 5) -> None:
        self.threshold = threshold
        self.gap = gap
        self.fast_step = fast_step
        self._last_key = None
        self._last_time = 0.0
        self._count = 0

    def step(self, key: str, now: float | None = None) -> int:
        if now is None:
            now = time.monotonic()

        repeat = False
        if key == self._last_key and now - self._last_time <= self.gap:
            if self._count < self.threshold:
                self._count += 1
            else:
                repeat = True
        else:
            self._count = 0

        self._last_key = key
        self._last_time = now
        return self.fast_step if repeat else 1


def longest_line_length(lines1: Iterable[str], lines2: Iterable[str]) -> int:
    return max((len(line) for line in (*lines1, *lines2)), default=0)


def scroll_right(offset: int, step: int, longest_length: int) -> int:
    """Moves right unless that would leave less than SCROLL_MARGIN columns of the longest line."""
    limit = longest_length - SCROLL_MARGIN if longest_length > SCROLL_MARGIN else 0
    if offset + step < limit:
        return offset + step
    return offset


def scroll_left(offset: int, step: int) -> int:
    return max(0, offset - step)


def render_side(sections: Iterable[DiffSection], side: int) -> Text:
    """
    Styled text of one side of a (possibly scrolled) line.

    An empty result means the line is scrolled off to the left or absent on
    this side, and is shown as a dimmed placeholder.
    """
    text = Text()
    for section in sections:
        fragment = section.left if side == FILE1 else section.right
        fragment = fragment.rstrip("\r\n")
        if fragment:
            text.append(fragment, style=SIDE_STYLES[section.kind])

    if not text.plain:
        return Text(OFFSCREEN_PLACEHOLDER, style="dim")
    return text


class TraceViewerApp(App):
    """Two panels, file 1 on the left and file 2 on the right."""

    CSS = """
    #panels {
        height: 100%;
    }
    .file-panel {
        width: 1fr;
        height: 100%;
        border: solid $accent;
        overflow: hidden;
    }
    """

    BINDINGS = [
        Binding("escape", "quit", "Quit"),
        Binding("q", "quit", "Quit", show=False),
        Binding("up", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("left", "scroll_left", "Left", show=False),
        Binding("right", "scroll_right", "Right", show=False),
        Binding("n", "next_diff", "Next change"),
        Binding("p", "prev_diff", "Previous change"),
    ]

    def __init__(self, comparer: TraceComparer, window_height: int = DEFAULT_WINDOW_HEIGHT) -> None:
        super().__init__()
        self.comparer = comparer
        self.window_height = window_height
        self.horizontal_offset = 0
        self.key_repeat = KeyRepeat()
        self._longest_length = 0

        line_index = comparer.index()
        self.line_count = max(len(line_index.file1_offsets), len(line_index.file2_offsets))
        first_diff = line_index.first_diff
        if first_diff is not None:
            self.diff_cursor = (first_diff.line_index, first_diff.char_offset)
        else:
            self.diff_cursor = (0, 0)

    def compose(self) -> ComposeResult:
        with Horizontal(id="panels"):
            yield Static(id="file1", classes="file-panel")
            yield Static(id="file2", classes="file-panel")

    def on_mount(self) -> None:
        self.query_one("#file1", Static).border_title = "File 1"
        self.query_one("#file2", Static).border_title = "File 2"
        self.refresh_panels()

    def refresh_panels(self) -> None:
        window, table = self.comparer.diff_window(self.diff_cursor[0], self.window_height)
        logger.debug(f"Cursor at {self.diff_cursor}, horizontal offset {self.horizontal_offset}")
        self._longest_length = longest_line_length(window.lines1, window.lines2)

        left = Text()
        right = Text()
        for row, sections in enumerate(table):
            visible = slice_sections(sections, self.horizontal_offset)
            selected = window.first_line + row == self.diff_cursor[0]
            for panel, side in ((left, FILE1), (right, FILE2)):
                if row:
                    panel.append("\n")
                if selected:
                    line = Text(HIGHLIGHT_SYMBOL)
                    line.append_text(render_side(visible, side))
                    line.stylize(HIGHLIGHT_STYLE)
                else:
                    line = Text(" " * len(HIGHLIGHT_SYMBOL))
                    line.append_text(render_side(visible, side))
                panel.append_text(line)

        self.query_one("#file1", Static).update(left)
        self.query_one("#file2", Static).update(right)

    def _move_cursor(self, position: tuple[int, int] | None) -> None:
        if position is None:
            self.bell()
            return
        self.diff_cursor = position

        # Keep the change in view when it sits outside the visible columns.
        visible_columns = max(self.size.width // 2 - len(HIGHLIGHT_SYMBOL) - 2, 1)
        char_offset = position[1]
        if not self.horizontal_offset <= char_offset < self.horizontal_offset + visible_columns:
            self.horizontal_offset = max(0, char_offset - SCROLL_MARGIN)
        self.refresh_panels()

    def action_cursor_up(self) -> None:
        if self.diff_cursor[0] > 0:
            self.diff_cursor = (self.diff_cursor[0] - 1, 0)
            self.refresh_panels()

    def action_cursor_down(self) -> None:
        if self.diff_cursor[0] + 1 < self.line_count:
            self.diff_cursor = (self.diff_cursor[0] + 1, 0)
            self.refresh_panels()

    def action_scroll_right(self) -> None:
        step = self.key_repeat.step("right")
        self.horizontal_offset = scroll_right(self.horizontal_offset, step, self._longest_length)
        self.refresh_panels()

    def action_scroll_left(self) -> None:
        step = self.key_repeat.step("left")
        self.horizontal_offset = scroll_left(self.horizontal_offset, step)
        self.refresh_panels()

    def action_next_diff(self) -> None:
        self._move_cursor(self.comparer.next_diff(self.diff_cursor, self.window_height))

    def action_prev_diff(self) -> None:
        self._move_cursor(self.comparer.prev_diff(self.diff_cursor, self.window_height))
