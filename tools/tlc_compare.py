#!/usr/bin/env python3
# ruff: noqa: T201, ANN201
import argparse
import logging
import os
import sys


# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from trace_log_comparer.chardiff import inline_text
from trace_log_comparer.line_accessor import LineReadError
from trace_log_comparer.line_indexer import DEFAULT_EXTRA_LINES
from trace_log_comparer.trace_comparer import TraceComparer
from trace_log_comparer.viewer import DEFAULT_WINDOW_HEIGHT, TraceViewerApp


logger = logging.getLogger("tlc_compare")


def print_first_diff_window(comparer: TraceComparer, window_height: int) -> None:
    """Prints the lines around the first difference, changes marked inline."""
    first_diff = comparer.first_diff
    center = first_diff.line_index if first_diff else 0

    window, table = comparer.diff_window(center, window_height)
    for row, sections in enumerate(table):
        line_number = window.first_line + row + 1
        marker = ">>" if first_diff and line_number == first_diff.line_index + 1 else "  "
        changed = "!" if any(section.is_change for section in sections) else " "
        print(f"{marker}{line_number:>7} {changed} {inline_text(sections)}")


def main():
    parser = argparse.ArgumentParser(
        description="Compare two trace/log files line by line and browse their differences.")
    parser.add_argument("file1", help="First file to compare")
    parser.add_argument("file2", help="Second file to compare")
    parser.add_argument("--extra-lines", type=int, default=DEFAULT_EXTRA_LINES,
                        help=f"Lines to index past the end of the shorter file (default: {DEFAULT_EXTRA_LINES})")
    parser.add_argument("--window", type=int, default=DEFAULT_WINDOW_HEIGHT,
                        help=f"Number of lines loaded around the cursor (default: {DEFAULT_WINDOW_HEIGHT})")
    parser.add_argument("--summary-only", action="store_true",
                        help="Print the summary and the first difference, do not start the viewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s: %(message)s')

    if args.extra_lines < 0 or args.window < 1:
        parser.error("--extra-lines must be >= 0 and --window must be >= 1")

    try:
        comparer = TraceComparer(args.file1, args.file2, extra_lines=args.extra_lines)
    except OSError as e:
        print(f"Error: Could not open input file: {e}", file=sys.stderr)
        sys.exit(1)

    with comparer:
        try:
            print(comparer.summary())

            first_diff = comparer.first_diff
            if first_diff is None:
                print("No differences found")
            else:
                print(f"First difference at line {first_diff.line_index + 1}, column {first_diff.char_offset + 1}")

            if args.summary_only:
                print_first_diff_window(comparer, args.window)
                return

            TraceViewerApp(comparer, window_height=args.window).run()
        except LineReadError as e:
            logger.error(f"Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
