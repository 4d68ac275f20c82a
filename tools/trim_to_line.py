#!/usr/bin/env python3
# ruff: noqa: T201, ANN201
import argparse
import os
import sys


# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from trace_log_comparer.trim import trim_to_line


def main():
    parser = argparse.ArgumentParser(description="Copy a log file starting at a given line number.")
    parser.add_argument("input_file", help="Log file to read")
    parser.add_argument("output_file", help="File to write (created or overwritten)")
    parser.add_argument("line_number", type=int, help="First line to keep (1-based)")

    args = parser.parse_args()

    if not os.path.exists(args.input_file):
        print(f"Error: File '{args.input_file}' not found.")
        sys.exit(1)

    try:
        written = trim_to_line(args.input_file, args.output_file, args.line_number)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Wrote {written} lines")

if __name__ == "__main__":
    main()
