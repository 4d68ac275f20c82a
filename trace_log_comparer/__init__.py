"""Positional comparison of large trace/log files."""
