import logging


logger = logging.getLogger(__name__)


def trim_to_line(input_path: str, output_path: str, line_number: int) -> int:
    """
    Copies `input_path` to `output_path` starting at a 1-based line number.

    Useful to cut a long trace down so it starts at the same event as the
    trace it is compared with. The output file is created or truncated.
    Returns the number of lines written.
    """
    if line_number < 1:
        raise ValueError(f"Line numbers start at 1, got {line_number}")

    written = 0
    with open(input_path, 'rb') as src, open(output_path, 'wb') as dst:
        for current, line in enumerate(src, start=1):
            if current >= line_number:
                dst.write(line)
                written += 1

    logger.debug(f"Copied {written} lines of {input_path} to {output_path} from line {line_number}")
    return written
