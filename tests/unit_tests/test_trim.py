import pytest

from trace_log_comparer.trim import trim_to_line


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "input.log"
    path.write_bytes(b"1 boot\n2 init\n3 start\n4 run\n5 stop")
    return path

def test_trim_from_middle(log_file, tmp_path):
    output = tmp_path / "output.log"
    written = trim_to_line(str(log_file), str(output), 3)

    assert written == 3
    assert output.read_bytes() == b"3 start\n4 run\n5 stop"

def test_trim_from_first_line_copies_everything(log_file, tmp_path):
    output = tmp_path / "output.log"
    assert trim_to_line(str(log_file), str(output), 1) == 5
    assert output.read_bytes() == log_file.read_bytes()

def test_trim_past_the_end(log_file, tmp_path):
    output = tmp_path / "output.log"
    assert trim_to_line(str(log_file), str(output), 10) == 0
    assert output.read_bytes() == b""

def test_trim_overwrites_existing_output(log_file, tmp_path):
    output = tmp_path / "output.log"
    output.write_bytes(b"stale content that is much longer than the result\n")

    trim_to_line(str(log_file), str(output), 5)
    assert output.read_bytes() == b"5 stop"

def test_trim_rejects_line_zero(log_file, tmp_path):
    with pytest.raises(ValueError):
        trim_to_line(str(log_file), str(tmp_path / "output.log"), 0)
