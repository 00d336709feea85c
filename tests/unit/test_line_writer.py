import io
import os
import sys
import threading
from datetime import datetime, timedelta, timezone

import pytest

from line_writer import Flag, LineWriter, parse_flags


FIXED = datetime(2009, 1, 23, 1, 23, 23, 123123)


def _writer(flags: int = 0, **kwargs) -> tuple[LineWriter, io.StringIO]:
    stream = io.StringIO()
    return LineWriter(stream, flags, clock=lambda: FIXED, **kwargs), stream


def test_output_without_flags_writes_prefix_and_message() -> None:
    writer, stream = _writer()
    assert writer.output(1, "hello", "INFO ") is True
    assert stream.getvalue() == "INFO hello\n"


def test_output_does_not_double_the_terminator() -> None:
    writer, stream = _writer()
    writer.output(1, "hello\n")
    assert stream.getvalue() == "hello\n"


def test_std_flags_render_date_and_time() -> None:
    writer, stream = _writer(Flag.STD)
    writer.output(1, "y", "WARN ")
    assert stream.getvalue() == "WARN 2009/01/23 01:23:23 y\n"


def test_microseconds_imply_time() -> None:
    writer, stream = _writer(Flag.MICROSECONDS)
    writer.output(1, "y")
    assert stream.getvalue() == "01:23:23.123123 y\n"


def test_utc_converts_timestamp() -> None:
    aware = datetime(2009, 1, 23, 1, 23, 23, tzinfo=timezone(timedelta(hours=2)))
    stream = io.StringIO()
    writer = LineWriter(stream, Flag.STD | Flag.UTC, clock=lambda: aware)
    writer.output(1, "y")
    assert stream.getvalue() == "2009/01/22 23:23:23 y\n"


def test_time_format_replaces_fixed_layout() -> None:
    writer, stream = _writer(Flag.DATE, time_format="%Y-%m-%dT%H:%M:%S")
    writer.output(1, "y", "ERRO ")
    assert stream.getvalue() == "ERRO 2009-01-23T01:23:23 y\n"


def test_time_format_needs_date_or_time_flag() -> None:
    writer, stream = _writer(0, time_format="%H")
    writer.output(1, "y")
    assert stream.getvalue() == "y\n"


def test_short_file_points_at_caller() -> None:
    writer, stream = _writer(Flag.SHORT_FILE)
    writer.output(1, "here")
    expected_line = sys._getframe().f_lineno - 1
    assert stream.getvalue() == f"{os.path.basename(__file__)}:{expected_line}: here\n"


def test_short_file_overrides_long_file() -> None:
    writer, stream = _writer(Flag.LONG_FILE | Flag.SHORT_FILE)
    writer.output(1, "here")
    assert stream.getvalue().startswith(os.path.basename(__file__) + ":")


def test_long_file_uses_full_path() -> None:
    writer, stream = _writer(Flag.LONG_FILE)
    writer.output(1, "here")
    assert stream.getvalue().startswith(sys._getframe().f_code.co_filename + ":")


def test_unreachable_caller_depth_is_marked_unknown() -> None:
    writer, stream = _writer(Flag.SHORT_FILE)
    writer.output(10_000, "lost")
    assert stream.getvalue() == "???:0: lost\n"


def test_set_flags_replaces_flags() -> None:
    writer, _ = _writer(Flag.STD)
    writer.set_flags(Flag.SHORT_FILE)
    assert writer.flags == Flag.SHORT_FILE


def test_stream_errors_are_not_raised() -> None:
    class _Broken:
        def write(self, text: str) -> int:
            raise OSError("disk full")

    writer = LineWriter(_Broken())
    assert writer.output(1, "lost") is False


def test_closed_stream_is_not_raised() -> None:
    writer, stream = _writer()
    stream.close()
    assert writer.output(1, "lost") is False


def test_unencodable_text_is_not_raised() -> None:
    stream = io.TextIOWrapper(io.BytesIO(), encoding="ascii")
    writer = LineWriter(stream)
    assert writer.output(1, "café") is False


def test_concurrent_lines_are_not_interleaved() -> None:
    class _SplitStream:
        def __init__(self) -> None:
            self.parts: list[str] = []

        def write(self, text: str) -> int:
            self.parts.append(text[:3])
            self.parts.append(text[3:])
            return len(text)

    stream = _SplitStream()
    writer = LineWriter(stream)

    def worker(n: int) -> None:
        for i in range(200):
            writer.output(1, f"worker-{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = "".join(stream.parts).splitlines()
    assert len(lines) == 800
    assert all(line.startswith("worker-") for line in lines)


def test_parse_flags_combines_names() -> None:
    assert parse_flags("date,time") == Flag.STD
    assert parse_flags("std|utc") == Flag.DATE | Flag.TIME | Flag.UTC
    assert parse_flags(" Short_File ") == Flag.SHORT_FILE
    assert parse_flags("") == Flag(0)


def test_parse_flags_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown log flag: dates"):
        parse_flags("dates")
