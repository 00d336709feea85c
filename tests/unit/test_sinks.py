import requests

from line_writer import LineWriter
from logger import Logger
from sinks import HttpLineSink


class _Resp:
    def __init__(self, status: int = 200) -> None:
        self.status = status

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Server Error")


class _Session:
    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.calls = []
        self.closed = False

    def post(self, url, data, headers, timeout):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        return _Resp(self.status)

    def close(self) -> None:
        self.closed = True


def test_write_posts_one_request_per_line() -> None:
    session = _Session()
    sink = HttpLineSink("http://collector.local/lines", session=session, timeout=2.5)

    assert sink.write("INFO one\n") == len("INFO one\n")
    sink.write("INFO two\n")

    assert [c["data"] for c in session.calls] == [b"INFO one\n", b"INFO two\n"]
    assert session.calls[0]["url"] == "http://collector.local/lines"
    assert session.calls[0]["timeout"] == 2.5
    assert session.calls[0]["headers"]["Content-Type"].startswith("text/plain")


def test_close_leaves_injected_session_open() -> None:
    session = _Session()
    sink = HttpLineSink("http://collector.local/lines", session=session)
    sink.close()
    assert session.closed is False


def test_http_errors_do_not_break_the_logger() -> None:
    session = _Session(status=503)
    sink = HttpLineSink("http://collector.local/lines", session=session)
    writer = LineWriter(sink)
    log = Logger(writer)

    assert writer.output(1, "dropped") is False
    log.error("also dropped")

    assert len(session.calls) == 2
