import io

import pytest

from cancellation import CancellationToken
from models import StopReason
from quit_listener import QuitListener


class ScriptedStream:
    """Yields queued results from readline(); exceptions are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.reads = 0

    def readline(self):
        self.reads += 1
        if not self.results:
            return ""
        item = self.results.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def _run(stream):
    token = CancellationToken()
    listener = QuitListener(token, stream=stream)
    listener.start()
    listener.join(timeout=5.0)
    assert not listener.is_running()
    return token


@pytest.mark.parametrize("line", ["q\n", "quit\n", "exit\n", "exit\r\n", "q"])
def test_quit_tokens_cancel(line):
    token = _run(io.StringIO(line))

    assert token.is_cancelled
    assert token.reason is StopReason.KEYBOARD


@pytest.mark.parametrize("line", ["Q\n", "Quit \n", "exitnow\n", " q\n", "\n", "stop\n"])
def test_non_matching_lines_do_not_cancel(line):
    token = _run(io.StringIO(line))

    assert not token.is_cancelled


def test_stops_reading_after_quit():
    stream = ScriptedStream("hello\n", "q\n", "quit\n")
    token = _run(stream)

    assert token.is_cancelled
    assert stream.reads == 2
    assert stream.results == ["quit\n"]


def test_transient_read_errors_are_retried():
    stream = ScriptedStream(
        UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
        OSError("interrupted"),
        "\n",
        "exit\n",
    )
    token = _run(stream)

    assert token.reason is StopReason.KEYBOARD


def test_closed_stream_ends_reader_without_cancelling():
    stream = io.StringIO("q\n")
    stream.close()
    token = _run(stream)

    assert not token.is_cancelled


def test_existing_cancellation_is_not_overwritten():
    token = CancellationToken()
    token.cancel(StopReason.SIGNAL)
    listener = QuitListener(token, stream=io.StringIO("q\n"))
    listener.start()
    listener.join(timeout=5.0)

    assert token.reason is StopReason.SIGNAL


def test_is_quit_command_is_exact():
    listener = QuitListener(CancellationToken())

    assert listener.is_quit_command("quit\n")
    assert not listener.is_quit_command("QUIT\n")
    assert not listener.is_quit_command("quit \n")
