import sys
import time
from pathlib import Path

import pytest
from fakes import RecordingSink

from voxscribe.runner import SubprocessRunner
from voxscribe.status import LoggingStatusSink, StreamStatusSink, emit_status


def test_captures_output_and_ignores_failure_exit() -> None:
    script = "import sys; print('transcript line'); print('warn', file=sys.stderr); sys.exit(3)"

    output = SubprocessRunner().run(sys.executable, ["-c", script], timeout_sec=30)

    assert output.launched is True
    assert output.returncode == 3
    assert output.timed_out is False
    assert output.stdout.strip() == "transcript line"
    assert output.stderr.strip() == "warn"


def test_streams_lines_to_status_sink() -> None:
    sink = RecordingSink()
    script = "print('one'); print('two')"

    SubprocessRunner().run(sys.executable, ["-c", script], timeout_sec=30, status=sink)

    assert [message.strip() for message in sink.messages] == ["one", "two"]


def test_timeout_is_reported_not_raised() -> None:
    script = "import time; print('starting', flush=True); time.sleep(30)"

    output = SubprocessRunner().run(sys.executable, ["-c", script], timeout_sec=0.5)

    assert output.timed_out is True
    assert output.returncode is None
    assert "starting" in output.stdout


def test_missing_executable_is_reported_not_raised(tmp_path: Path) -> None:
    output = SubprocessRunner().run(str(tmp_path / "no-such-whisper"), ["-f", "x.wav"], timeout_sec=5)

    assert output.launched is False
    assert output.launch_error
    assert output.stdout == ""
    assert output.stderr == ""


class _BrokenSink:
    def emit(self, text: str) -> None:
        raise RuntimeError("window closed")


def test_emit_status_never_raises() -> None:
    emit_status(_BrokenSink(), "Running Whisper (attempt 1/4)…")
    emit_status(None, "ignored")


def test_stream_sink_writes_lines(capsys) -> None:
    sink = StreamStatusSink()
    sink.emit("Converting to WAV (ffmpeg)…")
    sink.emit("\n")
    captured = capsys.readouterr()

    assert captured.err == "Converting to WAV (ffmpeg)…\n"


def test_logging_sink_logs_at_info(caplog) -> None:
    caplog.set_level("INFO", logger="voxscribe.status")

    LoggingStatusSink().emit("Done.\n")

    assert caplog.records[-1].getMessage() == "Done."


def test_invalid_argument_is_reported_as_launch_failure() -> None:
    output = SubprocessRunner().run(sys.executable, ["-c", "pass", "en\x00"], timeout_sec=5)

    assert output.launched is False
    assert "null byte" in (output.launch_error or "")


@pytest.mark.skipif(sys.platform == "win32", reason="process groups need POSIX")
def test_timeout_kills_grandchildren_holding_pipes() -> None:
    started = time.monotonic()

    output = SubprocessRunner().run("/bin/sh", ["-c", "sleep 30 & sleep 30; wait"], timeout_sec=0.5)

    assert output.timed_out is True
    assert time.monotonic() - started < 10
