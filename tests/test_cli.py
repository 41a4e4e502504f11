import json
import sys
from pathlib import Path

import pytest
from whisper_stub import write_whisper_stub

from voxscribe.cli import main

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="shebang stub needs POSIX")


def test_cli_no_args_shows_help(capsys) -> None:
    exit_code = main([])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "usage: voxscribe" in captured.out


def test_cli_transcribe_missing_file_fails(tmp_path: Path, capsys) -> None:
    exit_code = main(["transcribe", str(tmp_path / "absent.mp3"), "--quiet"])
    captured = capsys.readouterr()

    assert exit_code == 1
    payload = json.loads(captured.out)
    assert payload["ok"] is False
    assert "not found" in payload["error"]
    assert "ERROR:" in captured.err


@posix_only
def test_cli_transcribe_with_stub_binary(tmp_path: Path, capsys) -> None:
    audio = tmp_path / "song.wav"
    audio.write_bytes(b"RIFF")
    stub = write_whisper_stub(tmp_path, "hello world")

    exit_code = main(["transcribe", str(audio), "--bin", str(stub), "--language", "en"])
    captured = capsys.readouterr()

    assert exit_code == 0
    payload = json.loads(captured.out)
    assert payload == {
        "ok": True,
        "outputPath": str(tmp_path / "song.txt"),
        "provenance": "direct",
    }
    assert (tmp_path / "song.txt").read_text(encoding="utf-8") == "hello world"
    assert "Running Whisper (attempt 1/4)" in captured.err


@posix_only
def test_cli_transcribe_writes_result_json(tmp_path: Path, capsys) -> None:
    audio = tmp_path / "song.wav"
    audio.write_bytes(b"RIFF")
    stub = write_whisper_stub(tmp_path, "hello world")
    result_path = tmp_path / "out" / "result.json"

    exit_code = main(
        ["transcribe", str(audio), "--bin", str(stub), "--quiet", "-o", str(result_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "Wrote job result JSON" in captured.out
    assert "Running Whisper" not in captured.err
    written = json.loads(result_path.read_text(encoding="utf-8"))
    assert written["ok"] is True


def test_cli_rejects_invalid_config(monkeypatch, capsys) -> None:
    monkeypatch.setenv("VOXSCRIBE_ATTEMPT_TIMEOUT_SEC", "soon")

    exit_code = main(["transcribe", "song.wav"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "VOXSCRIBE_ATTEMPT_TIMEOUT_SEC" in captured.err


def test_cli_transcribe_empty_audio_path_is_rejected(capsys) -> None:
    exit_code = main(["transcribe", "", "--quiet"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Invalid request" in captured.err
    assert captured.out == ""


def test_cli_transcribe_accepts_short_language_code(tmp_path: Path, capsys) -> None:
    exit_code = main(["transcribe", str(tmp_path / "song.wav"), "--language", "x", "--quiet"])
    captured = capsys.readouterr()

    assert exit_code == 1
    payload = json.loads(captured.out)
    assert payload["ok"] is False
    assert "not found" in payload["error"]
