import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from voxscribe.io import to_json, write_json
from voxscribe.models import JobResult, TranscriptionRequest


def test_to_json_and_write_json(tmp_path: Path) -> None:
    result = JobResult.success("/data/note.txt", "stdout-fallback", note="Saved from stdout fallback.")

    payload = json.loads(to_json(result))
    assert payload == {
        "ok": True,
        "outputPath": "/data/note.txt",
        "note": "Saved from stdout fallback.",
        "provenance": "stdout-fallback",
    }

    output_path = tmp_path / "out" / "result.json"
    write_json(JobResult.failure("Audio path is empty or not found: x.mp3"), output_path)
    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written == {"ok": False, "error": "Audio path is empty or not found: x.mp3"}


def test_request_accepts_camel_and_snake_case() -> None:
    camel = TranscriptionRequest.model_validate(
        {"audioPath": "/a.mp3", "transcriberBinaryPath": "/bin/whisper", "noTimestamps": True}
    )
    snake = TranscriptionRequest(audio_path="/a.mp3", model_path="/m.bin", language="en")

    assert camel.transcriber_binary_path == "/bin/whisper"
    assert camel.no_timestamps is True
    assert snake.model_path == "/m.bin"


def test_request_is_immutable() -> None:
    request = TranscriptionRequest(audio_path="/a.mp3")

    with pytest.raises(ValidationError):
        request.audio_path = "/b.mp3"  # type: ignore[misc]


def test_request_requires_audio_path() -> None:
    with pytest.raises(ValidationError):
        TranscriptionRequest(audio_path="")
