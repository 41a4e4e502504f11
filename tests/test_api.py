import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from whisper_stub import write_whisper_stub

from voxscribe.api import create_app


def test_health_endpoint() -> None:
    client = TestClient(create_app())

    response = client.get("/health")
    assert response.status_code == 200

    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["version"] == "0.1.0"
    assert payload["env"] == "dev"


def test_transcribe_missing_audio_is_a_failed_job(tmp_path: Path) -> None:
    client = TestClient(create_app())
    response = client.post("/v1/transcribe", json={"audioPath": str(tmp_path / "absent.mp3")})

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is False
    assert "not found" in payload["error"]
    assert "outputPath" not in payload


def test_transcribe_rejects_empty_audio_path() -> None:
    client = TestClient(create_app())
    response = client.post("/v1/transcribe", json={"audioPath": ""})

    assert response.status_code == 422


@pytest.mark.skipif(sys.platform == "win32", reason="shebang stub needs POSIX")
def test_transcribe_endpoint_with_stub_binary(tmp_path: Path) -> None:
    audio = tmp_path / "song.wav"
    audio.write_bytes(b"RIFF")
    stub = write_whisper_stub(tmp_path, "hello world")

    client = TestClient(create_app())
    response = client.post(
        "/v1/transcribe",
        json={"audioPath": str(audio), "transcriberBinaryPath": str(stub), "noTimestamps": True},
    )

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "outputPath": str(tmp_path / "song.txt"),
        "provenance": "direct",
    }
    assert (tmp_path / "song.txt").read_text(encoding="utf-8") == "hello world"


def test_transcribe_unlaunchable_request_is_a_failed_job(tmp_path: Path) -> None:
    audio = tmp_path / "song.wav"
    audio.write_bytes(b"RIFF")

    client = TestClient(create_app())
    response = client.post("/v1/transcribe", json={"audioPath": str(audio), "language": "en\u0000"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is False
    assert payload["error"].endswith(str(tmp_path / "song.log.txt"))
