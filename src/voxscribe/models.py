"""Shared data models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Provenance = Literal["direct", "heuristic", "stdout-fallback"]


class HealthResponse(BaseModel):
    """Response payload for the API health endpoint."""

    status: Literal["ok"]
    version: str
    env: str


class TranscriptionRequest(BaseModel):
    """Transcription job payload used by both CLI and API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    audio_path: str = Field(min_length=1)
    transcriber_binary_path: str | None = None
    model_path: str | None = None
    language: str | None = None
    no_timestamps: bool = False


class JobResult(BaseModel):
    """Classified outcome of one transcription job."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool
    output_path: str | None = None
    error: str | None = None
    note: str | None = None
    provenance: Provenance | None = None

    @classmethod
    def success(
        cls,
        output_path: str,
        provenance: Provenance,
        note: str | None = None,
    ) -> JobResult:
        return cls(ok=True, output_path=output_path, provenance=provenance, note=note)

    @classmethod
    def failure(cls, error: str) -> JobResult:
        return cls(ok=False, error=error)
