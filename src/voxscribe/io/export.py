"""Job result serializers."""

from __future__ import annotations

from pathlib import Path

from voxscribe.models import JobResult


def to_json(result: JobResult) -> str:
    """Serialize a job result to formatted camelCase JSON."""
    return result.model_dump_json(indent=2, by_alias=True, exclude_none=True)


def write_json(result: JobResult, output_path: str | Path) -> None:
    """Write job result JSON to disk."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(result) + "\n", encoding="utf-8")
