"""Locate the transcript a whisper attempt produced."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from voxscribe.io.files import FileSystem
from voxscribe.io.paths import normalize_path
from voxscribe.models import Provenance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveredOutput:
    """Transcript now stored at the canonical path, with where it came from."""

    content: str
    provenance: Provenance
    source_path: Path | None = None


class OutputResolver:
    """Resolve transcript text by direct path, newest new file, then stdout.

    The directory snapshot is taken once before the first attempt and is not
    refreshed, so a stray `.txt` written by an earlier attempt stays a
    candidate for later heuristic matches.
    """

    def __init__(self, output_path: Path, fs: FileSystem) -> None:
        self.output_path = output_path
        self.directory = output_path.parent
        self.fs = fs
        self._pre_existing: set[str] | None = None

    def snapshot(self) -> None:
        files = self.fs.list_text_files(self.directory)
        self._pre_existing = {normalize_path(path) for path in files}
        logger.debug("Snapshot of %s: %d text files", self.directory, len(files))

    def resolve_attempt(self) -> DiscoveredOutput | None:
        return self.resolve_direct() or self.resolve_heuristic()

    def resolve_direct(self) -> DiscoveredOutput | None:
        if not self.fs.is_non_empty(self.output_path):
            return None
        content = self.fs.read_text(self.output_path)
        return DiscoveredOutput(content=content, provenance="direct", source_path=self.output_path)

    def resolve_heuristic(self) -> DiscoveredOutput | None:
        if self._pre_existing is None:
            raise RuntimeError("snapshot() must run before heuristic resolution")

        fresh = [
            path
            for path in self.fs.list_text_files(self.directory)
            if normalize_path(path) not in self._pre_existing
        ]
        newest = self._newest(fresh)
        if newest is None or not self.fs.is_non_empty(newest):
            return None

        content = self.fs.read_text(newest)
        self.fs.write_text(self.output_path, content)
        logger.info("Claimed %s as transcript for %s", newest, self.output_path)
        if normalize_path(newest) != normalize_path(self.output_path):
            try:
                self.fs.remove(newest)
            except OSError as exc:
                logger.warning("Could not remove superseded output %s: %s", newest, exc)
        return DiscoveredOutput(content=content, provenance="heuristic", source_path=newest)

    def resolve_stdout_fallback(self, stdout: str) -> DiscoveredOutput | None:
        if not stdout.strip():
            return None
        self.fs.write_text(self.output_path, stdout)
        logger.info("Saved captured stdout to %s", self.output_path)
        return DiscoveredOutput(content=stdout, provenance="stdout-fallback")

    def _newest(self, paths: list[Path]) -> Path | None:
        best: Path | None = None
        best_time = -1.0
        for path in paths:
            modified = self.fs.modified_time(path)
            if modified is not None and modified > best_time:
                best, best_time = path, modified
        return best
