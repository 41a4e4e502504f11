"""Filesystem access used by the preparer, resolver and diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from voxscribe.io.paths import TEXT_SUFFIX


class FileSystem(Protocol):
    """Filesystem operations a job needs; swappable in tests."""

    def exists(self, path: Path) -> bool: ...

    def is_non_empty(self, path: Path) -> bool: ...

    def list_text_files(self, directory: Path) -> list[Path]: ...

    def modified_time(self, path: Path) -> float | None: ...

    def read_text(self, path: Path) -> str: ...

    def write_text(self, path: Path, content: str) -> None: ...

    def remove(self, path: Path) -> None: ...


class LocalFileSystem:
    """Local disk implementation.

    Probing methods (`exists`, `is_non_empty`, `list_text_files`,
    `modified_time`) report absence instead of raising; `read_text`,
    `write_text` and `remove` propagate `OSError`.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_non_empty(self, path: Path) -> bool:
        try:
            return path.is_file() and path.stat().st_size > 0
        except OSError:
            return False

    def list_text_files(self, directory: Path) -> list[Path]:
        try:
            entries = list(directory.iterdir())
        except OSError:
            return []
        return [entry for entry in entries if entry.name.casefold().endswith(TEXT_SUFFIX)]

    def modified_time(self, path: Path) -> float | None:
        try:
            return path.stat().st_mtime
        except OSError:
            return None

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def remove(self, path: Path) -> None:
        path.unlink()
