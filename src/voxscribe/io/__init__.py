"""I/O utilities."""

from voxscribe.io.export import to_json, write_json
from voxscribe.io.files import FileSystem, LocalFileSystem
from voxscribe.io.paths import (
    canonical_output_path,
    diagnostic_log_path,
    is_wav,
    normalize_path,
    temp_wav_path,
)

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "canonical_output_path",
    "diagnostic_log_path",
    "is_wav",
    "normalize_path",
    "temp_wav_path",
    "to_json",
    "write_json",
]
