"""Configuration loading utilities for voxscribe."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

_INT_KEYS = {"api_port", "workers", "attempt_timeout_sec", "conversion_timeout_sec"}
_OPTIONAL_STR_KEYS = {"transcriber_binary", "converter_binary"}
_STR_KEYS = {"log_level", "api_host"}


@dataclass(frozen=True)
class AppConfig:
    """Application configuration resolved from profile + environment variables."""

    env: str
    log_level: str
    api_host: str
    api_port: int
    workers: int
    transcriber_binary: str | None
    converter_binary: str | None
    attempt_timeout_sec: int
    conversion_timeout_sec: int


def load_config(env_name: str | None = None, config_dir: Path | None = None) -> AppConfig:
    """Load configuration from `configs/<env>.toml` and environment overrides."""
    env = env_name or os.getenv("VOXSCRIBE_ENV", "dev")
    resolved_dir = config_dir or _default_config_dir()
    profile_path = resolved_dir / f"{env}.toml"

    defaults: dict[str, str | int | None] = {
        "log_level": "INFO",
        "api_host": "127.0.0.1",
        "api_port": 8000,
        "workers": 1,
        "transcriber_binary": None,
        "converter_binary": None,
        "attempt_timeout_sec": 600,
        "conversion_timeout_sec": 600,
    }
    file_values = _load_profile(profile_path)
    defaults.update(file_values)

    log_level = os.getenv("VOXSCRIBE_LOG_LEVEL", str(defaults["log_level"]))
    api_host = os.getenv("VOXSCRIBE_API_HOST", str(defaults["api_host"]))
    api_port = _parse_int("VOXSCRIBE_API_PORT", os.getenv("VOXSCRIBE_API_PORT"), defaults["api_port"])
    workers = _parse_int("VOXSCRIBE_WORKERS", os.getenv("VOXSCRIBE_WORKERS"), defaults["workers"])
    attempt_timeout_sec = _parse_int(
        "VOXSCRIBE_ATTEMPT_TIMEOUT_SEC",
        os.getenv("VOXSCRIBE_ATTEMPT_TIMEOUT_SEC"),
        defaults["attempt_timeout_sec"],
    )
    conversion_timeout_sec = _parse_int(
        "VOXSCRIBE_CONVERSION_TIMEOUT_SEC",
        os.getenv("VOXSCRIBE_CONVERSION_TIMEOUT_SEC"),
        defaults["conversion_timeout_sec"],
    )
    transcriber_binary = os.getenv("VOXSCRIBE_TRANSCRIBER_BINARY") or defaults["transcriber_binary"]
    converter_binary = os.getenv("VOXSCRIBE_CONVERTER_BINARY") or defaults["converter_binary"]

    for name, value in (
        ("VOXSCRIBE_ATTEMPT_TIMEOUT_SEC", attempt_timeout_sec),
        ("VOXSCRIBE_CONVERSION_TIMEOUT_SEC", conversion_timeout_sec),
    ):
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    return AppConfig(
        env=env,
        log_level=log_level,
        api_host=api_host,
        api_port=api_port,
        workers=workers,
        transcriber_binary=(str(transcriber_binary) if transcriber_binary else None),
        converter_binary=(str(converter_binary) if converter_binary else None),
        attempt_timeout_sec=attempt_timeout_sec,
        conversion_timeout_sec=conversion_timeout_sec,
    )


def _default_config_dir() -> Path:
    return Path(__file__).resolve().parents[2] / "configs"


def _load_profile(path: Path) -> dict[str, str | int | None]:
    if not path.exists():
        return {}

    with path.open("rb") as handle:
        payload = tomllib.load(handle)

    resolved: dict[str, str | int | None] = {}
    for key, raw in payload.items():
        if key in _INT_KEYS:
            resolved[key] = _coerce_int(key, raw)
        elif key in _STR_KEYS:
            resolved[key] = _coerce_str(key, raw)
        elif key in _OPTIONAL_STR_KEYS:
            resolved[key] = _coerce_str(key, raw) or None
    return resolved


def _parse_int(name: str, raw: str | None, default: str | int | None) -> int:
    if raw is None:
        return _coerce_int(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _coerce_int(name: str, value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got type bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    raise ValueError(f"{name} must be an integer, got type {type(value).__name__}")


def _coerce_str(name: str, value: object) -> str:
    if isinstance(value, str):
        return value
    raise ValueError(f"{name} must be a string, got type {type(value).__name__}")
