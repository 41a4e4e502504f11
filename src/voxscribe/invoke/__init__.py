"""Transcriber invocation strategies."""

from voxscribe.invoke.runner import DEFAULT_ATTEMPT_TIMEOUT_SEC, AttemptOutcome, InvocationRunner
from voxscribe.invoke.variants import (
    VARIANTS,
    InvocationVariant,
    common_flags,
    default_transcriber_binary,
    resolve_transcriber_binary,
)

__all__ = [
    "DEFAULT_ATTEMPT_TIMEOUT_SEC",
    "VARIANTS",
    "AttemptOutcome",
    "InvocationRunner",
    "InvocationVariant",
    "common_flags",
    "default_transcriber_binary",
    "resolve_transcriber_binary",
]
