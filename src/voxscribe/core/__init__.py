"""Core transcription job."""

from voxscribe.core.job import JobState, TranscriptionJob, run_transcription

__all__ = ["JobState", "TranscriptionJob", "run_transcription"]
