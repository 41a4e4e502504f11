"""voxscribe: resilient audio-to-text jobs over external whisper and ffmpeg CLIs."""

__version__ = "0.1.0"
