"""Audio preparation."""

from voxscribe.audio.prepare import PreparedAudio, default_converter_binary, prepare_audio

__all__ = ["PreparedAudio", "default_converter_binary", "prepare_audio"]
