"""Transcript output resolution."""

from voxscribe.resolve.output import DiscoveredOutput, OutputResolver

__all__ = ["DiscoveredOutput", "OutputResolver"]
