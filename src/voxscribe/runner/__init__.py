"""External process execution."""

from voxscribe.runner.process import ProcessOutput, ProcessRunner, SubprocessRunner

__all__ = ["ProcessOutput", "ProcessRunner", "SubprocessRunner"]
