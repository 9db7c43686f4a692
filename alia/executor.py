"""
Shell executor.

Spawns the platform shell with the arguments prepared by the interpreter and
returns immediately: the child process is neither awaited nor inspected. Only
spawn-level failures (the shell cannot be started) surface, as OSError.
"""
import logging
import subprocess

from .profiles import detect

logger = logging.getLogger(__name__)


class ShellExecutor:
    def __init__(self, profile=None):
        self.profile = profile or detect()

    def __call__(self, arguments, /):
        argv = [self.profile.shell, *arguments]
        logger.debug("spawning %r", argv)
        return subprocess.Popen(argv)


__all__ = ("ShellExecutor",)
