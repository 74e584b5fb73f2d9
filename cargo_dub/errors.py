"""
Errors raised by the wrapper itself.

Failures of the delegated tool are never turned into exceptions: its output
and exit code pass through untouched.
"""
from typing import List, Optional

EXIT_USAGE = 2
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
EXIT_INTERRUPTED = 130


class CargoDubError(Exception):
    """Base class for wrapper errors. Each carries the exit code to use."""

    exit_code = 1


class UsageError(CargoDubError):
    """Bad or missing command-line arguments."""

    exit_code = EXIT_USAGE

    def __init__(self, message: str, usage: str = ''):
        super().__init__(message)
        self.usage = usage


class SourceFileNotFound(UsageError):
    """The manifest that `convert` would read does not exist."""

    def __init__(self, source: str):
        super().__init__(f"Source file '{source}' not found")
        self.source = source


class ExternalToolNotFound(CargoDubError):
    """The delegate binary could not be located or spawned."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, tool: str, message: str, candidates: Optional[List[str]] = None,
                 exit_code: int = EXIT_NOT_FOUND):
        super().__init__(message)
        self.tool = tool
        self.candidates = list(candidates or [])
        self.exit_code = exit_code
