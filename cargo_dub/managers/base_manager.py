"""
Base runner providing the common spawn-and-relay logic for external tools.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional
import os
import subprocess
import shutil

from cargo_dub.errors import ExternalToolNotFound, EXIT_NOT_EXECUTABLE


def _has_directory(candidate: str) -> bool:
    return os.sep in candidate or bool(os.altsep and os.altsep in candidate)


class BaseToolRunner(ABC):
    """Abstract base class for binaries the wrapper delegates to."""

    def __init__(self, name: str, override: Optional[str] = None):
        """
        Initialize the runner.

        Args:
            name: Display name of the tool
            override: Explicit executable name or path, tried instead of candidates
        """
        self.name = name
        self.override = override

    @abstractmethod
    def candidates(self) -> List[str]:
        """
        Executable names to look for on PATH, in order of preference.
        Returns:
            List of executable names
        """
        pass

    def search_order(self) -> List[str]:
        if self.override:
            return [self.override]
        return self.candidates()

    def locate(self) -> str:
        """
        Find the executable to spawn.
        Returns:
            Full path of the first candidate found
        Raises:
            ExternalToolNotFound: if no candidate resolves, or an explicit
                path exists but is not executable
        """
        tried = self.search_order()
        for candidate in tried:
            # shutil.which skips files without the execute bit
            if _has_directory(candidate) and os.path.isfile(candidate):
                if not os.access(candidate, os.X_OK):
                    raise ExternalToolNotFound(
                        self.name,
                        f"Permission denied when executing {self.name}",
                        candidates=[candidate],
                        exit_code=EXIT_NOT_EXECUTABLE,
                    )
                return candidate
            path = shutil.which(candidate)
            if path is not None:
                return path
        raise ExternalToolNotFound(
            self.name,
            f"{self.name} executable not found. Install DUB from https://dub.pm",
            candidates=tried,
        )

    def run(self, args: List[str], announce: Optional[Callable[[List[str]], None]] = None) -> int:
        """
        Spawn the tool and wait for it.

        The child inherits the working directory, the environment and the
        standard streams of this process; nothing is captured. On Ctrl-C the
        child receives SIGINT from the terminal itself and is waited for
        until it exits, after which KeyboardInterrupt is re-raised.

        Args:
            args: Arguments following the executable
            announce: Called with the full command line once the executable is found
        Returns:
            The child's exit code, or 1 if it was killed by a signal
        """
        executable = self.locate()
        command = [executable] + list(args)
        if announce is not None:
            announce(command)
        try:
            process = subprocess.Popen(command)
        except FileNotFoundError:
            raise ExternalToolNotFound(
                self.name,
                f"{self.name} executable not found or not accessible",
                candidates=[executable],
            ) from None
        except PermissionError:
            raise ExternalToolNotFound(
                self.name,
                f"Permission denied when executing {self.name}",
                candidates=[executable],
                exit_code=EXIT_NOT_EXECUTABLE,
            ) from None

        interrupted = False
        while True:
            try:
                returncode = process.wait()
                break
            except KeyboardInterrupt:
                interrupted = True
        if interrupted:
            raise KeyboardInterrupt

        if returncode < 0:
            return 1
        return returncode
