"""
DUB (D package manager) runner.
"""
import os
import sys
from typing import List, Optional

from cargo_dub.commands import Convert, Subcommand
from cargo_dub.errors import SourceFileNotFound
from .base_manager import BaseToolRunner


class DubManager(BaseToolRunner):
    """Runs the dub binary found on PATH, or the one named by $DUB."""

    def __init__(self, override: Optional[str] = None, platform: str = sys.platform) -> None:
        super().__init__(name="dub", override=override)
        self.platform = platform

    def candidates(self) -> List[str]:
        if self.platform == 'win32':
            return ['dub.exe', 'dub']
        return ['dub']

    def preflight(self, cmd: Subcommand, cwd: Optional[str] = None) -> None:
        """
        Check what dub would otherwise fail on with a less helpful message.

        Args:
            cmd: Subcommand about to be executed
            cwd: Directory dub will run in (defaults to the current one)
        Raises:
            SourceFileNotFound: if `convert` has no manifest to read
        """
        if isinstance(cmd, Convert):
            source = os.path.join(cwd or os.getcwd(), cmd.source)
            if not os.path.exists(source):
                raise SourceFileNotFound(cmd.source)
