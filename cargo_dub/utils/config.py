"""
Settings read from the environment.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

COMPILER_ENV = "DC"
DUB_ENV = "DUB"


@dataclass(frozen=True)
class Settings:
    """Environment-provided defaults for a single run."""

    compiler: Optional[str] = None
    dub: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings with empty values normalised to None
        """
        if environ is None:
            environ = os.environ
        return cls(
            compiler=environ.get(COMPILER_ENV) or None,
            dub=environ.get(DUB_ENV) or None,
        )
