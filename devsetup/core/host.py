"""
Search path and environment handed to child processes.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union


class HostEnvironment:
    """
    The host's PATH plus directories made available during the run.

    Installers that put executables somewhere new (Homebrew's prefix, asdf's
    bin and shims) prepend those directories here so later probes and
    commands in the same process can find them.
    """

    def __init__(self, base_path: Optional[str] = None, base_env: Optional[Dict[str, str]] = None):
        self.logger = logging.getLogger(__name__)
        self.base_env = dict(os.environ if base_env is None else base_env)
        self.base_path = base_path if base_path is not None else self.base_env.get("PATH", "")
        self._extra: List[str] = []

    def prepend_path(self, *directories: Union[str, Path]) -> None:
        for directory in reversed(directories):
            entry = str(directory)
            if entry in self._extra:
                continue
            self._extra.insert(0, entry)
            self.logger.debug(f"Added {entry} to search path")

    @property
    def search_path(self) -> str:
        parts = self._extra + [p for p in self.base_path.split(os.pathsep) if p]
        return os.pathsep.join(parts)

    def env(self, overrides: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Environment for a child process."""
        env = dict(self.base_env)
        env["PATH"] = self.search_path
        if overrides:
            env.update(overrides)
        return env
