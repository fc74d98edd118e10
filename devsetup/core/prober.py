"""
Presence and version checks for catalog tools.
"""

import logging
import shutil
import subprocess
from typing import Iterable, List, Optional

from ..models.tool import ProbeResult, ToolSpec
from .host import HostEnvironment


class Prober:
    """Checks whether catalog tools resolve on the search path."""

    def __init__(self, host: HostEnvironment, version_timeout: float = 10.0):
        """
        Initialize the prober.

        Args:
            host: Search path and environment to probe against
            version_timeout: Seconds to wait for a tool to print its version
        """
        self.logger = logging.getLogger(__name__)
        self.host = host
        self.version_timeout = version_timeout

    def probe(self, tool: ToolSpec) -> ProbeResult:
        """
        Check one tool. Never raises: a missing tool and an unreadable
        version are both ordinary results.
        """
        resolved = shutil.which(tool.command, path=self.host.search_path)
        if not resolved:
            self.logger.debug(f"{tool.name} not found on search path")
            return ProbeResult(tool=tool, installed=False)

        version = self._read_version(resolved, tool)
        self.logger.debug(f"{tool.name} found at {resolved} (version: {version})")
        return ProbeResult(tool=tool, installed=True, version=version)

    def probe_all(self, catalog: Iterable[ToolSpec]) -> List[ProbeResult]:
        """Probe every tool, preserving catalog order."""
        return [self.probe(tool) for tool in catalog]

    def _read_version(self, executable: str, tool: ToolSpec) -> Optional[str]:
        try:
            result = subprocess.run(
                [executable, *tool.version_args],
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.version_timeout,
                env=self.host.env()
            )
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.debug(f"Version query for {tool.name} failed: {e}")
            return None

        if result.returncode != 0:
            self.logger.debug(f"Version query for {tool.name} exited with {result.returncode}")
            return None

        for stream in (result.stdout, result.stderr):
            for line in (stream or "").splitlines():
                if line.strip():
                    return line.strip()
        return None
