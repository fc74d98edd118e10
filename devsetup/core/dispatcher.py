"""
Installs one catalog tool and confirms it afterwards.
"""

import logging

from ..models.installation import InstallationRecord, InstallStatus
from ..models.tool import ToolSpec
from ..utils.console import Console
from .errors import InstallError
from .installers import InstallerRegistry
from .prober import Prober


POST_INSTALL_CHECK_FAILED = "post-install verification failed"


class InstallerDispatcher:
    """Runs the tool's installer strategy, then re-probes it."""

    def __init__(self, registry: InstallerRegistry, prober: Prober, console: Console):
        self.logger = logging.getLogger(__name__)
        self.registry = registry
        self.prober = prober
        self.console = console

    async def install(self, tool: ToolSpec) -> InstallationRecord:
        """
        Install ``tool``.

        Returns:
            The record in the SUCCEEDED state

        Raises:
            InstallError: the tool is still missing after its installer ran
        """
        record = InstallationRecord(tool=tool)
        record.update_status(InstallStatus.ATTEMPTING)
        self.console.echo(f"Installing {tool.label}...")
        self.logger.info(f"Installing {tool.name} with {tool.strategy.value}")

        await self.registry.for_tool(tool).install(tool)

        if self.prober.probe(tool).missing:
            record.update_status(InstallStatus.FAILED, POST_INSTALL_CHECK_FAILED)
            self.logger.error(f"{tool.name} not found after install")
            raise InstallError(tool, POST_INSTALL_CHECK_FAILED)

        record.update_status(InstallStatus.SUCCEEDED)
        self.logger.info(f"{tool.name} installed in {record.duration_seconds:.1f}s")
        self.console.success(f"{tool.label} installed successfully!")
        return record
