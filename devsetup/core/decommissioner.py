"""
Uninstall path: removes catalog tools and the cloned repository.
"""

import logging
import shutil
from typing import Iterable, List

from config.settings import Settings
from ..models.tool import ToolSpec
from ..utils.console import Console
from .installers import InstallerRegistry
from .prober import Prober


class Decommissioner:
    """
    Reverses catalog installations.

    The Python pin and the package install are left in place; only catalog
    tools and the clone target are removed.
    """

    def __init__(self,
                 catalog: Iterable[ToolSpec],
                 prober: Prober,
                 registry: InstallerRegistry,
                 settings: Settings,
                 console: Console):
        self.logger = logging.getLogger(__name__)
        self.catalog = list(catalog)
        self.prober = prober
        self.registry = registry
        self.settings = settings
        self.console = console

    async def run(self) -> List[str]:
        """
        Remove every catalog tool that is currently installed, then the clone target.

        Returns:
            Names of the tools a removal was attempted for
        """
        self.console.echo("Uninstalling all software...")
        removed: List[str] = []

        try:
            for tool in self.catalog:
                if self.prober.probe(tool).missing:
                    self.logger.debug(f"{tool.name} not installed, skipping")
                    continue
                self.console.echo(f"Uninstalling {tool.label}...")
                result = await self.registry.for_tool(tool).uninstall(tool)
                if not result.ok:
                    self.console.warning(f"{tool.label} removal exited with status {result.returncode}")
                removed.append(tool.name)
        finally:
            self.remove_clone_dir()

        self.console.success("Uninstallation complete.")
        return removed

    def remove_clone_dir(self) -> None:
        target = self.settings.clone_dir
        if target.exists():
            self.logger.info(f"Removing {target}")
        shutil.rmtree(target, ignore_errors=True)
