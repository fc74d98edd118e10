"""
Provisioner - probes the catalog, installs what is missing, then runs the post-install sequence.
"""

import logging
from typing import Callable, Iterable, List, Optional

from ..models.installation import ProvisionSummary
from ..models.tool import ProbeResult, ToolSpec
from ..utils.console import Console
from .dispatcher import InstallerDispatcher
from .post_install import PostInstallSequence
from .prober import Prober


INSTALL_QUESTION = "Would you like to install the missing software? (y/n)"


class Provisioner:
    """Drives catalog -> probe results -> user decision -> installs -> fixed steps."""

    def __init__(self,
                 catalog: Iterable[ToolSpec],
                 prober: Prober,
                 dispatcher: InstallerDispatcher,
                 post_install: PostInstallSequence,
                 console: Console,
                 assume_yes: bool = False,
                 ask: Optional[Callable[[str], bool]] = None):
        """
        Initialize the provisioner.

        Args:
            catalog: Ordered tools to check
            prober: Presence checker
            dispatcher: Installs a single tool
            post_install: Fixed steps run after the catalog pass
            console: User-facing output
            assume_yes: Skip the prompt and install missing tools
            ask: Yes/no prompt; defaults to reading from the terminal
        """
        self.logger = logging.getLogger(__name__)
        self.catalog = list(catalog)
        self.prober = prober
        self.dispatcher = dispatcher
        self.post_install = post_install
        self.console = console
        self.assume_yes = assume_yes
        self.ask = ask or console.confirm

    async def run(self) -> ProvisionSummary:
        """
        Main provisioning method.

        Returns:
            Summary of the run; ``declined`` is set when the user refused the install

        Raises:
            InstallError: a tool was missing after its installer ran
            VerificationError: a post-install step failed its check
        """
        summary = ProvisionSummary()
        self.console.header("Checking Installed Software")

        results = self.prober.probe_all(self.catalog)
        summary.probed = len(results)
        self._report(results)

        missing = [r.tool for r in results if r.missing]
        self.logger.info(f"{len(missing)} of {len(results)} tools missing")

        if not missing:
            self.console.success("All software is installed.")
        else:
            self.console.failure("The following software is missing:")
            for tool in missing:
                self.console.echo(f"- {tool.name}")

            if not (self.assume_yes or self.ask(INSTALL_QUESTION)):
                self.console.echo("Skipping installation.")
                self.logger.info("User declined installation")
                summary.declined = True
                summary.complete()
                return summary

            for tool in missing:
                record = await self.dispatcher.install(tool)
                summary.installed.append(record.tool.name)

        summary.steps = await self.post_install.run()
        summary.complete()

        self.console.success("All tasks completed successfully!")
        self.logger.info(f"Provisioning complete in {summary.duration_seconds:.1f}s")
        return summary

    def _report(self, results: List[ProbeResult]) -> None:
        for result in results:
            if result.installed:
                self.console.success(f"{result.tool.name} is installed: {result.version or 'unknown version'}")
            else:
                self.console.failure(f"{result.tool.name} is not installed.")
