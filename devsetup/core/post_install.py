"""
Fixed steps run after the catalog pass: pin Python, install one package, clone one repository.
"""

import logging
from typing import List, Optional

from config.settings import Settings
from ..models.installation import StepResult, StepStatus
from ..utils.console import Console
from .command_runner import CommandRunner
from .errors import VerificationError


class PostInstallSequence:
    """Runs each step as attempt, verify, and stops at the first failed check."""

    def __init__(self, runner: CommandRunner, settings: Settings, console: Console):
        self.logger = logging.getLogger(__name__)
        self.runner = runner
        self.settings = settings
        self.console = console

    async def run(self) -> List[StepResult]:
        """
        Run the three steps in order.

        Raises:
            VerificationError: a step's read-back check failed; later steps are not run
        """
        return [
            await self.pin_runtime(),
            await self.install_package(),
            await self.clone_repository(),
        ]

    async def pin_runtime(self) -> StepResult:
        version = self.settings.python_version
        self.console.echo(f"Installing Python {version} with asdf...")

        plugin = await self.runner.run(["asdf", "plugin-add", "python"])
        if not plugin.ok:
            # asdf exits non-zero when the plugin is already added
            self.logger.debug(f"asdf plugin-add python exited with {plugin.returncode}")
        await self.runner.run(["asdf", "install", "python", version],
                              label=f"Installing Python {version}")
        await self.runner.run(["asdf", "global", "python", version])

        check = await self.runner.run(["python", "--version"], capture=True)
        active = check.output.strip()
        reported = active.split()[-1] if active else ""
        if not check.ok or reported != version:
            self._fail("runtime_pin", f"Python installation failed (active version: {active or 'none'})", active)

        self.console.success(f"Python {version} installed and set as default successfully!")
        return StepResult(step="runtime_pin", status=StepStatus.PASSED, output=active)

    async def install_package(self) -> StepResult:
        package = self.settings.python_package
        self.console.echo(f"Installing {package}...")

        await self.runner.run(["pip", "install", package], label=f"Installing {package}")

        check = await self.runner.run(["pip", "show", package], capture=True)
        if not check.ok:
            self._fail("package_install", f"{package} installation failed", check.output)

        self.console.success(f"{package} installed successfully!")
        return StepResult(step="package_install", status=StepStatus.PASSED,
                          output=check.output.splitlines()[0] if check.output else None)

    async def clone_repository(self) -> StepResult:
        repo = self.settings.dotfiles_repo
        target = self.settings.clone_dir
        self.console.echo("Cloning dotfiles repository...")

        await self.runner.run(["git", "clone", repo, str(target)], label="Cloning repository")

        if not target.is_dir():
            self._fail("repository_clone", "Cloning repository failed")

        self.console.success(f"Repository cloned to {target} successfully!")
        return StepResult(step="repository_clone", status=StepStatus.PASSED, output=str(target))

    def _fail(self, step: str, message: str, output: Optional[str] = None) -> None:
        self.logger.error(f"{step}: {message}")
        result = StepResult(step=step, status=StepStatus.FAILED, output=output or None, error=message)
        raise VerificationError(step, message, result)
