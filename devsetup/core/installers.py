"""
Installer strategies: one class per InstallStrategy member.

Each strategy wraps the external installer's own CLI. Success is not judged
here; the dispatcher re-probes the tool afterwards.
"""

import logging
import shlex
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type

from config.settings import Settings
from ..models.installation import CommandResult
from ..models.tool import InstallStrategy, ToolSpec
from . import shell_rc
from .command_runner import CommandRunner
from .host import HostEnvironment


class InstallerStrategy(ABC):
    """Installs and removes one kind of catalog entry."""

    def __init__(self, runner: CommandRunner, host: HostEnvironment, settings: Settings):
        self.logger = logging.getLogger(__name__)
        self.runner = runner
        self.host = host
        self.settings = settings

    @abstractmethod
    async def install(self, tool: ToolSpec) -> CommandResult:
        ...

    @abstractmethod
    async def uninstall(self, tool: ToolSpec) -> CommandResult:
        ...

    def _log_result(self, action: str, tool: ToolSpec, result: CommandResult) -> None:
        if not result.ok:
            self.logger.warning(f"{action} {tool.name} exited with {result.returncode}")


def _remote_script(url: str, *script_args: str) -> List[str]:
    """Command line that fetches a script with curl and runs it with bash."""
    command = f'/bin/bash -c "$(curl -fsSL {shlex.quote(url)})"'
    if script_args:
        command += " " + " ".join(shlex.quote(a) for a in ("homebrew",) + script_args)
    return ["/bin/bash", "-c", command]


class HomebrewBootstrapInstaller(InstallerStrategy):
    """Bootstraps Homebrew itself from its remote install script."""

    async def install(self, tool: ToolSpec) -> CommandResult:
        result = await self.runner.run(
            _remote_script(self.settings.homebrew.install_script_url),
            label=f"Installing {tool.label}",
            env={"NONINTERACTIVE": "1"}
        )
        self._log_result("Installing", tool, result)
        # The installer does not touch the running process's PATH
        self.host.prepend_path(*[prefix / "bin" for prefix in self.settings.homebrew.prefixes
                                 if (prefix / "bin" / "brew").exists()])
        return result

    async def uninstall(self, tool: ToolSpec) -> CommandResult:
        result = await self.runner.run(
            _remote_script(self.settings.homebrew.uninstall_script_url, "--force"),
            label=f"Uninstalling {tool.label}",
            env={"NONINTERACTIVE": "1"}
        )
        self._log_result("Uninstalling", tool, result)
        return result


class HomebrewCaskInstaller(InstallerStrategy):
    """Installs a GUI application through ``brew --cask``."""

    async def install(self, tool: ToolSpec) -> CommandResult:
        result = await self.runner.run(
            ["brew", "install", "--cask", tool.package_name],
            label=f"Installing {tool.label}"
        )
        self._log_result("Installing", tool, result)
        return result

    async def uninstall(self, tool: ToolSpec) -> CommandResult:
        result = await self.runner.run(
            ["brew", "uninstall", "--cask", tool.package_name],
            label=f"Uninstalling {tool.label}"
        )
        self._log_result("Uninstalling", tool, result)
        return result


class AsdfCloneInstaller(InstallerStrategy):
    """Clones asdf and registers it in the shell start-up files."""

    RC_MARKERS = ("asdf.sh", "asdf.bash")

    def sourcing_lines(self) -> List[str]:
        install_dir = self.settings.asdf.install_dir
        try:
            shown = '$HOME/' + install_dir.relative_to(Path.home()).as_posix()
        except ValueError:
            shown = install_dir.as_posix()
        return [
            f'. "{shown}/asdf.sh"',
            f'. "{shown}/completions/asdf.bash"',
        ]

    async def install(self, tool: ToolSpec) -> CommandResult:
        asdf = self.settings.asdf
        result = await self.runner.run(
            ["git", "clone", asdf.repo_url, str(asdf.install_dir), "--branch", asdf.branch],
            label=f"Installing {tool.label}"
        )
        self._log_result("Installing", tool, result)

        for rc_file in self.settings.shell.rc_files:
            shell_rc.append_lines(rc_file, self.sourcing_lines())
        self.host.prepend_path(asdf.install_dir / "bin", asdf.install_dir / "shims")
        return result

    async def uninstall(self, tool: ToolSpec) -> CommandResult:
        install_dir = self.settings.asdf.install_dir
        self.logger.info(f"Removing {install_dir}")
        shutil.rmtree(install_dir, ignore_errors=True)
        for rc_file in self.settings.shell.rc_files:
            shell_rc.strip_lines(rc_file, self.RC_MARKERS)
        return CommandResult(args=["rm", "-rf", str(install_dir)], returncode=0)


class HomebrewFormulaInstaller(InstallerStrategy):
    """Installs a command-line tool through ``brew install``."""

    async def install(self, tool: ToolSpec) -> CommandResult:
        result = await self.runner.run(
            ["brew", "install", tool.package_name],
            label=f"Installing {tool.label}"
        )
        self._log_result("Installing", tool, result)
        return result

    async def uninstall(self, tool: ToolSpec) -> CommandResult:
        result = await self.runner.run(
            ["brew", "uninstall", tool.package_name],
            label=f"Uninstalling {tool.label} via Homebrew"
        )
        self._log_result("Uninstalling", tool, result)
        return result


STRATEGIES: Dict[InstallStrategy, Type[InstallerStrategy]] = {
    InstallStrategy.HOMEBREW_BOOTSTRAP: HomebrewBootstrapInstaller,
    InstallStrategy.HOMEBREW_CASK: HomebrewCaskInstaller,
    InstallStrategy.ASDF_CLONE: AsdfCloneInstaller,
    InstallStrategy.HOMEBREW_FORMULA: HomebrewFormulaInstaller,
}


class InstallerRegistry:
    """Builds one strategy instance per InstallStrategy and hands them out by tag."""

    def __init__(self,
                 runner: CommandRunner,
                 host: HostEnvironment,
                 settings: Settings,
                 overrides: Optional[Dict[InstallStrategy, InstallerStrategy]] = None):
        self._strategies: Dict[InstallStrategy, InstallerStrategy] = {
            tag: cls(runner, host, settings) for tag, cls in STRATEGIES.items()
        }
        if overrides:
            self._strategies.update(overrides)

    def for_tool(self, tool: ToolSpec) -> InstallerStrategy:
        return self._strategies[tool.strategy]
