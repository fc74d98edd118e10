"""
Shared test fixtures and configuration.
"""

import io
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from config.settings import Settings
from devsetup.core.host import HostEnvironment
from devsetup.core.installers import InstallerStrategy
from devsetup.core.prober import Prober
from devsetup.models.installation import CommandResult
from devsetup.models.tool import ToolSpec
from devsetup.utils.console import Console


def make_executable(directory: Path, name: str, output: str = "", exit_code: int = 0) -> Path:
    """Write a shell script named ``name`` that prints ``output`` and exits with ``exit_code``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    body = "#!/bin/sh\n"
    if output:
        body += f"echo '{output}'\n"
    body += f"exit {exit_code}\n"
    path.write_text(body)
    path.chmod(0o755)
    return path


class FakeRunner:
    """Records commands instead of running them."""

    def __init__(self):
        self.calls: List[List[str]] = []
        self.envs: List[Optional[Dict[str, str]]] = []
        self.responses: Dict[Tuple[str, ...], CommandResult] = {}
        self.hooks: Dict[Tuple[str, ...], Callable[[], None]] = {}

    def respond(self, args: List[str], returncode: int = 0, output: str = "") -> None:
        self.responses[tuple(args)] = CommandResult(args=args, returncode=returncode, output=output)

    def on(self, args: List[str], hook: Callable[[], None]) -> None:
        self.hooks[tuple(args)] = hook

    async def run(self, args, label=None, env=None, capture=False) -> CommandResult:
        self.calls.append(list(args))
        self.envs.append(env)
        key = tuple(args)
        if key in self.hooks:
            self.hooks[key]()
        if key in self.responses:
            return self.responses[key]
        return CommandResult(args=list(args), returncode=0)


class FakeStrategy(InstallerStrategy):
    """Strategy that optionally drops a fake executable into a bin directory."""

    def __init__(self, bin_dir: Path, creates: bool = True, events: Optional[List[str]] = None):
        self.bin_dir = bin_dir
        self.creates = creates
        self.events = events if events is not None else []
        self.installed: List[str] = []
        self.uninstalled: List[str] = []

    async def install(self, tool: ToolSpec) -> CommandResult:
        self.events.append(f"install:{tool.name}")
        self.installed.append(tool.name)
        if self.creates:
            make_executable(self.bin_dir, tool.command, f"{tool.name} 1.0.0")
        return CommandResult(args=["fake", "install", tool.name], returncode=0)

    async def uninstall(self, tool: ToolSpec) -> CommandResult:
        self.events.append(f"uninstall:{tool.name}")
        self.uninstalled.append(tool.name)
        path = self.bin_dir / tool.command
        if path.exists():
            path.unlink()
        return CommandResult(args=["fake", "uninstall", tool.name], returncode=0)


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Return an empty directory used as the only search path entry."""
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def host(bin_dir: Path) -> HostEnvironment:
    return HostEnvironment(base_path=str(bin_dir), base_env={"PATH": str(bin_dir)})


@pytest.fixture
def prober(host: HostEnvironment) -> Prober:
    return Prober(host, version_timeout=5)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(out=output)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Return settings that only touch the temporary directory."""
    return Settings(
        clone_dir=tmp_path / "clone",
        asdf={"install_dir": tmp_path / "asdf"},
        shell={"rc_files": [tmp_path / ".zshrc", tmp_path / ".bashrc"]},
        homebrew={"prefixes": [tmp_path / "brew"]},
        progress={"interval_seconds": 0.01},
        logging={"file_path": tmp_path / "logs" / "devsetup.log"},
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_root_logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
