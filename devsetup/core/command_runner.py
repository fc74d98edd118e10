"""
Runs external commands, with a spinner in quiet mode or verbose output in debug mode.
"""

import asyncio
import logging
import shlex
import time
from typing import Dict, List, Optional

from ..models.installation import CommandResult
from ..utils.console import Console
from .host import HostEnvironment
from .progress import Spinner


class CommandRunner:
    """Executes installer commands as child processes."""

    def __init__(self,
                 host: HostEnvironment,
                 console: Console,
                 debug: bool = False,
                 interval: float = 0.1):
        """
        Initialize the command runner.

        Args:
            host: Search path and environment for child processes
            console: Where progress and debug output is written
            debug: Show command output instead of a spinner
            interval: Delay between spinner frames
        """
        self.logger = logging.getLogger(__name__)
        self.host = host
        self.console = console
        self.debug = debug
        self.interval = interval

    async def run(self,
                  args: List[str],
                  label: Optional[str] = None,
                  env: Optional[Dict[str, str]] = None,
                  capture: bool = False) -> CommandResult:
        """
        Run a command to completion.

        Args:
            args: Command line
            label: Progress label shown while the command runs
            env: Extra environment variables
            capture: Always capture output, even in debug mode

        Returns:
            Command result; a missing executable is reported as exit status 127
        """
        command_line = shlex.join(args)
        self.logger.debug(f"Running: {command_line}")
        start = time.monotonic()

        if self.debug:
            self.console.echo(f"$ {command_line}")
            if capture:
                result = await self._run_captured(args, env)
                if result.output:
                    self.console.echo(result.output.rstrip())
            else:
                result = await self._run_verbose(args, env)
        elif label:
            async with Spinner(self.console, label, self.interval):
                result = await self._run_captured(args, env)
        else:
            result = await self._run_captured(args, env)

        result.duration_seconds = time.monotonic() - start
        self.logger.debug(f"{command_line} exited with {result.returncode}")
        if result.output:
            self.logger.debug(f"Output of {args[0]}:\n{result.output}")
        return result

    async def _run_captured(self, args: List[str], env: Optional[Dict[str, str]]) -> CommandResult:
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                env=self.host.env(env)
            )
        except OSError as e:
            return CommandResult(args=list(args), returncode=127, output=str(e))

        stdout, _ = await process.communicate()
        output = stdout.decode(errors="replace") if stdout else ""
        return CommandResult(args=list(args), returncode=process.returncode, output=output)

    async def _run_verbose(self, args: List[str], env: Optional[Dict[str, str]]) -> CommandResult:
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                env=self.host.env(env)
            )
        except OSError as e:
            self.console.failure(str(e))
            return CommandResult(args=list(args), returncode=127, output=str(e))

        await process.wait()
        return CommandResult(args=list(args), returncode=process.returncode)
