"""
Text spinner shown while an external command runs.
"""

import asyncio

from ..utils.console import Console


class Spinner:
    """
    Animates a label until the surrounding ``async with`` block exits.

    The block is expected to await the child process, so the animation lasts
    exactly as long as the command does.
    """

    FRAMES = ("/", "-", "\\", "|")

    def __init__(self, console: Console, label: str, interval: float = 0.1):
        self.console = console
        self.label = label
        self.interval = interval
        self.frames_drawn = 0
        self._task = None

    async def __aenter__(self) -> "Spinner":
        self.console.write_frame(self.label)
        self._task = asyncio.ensure_future(self._animate())
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        suffix = "Done!" if exc_type is None else "Failed!"
        self.console.write_frame(f"{self.label}... {suffix}   \n")
        return False

    async def _animate(self) -> None:
        while True:
            for frame in self.FRAMES:
                self.console.write_frame(f"{self.label} {frame}")
                self.frames_drawn += 1
                await asyncio.sleep(self.interval)
