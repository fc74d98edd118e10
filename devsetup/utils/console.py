"""
Coloured user-facing output and the install prompt.
"""

import re
from typing import IO, Optional

import click


YES_PATTERN = re.compile(r"^[Yy]$")


class Console:
    """Writes status lines for the user. Log records go through logging instead."""

    def __init__(self, out: Optional[IO[str]] = None):
        self.out = out

    def echo(self, message: str = "", nl: bool = True) -> None:
        click.echo(message, file=self.out, nl=nl)

    def header(self, title: str) -> None:
        click.secho("\n========================================", fg="cyan", file=self.out)
        click.secho(f"           {title}", fg="cyan", bold=True, file=self.out)
        click.secho("========================================", fg="cyan", file=self.out)

    def success(self, message: str) -> None:
        click.secho(message, fg="green", bold=True, file=self.out)

    def failure(self, message: str) -> None:
        click.secho(message, fg="red", bold=True, file=self.out)

    def warning(self, message: str) -> None:
        click.secho(message, fg="yellow", file=self.out)

    def write_frame(self, text: str) -> None:
        """Overwrite the current terminal line."""
        click.echo(f"\r{text}", file=self.out, nl=False)
        if self.out is not None:
            self.out.flush()

    def confirm(self, question: str) -> bool:
        """Ask a yes/no question; only a single ``y`` or ``Y`` counts as yes."""
        try:
            answer = click.prompt(question, default="", show_default=False)
        except click.Abort:
            self.echo()
            return False
        return answer_is_yes(answer)


def answer_is_yes(answer: str) -> bool:
    return bool(YES_PATTERN.match(answer.strip()))
