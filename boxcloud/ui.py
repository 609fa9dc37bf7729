"""Output sinks for human-readable progress messages."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape


@runtime_checkable
class Ui(Protocol):
    """Write-only channel for progress and warning messages."""

    def say(self, message: str) -> None:
        """Announce a major action."""
        ...

    def message(self, message: str) -> None:
        """Report detail under the current action."""
        ...

    def error(self, message: str) -> None:
        """Report a failure."""
        ...


class ConsoleUi:
    """Rich console implementation of ``Ui``.

    Parameters
    ----------
    console:
        Console to write to.  Defaults to a new ``Console()``.
    prefix:
        Label printed before each line, e.g. the post-processor name.
    """

    def __init__(self, console: Console | None = None, prefix: str = "vagrant-cloud") -> None:
        self.console = console or Console()
        self.prefix = prefix

    def say(self, message: str) -> None:
        self.console.print(f"[bold cyan]==> {self.prefix}:[/bold cyan] {escape(message)}", highlight=False)

    def message(self, message: str) -> None:
        self.console.print(f"    [cyan]{self.prefix}:[/cyan] {escape(message)}", highlight=False)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]==> {self.prefix}:[/bold red] {escape(message)}", highlight=False)
