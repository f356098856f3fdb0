"""User-facing prompts, progress spinner and status messages."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.status import Status


class Prompter(Protocol):
    """Everything the command needs from the terminal."""

    def intro(self, text: str) -> None: ...

    def outro(self, text: str) -> None: ...

    def start(self, text: str) -> None: ...

    def message(self, text: str) -> None: ...

    def stop(self, text: str) -> None: ...

    def confirm(self, prompt: str) -> bool | None:
        """Ask a yes/no question; ``None`` means the prompt was aborted."""
        ...

    def cancel(self, text: str) -> None: ...

    def success(self, text: str) -> None: ...


class RichPrompter:
    """:class:`Prompter` backed by a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._status: Status | None = None

    def intro(self, text: str) -> None:
        self.console.print(Panel(f"[bold]{text}[/bold]", expand=False))

    def outro(self, text: str) -> None:
        self.console.print(f"[bold green]{text}[/bold green]")

    def start(self, text: str) -> None:
        self._status = self.console.status(f"[bold blue]{text}")
        self._status.start()

    def message(self, text: str) -> None:
        if self._status is not None:
            self._status.update(f"[bold blue]{text}")

    def stop(self, text: str) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
        self.console.print(text)

    def confirm(self, prompt: str) -> bool | None:
        try:
            return Confirm.ask(prompt, console=self.console, default=False)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None

    def cancel(self, text: str) -> None:
        self.console.print(f"[bold red]✗[/bold red] {text}")

    def success(self, text: str) -> None:
        self.console.print(f"[bold green]✓[/bold green] {text}")
