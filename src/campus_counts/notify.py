from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .common import console as default_console


class BaseNotifier(ABC):
    """Sink for the run summary and diagnostic warnings. Never affects control flow."""

    @abstractmethod
    def summary(self, text: str) -> None: ...

    @abstractmethod
    def warning(self, text: str) -> None: ...

    def error(self, text: str) -> None:
        self.warning(text)


class ConsoleNotifier(BaseNotifier):
    """Print through a rich console: warnings as log lines, the summary in a panel."""

    def __init__(self, console: Console | None = None):
        self.console = console or default_console

    def summary(self, text: str) -> None:
        self.console.print(Panel(escape(text), title="Update Counts", expand=False))

    def warning(self, text: str) -> None:
        self.console.log(f"[yellow]Warning:[/yellow] {escape(text)}")

    def error(self, text: str) -> None:
        self.console.log(f"[bold red]{escape(text)}[/bold red]")


class RecordingNotifier(BaseNotifier):
    """Keep every message in memory."""

    def __init__(self):
        self.summaries: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def summary(self, text: str) -> None:
        self.summaries.append(text)

    def warning(self, text: str) -> None:
        self.warnings.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)
