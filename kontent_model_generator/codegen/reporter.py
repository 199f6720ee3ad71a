"""
Progress reporting for generation runs.

Generators report through a GenerationReporter instead of printing; the
CLI plugs in ConsoleReporter.
"""

from typing import Any, Optional

from rich.console import Console
from rich.markup import escape


class GenerationReporter:
    """Observer notified while models are generated. Does nothing by default."""

    def on_resolver_used(self, target: str, strategy: str) -> None:
        """A non-default naming strategy is in use for target."""
        pass

    def on_entity_start(self, kind: str, entity: Any) -> None:
        """Generation of one content type, snippet or taxonomy begins."""
        pass

    def on_file_written(self, path: str) -> None:
        """A file was written to disk."""
        pass


class ConsoleReporter(GenerationReporter):
    """Reporter printing progress with rich."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def on_resolver_used(self, target: str, strategy: str) -> None:
        self.console.print(
            f"Using '[yellow]{strategy}[/yellow]' name resolver for {target}"
        )

    def on_entity_start(self, kind: str, entity: Any) -> None:
        if self.verbose:
            self.console.print(
                f"[dim]Processing {kind} '{escape(str(entity.codename))}' ({escape(entity.name)})[/dim]"
            )

    def on_file_written(self, path: str) -> None:
        self.console.print(f"Created '[yellow]{escape(path)}[/yellow]'")
