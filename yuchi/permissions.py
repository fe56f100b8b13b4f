"""Interactive confirmation before a command runs."""

from dataclasses import dataclass, field

from rich.console import Console
from rich.panel import Panel

from yuchi.errors import InputError


@dataclass
class ConsoleConfirmer:
    """Asks the user to approve each command on the terminal.

    Only an explicit "y" (any case) approves; everything else declines.
    """

    console: Console = field(default_factory=Console)

    def __call__(self, prompt: str) -> bool:
        self.console.print()
        self.console.print(Panel(
            prompt,
            title="[yellow]Permission Required[/yellow]",
            border_style="yellow",
        ))
        try:
            response = self.console.input("[dim](y)es / (n)o:[/dim] ")
        except EOFError as e:
            raise InputError("No confirmation received") from e
        return response.strip().lower() == "y"
