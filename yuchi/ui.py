"""Terminal output for Yuchi."""

from typing import Protocol

from rich.console import Console
from rich.status import Status
from rich.table import Table

from yuchi import __version__
from yuchi.errors import YuchiError


class Progress(Protocol):
    """A transient progress indicator."""

    def show(self, message: str) -> None: ...

    def hide(self) -> None: ...

    def set_message(self, message: str) -> None: ...


class StatusProgress:
    """Spinner backed by rich's Status."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)
        self._status: Status | None = None

    def show(self, message: str = "Processing...") -> None:
        """Show a spinner with the given message."""
        if self._status:
            self._status.update(message)
            return
        self._status = Status(message, console=self.console, spinner="dots")
        self._status.start()

    def hide(self) -> None:
        """Hide the current spinner if any."""
        if self._status:
            self._status.stop()
            self._status = None

    def set_message(self, message: str) -> None:
        if self._status:
            self._status.update(message)


class NullProgress:
    """Progress that draws nothing."""

    def show(self, message: str = "") -> None:
        pass

    def hide(self) -> None:
        pass

    def set_message(self, message: str) -> None:
        pass


def display_response(response: str, console: Console) -> None:
    console.print(f"Yuchi: {response}", style="cyan", markup=False, highlight=False)


def display_command_result(command: str, result: str, console: Console) -> None:
    table = Table(show_header=False, show_lines=True)
    table.add_column(style="bold cyan")
    table.add_column(justify="center")
    table.add_row("Command", command)
    table.add_row("Result", result)
    console.print(table)


def display_error(error: YuchiError, console: Console) -> None:
    console.print(str(error), style="bold red", markup=False, highlight=False)
    if error.hint:
        console.print(error.hint, style="dim", markup=False, highlight=False)


def display_help(console: Console) -> None:
    console.print(f"[bold cyan]=== Yuchi CLI v{__version__} ===[/bold cyan]")
    console.print("A command-line assistant powered by ShapesAI.")
    console.print("\nUsage: yuchi [OPTIONS] [QUESTION...]", markup=False)
    console.print("\nOptions:")
    for flag, text in [
        ("--login", "Authenticate with ShapesAI (API key or user auth token)"),
        ("--shape <USERNAME>", "Set a ShapesAI username to use a custom model (shapesinc/<username>)"),
        ("--logout", "Clear stored credentials and configuration"),
        ("--reset", "Reset the AI conversation history (sends '!reset' to AI)"),
        ("--wack", "Clear the AI's short-term memory (sends '!wack' to AI)"),
        ("--sleep", "Save the current conversation state"),
        ("--model <MODEL>", "Override the model for this question"),
        ("--image <IMAGE_PATH>", "Path to an image file (PNG/JPEG) to send to the AI"),
        ("--imagine", "Generate an image via AI and download it (appends '!imagine' to the prompt)"),
        ("--verbose", "Log requests and tool execution to stderr"),
    ]:
        console.print(f"  {flag:<24} {text}", markup=False, highlight=False)
    console.print("\nNote: Multi-word questions can be entered without quotes (e.g., yuchi hows you)")
    console.print("\nExamples:")
    for example in [
        "yuchi hi",
        "yuchi hows you",
        "yuchi --imagine a train station",
        "yuchi --image meme.jpg What's the text?",
    ]:
        console.print(f"  {example}", markup=False, highlight=False)
    console.print("\nRun `yuchi --login` to authenticate first.", markup=False)
