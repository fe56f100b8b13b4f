"""Base tool class and the shell command tool."""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable

from yuchi.errors import ToolError
from yuchi.messages import ToolOutcome

logger = logging.getLogger(__name__)

CANCELLED = "Command execution cancelled by user."

Confirm = Callable[[str], bool]


class Tool(ABC):
    """Base class for all tools."""

    name: str
    description: str
    parameters: dict  # JSON Schema

    @abstractmethod
    def execute(self, **kwargs) -> ToolOutcome:
        """Execute the tool and return the outcome."""
        pass

    def schema(self) -> dict:
        """The tool declaration sent with a chat-completion request."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ShellCommandTool(Tool):
    """Run a command in the current directory after the user confirms it.

    The command is split on whitespace and run without a shell, so pipes,
    redirects and quoting are passed through literally as arguments.
    """

    name = "run_shell_command"
    description = "Run a shell command in the current directory"
    parameters = {
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "description": "The shell command to run (e.g., npm install express)",
            },
        },
        "required": ["command"],
    }

    def __init__(self, confirm: Confirm, run: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        self.confirm = confirm
        self.run = run

    def execute(self, command: str) -> ToolOutcome:
        try:
            cwd = os.getcwd()
        except OSError as e:
            raise ToolError(str(e)) from e

        if not self.confirm(f"Run `{command}` in {cwd}? (y/n): "):
            logger.debug("User declined %r", command)
            return ToolOutcome(text=CANCELLED, succeeded=False)

        argv = command.split()
        if not argv:
            raise ToolError("Empty command")

        try:
            result = self.run(argv, capture_output=True)
        except (OSError, ValueError) as e:
            raise ToolError(f"Failed to execute `{command}`: {e}") from e

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        logger.debug("%r exited with status %d", command, result.returncode)

        if result.returncode == 0:
            return ToolOutcome(text=f"`{command}` succeeded:\n{stdout}", succeeded=True)
        return ToolOutcome(text=f"`{command}` failed:\n{stderr}", succeeded=False)
