"""Base provider protocol for chat-completion backends."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from yuchi.tools.base import Tool

from yuchi.messages import Completion, Message

ToolChoice = Literal["auto", "none"]


class Provider(ABC):
    """Abstract base class for LLM providers."""

    name: str  # Provider identifier, e.g. "shapes"

    @abstractmethod
    def complete(
        self,
        messages: list[Message],
        tools: list["Tool"] | None = None,
        tool_choice: ToolChoice = "auto",
        follow_up: bool = False,
    ) -> Completion:
        """Send one chat-completion request and decode its first choice.

        Args:
            messages: Conversation so far
            tools: Tools the LLM may call; omitted from the request when empty
            tool_choice: "auto" to let the LLM call tools, "none" to forbid it
            follow_up: True for the request that carries tool results

        Returns:
            The decoded first choice
        """
        pass
