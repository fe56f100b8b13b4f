"""Core message types for Yuchi."""

import json
from dataclasses import dataclass, field
from typing import Literal

from yuchi.errors import ApiError

Role = Literal["user", "assistant", "tool"]

# Tool call id used when the model answers with a <function> envelope
FALLBACK_CALL_ID = "fallback"

FUNCTION_OPEN = "<function>"
FUNCTION_CLOSE = "</function>"


def parse_command(arguments: str) -> str:
    """Extract the `command` field from a JSON-encoded arguments object."""
    try:
        args = json.loads(arguments)
    except ValueError as e:
        raise ApiError(f"Failed to parse tool arguments: {e}") from e
    if not isinstance(args, dict):
        raise ApiError("Tool arguments must be a JSON object")
    command = args.get("command")
    if not isinstance(command, str):
        raise ApiError("Missing command parameter")
    return command


@dataclass
class ToolCall:
    """A request from the LLM to execute a tool."""
    id: str
    name: str
    arguments: str  # JSON-encoded, as sent by the API
    raw: dict | None = field(default=None, repr=False)  # the object exactly as received

    @property
    def command(self) -> str:
        return parse_command(self.arguments)

    def to_openai(self) -> dict:
        if self.raw is not None:
            return dict(self.raw)
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass
class StructuredToolCalls:
    """Tool calls delivered in the `tool_calls` field of the reply."""
    calls: list[ToolCall]


@dataclass
class FallbackToolCall:
    """A single command delivered as `<function>{...}</function>` text."""
    command: str
    id: str = FALLBACK_CALL_ID


ToolRequest = StructuredToolCalls | FallbackToolCall


@dataclass
class ToolOutcome:
    """The rendered result of running a command."""
    text: str
    succeeded: bool


@dataclass
class Completion:
    """The first choice of a chat completion, decoded once."""
    content: str | None = None
    tool_calls: list[ToolCall] | None = None

    def tool_request(self) -> ToolRequest | None:
        """Classify the reply. Structured calls win over the text envelope."""
        if self.tool_calls:
            return StructuredToolCalls(self.tool_calls)

        content = self.content or ""
        if content.startswith(FUNCTION_OPEN) and content.endswith(FUNCTION_CLOSE):
            inner = content[len(FUNCTION_OPEN):-len(FUNCTION_CLOSE)]
            try:
                return FallbackToolCall(command=parse_command(inner))
            except ApiError as e:
                raise ApiError(f"Invalid function tag: {e.message}") from e
        return None


@dataclass
class Message:
    """A message in the conversation."""
    role: Role
    content: str | list[dict] | None = ""
    tool_calls: list[ToolCall] = field(default_factory=list)
    tool_call_id: str | None = None

    @classmethod
    def user(cls, content: str | list[dict]) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str | None = None, tool_calls: list[ToolCall] | None = None) -> "Message":
        return cls(role="assistant", content=content, tool_calls=tool_calls or [])

    @classmethod
    def tool_result(cls, tool_call_id: str, content: str) -> "Message":
        return cls(role="tool", content=content, tool_call_id=tool_call_id)

    def to_openai(self) -> dict:
        """Convert to the chat-completions wire format."""
        if self.role == "tool":
            return {
                "role": "tool",
                "tool_call_id": self.tool_call_id,
                "content": self.content,
            }
        msg = {"role": self.role, "content": self.content}
        if self.tool_calls:
            msg["tool_calls"] = [tc.to_openai() for tc in self.tool_calls]
        return msg


def user_message(prompt: str, image_url: str | None = None) -> Message:
    """Build the user message, as two parts when an image is attached."""
    if image_url is None:
        return Message.user(prompt)
    return Message.user([
        {"type": "text", "text": prompt},
        {"type": "image_url", "image_url": {"url": image_url}},
    ])
