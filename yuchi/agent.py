"""The conversation driver: one prompt in, one reply out."""

import logging
from collections.abc import Callable

from yuchi.config import NO_TOOL_RESPONSE
from yuchi.credentials import Credentials
from yuchi.images import image_to_data_url
from yuchi.messages import (
    Completion,
    FallbackToolCall,
    Message,
    StructuredToolCalls,
    ToolOutcome,
    user_message,
)
from yuchi.providers import Provider, ShapesProvider
from yuchi.tools.base import Confirm, ShellCommandTool, Tool
from yuchi.ui import NullProgress, Progress

logger = logging.getLogger(__name__)

QUERY_MESSAGE = "Querying ShapesAI..."
TEXT_EXTRACTION_PREFIX = "Extract the text from this image: "

ProviderFactory = Callable[[str, dict[str, str]], Provider]
ResultHook = Callable[[str, ToolOutcome], None]


def adjust_prompt(prompt: str, has_image: bool) -> str:
    """Bias the model toward OCR when asked about text in an image."""
    if has_image and "text" in prompt.lower():
        return f"{TEXT_EXTRACTION_PREFIX}{prompt}"
    return prompt


class Agent:
    """Runs the two-phase tool-calling exchange for a single request."""

    def __init__(
        self,
        provider: Provider,
        tool: Tool,
        progress: Progress | None = None,
        on_tool_result: ResultHook | None = None,
    ):
        self.provider = provider
        self.tool = tool
        self.progress = progress or NullProgress()
        self.on_tool_result = on_tool_result
        self.messages: list[Message] = []

    def chat(self, user: Message) -> str:
        """Send the user message and return the final reply text."""
        self.messages = [user]
        self.progress.show(QUERY_MESSAGE)
        try:
            first = self.provider.complete(self.messages, tools=[self.tool], tool_choice="auto")
            request = first.tool_request()

            if isinstance(request, StructuredToolCalls):
                self.messages.append(Message.assistant(None, request.calls))
                for call in request.calls:
                    self._run_tool(call.id, call.command)
            elif isinstance(request, FallbackToolCall):
                self._run_tool(request.id, request.command)
            else:
                return first.content or ""

            return self._follow_up()
        finally:
            self.progress.hide()

    def _run_tool(self, call_id: str, command: str) -> None:
        # Hide spinner for the confirmation dialog
        self.progress.hide()
        outcome = self.tool.execute(command=command)
        if self.on_tool_result:
            self.on_tool_result(command, outcome)
        self.messages.append(Message.tool_result(call_id, outcome.text))

    def _follow_up(self) -> str:
        self.progress.show(QUERY_MESSAGE)
        second: Completion = self.provider.complete(self.messages, tool_choice="none", follow_up=True)
        return second.content or NO_TOOL_RESPONSE


def converse(
    prompt: str,
    credentials: Credentials,
    model: str,
    user_id: str,
    channel_id: str,
    image_path: str | None = None,
    *,
    confirm: Confirm,
    provider_factory: ProviderFactory = ShapesProvider,
    progress: Progress | None = None,
    on_tool_result: ResultHook | None = None,
) -> str:
    """Ask the model one question, running any shell command it requests.

    Args:
        prompt: The user's question
        credentials: Stored credentials; the auth token wins over the API key
        model: Model id, e.g. "shapesinc/ariwa"
        user_id: Sent with API-key authentication
        channel_id: Sent with API-key authentication
        image_path: Optional PNG/JPEG to attach
        confirm: Asked before each command runs
        provider_factory: Builds the provider from (model, headers)
        progress: Spinner shown while requests are in flight
        on_tool_result: Called with each command and its outcome

    Returns:
        The model's final reply

    Raises:
        ImageError: The image is missing, unreadable or not PNG/JPEG
        ConfigError: Token authentication without an application id
        ApiError: No credential, transport or HTTP failure, malformed reply
        ToolError: A confirmed command could not be spawned
    """
    image_url = image_to_data_url(image_path) if image_path is not None else None
    user = user_message(adjust_prompt(prompt, image_url is not None), image_url)

    headers = credentials.headers(user_id, channel_id)
    logger.debug(
        "Asking %s using %s authentication",
        model, "token" if credentials.uses_token else "API key",
    )

    agent = Agent(
        provider=provider_factory(model, headers),
        tool=ShellCommandTool(confirm),
        progress=progress,
        on_tool_result=on_tool_result,
    )
    return agent.chat(user)
