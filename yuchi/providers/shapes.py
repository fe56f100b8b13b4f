"""ShapesAI provider, spoken to through the OpenAI client."""

import logging
from typing import TYPE_CHECKING, Any

import httpx
from openai import APIConnectionError, APIStatusError, Omit, OpenAI, OpenAIError
from openai.types.chat import ChatCompletion

if TYPE_CHECKING:
    from yuchi.tools.base import Tool

from yuchi.config import DEFAULT_HOST
from yuchi.errors import ApiError
from yuchi.messages import Completion, Message, ToolCall
from yuchi.providers.base import Provider, ToolChoice

logger = logging.getLogger(__name__)

# Fixed messages for statuses on the first request
STATUS_MESSAGES = {
    429: "Blame Shapes, I got rate-limited. Try again later.",
    404: "The resource couldn't be found.",
    403: "I don't have access to the AccessVerse.",
}


def _field(obj: Any, name: str) -> Any:
    """Read a field from either a response model or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _status_line(response: httpx.Response) -> str:
    return f"{response.status_code} {response.reason_phrase}".strip()


class ShapesProvider(Provider):
    """Provider for the ShapesAI chat-completions endpoint."""

    name = "shapes"

    def __init__(
        self,
        model_id: str,
        headers: dict[str, str],
        host: str = DEFAULT_HOST,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the ShapesAI provider.

        Args:
            model_id: Model name, e.g. "shapesinc/ariwa"
            headers: Authentication headers for exactly one scheme
            host: Server URL without /v1 suffix
            http_client: Optional httpx client (tests use a mock transport)
        """
        self.model_id = model_id
        # The client always adds its own bearer header; token mode must not send one
        if "Authorization" not in headers:
            headers = {**headers, "Authorization": Omit()}
        self.headers = headers
        self.client = OpenAI(
            base_url=f"{host}/v1",
            api_key="EMPTY",
            default_headers=headers,
            max_retries=0,
            http_client=http_client,
        )

    def complete(
        self,
        messages: list[Message],
        tools: list["Tool"] | None = None,
        tool_choice: ToolChoice = "auto",
        follow_up: bool = False,
    ) -> Completion:
        """Send the request and decode the first choice."""
        kwargs = {
            "model": self.model_id,
            "messages": [msg.to_openai() for msg in messages],
            "tool_choice": tool_choice,
        }
        if tools:
            kwargs["tools"] = [tool.schema() for tool in tools]

        which = "second " if follow_up else ""
        logger.debug(
            "POST chat/completions model=%s messages=%d tool_choice=%s",
            self.model_id, len(messages), tool_choice,
        )
        try:
            response = self.client.chat.completions.create(**kwargs, extra_headers=self.headers)
        except APIStatusError as e:
            raise ApiError(self._status_message(e, follow_up)) from e
        except APIConnectionError as e:
            raise ApiError(f"Failed to send {which}request to ShapesAI API: {e}") from e
        except (OpenAIError, ValueError) as e:
            raise ApiError(f"Failed to parse {which}API response: {e}") from e

        if not isinstance(response, ChatCompletion):
            raise ApiError(f"Failed to parse {which}API response: unexpected body")
        return self._decode(response)

    def _status_message(self, error: APIStatusError, follow_up: bool) -> str:
        """Map a non-2xx status to a human-readable message."""
        body = error.response.text or "No response body"
        status = _status_line(error.response)
        if follow_up:
            return f"Second API request failed with status: {status}. Response: {body}"
        if error.status_code in STATUS_MESSAGES:
            return STATUS_MESSAGES[error.status_code]
        return f"API request failed with status: {status}. Response: {body}"

    def _decode(self, response: ChatCompletion) -> Completion:
        """Turn the first choice into a Completion."""
        choices = _field(response, "choices")
        if choices is None:
            return Completion()
        if not isinstance(choices, list):
            raise ApiError("Failed to parse API response: choices must be an array")
        if not choices:
            return Completion()
        message = _field(choices[0], "message")

        content = _field(message, "content")
        if not isinstance(content, str):
            content = None

        raw_calls = _field(message, "tool_calls")
        if raw_calls is None:
            return Completion(content=content)
        if not isinstance(raw_calls, list):
            raise ApiError("Tool calls must be an array")

        tool_calls = [self._decode_tool_call(tc) for tc in raw_calls]
        logger.debug("Reply requested %d tool call(s)", len(tool_calls))
        return Completion(content=content, tool_calls=tool_calls)

    def _decode_tool_call(self, raw: Any) -> ToolCall:
        call_id = _field(raw, "id")
        if not isinstance(call_id, str):
            raise ApiError("Missing tool call ID")

        function = _field(raw, "function")
        arguments = _field(function, "arguments")
        if arguments is None:
            raise ApiError("Missing tool arguments")
        if not isinstance(arguments, str):
            raise ApiError("Tool arguments must be a JSON string")

        name = _field(function, "name")
        return ToolCall(
            id=call_id,
            name=name if isinstance(name, str) else "",
            arguments=arguments,
            raw=raw if isinstance(raw, dict) else raw.to_dict(),
        )
