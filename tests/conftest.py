import io
import json

import httpx
import pytest
from rich.console import Console

from yuchi.providers import ShapesProvider


def chat_response(content: str | None = None, tool_calls: list[dict] | None = None) -> dict:
    """A chat-completion body with a single choice."""
    message = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "shapesinc/ariwa",
        "choices": [{"index": 0, "finish_reason": "stop", "message": message}],
    }


def tool_call(call_id: str, command: str) -> dict:
    return {
        "id": call_id,
        "type": "function",
        "function": {
            "name": "run_shell_command",
            "arguments": json.dumps({"command": command}),
        },
    }


class MockApi:
    """Queue of canned responses served through an httpx mock transport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []
        self.client = httpx.Client(transport=httpx.MockTransport(self.handler))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request to {request.url}")
        return self.responses.pop(0)

    def reply(self, body: dict, status: int = 200) -> None:
        self.responses.append(httpx.Response(status, json=body))

    def fail(self, status: int, text: str = "") -> None:
        self.responses.append(httpx.Response(status, text=text))

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def factory(self, model: str, headers: dict[str, str]) -> ShapesProvider:
        return ShapesProvider(model, headers, http_client=self.client)


@pytest.fixture
def api():
    return MockApi()


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    directory = tmp_path / "config"
    monkeypatch.setenv("YUCHI_CONFIG_DIR", str(directory))
    return directory


@pytest.fixture
def console():
    return Console(file=io.StringIO(), force_terminal=False, width=120)
