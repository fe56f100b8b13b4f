"""Command implementations behind the CLI flags."""

import logging
import re
import uuid
from pathlib import Path

import httpx
from prompt_toolkit import prompt
from rich.console import Console

from yuchi.agent import converse
from yuchi.config import (
    APP_ID,
    AUTH_NONCE_URL,
    AUTHORIZE_URL,
    DEFAULT_MODEL,
    IMAGE_URL_PATTERN,
    MODEL_PREFIX,
    VALIDATION_PROMPT,
)
from yuchi.credentials import Credentials
from yuchi.errors import ApiError, ConfigError, InputError
from yuchi.permissions import ConsoleConfirmer
from yuchi.providers import ShapesProvider
from yuchi.ui import StatusProgress, display_command_result, display_response

logger = logging.getLogger(__name__)


def read_secret(message: str) -> str:
    """Read a line without echoing it."""
    try:
        return prompt(message, is_password=True)
    except (EOFError, KeyboardInterrupt) as e:
        raise InputError("Input aborted") from e


def _ask(
    question: str,
    credentials: Credentials,
    model: str,
    console: Console,
    image_path: str | None = None,
    http_client: httpx.Client | None = None,
) -> str:
    """Run one question through the driver with terminal collaborators."""
    if not credentials.user_id:
        raise ConfigError("No user ID set. Run `yuchi --login` first.")
    if not credentials.channel_id:
        raise ConfigError("No channel ID set. Run `yuchi --login` first.")

    return converse(
        question,
        credentials,
        model,
        credentials.user_id,
        credentials.channel_id,
        image_path,
        confirm=ConsoleConfirmer(console=console),
        provider_factory=lambda m, headers: ShapesProvider(m, headers, http_client=http_client),
        progress=StatusProgress(console),
        on_tool_result=lambda command, outcome: display_command_result(command, outcome.text, console),
    )


def _ensure_ids(config: Credentials, console: Console) -> None:
    if config.user_id is None:
        config.user_id = str(uuid.uuid4())
        console.print("Generated new user ID.", style="yellow")
    if config.channel_id is None:
        config.channel_id = str(uuid.uuid4())
        console.print("Generated new channel ID.", style="yellow")


def login(console: Console | None = None, http_client: httpx.Client | None = None) -> None:
    """Authenticate with an API key or a user auth token and save it."""
    console = console or Console()
    config = Credentials.load()
    method = read_secret("Choose authentication method (1: API key, 2: User auth token): ").strip()

    if method == "1":
        key = read_secret("Enter API key: ")
        if not key.strip():
            raise InputError("API key cannot be empty")

        _ensure_ids(config, console)
        config.save()

        candidate = Credentials(
            api_key=key, user_id=config.user_id, channel_id=config.channel_id,
        )
        reply = _ask(VALIDATION_PROMPT, candidate, DEFAULT_MODEL, console, http_client=http_client)
        if not reply:
            raise ApiError("API key validation failed: No response received")

        config.api_key = key
        config.app_id = None
        config.auth_token = None
        config.save()
        console.print("API key validated and saved successfully!", style="green")

    elif method == "2":
        config.app_id = APP_ID
        _ensure_ids(config, console)
        config.save()

        console.print("Click on the link to authorize the application:", style="yellow")
        console.print(f"{AUTHORIZE_URL}?app_id={APP_ID}", style="blue", markup=False)
        console.print("\nAfter logging in to ShapesAI and approving the authorization request,")
        console.print("you will be given a one-time code. Copy and paste that code here.")

        code = read_secret("Enter the one-time code: ")
        if not code.strip():
            raise InputError("One-time code cannot be empty")

        token = exchange_code(code, http_client=http_client)
        candidate = Credentials(
            auth_token=token, app_id=APP_ID,
            user_id=config.user_id, channel_id=config.channel_id,
        )
        reply = _ask(VALIDATION_PROMPT, candidate, DEFAULT_MODEL, console, http_client=http_client)
        if not reply:
            raise ApiError("User auth token validation failed: No response received")

        config.auth_token = token
        config.api_key = None
        config.save()
        console.print("User auth token validated and saved successfully!", style="green")

    else:
        raise InputError(
            "Invalid authentication method. Choose 1 for API key or 2 for user auth token."
        )


def exchange_code(code: str, http_client: httpx.Client | None = None) -> str:
    """Trade a one-time authorization code for a user auth token."""
    post = http_client.post if http_client else httpx.post
    try:
        response = post(AUTH_NONCE_URL, json={"app_id": APP_ID, "code": code})
    except httpx.HTTPError as e:
        raise ApiError(f"Failed to exchange one-time code: {e}") from e

    if response.is_error:
        raise ApiError(
            f"Failed to exchange one-time code with status: {response.status_code}. "
            f"Response: {response.text}"
        )
    try:
        data = response.json()
    except ValueError as e:
        raise ApiError(f"Failed to parse auth token response: {e}") from e

    token = data.get("auth_token") if isinstance(data, dict) else None
    if not isinstance(token, str):
        raise ApiError("Missing auth_token in response")
    return token


def set_shape(username: str, console: Console | None = None, http_client: httpx.Client | None = None) -> None:
    """Validate a shape's model and remember its username."""
    console = console or Console()
    config = Credentials.load()
    if not config.has_credential():
        raise ConfigError("No API key or user auth token set. Run `yuchi --login` first.")

    model = f"{MODEL_PREFIX}{username}"
    reply = _ask(VALIDATION_PROMPT, config, model, console, http_client=http_client)
    if not reply:
        raise ApiError("Username validation failed: No response received.")

    config = Credentials.load()
    config.username = username
    config.save()
    console.print(
        f"Username '{username}' validated and saved successfully! Using model: {model}",
        style="green", markup=False,
    )


def logout(console: Console | None = None) -> None:
    """Forget every stored credential and id."""
    console = console or Console()
    Credentials().save()
    console.print(
        "API key, app ID, auth token, username, user ID, and channel ID cleared!",
        style="green",
    )


def ask(
    question: str,
    model: str | None = None,
    image_path: str | None = None,
    console: Console | None = None,
    http_client: httpx.Client | None = None,
) -> str:
    """Answer a question with the stored credentials and print the reply."""
    console = console or Console()
    config = Credentials.load()
    if not config.has_credential():
        raise ConfigError("No API key or user auth token set. Run `yuchi --login` first.")

    default_model = f"{MODEL_PREFIX}{config.username}" if config.username else DEFAULT_MODEL
    reply = _ask(question, config, model or default_model, console, image_path, http_client)
    display_response(reply, console)
    return reply


def download_image(
    response: str,
    dest_dir: Path | None = None,
    console: Console | None = None,
    http_client: httpx.Client | None = None,
) -> Path:
    """Save the image linked in a reply and return where it was written."""
    console = console or Console()
    match = re.search(IMAGE_URL_PATTERN, response)
    if match is None:
        raise ApiError("No valid image URL found in response")
    url = match.group(0)

    progress = StatusProgress(console)
    progress.show("Downloading image...")
    try:
        try:
            if http_client:
                res = http_client.get(url)
            else:
                res = httpx.get(url, follow_redirects=True)
        except httpx.HTTPError as e:
            raise ApiError(f"Failed to download image: {e}") from e
        if res.is_error:
            raise ApiError(f"Failed to download image, status: {res.status_code}")

        progress.set_message("Saving image...")

        path = (dest_dir or Path.cwd()) / f"yuchi_image_{uuid.uuid4()}.png"
        try:
            path.write_bytes(res.content)
        except OSError as e:
            raise ApiError(f"Failed to write image to '{path}': {e}") from e
    finally:
        progress.hide()

    logger.debug("Downloaded %s to %s", url, path)
    console.print(f"Image saved as '{path}'", style="green", markup=False)
    return path
