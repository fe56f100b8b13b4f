"""Error types raised by Yuchi."""


class YuchiError(Exception):
    """Base class for all errors surfaced to the user."""

    label = "Error"
    hint: str | None = None  # What the user can do about it

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class ConfigError(YuchiError):
    """Missing or unreadable stored credential state."""

    label = "Config Error"
    hint = "Run `yuchi --login` to set up your credentials."


class ApiError(YuchiError):
    """Network, HTTP status or malformed response from the remote service."""

    label = "API Error"
    hint = "Check your connection and credentials, then try again."


class ToolError(YuchiError):
    """The shell command could not be run."""

    label = "Tool Error"
    hint = "Make sure the program exists and is on your PATH."


class InputError(YuchiError):
    """Invalid or empty interactive input."""

    label = "Input Error"


class ImageError(YuchiError):
    """Image file missing, unsupported or unreadable."""

    label = "Image Error"
    hint = "Pass an existing PNG or JPEG file with --image."
