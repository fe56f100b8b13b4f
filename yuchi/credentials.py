"""Stored credentials and request authentication."""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from platformdirs import user_config_dir

from yuchi.config import CONFIG_DIR_ENV
from yuchi.errors import ApiError, ConfigError

logger = logging.getLogger(__name__)


def config_path() -> Path:
    """Location of the credentials file."""
    directory = os.environ.get(CONFIG_DIR_ENV) or user_config_dir("yuchi")
    return Path(directory) / "config.json"


@dataclass
class Credentials:
    """The small record kept between runs.

    Only one authentication scheme is used per request: the user auth token
    wins over the API key when both are stored.
    """

    api_key: str | None = None
    auth_token: str | None = None
    app_id: str | None = None
    username: str | None = None
    user_id: str | None = None
    channel_id: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> "Credentials":
        """Load credentials, returning an empty record if none are saved."""
        path = path or config_path()
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Failed to load config: {path} is not a JSON object")

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def save(self, path: Path | None = None) -> None:
        path = path or config_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e
        logger.debug("Saved credentials to %s", path)

    @property
    def uses_token(self) -> bool:
        return bool(self.auth_token)

    def has_credential(self) -> bool:
        return bool(self.auth_token or self.api_key)

    def headers(self, user_id: str, channel_id: str) -> dict[str, str]:
        """Build the authentication headers for one request.

        Raises:
            ConfigError: Token mode without an application id
            ApiError: Neither an auth token nor an API key is available
        """
        if self.auth_token:
            if not self.app_id:
                raise ConfigError("No app ID set for user auth token.")
            return {
                "X-App-ID": self.app_id,
                "X-User-Auth": self.auth_token,
            }
        if self.api_key:
            return {
                "X-User-ID": user_id,
                "X-Channel-ID": channel_id,
                "Authorization": f"Bearer {self.api_key}",
            }
        raise ApiError("No API key or user auth token provided.")
