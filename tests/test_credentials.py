"""Tests for stored credentials and images."""

import json

import pytest

from yuchi.credentials import Credentials, config_path
from yuchi.errors import ApiError, ConfigError, ImageError
from yuchi.images import image_to_data_url


def test_config_path_follows_env(config_dir):
    assert config_path() == config_dir / "config.json"


def test_load_without_file_is_empty():
    assert Credentials.load() == Credentials()


def test_save_then_load(config_dir):
    Credentials(api_key="k", user_id="u", channel_id="c").save()
    stored = json.loads((config_dir / "config.json").read_text())
    assert stored["api_key"] == "k"
    assert stored["auth_token"] is None
    assert Credentials.load() == Credentials(api_key="k", user_id="u", channel_id="c")


def test_unknown_keys_ignored(config_dir):
    config_dir.mkdir()
    (config_dir / "config.json").write_text('{"username": "kitty", "theme": "dark"}')
    assert Credentials.load().username == "kitty"


@pytest.mark.parametrize("text", ["{broken", "[1, 2]"])
def test_malformed_file(config_dir, text):
    config_dir.mkdir()
    (config_dir / "config.json").write_text(text)
    with pytest.raises(ConfigError, match="Failed to load config"):
        Credentials.load()


def test_token_takes_precedence():
    creds = Credentials(api_key="k", auth_token="t", app_id="a")
    assert creds.uses_token
    assert creds.headers("u", "c") == {"X-App-ID": "a", "X-User-Auth": "t"}


def test_key_headers():
    assert Credentials(api_key="k").headers("u", "c") == {
        "X-User-ID": "u",
        "X-Channel-ID": "c",
        "Authorization": "Bearer k",
    }


def test_token_needs_app_id():
    with pytest.raises(ConfigError, match="No app ID"):
        Credentials(auth_token="t").headers("u", "c")


def test_no_credential():
    assert not Credentials().has_credential()
    with pytest.raises(ApiError):
        Credentials().headers("u", "c")


@pytest.mark.parametrize("name, mime", [
    ("a.png", "image/png"),
    ("a.jpg", "image/jpeg"),
    ("a.jpeg", "image/jpeg"),
])
def test_data_url(tmp_path, name, mime):
    path = tmp_path / name
    path.write_bytes(b"abc")
    assert image_to_data_url(str(path)) == f"data:{mime};base64,YWJj"


def test_unsupported_extension(tmp_path):
    path = tmp_path / "a.bmp"
    path.write_bytes(b"abc")
    with pytest.raises(ImageError, match="Use PNG or JPEG"):
        image_to_data_url(str(path))


@pytest.mark.parametrize("name", ["a.PNG", "a.JPEG", "a.Jpg"])
def test_extension_is_case_sensitive(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"abc")
    with pytest.raises(ImageError, match="Unsupported image format"):
        image_to_data_url(str(path))
