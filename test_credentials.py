"""
Tests for credential loading and reference classification.
"""

import pytest

from clarifai_tagger.credentials import ConfigurationError, load_credentials
from clarifai_tagger.classifier import classify_reference, is_url
from clarifai_tagger.models import ReferenceKind


def test_load_credentials(tmp_path):
    keys = tmp_path / "keys.txt"
    keys.write_text("app-id\napp-secret\n")

    credentials = load_credentials(str(keys))
    assert credentials.api_key == "app-id"
    assert credentials.api_secret == "app-secret"


def test_load_credentials_strips_whitespace(tmp_path):
    keys = tmp_path / "keys.txt"
    keys.write_text("  app-id \r\napp-secret\t\r\n")

    credentials = load_credentials(str(keys))
    assert credentials.api_key == "app-id"
    assert credentials.api_secret == "app-secret"


def test_load_credentials_from_settings(tmp_path, monkeypatch):
    keys = tmp_path / "keys.txt"
    keys.write_text("app-id\napp-secret\n")
    monkeypatch.setattr("clarifai_tagger.credentials.settings.clarifai_keys_file", str(keys))

    assert load_credentials().api_key == "app-id"


def test_missing_keys_file(tmp_path):
    with pytest.raises(ConfigurationError, match="cannot be found"):
        load_credentials(str(tmp_path / "missing.txt"))


def test_unreadable_keys_file(tmp_path):
    # A directory exists but cannot be read as a file
    with pytest.raises(ConfigurationError, match="Failed to read"):
        load_credentials(str(tmp_path))


def test_undecodable_keys_file(tmp_path):
    keys = tmp_path / "keys.txt"
    keys.write_bytes(b"\xff\xfe\n\xff\n")

    with pytest.raises(ConfigurationError, match="Failed to read"):
        load_credentials(str(keys))


@pytest.mark.parametrize("content", ["app-id\n", "app-id", "app-id\n\n"])
def test_single_key_is_unsupported(tmp_path, content):
    keys = tmp_path / "keys.txt"
    keys.write_text(content)

    with pytest.raises(ConfigurationError, match="Single-key authentication is not supported"):
        load_credentials(str(keys))


def test_empty_keys_file(tmp_path):
    keys = tmp_path / "keys.txt"
    keys.write_text("")

    with pytest.raises(ConfigurationError, match="does not contain an API key"):
        load_credentials(str(keys))


@pytest.mark.parametrize("reference", [
    "http://example.com/a.png",
    "https://example.com",
    "ftp://files.example.org/pics/deer.jpeg",
    "www.example.com/image?id=3",
    "ftp.example.com",
    "lorempixel.com/400/200/",
    "HTTP://Example.COM/Deer.JPG",
])
def test_url_shaped_references(tmp_path, monkeypatch, reference):
    monkeypatch.chdir(tmp_path)
    assert is_url(reference)
    assert classify_reference(reference) is ReferenceKind.REMOTE


@pytest.mark.parametrize("reference", [
    "",
    "not-a-path-or-url",
    "http://",
    "http://example",
    "mailto:someone@example.com",
    "http://exa mple.com/a.png",
    "http://example.com/a.png\n",
    "www.example.com\n/x",
])
def test_unclassifiable_references(tmp_path, monkeypatch, reference):
    monkeypatch.chdir(tmp_path)
    assert classify_reference(reference) is None


def test_local_file_reference(tmp_path):
    image = tmp_path / "deer.jpeg"
    image.write_bytes(b"jpeg")

    assert classify_reference(str(image)) is ReferenceKind.LOCAL


def test_local_file_wins_over_url(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "example.com").write_bytes(b"not a website")

    assert is_url("example.com")
    assert classify_reference("example.com") is ReferenceKind.LOCAL
