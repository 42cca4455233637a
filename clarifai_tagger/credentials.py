"""
Credential loading for the Clarifai Tagger.

The keys file is plain text: the App ID on the first line and the App Secret
on the second. Clarifai's single API-key scheme is not supported yet, so a
file with only one key is rejected instead of silently falling back.
"""

import os
from typing import Optional
from .models import Credentials
from .config import settings
from .logging import get_logger


logger = get_logger("credentials")


class ConfigurationError(Exception):
    """Raised when the tagger cannot be configured."""
    pass


def load_credentials(path: Optional[str] = None) -> Credentials:
    """Read the App ID and App Secret from a keys file.

    Args:
        path: Path to the keys file. Defaults to the CLARIFAI_KEYS_FILE setting.

    Returns:
        The loaded credentials.

    Raises:
        ConfigurationError: If the file is missing, unreadable, has no key,
            or only has one key (single-key authentication).
    """
    path = path or settings.clarifai_keys_file

    if not os.path.exists(path):
        logger.error(f"❌ Keys file not found: {path}")
        raise ConfigurationError(f"The file that contains API access keys cannot be found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"❌ Failed to read keys file {path}: {e}")
        raise ConfigurationError(f"Failed to read keys file {path}: {e}") from e

    api_key = lines[0].strip() if len(lines) > 0 else ""
    api_secret = lines[1].strip() if len(lines) > 1 else ""

    if not api_key:
        raise ConfigurationError(f"Keys file {path} does not contain an API key")

    if not api_secret:
        # TODO: build an API-key client here once single-key auth is supported
        raise ConfigurationError(
            "Single-key authentication is not supported: "
            f"keys file {path} must contain an App ID and an App Secret"
        )

    logger.debug(f"🔑 Loaded credentials from {path}")
    return Credentials(api_key=api_key, api_secret=api_secret)
