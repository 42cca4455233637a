"""
Classification of image references as local files or remote URLs.
"""

import os
import re
from typing import Optional
from .models import ReferenceKind


URL_PATTERN = re.compile(
    r"^((https?|ftp)://|(www|ftp)\.)?[a-z0-9-]+(\.[a-z0-9-]+)+([/?].*)?\Z",
    re.IGNORECASE,
)


def is_url(reference: str) -> bool:
    """Check whether a string is shaped like a web URL."""
    return URL_PATTERN.match(reference) is not None


def classify_reference(reference: str) -> Optional[ReferenceKind]:
    """Decide whether a reference is a local file or a remote URL.

    An existing filesystem entry always wins, even if the name looks like a
    URL. Returns None when the reference is neither.
    """
    if os.path.exists(reference):
        return ReferenceKind.LOCAL
    if is_url(reference):
        return ReferenceKind.REMOTE
    return None
