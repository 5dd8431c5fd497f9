"""URL detection for cell values."""

from __future__ import annotations

import re

URL_RE = re.compile(r"^(?:https?|ftp)://[^\s/$.?#][^\s\"]*$", re.IGNORECASE)


def is_url(value: object) -> bool:
    """Return whether ``value`` is syntactically an http(s)/ftp URL."""
    if value is None or not isinstance(value, str):
        return False
    return URL_RE.match(value.strip()) is not None
