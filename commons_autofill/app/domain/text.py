"""Text helpers for Commons extmetadata values."""
from __future__ import annotations

import re
from typing import Any

_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def strip_html(value: Any) -> str:
    """Replace markup with spaces and collapse whitespace."""
    text = "" if value is None else str(value)
    return _WHITESPACE.sub(" ", _TAG.sub(" ", text)).strip()
