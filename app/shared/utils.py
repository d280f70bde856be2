"""Shared utility functions."""

from __future__ import annotations

import json
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return aware UTC datetime."""
    return datetime.now(timezone.utc)


def is_json_object(raw: str) -> bool:
    """Return True when raw text decodes to a JSON object."""
    try:
        decoded = json.loads(raw)
    except ValueError:
        return False
    return isinstance(decoded, dict)
