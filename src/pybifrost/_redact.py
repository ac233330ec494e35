"""Masking of secrets in DEBUG request logs.

The Home Assistant long-lived access token is write-only: the bridge
accepts it but never returns it, and it must not end up in a log line
either.  Request bodies go through :func:`redact_for_log` before the
transport logs them.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"

_SECRET_KEYS = frozenset({"token", "password", "authorization", "cookie", "set-cookie"})
_SECRET_SUFFIXES = ("_token", "_secret", "_password")
_BEARER = re.compile(r"(?i)\b(bearer)\s+\S+")
_MAX_DEPTH = 20


def is_secret_key(key: str) -> bool:
    """Whether values under *key* are credentials.

    Flags such as ``token_present`` describe a secret without containing it
    and are left readable.
    """
    lowered = key.lower()
    return lowered in _SECRET_KEYS or lowered.endswith(_SECRET_SUFFIXES)


def _redact_text(text: str, max_string: int) -> str:
    text = _BEARER.sub(lambda m: f"{m.group(1)} {REDACTED}", text)
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Copy of *value* with credential fields masked and long strings cut."""
    if _depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _redact_text(value, max_string)
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"

    depth = _depth + 1
    if isinstance(value, Mapping):
        return {
            str(key): REDACTED if is_secret_key(str(key)) else redact_for_log(item, max_string=max_string, _depth=depth)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [redact_for_log(item, max_string=max_string, _depth=depth) for item in value]
    return repr(value)
