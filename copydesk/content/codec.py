"""JSON codec for structured fields stored as text.

custom_versions, custom_limits, tags, character_limits, style_rules,
brand_keywords and forbidden_words are persisted as serialized JSON.
Rows written by every era of the schema must stay readable, so decoding
never raises: anything unreadable or of the wrong shape becomes the
caller's default.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional, TypeVar

T = TypeVar("T")


def encode_json(value: Any) -> Optional[str]:
    """Serialize a structured value for storage, keeping None as NULL."""
    if value is None:
        return None
    return json.dumps(value)


def decode_json(
    raw: Optional[str],
    default: T = None,
    expected: Optional[type] = None,
) -> Any | T:
    """Decode a stored JSON field, falling back to default on any failure.

    Args:
        raw: Stored text (may be None, empty, or malformed)
        default: Value returned when raw is absent or unusable
        expected: If given, the decoded value must be an instance of this type

    Returns:
        The decoded value, or default
    """
    if raw is None or raw == "":
        return default
    if not isinstance(raw, (str, bytes, bytearray)):
        # Drivers that hand back already-decoded JSON
        decoded = raw
    else:
        try:
            decoded = json.loads(raw)
        except (ValueError, TypeError):
            return default
    if expected is not None and not isinstance(decoded, expected):
        return default
    return decoded


def decode_mapping(raw: Optional[str], default: Any = None) -> Any:
    """Decode a JSON object field."""
    return decode_json(raw, default, expected=dict)


def decode_list(raw: Optional[str], default: Any = None) -> Any:
    """Decode a JSON array field."""
    return decode_json(raw, default, expected=list)


def normalize_tags(tags: Optional[Iterable[Any]]) -> Optional[list[str]]:
    """De-duplicate tags, keeping first-seen order and dropping blanks."""
    if tags is None:
        return None
    seen: list[str] = []
    for tag in tags:
        text = str(tag).strip()
        if text and text not in seen:
            seen.append(text)
    return seen
