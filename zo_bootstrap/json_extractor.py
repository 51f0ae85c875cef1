"""
Field extraction from JSON configuration blobs.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .constants import NULL_SENTINEL
from .errors import MissingFieldError, ParseError


@dataclass(frozen=True)
class FieldSpec:
    """One field to pull out of a blob."""

    name: str
    required: bool = True
    default: Optional[str] = None
    alias: Optional[str] = None


def _as_text(value: Any) -> Optional[str]:
    """Render a JSON value the way ``jq -r`` prints it; None for absent/null."""
    if value is None:
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, (dict, list)):
        text = json.dumps(value, separators=(",", ":"))
    else:
        text = str(value)
    return None if text == NULL_SENTINEL else text


def parse_object(blob: str, source: str = "configuration") -> Dict[str, Any]:
    """Decode ``blob`` and require a JSON object at the top level."""
    if not blob or not blob.strip():
        raise ParseError(source, "empty value")
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise ParseError(source, f"{e.msg} at line {e.lineno} column {e.colno}") from e
    if not isinstance(data, dict):
        raise ParseError(source, f"expected an object, got {type(data).__name__}")
    return data


def extract(
    blob: str, fields: Sequence[FieldSpec], source: str = "configuration"
) -> Dict[str, Optional[str]]:
    """
    Extract named fields from a JSON object.

    Each field is looked up by name, then by its alias. Missing values, JSON
    null and the text "null" are all treated as absent; absent fields take
    their default, and a required field with no default raises.

    Args:
        blob: JSON text
        fields: Fields to extract, in order
        source: Name of the configuration key, used in error messages

    Returns:
        Mapping of field name to text value (None for absent optional fields)

    Raises:
        ParseError: If the blob is not a JSON object
        MissingFieldError: If a required field is absent
    """
    data = parse_object(blob, source)
    result: Dict[str, Optional[str]] = {}

    for spec in fields:
        value = _as_text(data.get(spec.name))
        if value is None and spec.alias:
            value = _as_text(data.get(spec.alias))
        if value is None:
            value = spec.default
        if value is None and spec.required:
            raise MissingFieldError(source, spec.name)
        result[spec.name] = value

    return result
