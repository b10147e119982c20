"""
Lenient parsing of model output.

Models wrap JSON in ```json fences, add a sentence before the object, or
return an older shape. Everything here turns that text into validated
items or a ContentValidationError, never a half-checked dict.
"""

import json
import logging
import re
from typing import Any, List, Tuple

from pydantic import TypeAdapter, ValidationError

from classroom.generation.errors import ContentValidationError

logger = logging.getLogger(__name__)

FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
JSON_ARRAY = re.compile(r"\[[\s\S]*\]")


def extract_json(text: str) -> Any:
    trimmed = (text or "").strip()
    if not trimmed:
        raise ContentValidationError("The model returned an empty response.")

    candidates = []
    fenced = FENCED_JSON.search(trimmed)
    if fenced:
        candidates.append(fenced.group(1).strip())
    candidates.append(trimmed)
    for pattern in (JSON_OBJECT, JSON_ARRAY):
        match = pattern.search(trimmed)
        if match:
            candidates.append(match.group(0))

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    logger.error(f"Failed to parse model output as JSON. Raw text: {trimmed}")
    raise ContentValidationError("Unable to parse AI response as JSON.", raw_text=trimmed)


def pick_items(data: Any, list_key: str) -> List[Any]:
    """Finds the item list under `list_key`, tolerating a bare list or a lone object."""
    if isinstance(data, dict):
        value = data.get(list_key)
        if isinstance(value, list):
            return value
        if isinstance(value, dict):
            return [value]
        return []
    if isinstance(data, list):
        return data
    return []


def upgrade_legacy_sets(items: List[Any]) -> List[Any]:
    """Older this-or-that output was [{"left": .., "right": ..}]."""
    upgraded = []
    for item in items:
        if isinstance(item, dict) and "options" not in item and "left" in item and "right" in item:
            upgraded.append({"options": [item["left"], item["right"]]})
        elif isinstance(item, list):
            upgraded.append({"options": item})
        else:
            upgraded.append(item)
    return upgraded


def validate_items(items: List[Any], adapter: TypeAdapter) -> Tuple[List[Any], List[str]]:
    """Validates item by item. Returns (valid items, error messages)."""
    valid, errors = [], []
    for i, item in enumerate(items):
        try:
            valid.append(adapter.validate_python(item))
        except ValidationError as e:
            first = e.errors()[0]
            errors.append(f"item {i}: {first['msg']}")
    if errors:
        logger.warning(f"Dropped {len(errors)} malformed item(s): {'; '.join(errors)}")
    return valid, errors
