"""Image payload decoding and validation of model responses."""

from __future__ import annotations

import base64
import binascii
import json
import re

from ..errors import AnalysisError, RecipeGenerationError
from ..models import Recipe, sanitize_recipe

_DATA_URL_PREFIX = re.compile(r"^data:[^;,]+;base64,")


def decode_image(image: bytes | str) -> bytes:
    """Return raw image bytes from bytes, base64 text or a data URL."""
    if isinstance(image, bytes) and image.startswith(b"data:"):
        image = image.decode("ascii", errors="replace")

    if isinstance(image, str):
        cleaned = _DATA_URL_PREFIX.sub("", image.strip())
        try:
            data = base64.b64decode(cleaned, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AnalysisError() from e
    else:
        data = bytes(image)

    if not data:
        raise AnalysisError()
    return data


def _strip_fences(text: str) -> str:
    """Remove markdown code fences around a JSON payload."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned.strip()


def parse_ingredient_response(text: str | None) -> list[str]:
    """Validate ``{"ingredients": [...]}`` and return the names."""
    cleaned = _strip_fences(text or "")
    if not cleaned:
        return []

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AnalysisError() from e

    if not isinstance(data, dict):
        raise AnalysisError()
    items = data.get("ingredients")
    if items is None:
        return []
    if not isinstance(items, list):
        raise AnalysisError()

    return [i.strip() for i in items if isinstance(i, str) and i.strip()]


def parse_recipe_response(text: str | None) -> list[Recipe]:
    """Validate the recipe array and sanitize every entry."""
    cleaned = _strip_fences(text or "")
    if not cleaned:
        return []

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise RecipeGenerationError() from e

    if isinstance(data, dict) and isinstance(data.get("recipes"), list):
        data = data["recipes"]
    if not isinstance(data, list):
        raise RecipeGenerationError()
    if not all(isinstance(item, dict) for item in data):
        raise RecipeGenerationError()

    return [sanitize_recipe(item, idx) for idx, item in enumerate(data)]
