"""Analysis boundary: raw vision-model output → validated, immutable CropHints.

Validation happens exactly once, here. Everything downstream takes ``CropHints``
as trusted.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import ValidationError as SchemaError

from magic_moment.errors import AnalysisError, ValidationError
from magic_moment.models.crop import CropHints

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def decode_json_payload(text: str | bytes) -> Any:
    """Decode a model response, tolerating markdown fences and surrounding prose."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")

    cleaned = _FENCE_OPEN_RE.sub("", text.strip())
    cleaned = _FENCE_CLOSE_RE.sub("", cleaned).strip()

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        error = e

    # Prose around the payload: fall back to the outermost {...}
    match = _OBJECT_RE.search(cleaned)
    if match is None:
        raise AnalysisError(f"Vision model returned unparsable content: {error}") from error
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Vision model returned unparsable content: {e}") from e


def _describe(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors[:5]:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    more = f" (+{len(errors) - 5} more)" if len(errors) > 5 else ""
    return "; ".join(parts) + more


def parse_crop_hints(content: str | bytes | dict[str, Any] | None) -> CropHints:
    """Parse and strictly validate a crop-hints response.

    Raises:
        AnalysisError: empty or unparsable content.
        ValidationError: parsed JSON that does not satisfy the CropHints contract.
            Out-of-range values are never clamped.
    """
    if content is None:
        raise AnalysisError("Vision model returned no content")

    if isinstance(content, (str, bytes)):
        if not content.strip():
            raise AnalysisError("Vision model returned no content")
        data = decode_json_payload(content)
    else:
        data = content

    if not isinstance(data, dict):
        raise ValidationError(f"Crop hints must be a JSON object, got {type(data).__name__}")

    try:
        return CropHints.model_validate(data)
    except SchemaError as e:
        errors = e.errors(include_url=False, include_context=False)
        raise ValidationError(f"Invalid crop hints: {_describe(errors)}", errors=errors) from e
