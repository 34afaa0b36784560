"""Prompt templates for crop analysis and overlay text."""

from __future__ import annotations

from magic_moment.models.crop import MAX_REGIONS, REGION_TYPES

_IMPORTANCE_LADDER = """Rate region importance on a 0-10 scale:
- Face/Eyes: 10 (highest)
- Upper body/Head: 8-9
- Full body: 6-7
- Important objects/text: 5-8
- Background elements: 1-4"""

_FOCAL_RULES = """CRITICAL RULES for focal point detection:
1. For portraits: ALWAYS center on FACE or EYES, never on body center
2. If eyes are visible, the focal point is centered between the eyes
3. If only the face is visible, the focal point is the face center
4. For full body shots, the focal point is at head/upper chest level, NOT the geometric center
5. Never use the geometric center of a person's body as the focal point"""

_RESPONSE_SCHEMA = """Respond with ONLY a JSON object of this exact shape (no prose, no markdown):
{{
  "focalPoint": {{"x": <0-1>, "y": <0-1>}},
  "primarySubject": {{
    "type": "<short subject type>",
    "confidence": <0-10>,
    "box": {{"x": <0-1>, "y": <0-1>, "w": <0-1>, "h": <0-1>}}
  }},
  "regions": [
    {{
      "label": "<what it is>",
      "type": "<one of: {region_types}>",
      "importance": <0-10>,
      "confidence": <0-10>,
      "box": {{"x": <0-1>, "y": <0-1>, "w": <0-1>, "h": <0-1>}}
    }}
  ]
}}
All coordinates are normalized to the image (0-1); box x,y is the top-left corner.
Return at most {max_regions} regions."""

CROP_HINTS_SYSTEM = (
    "You are an intelligent image cropping assistant specialized in finding optimal "
    "{aspect_label} aspect ratio crops for postcards.\n\n"
    + _FOCAL_RULES
    + "\n\nProvide hierarchical object detection.\n"
    + _IMPORTANCE_LADDER
    + "\n\n"
    + _RESPONSE_SCHEMA
)

CROP_HINTS_USER = (
    "Analyze this image and provide smart cropping hints for a {aspect_label} postcard "
    "aspect ratio. Focus on faces/eyes for portraits."
)

OVERLAY_TEXT_SYSTEM = """You are a creative postcard overlay text generator. Generate a SHORT, memorable text overlay for a postcard.

Rules:
- Maximum 2-3 words total
- For multi-line text, put each line on a separate line
- Be specific to the context provided
- Avoid generic phrases like "Wish you were here" or "Adventure awaits"
- If a location is mentioned, you can use it creatively
- Consider the mood and content of the message and image description
- You can use the local language if appropriate (e.g., "Grüezi" for Zurich)

Examples of good overlays:
Zurich
2025

or:

Alpine
Dreams

or:

Golden Hour

Return ONLY the overlay text itself, without quotes or formatting."""

OVERLAY_TEXT_FALLBACK_USER = "Generate a creative postcard overlay text."


def aspect_label(aspect_ratio: float) -> str:
    """1.5 → '3:2', 4/3 → '4:3'; anything else as a decimal ratio."""
    for den in range(1, 17):
        num = aspect_ratio * den
        if abs(num - round(num)) < 1e-6:
            return f"{round(num)}:{den}"
    return f"{aspect_ratio:.3f}:1"


def crop_hints_messages(aspect_ratio: float) -> tuple[str, str]:
    """(system, user) prompt text for one analysis call."""
    label = aspect_label(aspect_ratio)
    system = CROP_HINTS_SYSTEM.format(
        aspect_label=label,
        region_types=", ".join(REGION_TYPES),
        max_regions=MAX_REGIONS,
    )
    return system, CROP_HINTS_USER.format(aspect_label=label)


def overlay_text_context(
    location_name: str | None,
    description: str | None,
    message: str | None,
) -> str:
    parts = []
    if location_name:
        parts.append(f"The photo was taken in {location_name}.")
    if description:
        parts.append(f"The image shows: {description}")
    if message:
        parts.append(f'The postcard message says: "{message}"')
    return " ".join(parts) or OVERLAY_TEXT_FALLBACK_USER
