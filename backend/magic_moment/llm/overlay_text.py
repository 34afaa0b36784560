"""Short overlay text ("Zurich\n2025") from location, photo description and message."""

from __future__ import annotations

import datetime
import logging
import re

from magic_moment.llm.client import build_chat_model, is_configured, message_text
from magic_moment.llm.prompts import OVERLAY_TEXT_SYSTEM, overlay_text_context

logger = logging.getLogger(__name__)

_SURROUNDING_QUOTES_RE = re.compile(r"^[\"']|[\"']$")


def fallback_overlay_text(location_name: str | None, today: datetime.date | None = None) -> str:
    """City part of the location, else today's date as 'October 18, 2026'."""
    if location_name:
        city = location_name.split(",")[0].strip()
        if city:
            return city
    today = today or datetime.date.today()
    return f"{today.strftime('%B')} {today.day}, {today.year}"


def clean_generated_text(text: str) -> str:
    text = _SURROUNDING_QUOTES_RE.sub("", text.strip())
    return text.replace('\\"', '"').replace("\\'", "'")


async def generate_overlay_text(
    location_name: str | None = None,
    message: str | None = None,
    description: str | None = None,
) -> str:
    """Ask the model for overlay text; any failure falls back to location/date."""
    if not is_configured():
        return fallback_overlay_text(location_name)

    from langchain_core.messages import HumanMessage, SystemMessage

    llm = build_chat_model("overlay_text", max_tokens=20, temperature=0.9)
    messages = [
        SystemMessage(content=OVERLAY_TEXT_SYSTEM),
        HumanMessage(content=overlay_text_context(location_name, description, message)),
    ]

    try:
        response = await llm.ainvoke(messages)
    except Exception as e:
        logger.warning("Overlay text generation failed: %s", e)
        return fallback_overlay_text(location_name)

    text = clean_generated_text(message_text(response))
    if not text:
        logger.warning("Overlay text generation returned nothing")
        return fallback_overlay_text(location_name)
    return text
