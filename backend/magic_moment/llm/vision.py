"""Vision collaborator: sends the image to a chat model and returns its raw answer."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from magic_moment.errors import AnalysisError
from magic_moment.llm.client import build_chat_model, is_configured, message_text
from magic_moment.llm.prompts import crop_hints_messages
from magic_moment.utils.image import ImageInput, to_data_url

logger = logging.getLogger(__name__)


class VisionBackend(Protocol):
    """Anything that can turn an image into a crop-hints JSON payload.

    May return the raw text (possibly fenced), an already-decoded dict, or None
    when the model produced nothing. Transport failures are raised as-is; the
    engine converts them to ``AnalysisError``.
    """

    async def request_crop_hints(
        self, image: ImageInput, aspect_ratio: float
    ) -> str | dict[str, Any] | None: ...


def _image_block(url: str) -> dict[str, Any]:
    """Anthropic image content block for a data URL or a remote http(s) URL."""
    if url.startswith("data:"):
        header, _, payload = url.partition(",")
        media_type = header[len("data:"):].split(";")[0] or "image/jpeg"
        return {
            "type": "image",
            "source": {"type": "base64", "media_type": media_type, "data": payload},
        }
    return {"type": "image", "source": {"type": "url", "url": url}}


class ChatVisionBackend:
    """Default backend: LangChain ChatAnthropic with an image content block."""

    def __init__(self, max_tokens: int = 1024) -> None:
        self.max_tokens = max_tokens

    async def request_crop_hints(self, image: ImageInput, aspect_ratio: float) -> str | None:
        if not is_configured():
            raise AnalysisError("Vision model not configured, set ANTHROPIC_API_KEY in .env")

        from langchain_core.messages import HumanMessage, SystemMessage

        system_text, user_text = crop_hints_messages(aspect_ratio)
        image_block = _image_block(to_data_url(image))

        llm = build_chat_model("analyze", max_tokens=self.max_tokens)
        messages = [
            SystemMessage(content=system_text),
            HumanMessage(
                content=[
                    image_block,
                    {"type": "text", "text": user_text},
                ]
            ),
        ]

        response = await llm.ainvoke(messages)
        text = message_text(response)
        logger.debug("Vision response: %d chars", len(text))
        return text or None
