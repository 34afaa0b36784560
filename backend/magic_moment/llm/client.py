"""LangChain ChatAnthropic wrapper."""

from __future__ import annotations

from magic_moment.config import settings
from magic_moment.llm.model_router import get_model_for_task


def is_configured() -> bool:
    return bool(settings.anthropic_api_key)


def build_chat_model(task: str, max_tokens: int = 1024, temperature: float | None = None):
    """ChatAnthropic for the given task. Callers check ``is_configured()`` first."""
    from langchain_anthropic import ChatAnthropic

    kwargs = {}
    if temperature is not None:
        kwargs["temperature"] = temperature

    return ChatAnthropic(
        model=get_model_for_task(task),
        api_key=settings.anthropic_api_key,
        max_tokens=max_tokens,
        **kwargs,
    )


def message_text(response) -> str:
    """Flatten a chat response's content (str or list of content blocks) to text."""
    content = response.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
