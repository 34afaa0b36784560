"""Tests for overlay text generation and the vision backend (no real LLM calls)."""

from __future__ import annotations

import asyncio
import datetime

import pytest

from magic_moment.config import settings
from magic_moment.errors import AnalysisError
from magic_moment.llm import overlay_text, vision
from magic_moment.llm.overlay_text import (
    clean_generated_text,
    fallback_overlay_text,
    generate_overlay_text,
)
from magic_moment.llm.vision import ChatVisionBackend
from tests.conftest import make_jpeg


class FakeResponse:
    def __init__(self, content):
        self.content = content


class FakeChatModel:
    def __init__(self, content=None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.messages = None

    async def ainvoke(self, messages):
        self.messages = messages
        if self.error is not None:
            raise self.error
        return FakeResponse(self.content)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "sk-test")


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "")


class TestFallback:
    def test_city_from_location(self):
        assert fallback_overlay_text("Zurich, Switzerland") == "Zurich"

    def test_location_without_comma(self):
        assert fallback_overlay_text("Lisbon") == "Lisbon"

    def test_date_when_no_location(self):
        assert fallback_overlay_text(None, today=datetime.date(2026, 10, 18)) == "October 18, 2026"

    def test_date_when_city_blank(self):
        assert fallback_overlay_text(" , Portugal", today=datetime.date(2026, 1, 5)) == "January 5, 2026"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('"Zurich\n2025"', "Zurich\n2025"),
        ("'Golden Hour'", "Golden Hour"),
        ('  Alpine\nDreams  ', "Alpine\nDreams"),
        ('Say \\"ciao\\" now', 'Say "ciao" now'),
    ],
)
def test_clean_generated_text(raw, expected):
    assert clean_generated_text(raw) == expected


class TestGenerate:
    def test_not_configured_uses_fallback(self, no_api_key):
        text = asyncio.run(generate_overlay_text("Bern, Switzerland", "Hello", None))
        assert text == "Bern"

    def test_model_output_is_cleaned(self, api_key, monkeypatch):
        model = FakeChatModel('"Grüezi\nZurich"')
        monkeypatch.setattr(overlay_text, "build_chat_model", lambda *a, **kw: model)

        text = asyncio.run(generate_overlay_text("Zurich, Switzerland", "Miss you", "lake view"))

        assert text == "Grüezi\nZurich"
        assert "lake view" in model.messages[1].content

    def test_model_failure_uses_fallback(self, api_key, monkeypatch):
        model = FakeChatModel(error=RuntimeError("rate limited"))
        monkeypatch.setattr(overlay_text, "build_chat_model", lambda *a, **kw: model)
        assert asyncio.run(generate_overlay_text("Porto, Portugal")) == "Porto"

    def test_empty_output_uses_fallback(self, api_key, monkeypatch):
        model = FakeChatModel('""')
        monkeypatch.setattr(overlay_text, "build_chat_model", lambda *a, **kw: model)
        assert asyncio.run(generate_overlay_text("Oslo")) == "Oslo"


class TestChatVisionBackend:
    def test_not_configured(self, no_api_key):
        with pytest.raises(AnalysisError):
            asyncio.run(ChatVisionBackend().request_crop_hints(make_jpeg(), 1.5))

    def test_sends_image_as_base64_block(self, api_key, monkeypatch):
        model = FakeChatModel('{"focalPoint": {"x": 0.5, "y": 0.5}}')
        monkeypatch.setattr(vision, "build_chat_model", lambda *a, **kw: model)

        raw = asyncio.run(ChatVisionBackend().request_crop_hints(make_jpeg(), 1.5))

        assert raw.startswith("{")
        system, human = model.messages
        assert "3:2" in system.content
        image, text = human.content
        assert image["source"]["type"] == "base64"
        assert image["source"]["media_type"] == "image/jpeg"
        assert text["type"] == "text"

    def test_remote_image_sent_by_url(self, api_key, monkeypatch):
        model = FakeChatModel("{}")
        monkeypatch.setattr(vision, "build_chat_model", lambda *a, **kw: model)
        asyncio.run(ChatVisionBackend().request_crop_hints("https://example.com/a.jpg", 1.5))
        image = model.messages[1].content[0]
        assert image["source"] == {"type": "url", "url": "https://example.com/a.jpg"}

    def test_content_blocks_flattened(self, api_key, monkeypatch):
        model = FakeChatModel([{"type": "text", "text": "{\"a\": "}, {"type": "text", "text": "1}"}])
        monkeypatch.setattr(vision, "build_chat_model", lambda *a, **kw: model)
        raw = asyncio.run(ChatVisionBackend().request_crop_hints(make_jpeg(), 1.5))
        assert raw == '{"a": 1}'

    def test_empty_response_is_none(self, api_key, monkeypatch):
        model = FakeChatModel("")
        monkeypatch.setattr(vision, "build_chat_model", lambda *a, **kw: model)
        assert asyncio.run(ChatVisionBackend().request_crop_hints(make_jpeg(), 1.5)) is None
