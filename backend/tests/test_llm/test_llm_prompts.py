"""Tests for prompt construction and model routing."""

from __future__ import annotations

import pytest

from magic_moment.config import settings
from magic_moment.llm.model_router import get_model_for_task
from magic_moment.llm.prompts import (
    OVERLAY_TEXT_FALLBACK_USER,
    aspect_label,
    crop_hints_messages,
    overlay_text_context,
)


@pytest.mark.parametrize(
    "ratio, label",
    [(1.5, "3:2"), (4 / 3, "4:3"), (16 / 9, "16:9"), (1.0, "1:1"), (2 ** 0.5, "1.414:1")],
)
def test_aspect_label(ratio, label):
    assert aspect_label(ratio) == label


def test_crop_hints_messages_fill_placeholders():
    system, user = crop_hints_messages(1.5)
    assert "3:2" in system
    assert "3:2" in user
    assert "{" in system and "{aspect_label}" not in system
    assert "upper_body" in system
    assert "at most 10 regions" in system
    assert '"focalPoint"' in system


def test_overlay_context_combines_fields():
    text = overlay_text_context("Zurich, Switzerland", "a tram at dusk", "Miss you!")
    assert "Zurich, Switzerland" in text
    assert "a tram at dusk" in text
    assert '"Miss you!"' in text


def test_overlay_context_empty():
    assert overlay_text_context(None, None, "") == OVERLAY_TEXT_FALLBACK_USER


def test_model_routing():
    assert get_model_for_task("analyze") == settings.model_mid
    assert get_model_for_task("overlay_text") == settings.model_cheap
    assert get_model_for_task("unknown") == settings.model_cheap
