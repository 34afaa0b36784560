"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import io
import json
from typing import Any, Callable

import pytest
from PIL import Image

from magic_moment.models.overlay import Overlay


# Crop-hints payloads as a vision model would return them

PORTRAIT_HINTS: dict[str, Any] = {
    "focalPoint": {"x": 0.42, "y": 0.31},
    "primarySubject": {
        "type": "person",
        "confidence": 9.5,
        "box": {"x": 0.25, "y": 0.1, "w": 0.35, "h": 0.85},
    },
    "regions": [
        {
            "label": "eyes",
            "type": "eyes",
            "importance": 10,
            "confidence": 8.5,
            "box": {"x": 0.36, "y": 0.27, "w": 0.12, "h": 0.06},
        },
        {
            "label": "face",
            "type": "face",
            "importance": 10,
            "confidence": 9.7,
            "box": {"x": 0.33, "y": 0.18, "w": 0.18, "h": 0.24},
        },
        {
            "label": "woman in red coat",
            "type": "full_body",
            "importance": 6.5,
            "confidence": 9,
            "box": {"x": 0.25, "y": 0.1, "w": 0.35, "h": 0.85},
        },
        {
            "label": "lake shore",
            "type": "landmark",
            "importance": 3,
            "confidence": 7,
            "box": {"x": 0.0, "y": 0.55, "w": 1.0, "h": 0.45},
        },
    ],
}

CENTERED_HINTS: dict[str, Any] = {
    "focalPoint": {"x": 0.5, "y": 0.5},
    "primarySubject": {
        "type": "landmark",
        "confidence": 7,
        "box": {"x": 0.3, "y": 0.3, "w": 0.4, "h": 0.4},
    },
    "regions": [],
}


def hints_json(data: dict[str, Any] = PORTRAIT_HINTS) -> str:
    return json.dumps(data)


def make_overlay(**fields: Any) -> Overlay:
    data: dict[str, Any] = {
        "id": "ov1",
        "text": "Zurich",
        "font_size": 24,
        "font_family": "sans-serif",
        "color": "#ffffff",
        "stroke_color": "#000000",
        "stroke_width": 2,
        "x": 50,
        "y": 50,
        "rotation": 0,
        "opacity": 1,
    }
    data.update(fields)
    return Overlay(**data)


def make_jpeg(width: int = 400, height: int = 300, color: tuple[int, int, int] = (200, 80, 40)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="JPEG")
    return buf.getvalue()


class FakeVisionBackend:
    """Returns queued responses; an Exception instance in the queue is raised."""

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[Any, float]] = []

    async def request_crop_hints(self, image: Any, aspect_ratio: float) -> Any:
        self.calls.append((image, aspect_ratio))
        response = self.responses.pop(0) if self.responses else hints_json()
        if isinstance(response, Exception):
            raise response
        return response


class GatedVisionBackend:
    """Each call blocks on its own asyncio.Event so tests control resolution order.

    An Exception instance among the responses is raised once its gate opens.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.gates: list[asyncio.Event] = []

    async def request_crop_hints(self, image: Any, aspect_ratio: float) -> Any:
        index = len(self.gates)
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response


class _Handle:
    def __init__(self, scheduler: "ManualScheduler", entry: list) -> None:
        self._scheduler = scheduler
        self._entry = entry

    def cancel(self) -> None:
        self._entry[3] = True


class ManualScheduler:
    """Deterministic stand-in for an event loop's ``call_later``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: list[list] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _Handle:
        entry = [self.now + delay, callback, args, False]
        self._timers.append(entry)
        return _Handle(self, entry)

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t[3])

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted((t for t in self._timers if not t[3] and t[0] <= self.now), key=lambda t: t[0])
        for entry in due:
            entry[3] = True
            entry[1](*entry[2])
        self._timers = [t for t in self._timers if not t[3]]


@pytest.fixture
def portrait_hints_json() -> str:
    return hints_json(PORTRAIT_HINTS)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg()
