"""OverlayCompositor: positions, renders and interactively moves text overlays.

The caller owns the overlay list and persistence. The compositor keeps a working
copy for rendering, tracks at most one drag session, and reports position
changes through ``on_overlay_update``:

- pointer moves update the live position immediately and schedule a debounced
  commit (one outstanding timer per session, reset on every move);
- pointer up / leave cancels that timer and commits the final position;
- arrow keys nudge the selected overlay and commit at once.

All positions are clamped to 0-100, so none of these inputs can fail.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Callable

from magic_moment.models.overlay import Overlay
from magic_moment.overlay.config import OverlayConfig
from magic_moment.overlay.debounce import Debouncer, Scheduler
from magic_moment.overlay.interaction import (
    CanvasBounds,
    DragSession,
    DragState,
    clamp_position,
)
from magic_moment.overlay.layout import OverlayLayout, layout_overlay
from magic_moment.overlay.render import render_composite_svg
from magic_moment.utils.keys import arrow_direction

logger = logging.getLogger(__name__)

OverlayUpdateCallback = Callable[[str, dict[str, float]], None]
OverlaySelectCallback = Callable[[str], None]


class OverlayCompositor:
    def __init__(
        self,
        overlays: Iterable[Overlay] = (),
        *,
        on_overlay_update: OverlayUpdateCallback | None = None,
        on_overlay_select: OverlaySelectCallback | None = None,
        selected_overlay_id: str | None = None,
        config: OverlayConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._overlays: list[Overlay] = list(overlays)
        self.on_overlay_update = on_overlay_update
        self.on_overlay_select = on_overlay_select
        self.selected_overlay_id = selected_overlay_id
        self.config = config or OverlayConfig()
        self.scheduler = scheduler
        self._session: DragSession | None = None

    # --- overlay list -------------------------------------------------------

    @property
    def overlays(self) -> list[Overlay]:
        return list(self._overlays)

    def set_overlays(self, overlays: Iterable[Overlay]) -> None:
        """Replace the working copy (e.g. after the caller persisted a change)."""
        self._overlays = list(overlays)

    def get_overlay(self, overlay_id: str) -> Overlay | None:
        for overlay in self._overlays:
            if overlay.id == overlay_id:
                return overlay
        return None

    @property
    def interactive(self) -> bool:
        return self.on_overlay_update is not None

    # --- drag state machine -------------------------------------------------

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._session is not None else DragState.IDLE

    @property
    def session(self) -> DragSession | None:
        return self._session

    def pointer_down(
        self, overlay_id: str, client_x: float, client_y: float, bounds: CanvasBounds
    ) -> bool:
        """Start dragging ``overlay_id``. Returns True if a session began.

        Ignored while another drag is active and when the compositor is not
        interactive.
        """
        if self._session is not None or not self.interactive:
            return False

        overlay = self.get_overlay(overlay_id)
        if overlay is None:
            return False

        self._select(overlay_id)
        position = (overlay.x, overlay.y)
        self._session = DragSession(
            overlay_id=overlay_id,
            drag_start=bounds.to_percent(client_x, client_y),
            original_position=position,
            live_position=position,
            debouncer=Debouncer(self.config.debounce_delay, self.scheduler),
        )
        return True

    def pointer_move(
        self, client_x: float, client_y: float, bounds: CanvasBounds
    ) -> tuple[float, float] | None:
        """Move the dragged overlay to the pointer. Returns the live position."""
        session = self._session
        if session is None:
            return None

        live = clamp_position(*bounds.to_percent(client_x, client_y))
        session.live_position = live
        session.debouncer.call(self._commit, session.overlay_id, live)
        return live

    def pointer_up(self) -> None:
        """End the drag, committing the final live position."""
        session = self._session
        if session is None:
            return
        session.debouncer.cancel()
        self._session = None
        self._commit(session.overlay_id, session.live_position)

    pointer_leave = pointer_up

    # --- keyboard -----------------------------------------------------------

    def key_down(self, key: str, overlay_id: str | None = None) -> bool:
        """Nudge an overlay with an arrow key. Returns False if nothing moved."""
        direction = arrow_direction(key)
        target_id = overlay_id or self.selected_overlay_id
        if direction is None or target_id is None or not self.interactive:
            return False
        if self._session is not None:
            return False

        overlay = self.get_overlay(target_id)
        if overlay is None:
            return False

        step = self.config.keyboard_step_units
        position = clamp_position(overlay.x + direction[0] * step, overlay.y + direction[1] * step)
        self._commit(target_id, position)
        return True

    # --- rendering ----------------------------------------------------------

    def display_position(self, overlay_id: str) -> tuple[float, float] | None:
        """Live drag position for the dragged overlay, stored position otherwise."""
        if self._session is not None and self._session.overlay_id == overlay_id:
            return self._session.live_position
        overlay = self.get_overlay(overlay_id)
        return (overlay.x, overlay.y) if overlay is not None else None

    def layouts(self) -> list[OverlayLayout]:
        """Per-overlay layout in z-order (later entries draw on top)."""
        return [layout_overlay(o, self.display_position(o.id)) for o in self._overlays]

    def render(self, image_href: str | None = None) -> str:
        live = {}
        if self._session is not None:
            live[self._session.overlay_id] = self._session.live_position
        return render_composite_svg(
            self._overlays,
            image_href=image_href,
            selected_overlay_id=self.selected_overlay_id,
            interactive=self.interactive,
            positions=live,
        )

    # --- internals ----------------------------------------------------------

    def _select(self, overlay_id: str) -> None:
        self.selected_overlay_id = overlay_id
        if self.on_overlay_select is not None:
            self.on_overlay_select(overlay_id)

    def _commit(self, overlay_id: str, position: tuple[float, float]) -> None:
        x, y = position
        self._overlays = [
            o.with_updates(x=x, y=y) if o.id == overlay_id else o for o in self._overlays
        ]
        if self.on_overlay_update is not None:
            self.on_overlay_update(overlay_id, {"x": x, "y": y})
        else:
            logger.debug("Position for %s dropped: no update callback", overlay_id)
