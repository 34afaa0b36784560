"""CropHintEngine: one analysis call per image, newest-issued call wins."""

from __future__ import annotations

import logging
import time

from magic_moment.crop.config import CropConfig
from magic_moment.crop.geometry import compute_crop_rect, preview_transform
from magic_moment.crop.hints import parse_crop_hints
from magic_moment.errors import AnalysisError, MagicMomentError
from magic_moment.llm.vision import VisionBackend
from magic_moment.models.crop import CropHints, CropRect, ManualAdjustment, PreviewTransform
from magic_moment.utils.image import ImageInput

logger = logging.getLogger(__name__)


class CropHintEngine:
    """Owns the crop-hints contract around an injected vision backend.

    Every ``analyze`` call is tagged with a monotonically increasing token. A
    result that arrives after a newer call was issued is discarded (``None``),
    whatever order the calls resolve in. Failures never touch ``latest``, so
    callers keep the last good hints until a new analysis succeeds.
    """

    def __init__(self, backend: VisionBackend, config: CropConfig | None = None) -> None:
        self.backend = backend
        self.config = config or CropConfig()
        self._issued = 0
        self._latest: CropHints | None = None

    @property
    def latest(self) -> CropHints | None:
        """Hints from the most recent successful, non-superseded analysis."""
        return self._latest

    @property
    def issued(self) -> int:
        return self._issued

    async def analyze(self, image: ImageInput) -> CropHints | None:
        """Analyze one image.

        Returns the validated hints, or None if a newer call was issued while this
        one was in flight. A superseded call that fails is discarded the same way.

        Raises:
            AnalysisError: backend unreachable, empty or unparsable response.
            ValidationError: response violates the CropHints contract.
        """
        self._issued += 1
        token = self._issued
        start = time.perf_counter()

        try:
            hints = await self._request(image, token)
        except MagicMomentError as e:
            if token != self._issued:
                logger.debug("Discarding failed stale crop analysis #%d: %s", token, e.message)
                return None
            raise

        if token != self._issued:
            logger.debug("Discarding stale crop analysis #%d (latest issued #%d)", token, self._issued)
            return None

        self._latest = hints
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Crop analysis #%d: focal=(%.3f, %.3f) %d regions in %.0fms",
            token,
            hints.focal_point.x,
            hints.focal_point.y,
            len(hints.regions),
            elapsed,
        )
        return hints

    async def _request(self, image: ImageInput, token: int) -> CropHints:
        try:
            raw = await self.backend.request_crop_hints(image, self.config.aspect_ratio)
        except MagicMomentError:
            raise
        except Exception as e:
            logger.warning("Crop analysis #%d failed upstream: %s", token, e)
            raise AnalysisError(f"Vision model unreachable: {e}") from e
        return parse_crop_hints(raw)

    def crop_rect(
        self,
        image_w: int,
        image_h: int,
        hints: CropHints,
        manual_adjustment: ManualAdjustment | None = None,
    ) -> CropRect:
        return compute_crop_rect(
            image_w,
            image_h,
            hints.focal_point,
            target_aspect_ratio=self.config.aspect_ratio,
            manual_adjustment=manual_adjustment,
            adjustment_cap=self.config.adjustment_cap,
        )

    def preview(
        self,
        hints: CropHints,
        manual_adjustment: ManualAdjustment | None = None,
    ) -> PreviewTransform:
        return preview_transform(self.config.preview_scale, hints.focal_point, manual_adjustment)
