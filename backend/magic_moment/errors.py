"""Domain exceptions. Each carries the HTTP status the API layer maps it to."""

from __future__ import annotations


class MagicMomentError(Exception):
    """Base exception for all crop/overlay errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class AnalysisError(MagicMomentError):
    """Vision collaborator unreachable, returned nothing, or returned unparsable content."""

    status_code = 502


class ValidationError(MagicMomentError):
    """Well-formed analysis response with an out-of-range, missing or wrong-enum field."""

    status_code = 422

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class InvalidDimensionsError(MagicMomentError):
    """Zero/negative image dimensions or a degenerate aspect ratio."""

    status_code = 400


class ImageProcessingError(MagicMomentError):
    """Image could not be decoded or the pixel extraction failed."""

    status_code = 500


class OverlayNotFoundError(MagicMomentError):
    status_code = 404

    def __init__(self, overlay_id: str) -> None:
        super().__init__(f"Overlay with id '{overlay_id}' not found")
        self.overlay_id = overlay_id
