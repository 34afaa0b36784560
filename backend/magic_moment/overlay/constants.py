"""Rendering scale for overlays on the normalised 0-100 canvas.

Overlay sizes are authored in pixels for a ~500px wide postcard; the SVG canvas
is a 100×100 viewBox, so pixel sizes are divided down to canvas units.
"""

VIEWBOX_SIZE = 100.0

# fontSize px → canvas units.
FONT_SIZE_DIVISOR = 5.0

# strokeWidth px → canvas units.
STROKE_WIDTH_DIVISOR = 20.0

# Wrapped lines sit 1.2 rendered font sizes apart: lineHeight = fontSize / K.
LINE_SPACING = 1.2
LINE_HEIGHT_DIVISOR = FONT_SIZE_DIVISOR / LINE_SPACING

# Wrapping: 45 characters per line at 24px, never fewer than 8.
WRAP_BASE_CHARS = 45
WRAP_BASE_FONT_SIZE = 24.0
WRAP_MIN_CHARS = 8

FONT_FAMILY_MAP = {
    "sans-serif": "Arial, sans-serif",
    "serif": "Georgia, serif",
    "cursive": "'Brush Script MT', cursive",
    "display": "Impact, sans-serif",
}

TEXT_ANCHOR_MAP = {
    "left": "start",
    "center": "middle",
    "right": "end",
}
