"""Write the postcard composite as SVG: image underneath, overlays in array order on top."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from html import escape

from magic_moment.models.overlay import Overlay
from magic_moment.overlay.constants import VIEWBOX_SIZE
from magic_moment.overlay.layout import OverlayLayout, layout_overlay


def _num(value: float) -> str:
    return f"{round(value, 4):g}"


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _text_element(layout: OverlayLayout, overlay: Overlay, interactive: bool) -> list[str]:
    x_pct = f"{_num(layout.x)}%"
    y_pct = f"{_num(layout.y)}%"
    pointer = "auto" if interactive else "none"
    style = f"paint-order: stroke fill; pointer-events: {pointer}"
    if interactive:
        style += "; cursor: grab"

    open_tag = (
        f'    <text x="{x_pct}" y="{y_pct}"'
        f' font-size="{_num(layout.font_size)}"'
        f' font-family="{_attr(layout.font_family)}"'
        f' font-weight="bold"'
        f' fill="{_attr(overlay.color)}"'
        f' stroke="{_attr(overlay.stroke_color)}"'
        f' stroke-width="{_num(layout.stroke_width)}"'
        f' text-anchor="{layout.text_anchor}"'
        f' dominant-baseline="middle"'
        f' transform="{layout.transform}"'
        f' style="{style}">'
    )

    if not layout.is_multiline:
        return [f"{open_tag}{escape(layout.lines[0], quote=False)}</text>"]

    lines = [open_tag]
    for line, dy in zip(layout.lines, layout.line_dys):
        lines.append(
            f'      <tspan x="{x_pct}" dy="{_num(dy)}" text-anchor="{layout.text_anchor}">'
            f"{escape(line, quote=False)}</tspan>"
        )
    lines.append("    </text>")
    return lines


def render_composite_svg(
    overlays: Sequence[Overlay],
    image_href: str | None = None,
    selected_overlay_id: str | None = None,
    interactive: bool = False,
    positions: Mapping[str, tuple[float, float]] | None = None,
) -> str:
    """Render overlays over an optional background image.

    ``positions`` overrides x/y per overlay id (live drag positions). When not
    ``interactive`` the document carries no pointer affordances at all.
    """
    positions = positions or {}
    size = _num(VIEWBOX_SIZE)
    root_attrs = (
        f'viewBox="0 0 {size} {size}" xmlns="http://www.w3.org/2000/svg"'
        f' preserveAspectRatio="xMidYMid slice"'
    )
    if not interactive:
        root_attrs += ' pointer-events="none"'

    lines = [f"<svg {root_attrs}>"]

    if image_href:
        lines.append(
            f'  <image href="{_attr(image_href)}" x="0" y="0" width="{size}" height="{size}"'
            f' preserveAspectRatio="xMidYMid slice" />'
        )

    for overlay in overlays:
        layout = layout_overlay(overlay, positions.get(overlay.id))
        g_attrs = f'opacity="{_num(overlay.opacity)}"'
        if interactive:
            g_attrs += f' data-overlay-id="{_attr(overlay.id)}" style="cursor: grab"'
        if overlay.id == selected_overlay_id:
            g_attrs += ' data-selected="true"'
        lines.append(f"  <g {g_attrs}>")
        lines.extend(_text_element(layout, overlay, interactive))
        lines.append("  </g>")

    lines.append("</svg>")
    return "\n".join(lines)
