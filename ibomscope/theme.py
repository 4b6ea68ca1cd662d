"""Shared colours and layout constants for the inspection views."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    def hex(self) -> str:
        """The colour as ``#rrggbb``, alpha left out."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def rgba(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


# Status colours, shared by every panel
PLACED = Color(72, 200, 72)
MISSING = Color(255, 80, 80)
DEFECT = Color(255, 165, 0)
PENDING = Color(140, 148, 172)

# Accent
ACCENT_DARK = Color(100, 136, 232)
ACCENT_LIGHT = Color(68, 102, 204)

# Layout constants
PANEL_MARGIN = 10
PANEL_SPACING = 8
GROUP_MARGIN_H = 6
GROUP_MARGIN_V = 10
GROUP_SPACING = 8
TOOLBAR_ICON = 28
STATUS_PADDING = 6

# Component state colours for overlay rendering
INSPECTED = Color(0, 200, 200)
DEFAULT_COMPONENT = Color(0, 180, 255)

# Overlay rendering
PAD_SELECTED = Color(255, 200, 0, 200)
PAD_NORMAL = Color(180, 160, 80, 180)
PAD_PIN1 = Color(255, 50, 50)
PAD_REGULAR = Color(0, 180, 220)
SILK_SELECTED = Color(255, 255, 100, 220)
SILK_NORMAL = Color(170, 170, 68, 180)
LABEL_SELECTED = Color(255, 255, 200)
LABEL_NORMAL = Color(68, 170, 170, 200)
BOARD_OUTLINE = Color(255, 255, 0)

# Homography point picking
PICK_POINT = Color(255, 50, 50)
PICK_POINT_FILL = Color(255, 50, 50, 100)
PICK_LINE = Color(255, 100, 100, 180)

_STATE_COLORS = {"placed": PLACED, "missing": MISSING, "defect": DEFECT}

_STATUS_CSS = {
    "placed": "color: #48c848; font-weight: bold;",
    "missing": "color: #ff5050; font-weight: bold;",
    "defect": "color: #ffa500; font-weight: bold;",
}


def state_color(state: str) -> Color:
    """Colour for a component state; anything unrecognised is pending."""
    return _STATE_COLORS.get(state, PENDING)


def status_css(state: str) -> str:
    """Inline style for a placed, missing or defect status label."""
    try:
        return _STATUS_CSS[state]
    except KeyError:
        raise ValueError(f"no status style for state {state!r}") from None