"""Geometry of the camera view: fit, zoom, pan and widget/image mapping."""

from __future__ import annotations

from typing import Optional

from .signals import Signal

MIN_ZOOM = 0.1
MAX_ZOOM = 20.0
WHEEL_STEP = 1.15

Point = tuple[float, float]
Rect = tuple[float, float, float, float]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ViewTransform:
    """Maps between widget and camera-frame coordinates.

    The frame is fitted to the widget, centred, scaled by the zoom level and
    shifted by the pan offset. Without a frame every widget position maps to
    the image origin.
    """

    def __init__(self, width: int = 640, height: int = 480) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("widget size must be positive")
        self.width = width
        self.height = height
        self.frame_size: Optional[tuple[int, int]] = None
        self.zoom = 1.0
        self.pan_offset: Point = (0.0, 0.0)
        self.overlay_opacity = 0.5
        self.crosshair_visible = True
        self.measure_mode = False
        self.scale = 1.0
        self.image_rect: Rect = (0.0, 0.0, 0.0, 0.0)
        self.zoom_changed = Signal()

    def set_frame_size(self, width: int, height: int) -> None:
        """Set the size of the incoming camera frames."""
        if width <= 0 or height <= 0:
            raise ValueError("frame size must be positive")
        self.frame_size = (width, height)
        self._update_transform()

    def resize(self, width: int, height: int) -> None:
        """Set the size of the widget the frame is shown in."""
        if width <= 0 or height <= 0:
            raise ValueError("widget size must be positive")
        self.width = width
        self.height = height
        self._update_transform()

    def set_zoom(self, zoom: float) -> None:
        self.zoom = _clamp(float(zoom), MIN_ZOOM, MAX_ZOOM)
        self._update_transform()
        self.zoom_changed.emit(self.zoom)

    def set_overlay_opacity(self, opacity: float) -> None:
        self.overlay_opacity = _clamp(float(opacity), 0.0, 1.0)

    def pan(self, dx: float, dy: float) -> None:
        """Shift the view by a mouse drag of (dx, dy) widget pixels."""
        px, py = self.pan_offset
        self.pan_offset = (px + dx, py + dy)

    def _factor(self) -> float:
        return self.scale * self.zoom

    def map_to_image(self, x: float, y: float) -> Point:
        """Image coordinates under widget position (x, y)."""
        if self.frame_size is None or self.scale <= 0:
            return (0.0, 0.0)
        rx, ry, _, _ = self.image_rect
        px, py = self.pan_offset
        factor = self._factor()
        return ((x - rx - px) / factor, (y - ry - py) / factor)

    def map_to_widget(self, x: float, y: float) -> Point:
        """Widget position of image coordinates (x, y)."""
        if self.frame_size is None or self.scale <= 0:
            raise ValueError("no frame to map from")
        rx, ry, _, _ = self.image_rect
        px, py = self.pan_offset
        factor = self._factor()
        return (x * factor + rx + px, y * factor + ry + py)

    def wheel(self, delta: int, x: float, y: float) -> float:
        """Zoom one wheel step toward widget position (x, y); returns the zoom."""
        factor = WHEEL_STEP if delta > 0 else 1.0 / WHEEL_STEP
        new_zoom = _clamp(self.zoom * factor, MIN_ZOOM, MAX_ZOOM)

        cursor = (round(x), round(y))
        before = self.map_to_image(*cursor)
        self.zoom = new_zoom
        self._update_transform()
        after = self.map_to_image(*cursor)

        factor_now = self._factor()
        self.pan((after[0] - before[0]) * factor_now, (after[1] - before[1]) * factor_now)
        self.zoom_changed.emit(self.zoom)
        return self.zoom

    def zoom_text(self) -> str:
        return f"{self.zoom:.1f}x"

    def _update_transform(self) -> None:
        if self.frame_size is None:
            return
        img_w, img_h = self.frame_size
        self.scale = min(self.width / img_w, self.height / img_h) * self.zoom
        scaled_w = img_w * self.scale
        scaled_h = img_h * self.scale
        self.image_rect = (
            (self.width - scaled_w) / 2.0,
            (self.height - scaled_h) / 2.0,
            scaled_w,
            scaled_h,
        )