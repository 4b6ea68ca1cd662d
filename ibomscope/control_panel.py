"""Overlay, detection and camera settings chosen in the control panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .signals import Signal

DEFAULT_DEVICE_LABEL = "Default (0)"

_WIDTH_RANGE = (320, 4096)
_HEIGHT_RANGE = (240, 2160)
_FPS_RANGE = (1, 120)
_CONFIDENCE_RANGE = (0.1, 1.0)


def _clamp(value, low, high):
    return max(low, min(high, value))


def camera_device_labels(devices: Iterable[str]) -> list[str]:
    """Device names numbered by index, as shown in the device list."""
    return [f"{index}: {name}" for index, name in enumerate(devices)]


def _signal():
    return field(default_factory=Signal, repr=False, compare=False)


@dataclass
class ControlSettings:
    """Current control values, kept within the ranges the controls allow."""

    opacity_percent: int = 50
    show_pads: bool = True
    show_silkscreen: bool = True
    show_fabrication: bool = False
    show_heatmap: bool = False
    confidence: float = 0.5
    auto_inspect: bool = False
    camera_index: int = 0
    camera_width: int = 1920
    camera_height: int = 1080
    camera_fps: int = 30
    live_mode: bool = False
    overlay_opacity_changed: Signal = _signal()
    confidence_changed: Signal = _signal()
    camera_settings_changed: Signal = _signal()

    @property
    def overlay_opacity(self) -> float:
        return self.opacity_percent / 100.0

    def set_opacity_percent(self, percent: int) -> None:
        """Set the overlay opacity in percent, clamped to 0..100."""
        value = _clamp(int(percent), 0, 100)
        if value != self.opacity_percent:
            self.opacity_percent = value
            self.overlay_opacity_changed.emit(self.overlay_opacity)

    def opacity_label(self) -> str:
        return f"{self.opacity_percent}%"

    def set_confidence(self, value: float) -> None:
        """Set the detection confidence, clamped to 0.1..1.0 at two decimals."""
        new = round(_clamp(float(value), *_CONFIDENCE_RANGE), 2)
        if new != self.confidence:
            self.confidence = new
            self.confidence_changed.emit(new)

    def set_camera(self, index: int, width: int, height: int, fps: int) -> None:
        """Apply camera settings, clamped to the supported ranges."""
        if index < 0:
            raise ValueError("camera index cannot be negative")
        self.camera_index = int(index)
        self.camera_width = _clamp(int(width), *_WIDTH_RANGE)
        self.camera_height = _clamp(int(height), *_HEIGHT_RANGE)
        self.camera_fps = _clamp(int(fps), *_FPS_RANGE)
        self.camera_settings_changed.emit(
            self.camera_index, self.camera_width, self.camera_height, self.camera_fps
        )