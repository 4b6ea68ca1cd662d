"""On-screen measurement of distances, angles, polygon areas and pin pitch."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .signals import Signal

log = logging.getLogger(__name__)

Point = tuple[float, float]


class Mode(enum.Enum):
    DISTANCE = "distance"
    ANGLE = "angle"
    AREA = "area"
    PIN_PITCH = "pitch"


# Number of points that completes a measurement; None means closed manually.
_REQUIRED_POINTS = {
    Mode.DISTANCE: 2,
    Mode.ANGLE: 3,
    Mode.PIN_PITCH: 2,
    Mode.AREA: None,
}


@dataclass
class MeasureResult:
    mode: Mode
    value_pixels: float = 0.0
    value_mm: float = 0.0
    points: list[Point] = field(default_factory=list)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def angle(a: Sequence[float], vertex: Sequence[float], b: Sequence[float]) -> float:
    """Angle in degrees at ``vertex`` between the rays to ``a`` and ``b``."""
    ax, ay = a[0] - vertex[0], a[1] - vertex[1]
    bx, by = b[0] - vertex[0], b[1] - vertex[1]
    mag_a = math.hypot(ax, ay)
    mag_b = math.hypot(bx, by)
    if mag_a < 1e-9 or mag_b < 1e-9:
        return 0.0
    cos_angle = max(-1.0, min(1.0, (ax * bx + ay * by) / (mag_a * mag_b)))
    return math.degrees(math.acos(cos_angle))


def polygon_area(points: Iterable[Sequence[float]]) -> float:
    """Area of a simple polygon by the shoelace formula."""
    pts = list(points)
    if not pts:
        return 0.0
    twice_area = sum(
        p[0] * q[1] - q[0] * p[1] for p, q in zip(pts, pts[1:] + pts[:1])
    )
    return abs(twice_area) / 2.0


class Measurement:
    """Collects points and turns them into measurements for the current mode."""

    def __init__(self) -> None:
        self.mode = Mode.DISTANCE
        self.pixels_per_mm = 0.0
        self._points: list[Point] = []
        self._history: list[MeasureResult] = []
        self.point_added = Signal()
        self.measurement_complete = Signal()
        self.mode_changed = Signal()

    @property
    def points(self) -> list[Point]:
        return list(self._points)

    @property
    def history(self) -> list[MeasureResult]:
        return list(self._history)

    def set_mode(self, mode: Mode) -> None:
        if self.mode != mode:
            self.mode = mode
            self.clear_points()
            self.mode_changed.emit(mode)

    def set_calibration(self, pixels_per_mm: float) -> None:
        self.pixels_per_mm = float(pixels_per_mm)
        log.info("Measurement: calibration set to %.2f px/mm", self.pixels_per_mm)

    def is_calibrated(self) -> bool:
        return self.pixels_per_mm > 0

    def add_point(self, point: Sequence[float]) -> None:
        """Add a point; completes the measurement once the mode has enough."""
        pt = (float(point[0]), float(point[1]))
        self._points.append(pt)
        self.point_added.emit(pt, len(self._points))

        required = _REQUIRED_POINTS[self.mode]
        if required is None or len(self._points) < required:
            return
        result = self.current_result()
        if result is None:
            return
        self._history.append(result)
        self.measurement_complete.emit(result)
        log.info(
            "Measurement: %s = %.2f px (%.3f mm)",
            self.mode.value,
            result.value_pixels,
            result.value_mm,
        )
        self.clear_points()

    def clear_points(self) -> None:
        self._points.clear()

    def current_result(self) -> Optional[MeasureResult]:
        """The measurement for the current points, or None if too few."""
        pts = list(self._points)
        ppmm = self.pixels_per_mm
        if self.mode in (Mode.DISTANCE, Mode.PIN_PITCH):
            if len(pts) < 2:
                return None
            px = distance(pts[0], pts[1])
            mm = px / ppmm if self.is_calibrated() else 0.0
        elif self.mode is Mode.ANGLE:
            if len(pts) < 3:
                return None
            px = angle(pts[0], pts[1], pts[2])
            mm = px  # degrees, not millimetres
        else:
            if len(pts) < 3:
                return None
            px = polygon_area(pts)
            mm = px / (ppmm * ppmm) if self.is_calibrated() else 0.0
        return MeasureResult(mode=self.mode, value_pixels=px, value_mm=mm, points=pts)

    def clear_history(self) -> None:
        self._history.clear()