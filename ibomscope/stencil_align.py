"""Solder paste stencil alignment: compares detected fiducials with expected ones."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from PIL import Image, ImageDraw

from .signals import Signal

log = logging.getLogger(__name__)

Point = tuple[float, float]

# Overlay colours (RGB)
_EXPECTED = (255, 255, 0)
_GOOD = (0, 255, 0)
_OK = (255, 200, 0)
_BAD = (255, 0, 0)


@dataclass
class FiducialMark:
    expected: Point
    detected: Point = (0.0, 0.0)
    error: float = 0.0
    found: bool = False


def find_nearest(expected: Sequence[float], detections: Iterable[Sequence[float]]) -> Point:
    """The detection closest to ``expected``; the first one wins a tie."""
    points = [(float(d[0]), float(d[1])) for d in detections]
    if not points:
        raise ValueError("no detections to choose from")
    target = (float(expected[0]), float(expected[1]))
    return min(points, key=lambda p: math.dist(p, target))


def _ipoint(p: Sequence[float]) -> tuple[int, int]:
    return (round(p[0]), round(p[1]))


def _cross(draw: ImageDraw.ImageDraw, c: tuple[int, int], size: int, color, width: int) -> None:
    half = size // 2
    x, y = c
    draw.line([(x - half, y), (x + half, y)], fill=color, width=width)
    draw.line([(x, y - half), (x, y + half)], fill=color, width=width)


def _tilted_cross(draw: ImageDraw.ImageDraw, c: tuple[int, int], size: int, color, width: int) -> None:
    half = size // 2
    x, y = c
    draw.line([(x - half, y - half), (x + half, y + half)], fill=color, width=width)
    draw.line([(x - half, y + half), (x + half, y - half)], fill=color, width=width)


def _arrow(
    draw: ImageDraw.ImageDraw,
    start: tuple[int, int],
    end: tuple[int, int],
    color,
    width: int,
    tip_ratio: float = 0.3,
) -> None:
    draw.line([start, end], fill=color, width=width)
    dx, dy = end[0] - start[0], end[1] - start[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return
    tip = length * tip_ratio
    base_angle = math.atan2(dy, dx)
    for offset in (math.pi / 4, -math.pi / 4):
        a = base_angle + math.pi + offset
        wing = (end[0] + tip * math.cos(a), end[1] + tip * math.sin(a))
        draw.line([end, _ipoint(wing)], fill=color, width=width)


class StencilAlign:
    """Tracks how far detected fiducials are from where they should be."""

    def __init__(self) -> None:
        self._fiducials: list[FiducialMark] = []
        self.pixels_per_mm = 0.0
        self._was_aligned = False
        self.fiducial_detected = Signal()
        self.alignment_achieved = Signal()
        self.alignment_lost = Signal()

    @property
    def fiducials(self) -> tuple[FiducialMark, ...]:
        return tuple(self._fiducials)

    def set_expected_fiducials(self, positions: Iterable[Sequence[float]]) -> None:
        """Replace the fiducials with fresh, undetected marks at ``positions``."""
        self._fiducials = [
            FiducialMark(expected=(float(p[0]), float(p[1]))) for p in positions
        ]
        log.info("StencilAlign: set %d expected fiducial positions", len(self._fiducials))

    def set_pixels_per_mm(self, ppmm: float) -> None:
        self.pixels_per_mm = float(ppmm)

    def detect_fiducials(self, detections: Iterable[Sequence[float]]) -> None:
        """Match candidate mark centres (in pixels) to the expected fiducials."""
        if not self._fiducials:
            return
        points = [(float(d[0]), float(d[1])) for d in detections]
        ppmm = self.pixels_per_mm
        max_dist_px = ppmm * 5.0 if ppmm > 0 else 100.0

        for index, fid in enumerate(self._fiducials):
            if not points:
                fid.found = False
                continue
            nearest = find_nearest(fid.expected, points)
            dist = math.dist(nearest, fid.expected)
            if dist < max_dist_px:
                fid.detected = nearest
                fid.found = True
                fid.error = dist / ppmm if ppmm > 0 else dist
                self.fiducial_detected.emit(index, fid.error)
            else:
                fid.found = False

        aligned = self.is_aligned()
        if aligned and not self._was_aligned:
            self.alignment_achieved.emit()
            log.info("StencilAlign: alignment achieved")
        elif not aligned and self._was_aligned:
            self.alignment_lost.emit()
            log.warning("StencilAlign: alignment lost")
        self._was_aligned = aligned

    def alignment_quality(self) -> float:
        """Score in [0, 1]: coverage of found marks times an error penalty."""
        found = [f for f in self._fiducials if f.found]
        if not found:
            return 0.0
        avg_error = sum(f.error for f in found) / len(found)
        coverage = len(found) / len(self._fiducials)
        return coverage * math.exp(-avg_error * 10.0)

    def max_error(self) -> float:
        return max((f.error for f in self._fiducials if f.found), default=0.0)

    def is_aligned(self, threshold_mm: float = 0.1) -> bool:
        """True when every fiducial is found within ``threshold_mm``."""
        if not self._fiducials:
            return False
        return all(f.found and f.error <= threshold_mm for f in self._fiducials)

    def draw_alignment_overlay(self, image: Image.Image) -> Image.Image:
        """A copy of ``image`` with expected, detected and error markers drawn."""
        output = image.convert("RGB") if image.mode != "RGB" else image.copy()
        draw = ImageDraw.Draw(output)

        for fid in self._fiducials:
            exp = _ipoint(fid.expected)
            _cross(draw, exp, 20, _EXPECTED, 2)
            if fid.found:
                det = _ipoint(fid.detected)
                if fid.error < 0.05:
                    color = _GOOD
                elif fid.error < 0.1:
                    color = _OK
                else:
                    color = _BAD
                draw.ellipse([det[0] - 8, det[1] - 8, det[0] + 8, det[1] + 8], outline=color, width=2)
                _arrow(draw, det, exp, color, 2)
                draw.text((det[0] + 12, det[1] - 18), f"{fid.error:.3f} mm", fill=color)
            else:
                _tilted_cross(draw, exp, 15, _BAD, 2)
                draw.text((exp[0] + 12, exp[1] - 18), "?", fill=_BAD)

        quality = self.alignment_quality()
        if quality > 0.9:
            status_color = _GOOD
        elif quality > 0.5:
            status_color = _OK
        else:
            status_color = _BAD
        draw.text((10, 20), f"Alignment: {quality * 100:.0f}%", fill=status_color)
        return output