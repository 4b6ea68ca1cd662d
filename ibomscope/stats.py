"""Inspection progress counters, performance readouts and the defect log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .signals import Signal


@dataclass(frozen=True)
class DefectEntry:
    time: str
    reference: str
    defect_type: str


class InspectionStats:
    """Counts placed, missing and defective components against a total."""

    def __init__(self) -> None:
        self.total = 0
        self.placed = 0
        self.missing = 0
        self.defect = 0
        self._progress = 0
        self.defects: list[DefectEntry] = []
        self.fps_text = "0.0"
        self.inference_text = "-- ms"
        self.gpu_memory_text = "-- / -- MB"
        self.scale_text = "-- px/mm"
        self.defect_added = Signal()

    @property
    def done(self) -> int:
        return self.placed + self.missing + self.defect

    def reset(self) -> None:
        """Zero the counters, the progress and the defect log."""
        self.total = self.placed = self.missing = self.defect = 0
        self._progress = 0
        self.defects.clear()

    def set_total_components(self, total: int) -> None:
        self.total = total
        self._update_progress()

    def increment_placed(self) -> None:
        self.placed += 1
        self._update_progress()

    def increment_missing(self) -> None:
        self.missing += 1
        self._update_progress()

    def increment_defect(self) -> None:
        self.defect += 1
        self._update_progress()

    def pending(self) -> int:
        return max(0, self.total - self.done)

    def progress_percent(self) -> int:
        """Percentage of components inspected, as last updated."""
        return self._progress

    def summary(self) -> str:
        if self.total == 0:
            return "No inspection data"
        yield_pct = self.placed * 100.0 / self.total
        return f"{self.done}/{self.total} inspected — Yield: {yield_pct:.1f}%"

    def add_defect_entry(self, reference: str, defect_type: str) -> DefectEntry:
        """Log a defect, stamped with the current time of day."""
        entry = DefectEntry(
            time=datetime.now().strftime("%H:%M:%S"),
            reference=reference,
            defect_type=defect_type,
        )
        self.defects.append(entry)
        self.defect_added.emit(entry)
        return entry

    def set_fps(self, fps: float) -> None:
        self.fps_text = f"{fps:.1f}"

    def set_inference_time(self, ms: float) -> None:
        self.inference_text = f"{ms:.1f} ms"

    def set_gpu_memory(self, used_mb: int, total_mb: int) -> None:
        if used_mb < 0 or total_mb < 0:
            raise ValueError("memory sizes cannot be negative")
        self.gpu_memory_text = f"{used_mb} / {total_mb} MB"

    def set_scale(self, pixels_per_mm: float) -> None:
        if pixels_per_mm > 0:
            self.scale_text = f"{pixels_per_mm:.1f} px/mm"
        else:
            self.scale_text = "-- px/mm"

    def _update_progress(self) -> None:
        if self.total > 0:
            self._progress = min(100, self.done * 100 // self.total)