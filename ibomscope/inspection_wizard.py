"""Step-by-step inspection run: choose components, align, inspect, review."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from . import theme
from .signals import Signal


class Step(enum.IntEnum):
    SELECT_COMPONENTS = 0
    ALIGNMENT = 1
    INSPECTION = 2
    RESULTS = 3


_NEXT_LABELS = {
    Step.SELECT_COMPONENTS: "Next >",
    Step.ALIGNMENT: "Start Inspection >",
    Step.INSPECTION: "Inspecting...",
    Step.RESULTS: "Finish",
}

_STATUS_COLORS = {
    "OK": theme.PLACED,
    "Placed": theme.PLACED,
    "Missing": theme.MISSING,
    "Defect": theme.DEFECT,
}


@dataclass(frozen=True)
class InspectionResult:
    reference: str
    status: str
    detail: str = ""

    @property
    def color(self) -> Optional[theme.Color]:
        """Colour for the status, or None for an unrecognised status."""
        return _STATUS_COLORS.get(self.status)


class InspectionWizard:
    """Drives the four steps of an inspection run over a list of references."""

    def __init__(self, references: Iterable[str] = ()) -> None:
        self.references: list[str] = list(references)
        self._selected: list[str] = []
        self.results: list[InspectionResult] = []
        self.progress_value = 0
        self.progress_maximum = 100
        self.progress_text = "0 / 0"
        self.accepted: Optional[bool] = None
        self._step = Step.SELECT_COMPONENTS
        self._next_enabled = True
        self.inspection_started = Signal()
        self.inspection_cancelled = Signal()
        self.inspection_finished = Signal()
        self.set_step(Step.SELECT_COMPONENTS)

    @property
    def step(self) -> Step:
        return self._step

    @property
    def selected(self) -> list[str]:
        return list(self._selected)

    def set_step(self, step: Step) -> None:
        self._step = Step(step)
        if self._step is Step.INSPECTION:
            self._next_enabled = False
        elif self._step is Step.RESULTS:
            self._next_enabled = True

    def select(self, references: Iterable[str]) -> None:
        """Choose which of the known references take part in the run."""
        wanted = set(references)
        unknown = wanted.difference(self.references)
        if unknown:
            raise ValueError(f"unknown references: {sorted(unknown)}")
        self._selected = [ref for ref in self.references if ref in wanted]

    def next(self) -> Step:
        """Advance one step; on the last step finish the run."""
        if not self._next_enabled:
            return self._step
        if self._step is Step.RESULTS:
            self.inspection_finished.emit()
            self.accepted = True
            return self._step
        if self._step is Step.SELECT_COMPONENTS and not self._selected:
            return self._step
        if self._step is Step.ALIGNMENT:
            self.inspection_started.emit(list(self._selected))
        self.set_step(Step(self._step + 1))
        return self._step

    def back(self) -> Step:
        if self._step > Step.SELECT_COMPONENTS:
            self.set_step(Step(self._step - 1))
        return self._step

    def cancel(self) -> None:
        self.inspection_cancelled.emit()
        self.accepted = False

    def add_result(self, reference: str, status: str, detail: str = "") -> InspectionResult:
        result = InspectionResult(reference=reference, status=status, detail=detail)
        self.results.append(result)
        return result

    def set_progress(self, current: int, total: int) -> None:
        self.progress_maximum = total
        self.progress_value = current
        self.progress_text = f"Inspecting {current} of {total}"

    def next_label(self) -> str:
        return _NEXT_LABELS[self._step]

    def back_enabled(self) -> bool:
        return self._step is not Step.SELECT_COMPONENTS

    def next_enabled(self) -> bool:
        return self._next_enabled