"""Guided pick-and-place workflow: which component to place next."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from .signals import Signal

log = logging.getLogger(__name__)


class Layer(enum.Enum):
    FRONT = "F"
    BACK = "B"


@dataclass
class PlacementStep:
    reference: str = ""
    value: str = ""
    footprint: str = ""
    layer: Layer = Layer.FRONT
    placed: bool = False
    order: int = 0


class PickAndPlace:
    """Tracks placement order and progress over a list of components.

    Components are any objects with ``reference``, ``value``, ``footprint``
    and ``layer`` attributes; ``layer`` may be a :class:`Layer` or "F"/"B".
    """

    def __init__(self) -> None:
        self._steps: list[PlacementStep] = []
        self._current_index = 0
        self.current_step_changed = Signal()
        self.step_placed = Signal()
        self.all_placed = Signal()
        self.progress_changed = Signal()

    @property
    def steps(self) -> tuple[PlacementStep, ...]:
        return tuple(self._steps)

    @property
    def current_index(self) -> int:
        return self._current_index

    def load_components(self, components: Iterable[Any]) -> None:
        """Replace the steps with the given components, grouped by value."""
        self._steps = [
            PlacementStep(
                reference=comp.reference,
                value=comp.value,
                footprint=comp.footprint,
                layer=Layer(getattr(comp, "layer", Layer.FRONT)),
                order=order,
            )
            for order, comp in enumerate(components)
        ]
        self._current_index = 0
        log.info("PickAndPlace: loaded %d components", len(self._steps))
        self.sort_by_value_group()
        if self._steps:
            self.current_step_changed.emit(self._steps[0])
        self._emit_progress()

    def _renumber(self) -> None:
        for order, step in enumerate(self._steps):
            step.order = order

    def sort_by_value_group(self) -> None:
        """Group steps by value, then by reference within a group."""
        self._steps.sort(key=lambda s: (s.value, s.reference))
        self._renumber()

    def sort_by_position(self) -> None:
        """Restore the order recorded in each step."""
        self._steps.sort(key=lambda s: s.order)

    def sort_by_footprint_size(self) -> None:
        """Shorter footprint names first, as a rough proxy for package size."""
        self._steps.sort(key=lambda s: (len(s.footprint), s.footprint))
        self._renumber()

    def current_step(self) -> PlacementStep:
        """The step to place now, or an empty step when none is left."""
        if self._current_index >= len(self._steps):
            return PlacementStep()
        return self._steps[self._current_index]

    def mark_placed(self) -> None:
        """Mark the current step as placed and advance to the next one."""
        if self._current_index >= len(self._steps):
            return
        step = self._steps[self._current_index]
        step.placed = True
        log.info("PickAndPlace: placed %s", step.reference)
        self.step_placed.emit(step.reference)

        self._current_index += 1
        self._emit_progress()

        if self.is_complete():
            self.all_placed.emit()
        elif self._current_index < len(self._steps):
            self.current_step_changed.emit(self._steps[self._current_index])

    def skip(self) -> None:
        if self._current_index < len(self._steps) - 1:
            self._current_index += 1
            self.current_step_changed.emit(self._steps[self._current_index])

    def go_back(self) -> None:
        if self._current_index > 0:
            self._current_index -= 1
            self.current_step_changed.emit(self._steps[self._current_index])

    def reset(self) -> None:
        for step in self._steps:
            step.placed = False
        self._current_index = 0
        if self._steps:
            self.current_step_changed.emit(self._steps[0])
        self._emit_progress()

    def total_steps(self) -> int:
        return len(self._steps)

    def placed_count(self) -> int:
        return sum(step.placed for step in self._steps)

    def is_complete(self) -> bool:
        return all(step.placed for step in self._steps)

    def _emit_progress(self) -> None:
        self.progress_changed.emit(self.placed_count(), len(self._steps))