"""Bill-of-materials table: filtering, per-component state and check marks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from . import theme
from .pick_and_place import Layer
from .signals import Signal

log = logging.getLogger(__name__)

CHECKED_MARK = "☑"
UNCHECKED_MARK = "☐"


@dataclass
class BomRow:
    reference: str
    value: str
    footprint: str
    layer: str
    state: str = "pending"
    checked: bool = False

    @property
    def color(self) -> theme.Color:
        """Display colour of the row's state."""
        return theme.state_color(self.state)

    @property
    def check_mark(self) -> str:
        return CHECKED_MARK if self.checked else UNCHECKED_MARK


class BomTable:
    """The component rows of a board with search, layer filter and check marks.

    Components are any objects with ``reference``, ``value``, ``footprint``
    and ``layer`` attributes; ``layer`` may be a :class:`Layer` or "F"/"B".
    """

    def __init__(self) -> None:
        self._rows: list[BomRow] = []
        self.component_checked = Signal()

    @property
    def rows(self) -> tuple[BomRow, ...]:
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def load(self, components: Iterable[Any]) -> None:
        """Replace the rows with one pending, unchecked row per component."""
        self._rows = [
            BomRow(
                reference=comp.reference,
                value=comp.value,
                footprint=comp.footprint,
                layer=Layer(getattr(comp, "layer", Layer.FRONT)).value,
            )
            for comp in components
        ]
        log.info("BOM loaded: %d components", len(self._rows))

    def clear(self) -> None:
        self._rows.clear()

    def filtered_rows(self, text: str = "", layer: str = "") -> list[BomRow]:
        """Rows on ``layer`` (all if empty) whose reference, value or
        footprint contains ``text``, ignoring case."""
        needle = text.lower()
        return [
            row
            for row in self._rows
            if (not layer or row.layer == layer)
            and (
                not needle
                or needle in row.reference.lower()
                or needle in row.value.lower()
                or needle in row.footprint.lower()
            )
        ]

    def find(self, reference: str) -> Optional[BomRow]:
        return next((row for row in self._rows if row.reference == reference), None)

    def _require(self, reference: str) -> BomRow:
        row = self.find(reference)
        if row is None:
            raise KeyError(reference)
        return row

    def set_component_state(self, reference: str, state: str) -> None:
        """Set the state text ("placed", "missing", "defect", ...) of a row."""
        self._require(reference).state = state

    def toggle_checked(self, reference: str) -> bool:
        """Flip a row's check mark and return its new value."""
        row = self._require(reference)
        row.checked = not row.checked
        self.component_checked.emit(reference, row.checked)
        return row.checked

    def select_all(self) -> None:
        for row in self._rows:
            row.checked = True

    def deselect_all(self) -> None:
        for row in self._rows:
            row.checked = False

    def checked_references(self) -> list[str]:
        return [row.reference for row in self._rows if row.checked]

    @staticmethod
    def progress_text(placed: int, total: int) -> str:
        return f"{placed} / {total} placed"