"""Capture, annotate and keep a history of inspection snapshots."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from .signals import Signal

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")


def safe_filename(label: str, when: datetime) -> str:
    """File name for a snapshot: timestamp, then the label made path-safe."""
    safe = _UNSAFE.sub("_", label)
    return f"{when:%Y%m%d_%H%M%S}_{safe}.png"


@dataclass
class Snapshot:
    id: int
    image: Image.Image
    timestamp: datetime = field(default_factory=datetime.now)
    label: str = ""
    component_ref: str = ""
    notes: str = ""
    file_path: Optional[Path] = None


class SnapshotHistory:
    """Snapshots kept most recent first, optionally saved as PNG files."""

    def __init__(self) -> None:
        self.storage_dir: Optional[Path] = None
        self._snapshots: list[Snapshot] = []
        self._next_id = 1
        self.snapshot_taken = Signal()
        self.snapshot_deleted = Signal()
        self.snapshots_cleared = Signal()

    @property
    def snapshots(self) -> list[Snapshot]:
        return list(self._snapshots)

    def set_storage_dir(self, directory: PathLike) -> None:
        """Use ``directory`` for new snapshot files, creating it if needed."""
        self.storage_dir = Path(directory)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        log.info("SnapshotHistory: storage dir set to '%s'", self.storage_dir)

    def take_snapshot(
        self, image: Image.Image, label: str = "", component_ref: str = ""
    ) -> int:
        """Record ``image`` and return the new snapshot's id."""
        if image is None or image.width == 0 or image.height == 0:
            raise ValueError("cannot take a snapshot of an empty image")

        snap_id = self._next_id
        self._next_id += 1
        now = datetime.now()
        snap = Snapshot(
            id=snap_id,
            image=image,
            timestamp=now,
            label=label or f"Snapshot_{snap_id}",
            component_ref=component_ref,
        )

        if self.storage_dir is not None:
            snap.file_path = self.storage_dir / safe_filename(snap.label, now)
            try:
                image.save(snap.file_path, "PNG")
                log.info(
                    "SnapshotHistory: saved snapshot #%d to '%s'", snap_id, snap.file_path
                )
            except (OSError, ValueError):
                log.warning("SnapshotHistory: failed to save snapshot #%d", snap_id)

        self._snapshots.insert(0, snap)
        self.snapshot_taken.emit(snap_id, snap.label)
        return snap_id

    def _find(self, snapshot_id: int) -> Optional[Snapshot]:
        return next((s for s in self._snapshots if s.id == snapshot_id), None)

    def add_notes(self, snapshot_id: int, notes: str) -> None:
        snap = self._find(snapshot_id)
        if snap is not None:
            snap.notes = notes

    def delete_snapshot(self, snapshot_id: int) -> bool:
        """Remove a snapshot and its file; False if the id is unknown."""
        snap = self._find(snapshot_id)
        if snap is None:
            return False
        if snap.file_path is not None:
            snap.file_path.unlink(missing_ok=True)
        self._snapshots.remove(snap)
        self.snapshot_deleted.emit(snapshot_id)
        return True

    def get_snapshot(self, snapshot_id: int) -> Optional[Snapshot]:
        return self._find(snapshot_id)

    def snapshots_for_component(self, reference: str) -> list[Snapshot]:
        return [s for s in self._snapshots if s.component_ref == reference]

    def clear(self) -> None:
        """Drop every snapshot and delete its file."""
        for snap in self._snapshots:
            if snap.file_path is not None:
                snap.file_path.unlink(missing_ok=True)
        self._snapshots.clear()
        self.snapshots_cleared.emit()

    def export_snapshot(self, snapshot_id: int, path: PathLike) -> bool:
        """Save a snapshot's image to ``path``; format follows the extension."""
        snap = self._find(snapshot_id)
        if snap is None:
            return False
        try:
            snap.image.save(path)
        except (OSError, ValueError):
            return False
        return True

    def count(self) -> int:
        return len(self._snapshots)