"""Barcode and QR code scanning of camera frames through a pluggable decoder."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Sequence

from PIL import Image

from .signals import Signal

log = logging.getLogger(__name__)

QR_CODE = "QRCode"
CODE_128 = "Code128"
DATA_MATRIX = "DataMatrix"
EAN_13 = "EAN13"
EAN_8 = "EAN8"


class DecodedBarcode(Protocol):
    """What a decoder yields for each symbol it finds."""

    text: str
    format: str
    position: Sequence[Sequence[float]]


Decoder = Callable[[Image.Image, frozenset], Iterable[DecodedBarcode]]


@dataclass
class Decoded:
    """A plain decoder result: text, format name and corner points."""

    text: str
    format: str
    position: Sequence[Sequence[float]]


@dataclass
class ScanResult:
    text: str
    format: str
    bounding_box: tuple[int, int, int, int]
    confidence: float = 1.0


class BarcodeScanner:
    """Finds barcodes in frames and matches them to component references.

    ``decoder`` takes a grayscale image and the set of enabled format names
    and returns decoded symbols; without one, scanning finds nothing.
    """

    def __init__(self, decoder: Optional[Decoder] = None) -> None:
        self._decoder = decoder
        self._qr = True
        self._code128 = True
        self._data_matrix = True
        self._ean = False
        self.barcode_detected = Signal()
        self.component_matched = Signal()
        if decoder is None:
            log.warning("BarcodeScanner: no decoder available, barcode scanning disabled")

    def is_available(self) -> bool:
        return self._decoder is not None

    def set_formats_enabled(self, qr: bool, code128: bool, data_matrix: bool, ean: bool) -> None:
        self._qr = qr
        self._code128 = code128
        self._data_matrix = data_matrix
        self._ean = ean

    def enabled_formats(self) -> frozenset:
        formats = set()
        if self._qr:
            formats.add(QR_CODE)
        if self._code128:
            formats.add(CODE_128)
        if self._data_matrix:
            formats.add(DATA_MATRIX)
        if self._ean:
            formats.update((EAN_13, EAN_8))
        return frozenset(formats)

    def scan(self, frame: Optional[Image.Image]) -> list[ScanResult]:
        """Decode every enabled symbol in ``frame``."""
        if frame is None or frame.width == 0 or frame.height == 0 or self._decoder is None:
            return []
        gray = frame if frame.mode == "L" else frame.convert("L")

        results = []
        for found in self._decoder(gray, self.enabled_formats()):
            xs = [int(p[0]) for p in found.position]
            ys = [int(p[1]) for p in found.position]
            box = (min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))
            result = ScanResult(text=found.text, format=found.format, bounding_box=box)
            results.append(result)
            self.barcode_detected.emit(result.text, result.format)
        return results

    def scan_for_component(
        self, frame: Optional[Image.Image], known_references: Iterable[str]
    ) -> Optional[str]:
        """The first reference a scanned code matches exactly, else contains."""
        refs = list(known_references)
        for result in self.scan(frame):
            match = next((r for r in refs if result.text == r), None)
            if match is None:
                match = next((r for r in refs if r in result.text), None)
            if match is not None:
                self.component_matched.emit(match)
                return match
        return None