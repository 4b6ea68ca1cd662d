"""Hands-free control: voice activity detection and keyword commands."""

from __future__ import annotations

import logging
import math
import sys
from array import array
from typing import Callable, Optional

from .signals import Signal

log = logging.getLogger(__name__)


def calculate_rms(data: bytes) -> float:
    """RMS level in [0, 1] of 16-bit little-endian mono PCM samples."""
    count = len(data) // 2
    if count == 0:
        return 0.0
    samples = array("h")
    samples.frombytes(bytes(data[: count * 2]))
    if sys.byteorder == "big":
        samples.byteswap()
    total = sum((s / 32768.0) ** 2 for s in samples)
    return math.sqrt(total / count)


class VoiceControl:
    """Buffers voiced audio and dispatches commands found in recognised speech.

    Audio arrives through :meth:`feed_audio`. Once about one second of voiced
    audio has built up it is handed to :attr:`recognizer`, a callable that
    turns PCM bytes into text; every registered keyword found in the text
    runs its callback.
    """

    def __init__(self, sample_rate: int = 16000, threshold: float = 0.02) -> None:
        if sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        self.sample_rate = sample_rate
        self.threshold = threshold
        self.device_name = ""
        self.recognizer: Optional[Callable[[bytes], str]] = None
        self._commands: dict[str, Callable[[], None]] = {}
        self._listening = False
        self._buffer = bytearray()
        self.command_recognized = Signal()
        self.listening_started = Signal()
        self.listening_stopped = Signal()
        self.audio_level_changed = Signal()

    @property
    def is_listening(self) -> bool:
        return self._listening

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(sorted(self._commands))

    def register_command(self, keyword: str, callback: Callable[[], None]) -> None:
        self._commands[keyword.lower()] = callback
        log.info("VoiceControl: registered command '%s'", keyword)

    def start_listening(self) -> None:
        if self._listening:
            return
        self._listening = True
        self.listening_started.emit()
        log.info("VoiceControl: started listening")

    def stop_listening(self) -> None:
        if not self._listening:
            return
        self._listening = False
        self.listening_stopped.emit()
        log.info("VoiceControl: stopped listening")

    def set_device(self, device_name: str) -> None:
        """Choose the input device; restarts listening if it was running."""
        self.device_name = device_name
        if self._listening:
            self.stop_listening()
            self.start_listening()

    def feed_audio(self, data: bytes) -> list[str]:
        """Process captured audio; returns the keywords whose commands ran."""
        if not self._listening or not data:
            return []

        level = calculate_rms(data)
        self.audio_level_changed.emit(level)
        if level < self.threshold:
            return []

        self._buffer.extend(data)
        if len(self._buffer) < self.sample_rate * 2:
            return []

        chunk = bytes(self._buffer)
        self._buffer.clear()
        log.debug("VoiceControl: processing %d bytes of audio", len(chunk))
        if self.recognizer is None:
            return []

        text = self.recognizer(chunk).lower()
        triggered = []
        for keyword in sorted(self._commands):
            if keyword in text:
                self._commands[keyword]()
                self.command_recognized.emit(keyword)
                triggered.append(keyword)
        return triggered