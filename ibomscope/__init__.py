"""Measurement, placement, snapshot, alignment, barcode, voice, streaming and panel models for microscope-based PCB inspection."""

__version__ = "0.1.0"