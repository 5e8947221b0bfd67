"""Truma/Alde iNet box enumerations, checksums, status frames, sensor and climate logic."""

__version__ = "0.1.0"