"""
Unit conversion helpers.
"""

from __future__ import annotations

import math

GIGABYTE = 1024 * 1024 * 1024


def bytes_to_gb(size: int) -> float:
    """Convert a byte count to (binary) gigabytes."""
    return float(size) / GIGABYTE


def round_gb(size: int) -> int:
    """
    Convert a byte count to gigabytes rounded to the nearest integer.

    Halves round away from zero, so 1.5 GB reports as 2 and 2.5 GB as 3.
    """
    value = bytes_to_gb(size)
    return int(math.copysign(math.floor(abs(value) + 0.5), value))
