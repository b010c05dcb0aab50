"""
Exceptions raised by the bay water quality toolkit.

License: MIT
"""

from __future__ import annotations


class ScaleError(ValueError):
    """Base class for adaptive axis scale failures."""


class InvalidRange(ScaleError):
    """Panel range bounds are non-finite, inverted, or zero-width."""

    def __init__(self, lower: float, upper: float, reason: str):
        self.lower = lower
        self.upper = upper
        self.reason = reason
        super().__init__(f"Invalid panel range ({lower}, {upper}): {reason}")


class AmbiguousLabelMatch(ScaleError):
    """Every break candidate is missing, so the panel cannot be identified."""


class ScaleConfigError(ScaleError):
    """An AxisScaleConfig violates its own invariants."""


class DataFormatError(ValueError):
    """The monitoring spreadsheet is missing required columns or usable rows."""
