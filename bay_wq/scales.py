"""
Adaptive axis scale for a log-displayed parameter in a multi-panel chart.

Chlorophyll is plotted as ln(x + 1) next to untransformed parameters that
share one faceted layout. Two pure functions give its panel readable ticks:

- ``select_breaks`` picks tick positions for a panel range: the transformed
  preferred breaks on the chlorophyll panel, generic "nice" breaks elsewhere.
- ``label_breaks`` turns the positions the charting layer kept (with
  out-of-range positions replaced by missing markers) into labels, mapping
  transformed preferred breaks back to their raw concentrations.

Both take an optional panel identifier. Without one they fall back to
inferring the panel from the numbers themselves, which only works while the
transformed breaks stay below every other panel's range.

License: MIT
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from matplotlib.ticker import MaxNLocator

from bay_wq.config import DEFAULT_CHLOROPHYLL_SCALE, AxisScaleConfig
from bay_wq.errors import AmbiguousLabelMatch, InvalidRange

logger = logging.getLogger(__name__)

NICE_STEPS = [1, 2, 2.5, 5, 10]


def nice_breaks(lower: float, upper: float, target_count: int = 5) -> np.ndarray:
    """Generic extended breaks covering [lower, upper]."""
    locator = MaxNLocator(nbins=target_count, steps=NICE_STEPS)
    return np.asarray(locator.tick_values(lower, upper), dtype=float)


def validate_range(panel_range: Tuple[float, float]) -> Tuple[float, float]:
    lower, upper = panel_range
    if _is_missing(lower) or _is_missing(upper):
        raise InvalidRange(lower, upper, "bounds must not be missing")
    lower, upper = float(lower), float(upper)
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise InvalidRange(lower, upper, "bounds must be finite")
    if upper < lower:
        raise InvalidRange(lower, upper, "upper bound is below lower bound")
    if upper == lower:
        raise InvalidRange(lower, upper, "range has zero width")
    return lower, upper


def _is_missing(value) -> bool:
    return value is None or bool(pd.isna(value))


class AdaptiveAxisScale:
    """Tick positions and labels for panels sharing one faceted chart."""

    def __init__(self, config: AxisScaleConfig = DEFAULT_CHLOROPHYLL_SCALE):
        self.config = config

    def _expected_labels(self) -> dict:
        rounded = np.round(self.config.transformed_breaks(), self.config.precision)
        return {float(key): raw for key, raw in zip(rounded, self.config.preferred_breaks)}

    def is_scaled_panel(self, panel: str) -> bool:
        return panel == self.config.parameter

    def select_breaks(self, panel_range: Tuple[float, float],
                      panel: Optional[str] = None) -> np.ndarray:
        """Tick positions, on the display scale, for one panel."""
        lower, upper = validate_range(panel_range)

        if panel is not None:
            use_preferred = self.is_scaled_panel(panel)
        else:
            use_preferred = upper < self.config.threshold

        if use_preferred:
            return self.config.transformed_breaks()
        return nice_breaks(lower, upper, self.config.target_count)

    def label_breaks(self, break_candidates: Sequence,
                     panel: Optional[str] = None) -> List[Optional[float]]:
        """
        Labels for break candidates, position for position.

        Missing candidates yield None. On the scaled panel, transformed
        preferred breaks are labelled with their raw values.

        Raises:
            AmbiguousLabelMatch: no panel was given and every candidate is
                missing, so the panel cannot be inferred.
        """
        candidates = list(break_candidates)
        present = [float(c) for c in candidates if not _is_missing(c)]
        expected = self._expected_labels()
        digits = self.config.precision

        def passthrough() -> List[Optional[float]]:
            return [None if _is_missing(c) else float(c) for c in candidates]

        if panel is not None:
            if not self.is_scaled_panel(panel):
                return passthrough()
            labels = []
            for c in candidates:
                if _is_missing(c):
                    labels.append(None)
                    continue
                key = float(np.round(float(c), digits))
                if key in expected:
                    labels.append(expected[key])
                else:
                    raw = float(self.config.inverse(float(c)))
                    labels.append(round(raw, self.config.label_digits))
            return labels

        if not present:
            raise AmbiguousLabelMatch(
                f"cannot identify panel from {len(candidates)} missing break candidates"
            )

        rounded = [float(np.round(c, digits)) for c in present]
        if not all(r in expected for r in rounded):
            return passthrough()

        logger.debug("Break candidates %s matched transformed %s breaks",
                     rounded, self.config.parameter)
        return [None if _is_missing(c) else expected[float(np.round(float(c), digits))]
                for c in candidates]


_default_scale = AdaptiveAxisScale()


def select_breaks(panel_range: Tuple[float, float], panel: Optional[str] = None) -> np.ndarray:
    """``AdaptiveAxisScale.select_breaks`` with the shared chlorophyll scale."""
    return _default_scale.select_breaks(panel_range, panel)


def label_breaks(break_candidates: Sequence, panel: Optional[str] = None) -> List[Optional[float]]:
    """``AdaptiveAxisScale.label_breaks`` with the shared chlorophyll scale."""
    return _default_scale.label_breaks(break_candidates, panel)
