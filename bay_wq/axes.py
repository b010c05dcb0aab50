"""
Install adaptive ticks on matplotlib axes.

License: MIT
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np
from matplotlib.axes import Axes

from bay_wq.errors import ScaleError
from bay_wq.scales import AdaptiveAxisScale, nice_breaks

logger = logging.getLogger(__name__)


def format_tick_label(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:g}"


def _ticks_in_limits(scale: AdaptiveAxisScale, breaks, lower: float, upper: float,
                     panel: Optional[str]) -> Tuple[List[float], List[str]]:
    candidates = [b if lower <= b <= upper else np.nan for b in breaks]
    labels = scale.label_breaks(candidates, panel)
    ticks = [float(b) for b, label in zip(breaks, labels) if label is not None]
    texts = [format_tick_label(label) for label in labels if label is not None]
    return ticks, texts


def apply_adaptive_scale(ax: Axes, scale: Optional[AdaptiveAxisScale] = None,
                         panel: Optional[str] = None,
                         axis: str = "y") -> Optional[Tuple[List[float], List[str]]]:
    """
    Replace the ticks of one axis with adaptive breaks and labels.

    Breaks outside the current limits become missing markers before
    labelling, as the charting layer would drop them. When a named
    transformed panel holds none of its preferred breaks, nice breaks on the
    display scale are labelled through the inverse transform instead.
    Returns the installed (ticks, labels), or None when the axis keeps
    matplotlib's default ticks.
    """
    if axis not in ("x", "y"):
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
    scale = scale or AdaptiveAxisScale()

    limits = ax.get_ylim() if axis == "y" else ax.get_xlim()
    lower, upper = min(limits), max(limits)

    try:
        breaks = scale.select_breaks((lower, upper), panel)
        ticks, texts = _ticks_in_limits(scale, breaks, lower, upper, panel)
        if not ticks and panel is not None and scale.is_scaled_panel(panel):
            logger.debug(f"No preferred break inside limits of {panel}, using inverse-labelled nice breaks")
            breaks = nice_breaks(lower, upper, scale.config.target_count)
            ticks, texts = _ticks_in_limits(scale, breaks, lower, upper, panel)
    except ScaleError as e:
        logger.warning(f"Keeping default ticks for panel {panel or '<unnamed>'}: {e}")
        return None

    if not ticks:
        logger.warning(f"Keeping default ticks for panel {panel or '<unnamed>'}: no break inside limits")
        return None

    if axis == "y":
        ax.set_yticks(ticks, labels=texts)
        ax.set_ylim(*limits)
    else:
        ax.set_xticks(ticks, labels=texts)
        ax.set_xlim(*limits)

    return ticks, texts
