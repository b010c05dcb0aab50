"""
Bay Water Quality Report - Version 2.0
======================================
Seasonal analysis and report graphics for estuarine bay monitoring data.

Features:
- Adaptive chlorophyll axis: ln(x + 1) display with ticks labelled in ug/L
- Explicit panel identifiers, with a range heuristic for unnamed panels
- Detection-limit handling for censored ("<DL") results
- Per-season trend classification from confidence intervals on OLS slopes
- Faceted violin, seasonal mean and trend figures with CSV and text reports

License: MIT
"""

from bay_wq.config import DEFAULT_CHLOROPHYLL_SCALE, AxisScaleConfig, ReportConfig
from bay_wq.errors import AmbiguousLabelMatch, DataFormatError, InvalidRange, ScaleConfigError, ScaleError
from bay_wq.scales import AdaptiveAxisScale, label_breaks, nice_breaks, select_breaks

__version__ = "2.0.0"

__all__ = [
    "AdaptiveAxisScale",
    "AmbiguousLabelMatch",
    "AxisScaleConfig",
    "DEFAULT_CHLOROPHYLL_SCALE",
    "DataFormatError",
    "InvalidRange",
    "ReportConfig",
    "ScaleConfigError",
    "ScaleError",
    "label_breaks",
    "nice_breaks",
    "select_breaks",
]
