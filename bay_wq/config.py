"""
Configuration for the bay water quality report.

The chlorophyll axis scale lives here as one shared value so every chart
builds its ticks from the same preferred breaks and transform.

License: MIT
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from bay_wq.errors import ScaleConfigError


# =============================================================================
# AXIS SCALE
# =============================================================================

@dataclass(frozen=True)
class AxisScaleConfig:
    """Preferred breaks and transform for a log-displayed parameter."""

    parameter: str = "Chlorophyll a"
    preferred_breaks: tuple = (0.0, 1.0, 5.0, 10.0, 50.0)
    transform: Callable = np.log1p      # ln(x + 1)
    inverse: Callable = np.expm1
    # Panels whose upper bound falls below this are taken to be the
    # transformed series when no panel identifier is supplied.
    threshold: float = 5.0
    precision: int = 3
    target_count: int = 5
    label_digits: int = 1

    def __post_init__(self):
        breaks = tuple(float(b) for b in self.preferred_breaks)
        object.__setattr__(self, "preferred_breaks", breaks)

        if not breaks:
            raise ScaleConfigError("preferred_breaks must not be empty")
        if not all(math.isfinite(b) for b in breaks):
            raise ScaleConfigError(f"preferred_breaks must be finite: {breaks}")
        if any(b2 <= b1 for b1, b2 in zip(breaks, breaks[1:])):
            raise ScaleConfigError(f"preferred_breaks must be strictly increasing: {breaks}")
        if self.precision < 0:
            raise ScaleConfigError(f"precision must be >= 0, got {self.precision}")
        if self.target_count < 1:
            raise ScaleConfigError(f"target_count must be >= 1, got {self.target_count}")

        top = float(self.transform(breaks[-1]))
        if not top < self.threshold:
            raise ScaleConfigError(
                f"transformed largest break {top:.3f} must be below threshold {self.threshold}"
            )

    def transformed_breaks(self) -> np.ndarray:
        """Preferred breaks on the display scale."""
        return np.asarray(self.transform(np.asarray(self.preferred_breaks, dtype=float)), dtype=float)


DEFAULT_CHLOROPHYLL_SCALE = AxisScaleConfig()


# =============================================================================
# REPORT
# =============================================================================

@dataclass
class ReportConfig:
    """Configuration settings for the bay monitoring report."""

    # File paths
    input_file: Path = Path("bay_monitoring.xlsx")
    output_dir: Path = Path("bay_wq_output")
    sheet_name: Optional[str] = None    # None = first sheet

    # Source header -> canonical column
    column_map: dict = field(default_factory=lambda: {
        "Station": "STATION",
        "Site": "STATION",
        "Date": "SAMPLE_DATE",
        "Sample Date": "SAMPLE_DATE",
        "Water Temp (C)": "Temperature",
        "Temp": "Temperature",
        "Salinity (ppt)": "Salinity",
        "DO (mg/L)": "Dissolved Oxygen",
        "DO": "Dissolved Oxygen",
        "Chl a (ug/L)": "Chlorophyll a",
        "Chla": "Chlorophyll a",
        "Secchi (m)": "Secchi Depth",
        "Secchi": "Secchi Depth",
    })

    # Parameters reported, in panel order
    parameters: dict = field(default_factory=lambda: {
        "Temperature": {'label': 'Water temperature', 'unit': '°C'},
        "Salinity": {'label': 'Salinity', 'unit': 'ppt'},
        "Dissolved Oxygen": {'label': 'Dissolved oxygen', 'unit': 'mg/L'},
        "pH": {'label': 'pH', 'unit': 'SU'},
        "Chlorophyll a": {'label': 'Chlorophyll a', 'unit': 'µg/L'},
        "Secchi Depth": {'label': 'Secchi depth', 'unit': 'm'},
    })

    # Analysis settings
    censored_method: str = "half_dl"  # "half_dl", "dl", "exclude"
    high_censored_threshold: float = 0.50
    min_samples_per_year: int = 1
    min_years_for_trend: int = 5
    significance_level: float = 0.05

    # Plotting settings
    figure_dpi: int = 150
    figure_format: str = "png"
    color_palette: str = "viridis"
    facet_columns: int = 3

    season_map: dict = field(default_factory=lambda: {
        12: 'Winter', 1: 'Winter', 2: 'Winter',
        3: 'Spring', 4: 'Spring', 5: 'Spring',
        6: 'Summer', 7: 'Summer', 8: 'Summer',
        9: 'Fall', 10: 'Fall', 11: 'Fall',
    })
    season_order: list = field(default_factory=lambda: ['Winter', 'Spring', 'Summer', 'Fall'])

    axis_scale: AxisScaleConfig = field(default_factory=lambda: DEFAULT_CHLOROPHYLL_SCALE)

    def __post_init__(self):
        self.input_file = Path(self.input_file)
        self.output_dir = Path(self.output_dir)
        if self.censored_method not in ("half_dl", "dl", "exclude"):
            raise ValueError(f"Unknown censored_method: {self.censored_method}")

    def parameter_label(self, name: str) -> str:
        meta = self.parameters.get(name, {})
        label = meta.get('label', name)
        unit = meta.get('unit')
        return f"{label} ({unit})" if unit else label
