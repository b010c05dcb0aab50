"""
Summary statistics and seasonal trend classification.

Trends are fit per parameter and season on annual medians of the display
value, so chlorophyll trends are on the ln(x + 1) scale used in the charts.
A trend counts as significant only when the confidence interval on the
slope excludes zero.

License: MIT
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd
from scipy import stats

from bay_wq.config import ReportConfig


class TrendClass(Enum):
    """Seasonal trend outcomes."""
    INCREASING = "Increasing"
    DECREASING = "Decreasing"
    NO_TREND = "No significant trend"
    INSUFFICIENT_DATA = "Insufficient data"


def classify_interval(ci_low: float, ci_high: float) -> TrendClass:
    """Classify a slope confidence interval by whether it excludes zero."""
    if np.isnan(ci_low) or np.isnan(ci_high):
        return TrendClass.INSUFFICIENT_DATA
    if ci_low > 0:
        return TrendClass.INCREASING
    if ci_high < 0:
        return TrendClass.DECREASING
    return TrendClass.NO_TREND


def summarize_parameters(df: pd.DataFrame) -> pd.DataFrame:
    """Per-parameter summary of raw-scale values."""
    rows = []
    for param, param_data in df.groupby('PARAMETER', sort=False):
        values = param_data['VALUE']
        rows.append({
            'parameter': param,
            'n_total': len(values),
            'n_censored': int(param_data['IS_CENSORED'].sum()),
            'pct_censored': 100 * param_data['IS_CENSORED'].mean(),
            'mean': values.mean(),
            'median': values.median(),
            'std': values.std() if len(values) > 1 else np.nan,
            'min': values.min(),
            'max': values.max(),
            'n_stations': param_data['STATION'].nunique(),
            'date_min': param_data['SAMPLE_DATE'].min(),
            'date_max': param_data['SAMPLE_DATE'].max(),
        })
    return pd.DataFrame(rows)


class SeasonalTrendAnalysis:
    """Fits a linear trend per parameter and season and classifies it."""

    def __init__(self, df: pd.DataFrame, config: ReportConfig, logger: logging.Logger):
        self.df = df
        self.config = config
        self.logger = logger

    def annual_medians(self, param_data: pd.DataFrame) -> pd.DataFrame:
        """Annual median display value for one parameter/season group."""
        annual = param_data.groupby('SAMPLE_YEAR')['DISPLAY_VALUE'].agg(['median', 'count'])
        return annual[annual['count'] >= self.config.min_samples_per_year]

    def fit_trend(self, annual: pd.DataFrame) -> dict[str, Any]:
        n_years = len(annual)
        result = {
            'n_years': n_years,
            'slope': np.nan,
            'intercept': np.nan,
            'ci_low': np.nan,
            'ci_high': np.nan,
            'p_value': np.nan,
            'r_squared': np.nan,
        }
        if n_years < max(self.config.min_years_for_trend, 3):
            result['classification'] = TrendClass.INSUFFICIENT_DATA
            return result

        years = annual.index.values.astype(float)
        values = annual['median'].values.astype(float)
        fit = stats.linregress(years, values)

        t_crit = stats.t.ppf(1 - self.config.significance_level / 2, n_years - 2)
        half_width = t_crit * fit.stderr

        result.update({
            'slope': fit.slope,
            'intercept': fit.intercept,
            'ci_low': fit.slope - half_width,
            'ci_high': fit.slope + half_width,
            'p_value': fit.pvalue,
            'r_squared': fit.rvalue ** 2,
        })
        result['classification'] = classify_interval(result['ci_low'], result['ci_high'])
        return result

    def classify_trends(self) -> pd.DataFrame:
        """Classify the trend of every parameter/season group."""
        self.logger.info("=" * 60)
        self.logger.info("SEASONAL TREND ANALYSIS")
        self.logger.info("=" * 60)

        rows = []
        for param in self.config.parameters:
            param_data = self.df[self.df['PARAMETER'] == param]
            if len(param_data) == 0:
                continue

            for season in self.config.season_order:
                season_data = param_data[param_data['SEASON'] == season]
                trend = self.fit_trend(self.annual_medians(season_data))
                rows.append({'parameter': param, 'season': season, **trend})

                if trend['classification'] in (TrendClass.INCREASING, TrendClass.DECREASING):
                    self.logger.info(
                        f"  {param} ({season}): {trend['classification'].value.lower()} "
                        f"(slope={trend['slope']:+.4f}/yr, p={trend['p_value']:.4f})"
                    )

        columns = ['parameter', 'season', 'n_years', 'slope', 'intercept',
                   'ci_low', 'ci_high', 'p_value', 'r_squared', 'classification']
        trends = pd.DataFrame(rows, columns=columns)
        if len(trends) > 0:
            counts = trends['classification'].map(lambda c: c.value).value_counts()
            self.logger.info(f"  Trend outcomes: {counts.to_dict()}")
        return trends
