"""
Report graphics for the bay monitoring parameters.

License: MIT
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from bay_wq.analysis import TrendClass
from bay_wq.axes import apply_adaptive_scale
from bay_wq.config import ReportConfig
from bay_wq.scales import AdaptiveAxisScale

TREND_COLORS = {
    TrendClass.INCREASING: 'darkred',
    TrendClass.DECREASING: 'darkgreen',
    TrendClass.NO_TREND: 'dimgray',
    TrendClass.INSUFFICIENT_DATA: 'lightgray',
}


class MonitoringVisualizer:
    """Creates faceted visualizations of the monitoring data."""

    def __init__(self, df: pd.DataFrame, config: ReportConfig, logger: logging.Logger):
        self.df = df
        self.config = config
        self.logger = logger
        self.scale = AdaptiveAxisScale(config.axis_scale)
        self.output_dir = config.output_dir / "plots"
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette(config.color_palette)

    @property
    def panels(self) -> list:
        present = set(self.df['PARAMETER'].unique())
        return [p for p in self.config.parameters if p in present]

    def create_all_visualizations(self, trends: pd.DataFrame) -> list:
        """Generate all report plots."""
        self.logger.info("=" * 60)
        self.logger.info("GENERATING VISUALIZATIONS")
        self.logger.info("=" * 60)

        self.output_dir.mkdir(parents=True, exist_ok=True)

        paths = [
            self.plot_parameter_facets(),
            self.plot_seasonal_means(),
            self.plot_seasonal_trends(trends),
        ]
        paths = [p for p in paths if p is not None]

        self.logger.info(f"Visualizations saved to {self.output_dir}")
        return paths

    def _facet_grid(self, n_panels: int, panel_size=(4.5, 3.5)):
        ncols = min(self.config.facet_columns, n_panels)
        nrows = math.ceil(n_panels / ncols)
        fig, axes = plt.subplots(nrows, ncols, figsize=(panel_size[0] * ncols, panel_size[1] * nrows),
                                 squeeze=False)
        flat = axes.ravel()
        for ax in flat[n_panels:]:
            ax.set_visible(False)
        return fig, flat[:n_panels]

    def _save(self, fig, name: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{name}.{self.config.figure_format}"
        fig.tight_layout()
        fig.savefig(path, dpi=self.config.figure_dpi, bbox_inches='tight')
        plt.close(fig)
        return path

    def plot_parameter_facets(self):
        """Violin and jitter of each parameter by season, one panel per parameter."""
        panels = self.panels
        if not panels:
            return None

        self.logger.info("  Creating parameter facet plot...")
        order = self.config.season_order
        fig, axes = self._facet_grid(len(panels))

        for ax, param in zip(axes, panels):
            data = self.df[self.df['PARAMETER'] == param]
            sns.violinplot(data=data, x='SEASON', y='DISPLAY_VALUE', order=order,
                           color='lightsteelblue', inner=None, cut=0, ax=ax)
            sns.stripplot(data=data, x='SEASON', y='DISPLAY_VALUE', order=order,
                          color='navy', size=2.5, alpha=0.5, jitter=0.25, ax=ax)
            ax.set_title(self.config.parameter_label(param), fontsize=11)
            ax.set_xlabel('')
            ax.set_ylabel('')
            apply_adaptive_scale(ax, self.scale, panel=param)

        fig.suptitle('Bay Water Quality by Season', fontsize=14)
        return self._save(fig, 'parameter_facets')

    def plot_seasonal_means(self):
        """Seasonal mean display value per parameter."""
        panels = self.panels
        if not panels:
            return None

        self.logger.info("  Creating seasonal means plot...")
        order = self.config.season_order
        means = (self.df.groupby(['PARAMETER', 'SEASON'])['DISPLAY_VALUE']
                 .mean().unstack().reindex(columns=order))
        fig, axes = self._facet_grid(len(panels))
        colors = sns.color_palette(self.config.color_palette, len(order))

        for ax, param in zip(axes, panels):
            values = means.loc[param]
            ax.bar(order, values.values, color=colors, edgecolor='black', alpha=0.8)
            ax.set_title(self.config.parameter_label(param), fontsize=11)
            ax.set_ylim(bottom=min(0.0, float(np.nanmin(values.values))))
            apply_adaptive_scale(ax, self.scale, panel=param)

        fig.suptitle('Seasonal Means', fontsize=14)
        return self._save(fig, 'seasonal_means')

    def plot_seasonal_trends(self, trends: pd.DataFrame):
        """Annual medians per season with fitted lines and trend annotations."""
        panels = self.panels
        if not panels or len(trends) == 0:
            return None

        self.logger.info("  Creating seasonal trend plot...")
        fig, axes = self._facet_grid(len(panels), panel_size=(5.0, 3.8))
        colors = dict(zip(self.config.season_order,
                          sns.color_palette(self.config.color_palette, len(self.config.season_order))))

        for ax, param in zip(axes, panels):
            data = self.df[self.df['PARAMETER'] == param]
            annotations = []

            for season in self.config.season_order:
                annual = (data[data['SEASON'] == season]
                          .groupby('SAMPLE_YEAR')['DISPLAY_VALUE'].median())
                if len(annual) == 0:
                    continue
                ax.plot(annual.index, annual.values, 'o', color=colors[season],
                        markersize=4, label=season)

                row = trends[(trends['parameter'] == param) & (trends['season'] == season)]
                if len(row) == 0:
                    continue
                row = row.iloc[0]
                trend_class = row['classification']
                if trend_class != TrendClass.INSUFFICIENT_DATA:
                    years = np.array([annual.index.min(), annual.index.max()], dtype=float)
                    linestyle = '-' if trend_class != TrendClass.NO_TREND else ':'
                    ax.plot(years, row['intercept'] + row['slope'] * years,
                            linestyle=linestyle, color=colors[season], linewidth=1.5)
                annotations.append((f"{season}: {trend_class.value}", TREND_COLORS[trend_class]))

            for i, (text, color) in enumerate(annotations):
                ax.text(0.02, 0.97 - 0.09 * i, text, transform=ax.transAxes, fontsize=7,
                        color=color, va='top',
                        bbox=dict(boxstyle='round', facecolor='white', alpha=0.6, edgecolor='none'))

            ax.set_title(self.config.parameter_label(param), fontsize=11)
            ax.set_xlabel('Year')
            apply_adaptive_scale(ax, self.scale, panel=param)

        axes[0].legend(loc='lower right', fontsize=7)
        fig.suptitle('Seasonal Trends in Annual Medians\n(solid = significant, dotted = not significant)',
                     fontsize=13)
        return self._save(fig, 'seasonal_trends')
