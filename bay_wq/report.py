"""
Table exports and the plain-text report.

License: MIT
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from bay_wq.analysis import TrendClass
from bay_wq.config import ReportConfig


class ReportGenerator:
    """Generates analysis reports and exports results."""

    def __init__(self, config: ReportConfig, logger: logging.Logger):
        self.config = config
        self.logger = logger

    def generate_reports(self, df: pd.DataFrame, summary: pd.DataFrame,
                         trends: pd.DataFrame) -> list:
        """Generate all reports and export data."""
        self.logger.info("=" * 60)
        self.logger.info("GENERATING REPORTS")
        self.logger.info("=" * 60)

        output_dir = self.config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        written = []

        df.to_csv(output_dir / 'cleaned_data.csv', index=False)
        written.append(output_dir / 'cleaned_data.csv')
        self.logger.info("  Saved: cleaned_data.csv")

        if len(summary) > 0:
            summary.to_csv(output_dir / 'summary_statistics.csv', index=False)
            written.append(output_dir / 'summary_statistics.csv')
            self.logger.info("  Saved: summary_statistics.csv")

        if len(trends) > 0:
            export = trends.copy()
            export['classification'] = export['classification'].map(lambda c: c.value)
            export.to_csv(output_dir / 'seasonal_trends.csv', index=False)
            written.append(output_dir / 'seasonal_trends.csv')
            self.logger.info("  Saved: seasonal_trends.csv")

        written.append(self._generate_text_report(summary, trends, output_dir))
        return written

    def _generate_text_report(self, summary: pd.DataFrame, trends: pd.DataFrame,
                              output_dir: Path) -> Path:
        lines = [
            "=" * 80,
            "BAY WATER QUALITY MONITORING REPORT",
            f"Source: {self.config.input_file.name}",
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "=" * 80,
            "",
        ]

        if len(summary) > 0:
            lines.extend([
                "PARAMETER SUMMARY",
                "-" * 50,
            ])
            for _, row in summary.iterrows():
                unit = self.config.parameters.get(row['parameter'], {}).get('unit', '')
                lines.append(
                    f"{row['parameter']}: n={row['n_total']:,}, "
                    f"median={row['median']:.2f} {unit}, "
                    f"range {row['min']:.2f}-{row['max']:.2f}, "
                    f"{row['pct_censored']:.1f}% censored"
                )
            lines.append("")

        if len(trends) > 0:
            significant = trends[trends['classification'].isin(
                [TrendClass.INCREASING, TrendClass.DECREASING])]
            ci_pct = 100 * (1 - self.config.significance_level)
            lines.extend([
                f"SIGNIFICANT SEASONAL TRENDS ({ci_pct:.0f}% CI on slope excludes zero)",
                "-" * 50,
            ])
            if len(significant) == 0:
                lines.append("None")
            for _, row in significant.iterrows():
                scale_note = " (ln(x+1) scale)" if row['parameter'] == self.config.axis_scale.parameter else ""
                lines.append(
                    f"{row['parameter']} - {row['season']}: {row['classification'].value} "
                    f"(slope {row['slope']:+.4f}/yr{scale_note}, "
                    f"CI {row['ci_low']:+.4f} to {row['ci_high']:+.4f}, n_years={row['n_years']})"
                )
            n_insufficient = int((trends['classification'] == TrendClass.INSUFFICIENT_DATA).sum())
            if n_insufficient:
                lines.append(f"{n_insufficient} parameter/season groups had insufficient data")
            lines.append("")

        lines.extend([
            "=" * 80,
            "END OF REPORT",
            "=" * 80,
        ])

        path = output_dir / 'analysis_report.txt'
        with open(path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))

        self.logger.info("  Saved: analysis_report.txt")
        return path
