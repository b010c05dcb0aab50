"""
Loading and cleaning of bay monitoring spreadsheets.

License: MIT
"""

from __future__ import annotations

import logging
import re

import numpy as np
import pandas as pd

from bay_wq.config import ReportConfig
from bay_wq.errors import DataFormatError

NA_VALUES = ['None', 'NA', 'N/A', '', 'null', 'NULL', '-', 'n/a']
CENSORED_PATTERN = re.compile(r'^\s*<\s*([0-9]*\.?[0-9]+)\s*$')


def _censored_limit(value) -> float:
    """Reporting limit of a '<DL' entry, NaN for anything else."""
    if not isinstance(value, str):
        return np.nan
    match = CENSORED_PATTERN.match(value)
    return float(match.group(1)) if match else np.nan


class MonitoringDataLoader:
    """Handles loading and initial cleaning of bay monitoring data."""

    def __init__(self, config: ReportConfig, logger: logging.Logger):
        self.config = config
        self.logger = logger

    def load_data(self) -> pd.DataFrame:
        """Load the CSV or Excel file as text columns."""
        path = self.config.input_file
        self.logger.info(f"Loading data from {path}")

        if not path.exists():
            raise FileNotFoundError(path)

        if path.suffix.lower() in ('.xlsx', '.xls'):
            df = pd.read_excel(
                path,
                sheet_name=self.config.sheet_name if self.config.sheet_name is not None else 0,
                dtype=str,
                na_values=NA_VALUES,
            )
        else:
            df = pd.read_csv(path, dtype=str, na_values=NA_VALUES, low_memory=False)

        self.logger.info(f"Loaded {len(df):,} rows with {len(df.columns)} columns")
        return df

    def clean_data(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the wide sheet and reshape it to one row per measurement."""
        self.logger.info("Cleaning data...")
        initial_rows = len(df)

        df = self._rename_columns(df)
        df = self._parse_dates(df)
        df = self._to_long(df)
        df = self._handle_censored(df)
        df = self._drop_unusable(df)
        df = self._add_display_values(df)

        self.logger.info(f"Cleaning complete: {initial_rows:,} rows → {len(df):,} measurements")
        return df

    def _rename_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.rename(columns=lambda c: str(c).strip())
        df = df.rename(columns=self.config.column_map)
        # Several source headers may map to one column; keep the first
        df = df.loc[:, ~df.columns.duplicated()].copy()

        missing = [c for c in ('STATION', 'SAMPLE_DATE') if c not in df.columns]
        if missing:
            raise DataFormatError(f"Missing required columns: {', '.join(missing)}")
        if not any(p in df.columns for p in self.config.parameters):
            raise DataFormatError(
                f"None of the configured parameters found: {', '.join(self.config.parameters)}"
            )
        return df

    def _parse_dates(self, df: pd.DataFrame) -> pd.DataFrame:
        """Parse sample dates and derive year, month and season."""
        self.logger.debug("Parsing sample dates")

        df['SAMPLE_DATE'] = pd.to_datetime(df['SAMPLE_DATE'], errors='coerce')
        n_bad = df['SAMPLE_DATE'].isna().sum()
        if n_bad > 0:
            self.logger.warning(f"Dropping {n_bad:,} rows with unparseable dates")
            df = df[df['SAMPLE_DATE'].notna()].copy()

        df['SAMPLE_YEAR'] = df['SAMPLE_DATE'].dt.year
        df['SAMPLE_MONTH'] = df['SAMPLE_DATE'].dt.month
        df['SEASON'] = df['SAMPLE_MONTH'].map(self.config.season_map)
        return df

    def _to_long(self, df: pd.DataFrame) -> pd.DataFrame:
        params = [p for p in self.config.parameters if p in df.columns]
        absent = [p for p in self.config.parameters if p not in df.columns]
        if absent:
            self.logger.info(f"  Parameters not in sheet: {', '.join(absent)}")

        id_cols = ['STATION', 'SAMPLE_DATE', 'SAMPLE_YEAR', 'SAMPLE_MONTH', 'SEASON']
        long_df = df.melt(id_vars=id_cols, value_vars=params,
                          var_name='PARAMETER', value_name='VALUE_RAW')
        long_df['STATION'] = long_df['STATION'].astype(str).str.strip()
        return long_df

    def _handle_censored(self, df: pd.DataFrame) -> pd.DataFrame:
        """Flag '<DL' entries and substitute per the configured method."""
        self.logger.info(f"Handling censored values using method: {self.config.censored_method}")

        raw = df['VALUE_RAW'].map(lambda v: v.strip() if isinstance(v, str) else v)
        dl = raw.map(_censored_limit).astype(float)

        df['IS_CENSORED'] = dl.notna()
        df['VALUE'] = pd.to_numeric(raw.where(~df['IS_CENSORED']), errors='coerce')

        cens_pct = df[df['VALUE_RAW'].notna()].groupby('PARAMETER')['IS_CENSORED'].mean()
        high = cens_pct[cens_pct > self.config.high_censored_threshold]
        for param, pct in high.items():
            self.logger.warning(f"  {param}: {pct*100:.1f}% censored - statistics may be unreliable")

        mask = df['IS_CENSORED']
        if self.config.censored_method == "half_dl":
            df.loc[mask, 'VALUE'] = dl[mask] / 2
        elif self.config.censored_method == "dl":
            df.loc[mask, 'VALUE'] = dl[mask]
        elif self.config.censored_method == "exclude":
            df = df[~mask].copy()

        self.logger.info(f"  Censored values: {int(mask.sum()):,}")
        return df

    def _drop_unusable(self, df: pd.DataFrame) -> pd.DataFrame:
        n_before = len(df)
        df = df[df['VALUE'].notna()]
        df = df.drop(columns=['VALUE_RAW']).drop_duplicates().reset_index(drop=True)
        self.logger.debug(f"Dropped {n_before - len(df):,} empty or duplicate measurements")

        if len(df) == 0:
            raise DataFormatError("No usable measurements after cleaning")
        return df

    def _add_display_values(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add the display-scale value used by every chart and trend fit."""
        scale = self.config.axis_scale
        df['DISPLAY_VALUE'] = df['VALUE'].astype(float)

        mask = df['PARAMETER'] == scale.parameter
        negative = mask & (df['VALUE'] < 0)
        if negative.any():
            self.logger.warning(f"Clipping {int(negative.sum()):,} negative {scale.parameter} values to 0")
        values = df.loc[mask, 'VALUE'].clip(lower=0).to_numpy(dtype=float)
        df.loc[mask, 'DISPLAY_VALUE'] = np.asarray(scale.transform(values), dtype=float)
        return df
