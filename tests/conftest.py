import logging

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from bay_wq.config import ReportConfig


def make_wide_sheet(years=range(2012, 2022), stations=("BAY-01", "BAY-02"), seed=7):
    """Monthly samples with a rising summer chlorophyll signal."""
    rng = np.random.default_rng(seed)
    rows = []
    for year in years:
        for month in range(1, 13):
            for station in stations:
                summer = month in (6, 7, 8)
                chla = 4.0 + (year - 2012) * (1.5 if summer else 0.0) + rng.uniform(0, 1)
                rows.append({
                    "Station": station,
                    "Date": f"{year}-{month:02d}-15",
                    "Water Temp (C)": f"{12 + 10 * np.sin((month - 3) / 12 * 2 * np.pi) + rng.normal(0, 1):.2f}",
                    "Salinity (ppt)": f"{25 + rng.normal(0, 2):.2f}",
                    "DO (mg/L)": f"{8 + rng.normal(0, 1):.2f}",
                    "pH": f"{7.9 + rng.normal(0, 0.1):.2f}",
                    "Chl a (ug/L)": "<0.5" if (month == 1 and station == "BAY-02") else f"{chla:.2f}",
                    "Secchi (m)": f"{1.5 + rng.normal(0, 0.2):.2f}",
                })
    return pd.DataFrame(rows)


@pytest.fixture
def logger():
    return logging.getLogger("bay_wq.tests")


@pytest.fixture
def wide_sheet():
    return make_wide_sheet()


@pytest.fixture
def sheet_csv(tmp_path, wide_sheet):
    path = tmp_path / "bay_monitoring.csv"
    wide_sheet.to_csv(path, index=False)
    return path


@pytest.fixture
def config(tmp_path, sheet_csv):
    return ReportConfig(input_file=sheet_csv, output_dir=tmp_path / "out")


@pytest.fixture
def clean_df(config, logger, wide_sheet):
    from bay_wq.loader import MonitoringDataLoader
    return MonitoringDataLoader(config, logger).clean_data(wide_sheet.astype(str))
