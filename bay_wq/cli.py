#!/usr/bin/env python3
"""
Command-line entry point for the bay monitoring report.

Loads the monitoring spreadsheet, classifies seasonal trends, draws the
report figures and writes the tables and text report to the output
directory. Failures are logged to the run log and re-raised.

License: MIT
"""

from __future__ import annotations

import argparse
import warnings
from pathlib import Path
from typing import Optional, Sequence

from bay_wq.analysis import SeasonalTrendAnalysis, summarize_parameters
from bay_wq.config import ReportConfig
from bay_wq.loader import MonitoringDataLoader
from bay_wq.log import setup_logging
from bay_wq.plots import MonitoringVisualizer
from bay_wq.report import ReportGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bay-wq-report",
        description="Clean bay monitoring data, classify seasonal trends and draw report graphics.",
    )
    parser.add_argument("input_file", type=Path, help="monitoring spreadsheet (.xlsx or .csv)")
    parser.add_argument("-o", "--output-dir", type=Path, default=ReportConfig.output_dir,
                        help="directory for plots, tables and the log")
    parser.add_argument("--sheet", default=None, help="worksheet name (default: first sheet)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug output on the console")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    config = ReportConfig(input_file=args.input_file, output_dir=args.output_dir,
                          sheet_name=args.sheet)
    logger = setup_logging(config.output_dir, verbose=args.verbose)

    logger.info("=" * 60)
    logger.info("BAY WATER QUALITY REPORT")
    logger.info("=" * 60)

    warnings.filterwarnings('ignore', category=FutureWarning)

    try:
        loader = MonitoringDataLoader(config, logger)
        df = loader.clean_data(loader.load_data())

        summary = summarize_parameters(df)
        trends = SeasonalTrendAnalysis(df, config, logger).classify_trends()

        visualizer = MonitoringVisualizer(df, config, logger)
        visualizer.create_all_visualizations(trends)

        ReportGenerator(config, logger).generate_reports(df, summary, trends)

        logger.info("=" * 60)
        logger.info("ANALYSIS COMPLETE")
        logger.info(f"Results saved to: {config.output_dir.absolute()}")
        logger.info("=" * 60)

    except FileNotFoundError:
        logger.error(f"Input file not found: {config.input_file}")
        raise
    except Exception as e:
        logger.exception(f"Analysis failed: {e}")
        raise


if __name__ == "__main__":
    main()
