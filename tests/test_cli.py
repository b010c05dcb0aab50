import logging

import pytest

from bay_wq.cli import build_parser, main
from bay_wq.log import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def test_parser_defaults(tmp_path):
    args = build_parser().parse_args([str(tmp_path / "data.xlsx")])
    assert args.sheet is None
    assert args.verbose is False
    assert args.output_dir.name == "bay_wq_output"


def test_setup_logging_writes_file(tmp_path):
    logger = setup_logging(tmp_path / "logs")
    logger.info("hello report")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert "hello report" in (tmp_path / "logs" / "analysis.log").read_text(encoding="utf-8")

    # Reconfiguring replaces handlers instead of stacking them
    assert len(setup_logging(tmp_path / "logs").handlers) == 2


def test_main_end_to_end(sheet_csv, tmp_path):
    out = tmp_path / "report"
    main([str(sheet_csv), "--output-dir", str(out)])

    assert (out / "analysis_report.txt").exists()
    assert (out / "seasonal_trends.csv").exists()
    assert (out / "plots" / "parameter_facets.png").exists()
    assert "ANALYSIS COMPLETE" in (out / "analysis.log").read_text(encoding="utf-8")


def test_main_missing_input(tmp_path):
    out = tmp_path / "report"
    with pytest.raises(FileNotFoundError):
        main([str(tmp_path / "missing.csv"), "-o", str(out)])
    assert "Input file not found" in (out / "analysis.log").read_text(encoding="utf-8")
