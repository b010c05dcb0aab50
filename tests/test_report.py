import pandas as pd

from bay_wq.analysis import SeasonalTrendAnalysis, summarize_parameters
from bay_wq.report import ReportGenerator


def test_generate_reports(clean_df, config, logger):
    summary = summarize_parameters(clean_df)
    trends = SeasonalTrendAnalysis(clean_df, config, logger).classify_trends()

    paths = ReportGenerator(config, logger).generate_reports(clean_df, summary, trends)

    assert [p.name for p in paths] == [
        "cleaned_data.csv", "summary_statistics.csv", "seasonal_trends.csv", "analysis_report.txt",
    ]
    exported = pd.read_csv(config.output_dir / "seasonal_trends.csv")
    assert "Increasing" in set(exported["classification"])
    assert len(exported) == len(trends)

    text = (config.output_dir / "analysis_report.txt").read_text(encoding="utf-8")
    assert "SIGNIFICANT SEASONAL TRENDS (95% CI on slope excludes zero)" in text
    assert "Chlorophyll a - Summer: Increasing" in text
    assert "(ln(x+1) scale)" in text
    assert "Chlorophyll a: n=240" in text


def test_report_without_trends(clean_df, config, logger):
    summary = summarize_parameters(clean_df)
    paths = ReportGenerator(config, logger).generate_reports(clean_df, summary, pd.DataFrame())

    assert [p.name for p in paths] == ["cleaned_data.csv", "summary_statistics.csv", "analysis_report.txt"]
    assert "SIGNIFICANT SEASONAL TRENDS" not in paths[-1].read_text(encoding="utf-8")
