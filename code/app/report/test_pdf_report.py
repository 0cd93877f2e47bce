from datetime import date

from reportlab.platypus import Paragraph

from app.core.sample_payloads import SAMPLE_FORM
from app.report import pdf_report
from app.report.pdf_report import (
    ReportBuilder,
    build_report,
    format_payback_period,
    narrative_summary,
    report_filename,
)
from roi.engine import calculate_roi
from roi.schemas import EngineConfig

ON = date(2025, 3, 14)


def test_filename():
    assert report_filename("Acme Analytics", ON) == "SqlDBM_ROI_Analysis_Acme_Analytics_2025-03-14.pdf"
    assert report_filename("", ON) == "SqlDBM_ROI_Analysis_Company_2025-03-14.pdf"
    assert report_filename("R&D Co.", ON) == "SqlDBM_ROI_Analysis_R_D_Co__2025-03-14.pdf"


def test_payback_period_wording():
    assert format_payback_period(2.4) == "2 months"
    assert format_payback_period(12) == "12 months"
    assert format_payback_period(33.9) == "2.8 years"
    assert format_payback_period(24) == "2 years"


def test_narrative_mentions_headline_numbers():
    text = narrative_summary(calculate_roi(SAMPLE_FORM))
    assert "2 months payback period" in text
    assert "3.9x ROI" in text
    assert "$588,300" in text


def test_render_in_memory():
    outcome = build_report(calculate_roi(SAMPLE_FORM), on=ON)
    assert outcome.success
    assert outcome.error is None
    assert outcome.path is None
    assert outcome.data.startswith(b"%PDF")
    assert outcome.filename.endswith("_2025-03-14.pdf")


def test_render_to_directory(tmp_path):
    outcome = build_report(calculate_roi(SAMPLE_FORM), output_dir=tmp_path / "reports", on=ON)
    assert outcome.success
    written = tmp_path / "reports" / "SqlDBM_ROI_Analysis_Acme_Analytics_2025-03-14.pdf"
    assert outcome.path == str(written)
    assert written.read_bytes() == outcome.data


def test_failure_is_reported_not_raised(monkeypatch):
    def broken(self, result, on=None):
        raise RuntimeError("font missing")

    monkeypatch.setattr(pdf_report.ReportBuilder, "render", broken)
    outcome = build_report(calculate_roi(SAMPLE_FORM), on=ON)
    assert not outcome.success
    assert outcome.error == "font missing"
    assert outcome.data == b""


def test_cost_lines_follow_engine_config():
    config = EngineConfig(platform_annual_cost=240000)
    result = calculate_roi(SAMPLE_FORM, config)
    texts = [f.getPlainText() for f in ReportBuilder(config)._breakdown(result) if isinstance(f, Paragraph)]
    assert "• SqlDBM annual platform cost: $240,000" in texts
