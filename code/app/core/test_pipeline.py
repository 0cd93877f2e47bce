import pytest

from app.core import pipeline
from app.core.pipeline import generate_report, run_calculation, submit_lead
from app.core.sample_payloads import SAMPLE_FORM
from app.report.pdf_report import ReportOutcome
from roi.engine import CalculationError, RoiEngine
from roi.schemas import EngineConfig


def test_run_calculation_bundles_view_data():
    outcome = run_calculation(SAMPLE_FORM)
    assert outcome.result.metrics.total_annual_value == 588300
    assert outcome.text.summary == "Break-even in 2.4 months with 3.9x ROI over 3 years"
    assert outcome.breakdown_series["amounts"][0] == 525000
    assert outcome.timeline_series["months"][-1] == 36


def test_run_calculation_custom_engine():
    engine = RoiEngine(EngineConfig(platform_annual_cost=240000))
    outcome = run_calculation(SAMPLE_FORM, engine=engine)
    assert outcome.result.metrics.net_annual_value == 348300


def test_run_calculation_propagates_failure():
    with pytest.raises(CalculationError):
        run_calculation(["not", "a", "form"])


def test_submit_lead_foreground(monkeypatch):
    seen = []
    monkeypatch.setattr(pipeline, "deliver_lead", lambda payload, url=None: seen.append((payload, url)))
    result = run_calculation(SAMPLE_FORM).result
    submit_lead(result, background=False, url="https://hooks.example.com/lead")
    assert len(seen) == 1
    payload, url = seen[0]
    assert url == "https://hooks.example.com/lead"
    assert payload.business_email == "dana.reyes@acme-analytics.com"


def test_submit_lead_background_uses_thread(monkeypatch):
    seen = []
    monkeypatch.setattr(pipeline, "deliver_lead_in_background", lambda payload, url=None: seen.append(payload))
    submit_lead(run_calculation(SAMPLE_FORM).result)
    assert len(seen) == 1


def test_submit_lead_never_raises(monkeypatch):
    def broken(result):
        raise ValueError("bad payload")

    monkeypatch.setattr(pipeline, "build_lead_payload", broken)
    submit_lead(run_calculation(SAMPLE_FORM).result)


def test_generate_report_writes_file(tmp_path):
    outcome = generate_report(run_calculation(SAMPLE_FORM).result, output_dir=tmp_path)
    assert outcome.success
    assert outcome.path is not None
    assert (tmp_path / outcome.filename).read_bytes() == outcome.data


def test_generate_report_uses_engine_config(monkeypatch):
    seen = {}

    def fake_build(result, output_dir=None, config=None):
        seen["config"] = config
        return ReportOutcome(success=True, filename="x.pdf", data=b"%PDF")

    monkeypatch.setattr(pipeline, "build_report", fake_build)
    custom = EngineConfig(platform_annual_cost=240000)
    outcome = run_calculation(SAMPLE_FORM, engine=RoiEngine(custom))
    assert outcome.config is custom
    generate_report(outcome.result, config=outcome.config)
    assert seen["config"].platform_annual_cost == 240000

    generate_report(outcome.result)
    assert seen["config"].platform_annual_cost == 120000
