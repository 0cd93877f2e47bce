import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from app.config import REPORTS_DIR
from app.core.charts import breakdown_chart, timeline_chart
from app.integrations.webhook import build_lead_payload, deliver_lead, deliver_lead_in_background
from app.report.pdf_report import ReportOutcome, build_report
from roi.engine import RoiEngine
from roi.schemas import EngineConfig, RoiResult
from roi.summary import SummaryText

log = logging.getLogger(__name__)

_default_engine = RoiEngine()


@dataclass(frozen=True)
class CalculationOutcome:
    result: RoiResult
    text: SummaryText
    breakdown_series: dict
    timeline_series: dict
    config: EngineConfig


def run_calculation(form: Optional[Mapping[str, Any]], engine: Optional[RoiEngine] = None) -> CalculationOutcome:
    """Engine result plus everything the results view needs. Raises CalculationError on failure."""
    engine = engine or _default_engine
    result = engine.calculate(form)
    return CalculationOutcome(
        result=result,
        text=engine.summarize(result),
        breakdown_series=breakdown_chart(result.breakdown),
        timeline_series=timeline_chart(result.timeline),
        config=engine.config,
    )


def submit_lead(result: RoiResult, background: bool = True, url: Optional[str] = None) -> None:
    """Hand the lead to the webhook. Never raises and never delays the caller when background=True."""
    try:
        payload = build_lead_payload(result)
    except Exception as e:
        log.warning("Could not build lead payload: %s", e)
        return
    if background:
        deliver_lead_in_background(payload, url=url)
    else:
        deliver_lead(payload, url=url)


def generate_report(
    result: RoiResult,
    output_dir: Optional[Path] = None,
    config: Optional[EngineConfig] = None,
) -> ReportOutcome:
    """Render the PDF with the same EngineConfig that produced the result (CalculationOutcome.config)."""
    outcome = build_report(
        result,
        output_dir=output_dir if output_dir is not None else REPORTS_DIR,
        config=config or _default_engine.config,
    )
    if not outcome.success:
        log.warning("Report generation failed: %s", outcome.error)
    return outcome
