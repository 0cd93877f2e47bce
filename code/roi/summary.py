import math
from dataclasses import dataclass

from .schemas import RoiResult
from .utils import format_number

PRODUCT_NAME = "SqlDBM"


@dataclass(frozen=True)
class SummaryText:
    summary: str
    narrative: str


def headline(payback_months: float, three_year_roi: float) -> str:
    roi = format_number(three_year_roi)
    if payback_months <= 12:
        return f"Break-even in {format_number(payback_months)} months with {roi}x ROI over 3 years"
    if payback_months <= 24:
        return f"Break-even in {math.ceil(payback_months)} months with {roi}x ROI over 3 years"
    return f"Positive ROI achieved over 3 years with {roi}x return"


def summary_text(result: RoiResult) -> SummaryText:
    metrics = result.metrics
    inputs = result.inputs
    narrative = (
        f"With {PRODUCT_NAME}, your {inputs.team_size}-person team breaks even in "
        f"{math.ceil(metrics.payback_months)} months and achieves {format_number(metrics.three_year_roi)}x "
        f"ROI over 3 years, while empowering {inputs.stakeholders} downstream stakeholders with better "
        "data model access and understanding."
    )
    return SummaryText(summary=headline(metrics.payback_months, metrics.three_year_roi), narrative=narrative)
