import math
from typing import List

from .schemas import DEFAULT_CONFIG, BreakdownEntry, EngineConfig, RoiMetrics, Savings, TimelinePoint
from .utils import round_currency, round_half_up, safe_div

NO_PAYBACK_MONTHS = 99
MIN_PAYBACK_MONTHS = 0.1

BREAKDOWN_LABELS = (
    "Labor Efficiency Savings",
    "Rework Reduction",
    "Downstream Productivity Gains",
    "Tool Consolidation Savings",
)


def raw_payback_months(total_annual_value: int, annual_cost: int) -> float:
    if total_annual_value <= 0:
        return float(NO_PAYBACK_MONTHS)
    return (annual_cost / total_annual_value) * 12


def compute_payback_months(total_annual_value: int, annual_cost: int) -> float:
    if total_annual_value <= 0:
        return float(NO_PAYBACK_MONTHS)
    raw = raw_payback_months(total_annual_value, annual_cost)
    return max(MIN_PAYBACK_MONTHS, round_half_up(raw, 1))


def aggregate(savings: Savings, config: EngineConfig = DEFAULT_CONFIG) -> RoiMetrics:
    # Sum of already-rounded components; never re-rounded from raw values.
    total = sum(c.annual_savings for c in savings.components())
    net = total - config.platform_annual_cost
    payback = compute_payback_months(total, config.platform_annual_cost)
    # break-even counts whole months from the unrounded figure
    break_even = math.ceil(raw_payback_months(total, config.platform_annual_cost))

    three_year_value = net * 3
    three_year_investment = config.platform_annual_cost * 3
    three_year_roi = safe_div(three_year_value, three_year_investment, default=0.0)

    return RoiMetrics(
        total_annual_value=total,
        net_annual_value=net,
        payback_months=payback,
        three_year_roi=round_half_up(three_year_roi, 1),
        three_year_value=round_currency(three_year_value),
        break_even_month=break_even,
    )


def breakdown(savings: Savings) -> List[BreakdownEntry]:
    components = savings.components()
    total = sum(c.annual_savings for c in components)
    entries = []
    for label, component in zip(BREAKDOWN_LABELS, components):
        percentage = round_currency(component.annual_savings / total * 100) if total > 0 else 0
        entries.append(
            BreakdownEntry(
                category=label,
                amount=component.annual_savings,
                percentage=percentage,
                description=component.details,
            )
        )
    return entries


def timeline(metrics: RoiMetrics, config: EngineConfig = DEFAULT_CONFIG) -> List[TimelinePoint]:
    monthly_value = metrics.total_annual_value / 12
    monthly_cost = config.platform_annual_cost / 12
    cumulative_value = 0.0
    cumulative_cost = 0.0
    points: List[TimelinePoint] = []
    for month in range(1, config.timeline_months + 1):
        cumulative_value += monthly_value
        cumulative_cost += monthly_cost
        roi = safe_div(cumulative_value - cumulative_cost, cumulative_cost, default=0.0)
        points.append(
            TimelinePoint(
                month=month,
                monthly_value=round_currency(monthly_value),
                cumulative_value=round_currency(cumulative_value),
                cumulative_cost=round_currency(cumulative_cost),
                net_value=round_currency(cumulative_value - cumulative_cost),
                roi=round_half_up(roi, 2),
            )
        )
    return points
