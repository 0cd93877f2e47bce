import math
from typing import Any, Dict, List, Sequence

from roi.schemas import BreakdownEntry, TimelinePoint

LABEL_MAX = 25


def format_currency(value: float) -> str:
    if value < 0:
        return f"-${abs(value):,.0f}"
    return f"${value:,.0f}"


def format_multiple(roi: float) -> str:
    return f"{roi:.1f}x"


def format_payback(months: float) -> str:
    whole = math.floor(months + 0.5)
    if whole < 12:
        return f"{whole} months"
    years, remaining = divmod(whole, 12)
    if remaining == 0:
        return f"{years} year{'s' if years > 1 else ''}"
    return f"{years}y {remaining}m"


def truncate_label(label: str, limit: int = LABEL_MAX) -> str:
    if len(label) <= limit:
        return label
    return label[: limit - 3] + "..."


def breakdown_chart(breakdown: Sequence[BreakdownEntry]) -> Dict[str, List[Any]]:
    return {
        "labels": [truncate_label(e.category) for e in breakdown],
        "amounts": [e.amount for e in breakdown],
        "percentages": [e.percentage for e in breakdown],
        "tooltips": [f"{e.category}: {format_currency(e.amount)} ({e.percentage}%)" for e in breakdown],
    }


def _show_month(month: int) -> bool:
    # quarterly through year one, then half-yearly
    if month <= 12:
        return month % 3 == 0
    return month % 6 == 0


def _month_label(month: int) -> str:
    if month <= 12:
        return f"Month {month}"
    return f"Year {math.ceil(month / 12)}"


def timeline_chart(timeline: Sequence[TimelinePoint]) -> Dict[str, List[Any]]:
    points = [p for p in timeline if _show_month(p.month)]
    return {
        "months": [p.month for p in points],
        "labels": [_month_label(p.month) for p in points],
        "cumulative_value": [p.cumulative_value for p in points],
        "cumulative_cost": [p.cumulative_cost for p in points],
        "net_value": [p.net_value for p in points],
    }
