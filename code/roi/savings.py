from .schemas import (
    DEFAULT_CONFIG,
    DownstreamProductivity,
    EngineConfig,
    LaborEfficiency,
    NormalizedInput,
    ReworkReduction,
    Savings,
    Tool,
    ToolConsolidation,
)
from .utils import round_currency, round_half_up

LABOR_TIME_SAVED_CAP = 0.45
LABOR_CICD_BONUS = 0.05
REWORK_BASE_REDUCTION = 0.20
REWORK_GOVERNANCE_FACTOR = 1.1
DOWNSTREAM_BASE_HOURS = 3.0
DOWNSTREAM_GOVERNANCE_HOURS = 1.0
DOWNSTREAM_CLOUD_HOURS = 0.5
CONSULTING_SHARE = 0.4
TOOL_REDUCTION_CAP = 0.80
ADOPTED_PRODUCT_SPEND = 120000

LIGHTWEIGHT_TOOLS = (Tool.EXCEL, Tool.VISIO)
ADVANCED_TOOLS = (Tool.ERWIN, Tool.POWERDESIGNER)

# annual licence cost per seat
SEAT_COSTS = {
    Tool.ERWIN: 8000,
    Tool.POWERDESIGNER: 6000,
    Tool.EXCEL: 500,
    Tool.VISIO: 500,
    Tool.LUCIDCHART: 1200,
}
DEFAULT_SEAT_COST = 2000


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _base_time_saved(tool: Tool) -> float:
    if tool == Tool.SQLDBM:
        return 0.10
    if tool in LIGHTWEIGHT_TOOLS:
        return 0.35
    if tool in ADVANCED_TOOLS:
        return 0.20
    return 0.25


def labor_efficiency(n: NormalizedInput, config: EngineConfig = DEFAULT_CONFIG) -> LaborEfficiency:
    time_saved = _base_time_saved(n.current_tools)
    if n.uses_cicd:
        time_saved += LABOR_CICD_BONUS
    time_saved *= n.overall_multiplier
    time_saved = min(time_saved, LABOR_TIME_SAVED_CAP)

    annual = n.team_size * config.fte_annual_cost * time_saved
    percent = round_currency(time_saved * 100)
    return LaborEfficiency(
        annual_savings=round_currency(annual),
        details=f"{n.team_size} engineers × {_money(config.fte_annual_cost)} × {percent}% time saved",
        time_saved_percent=percent,
    )


def rework_reduction(n: NormalizedInput, config: EngineConfig = DEFAULT_CONFIG) -> ReworkReduction:
    avoided = max(n.rework_percent, n.revision_percent) / 100
    avoided = min(avoided, REWORK_BASE_REDUCTION * n.overall_multiplier)
    if n.uses_governance:
        # Applied after the cap and never re-clamped.
        avoided *= REWORK_GOVERNANCE_FACTOR

    annual = n.data_products * config.hours_per_model * config.hourly_cost * avoided
    percent = round_currency(avoided * 100)
    return ReworkReduction(
        annual_savings=round_currency(annual),
        details=(
            f"{n.data_products} models × {config.hours_per_model} hrs × "
            f"${config.hourly_cost} × {percent}% rework avoided"
        ),
        rework_avoided_percent=percent,
    )


def downstream_productivity(
    n: NormalizedInput, config: EngineConfig = DEFAULT_CONFIG
) -> DownstreamProductivity:
    hours = DOWNSTREAM_BASE_HOURS
    if n.uses_governance:
        hours += DOWNSTREAM_GOVERNANCE_HOURS
    if n.cloud_only:
        hours += DOWNSTREAM_CLOUD_HOURS
    hours *= n.overall_multiplier

    annual = n.stakeholders * hours * config.stakeholder_hourly_cost * 12
    hours_display = round_half_up(hours, 1)
    return DownstreamProductivity(
        annual_savings=round_currency(annual),
        details=(
            f"{n.stakeholders} stakeholders × {hours_display:g} hrs/month × "
            f"${config.stakeholder_hourly_cost} × 12 months"
        ),
        hours_saved_per_month=hours_display,
    )


def current_tool_spend(n: NormalizedInput) -> float:
    if n.current_tools == Tool.SQLDBM:
        return ADOPTED_PRODUCT_SPEND
    return n.team_size * SEAT_COSTS.get(n.current_tools, DEFAULT_SEAT_COST)


def _base_reduction(tool: Tool) -> float:
    if tool == Tool.SQLDBM:
        return 0.05
    if tool in LIGHTWEIGHT_TOOLS:
        return 0.30
    return 0.60


def tool_consolidation(n: NormalizedInput, config: EngineConfig = DEFAULT_CONFIG) -> ToolConsolidation:
    tool_spend = current_tool_spend(n)
    consulting = tool_spend * CONSULTING_SHARE
    total_spend = tool_spend + consulting

    reduction = _base_reduction(n.current_tools) * n.overall_multiplier
    reduction = min(reduction, TOOL_REDUCTION_CAP)

    percent = round_currency(reduction * 100)
    return ToolConsolidation(
        annual_savings=round_currency(total_spend * reduction),
        details=f"{_money(round_currency(total_spend))} current spend × {percent}% reduction",
        current_tool_spend=round_currency(tool_spend),
        consulting_spend=round_currency(consulting),
        reduction_percent=percent,
    )


def compute_savings(n: NormalizedInput, config: EngineConfig = DEFAULT_CONFIG) -> Savings:
    return Savings(
        labor_efficiency=labor_efficiency(n, config),
        rework_reduction=rework_reduction(n, config),
        downstream_productivity=downstream_productivity(n, config),
        tool_consolidation=tool_consolidation(n, config),
    )
