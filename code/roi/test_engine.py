import pytest

from roi.engine import CalculationError, RoiEngine, calculate_roi
from roi.schemas import EngineConfig, Industry

EXAMPLE_FORM = {
    "teamSize": 10,
    "stakeholders": 20,
    "dataProducts": 15,
    "currentTools": "excel",
    "industry": "technology",
    "companySize": "medium",
    "reworkPercent": 15,
    "revisionPercent": 20,
    "usesCICD": False,
    "usesGovernance": False,
    "cloudOnly": False,
}


def test_example_scenario_savings():
    result = calculate_roi(EXAMPLE_FORM)
    s = result.savings
    assert result.inputs.overall_multiplier == 1.0
    assert s.labor_efficiency.time_saved_percent == 35
    assert s.labor_efficiency.annual_savings == 525000
    assert s.rework_reduction.rework_avoided_percent == 20
    assert s.rework_reduction.annual_savings == 18000
    assert s.downstream_productivity.hours_saved_per_month == 3
    assert s.downstream_productivity.annual_savings == 43200
    assert s.tool_consolidation.current_tool_spend == 5000
    assert s.tool_consolidation.consulting_spend == 2000
    assert s.tool_consolidation.reduction_percent == 30
    assert s.tool_consolidation.annual_savings == 2100


def test_example_scenario_metrics():
    m = calculate_roi(EXAMPLE_FORM).metrics
    assert m.total_annual_value == 588300
    assert m.net_annual_value == 468300
    assert m.payback_months == 2.4
    assert m.three_year_roi == 3.9
    assert m.three_year_value == 1404900
    assert m.break_even_month == 3


def test_break_even_uses_unrounded_payback():
    form = {
        "teamSize": 12,
        "stakeholders": 32,
        "dataProducts": 15,
        "currentTools": "excel",
        "industry": "technology",
        "companySize": "medium",
    }
    m = calculate_roi(form).metrics
    assert m.total_annual_value == 719640
    # 120000 / 719640 * 12 is just over 2 months
    assert m.payback_months == 2.0
    assert m.break_even_month == 3


def test_total_is_sum_of_rounded_components():
    forms = [
        EXAMPLE_FORM,
        {},
        {**EXAMPLE_FORM, "industry": "insurance", "companySize": "large", "usesGovernance": True},
        {**EXAMPLE_FORM, "currentTools": "erwin", "cloudOnly": True, "teamSize": 7},
        {**EXAMPLE_FORM, "currentTools": "sqldbm", "industry": "education"},
    ]
    for form in forms:
        result = calculate_roi(form)
        parts = [c.annual_savings for c in result.savings.components()]
        assert all(isinstance(p, int) for p in parts)
        assert result.metrics.total_annual_value == sum(parts)


def test_breakdown_percentages_sum_to_100():
    for industry in Industry:
        result = calculate_roi({**EXAMPLE_FORM, "industry": industry.value, "usesCICD": True})
        assert [e.category for e in result.breakdown] == [
            "Labor Efficiency Savings",
            "Rework Reduction",
            "Downstream Productivity Gains",
            "Tool Consolidation Savings",
        ]
        assert abs(sum(e.percentage for e in result.breakdown) - 100) <= 1


def test_non_positive_total_uses_sentinels():
    form = {"reworkPercent": -500, "revisionPercent": -500, "dataProducts": 100}
    result = calculate_roi(form)
    assert result.metrics.total_annual_value < 0
    assert result.metrics.payback_months == 99
    assert result.metrics.break_even_month == 99
    assert sum(e.percentage for e in result.breakdown) == 0


def test_timeline_shape():
    result = calculate_roi(EXAMPLE_FORM)
    points = result.timeline
    assert len(points) == 36
    assert [p.month for p in points] == list(range(1, 37))
    for prev, cur in zip(points, points[1:]):
        assert cur.cumulative_value >= prev.cumulative_value
        assert cur.cumulative_cost >= prev.cumulative_cost
    assert points[0].monthly_value == 49025
    assert points[0].cumulative_cost == 10000
    assert points[0].roi == 3.9
    assert points[-1].cumulative_cost == 360000
    assert points[-1].net_value == 1404900


def test_idempotent():
    engine = RoiEngine()
    assert engine.calculate(EXAMPLE_FORM) == engine.calculate(EXAMPLE_FORM)
    assert engine.calculate(EXAMPLE_FORM).to_dict() == engine.calculate(dict(EXAMPLE_FORM)).to_dict()


def test_empty_input_defaults():
    for raw in (None, {}):
        result = calculate_roi(raw)
        assert result.inputs.team_size == 1
        assert result.inputs.data_products == 1
        assert result.inputs.stakeholders == 1
        assert result.metrics.total_annual_value == 42540
        assert result.metrics.payback_months == 33.9
        assert result.metrics.break_even_month == 34
        assert result.metrics.three_year_roi == -0.6
        assert [e.percentage for e in result.breakdown] == [88, 3, 5, 4]


def test_non_mapping_input_raises_calculation_error():
    with pytest.raises(CalculationError) as exc:
        RoiEngine().calculate(["teamSize", 10])
    assert "Failed to calculate ROI" in str(exc.value)
    assert isinstance(exc.value.__cause__, TypeError)


def test_to_dict_is_plain_data():
    data = calculate_roi(EXAMPLE_FORM).to_dict()
    assert data["inputs"]["current_tools"] == "excel"
    assert data["metrics"]["total_annual_value"] == 588300
    assert len(data["timeline"]) == 36
    assert data["breakdown"][0]["amount"] == 525000


def test_injected_config_changes_platform_cost():
    config = EngineConfig(platform_annual_cost=60000)
    m = calculate_roi(EXAMPLE_FORM, config).metrics
    assert m.net_annual_value == 588300 - 60000
    assert calculate_roi(EXAMPLE_FORM, config).timeline[-1].cumulative_cost == 180000


def test_summary_text():
    engine = RoiEngine()
    text = engine.summarize(engine.calculate(EXAMPLE_FORM))
    assert text.summary == "Break-even in 2.4 months with 3.9x ROI over 3 years"
    assert text.narrative.startswith("With SqlDBM, your 10-person team breaks even in 3 months")
    assert "20 downstream stakeholders" in text.narrative

    slow = engine.summarize(engine.calculate({}))
    assert slow.summary == "Positive ROI achieved over 3 years with -0.6x return"
