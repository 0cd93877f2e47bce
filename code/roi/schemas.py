from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping

from .utils import to_plain


class Tool(str, Enum):
    SQLDBM = "sqldbm"
    ERWIN = "erwin"
    POWERDESIGNER = "powerdesigner"
    EXCEL = "excel"
    VISIO = "visio"
    LUCIDCHART = "lucidchart"
    DRAWIO = "draw.io"
    OTHER = "other"


class Industry(str, Enum):
    FINANCIAL_SERVICES = "financial-services"
    INSURANCE = "insurance"
    HEALTHCARE = "healthcare"
    TECHNOLOGY = "technology"
    RETAIL_ECOMMERCE = "retail-ecommerce"
    MANUFACTURING = "manufacturing"
    TELECOMMUNICATIONS = "telecommunications"
    ENERGY = "energy"
    GOVERNMENT = "government"
    EDUCATION = "education"
    MEDIA = "media"
    OTHER = "other"


class CompanySize(str, Enum):
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


INDUSTRY_MULTIPLIERS = MappingProxyType({
    Industry.FINANCIAL_SERVICES: 1.2,
    Industry.INSURANCE: 1.15,
    Industry.HEALTHCARE: 1.1,
    Industry.TECHNOLOGY: 1.0,
    Industry.RETAIL_ECOMMERCE: 0.9,
    Industry.MANUFACTURING: 0.8,
    Industry.TELECOMMUNICATIONS: 1.0,
    Industry.ENERGY: 1.1,
    Industry.GOVERNMENT: 0.7,
    Industry.EDUCATION: 0.6,
    Industry.MEDIA: 0.9,
    Industry.OTHER: 1.0,
})

COMPANY_SIZE_MULTIPLIERS = MappingProxyType({
    CompanySize.MEDIUM: 1.0,
    CompanySize.LARGE: 1.1,
    CompanySize.ENTERPRISE: 1.2,
})


@dataclass(frozen=True)
class EngineConfig:
    platform_annual_cost: int = 120000
    fte_annual_cost: int = 150000
    hourly_cost: int = 75
    stakeholder_hourly_cost: int = 60
    hours_per_model: int = 80
    timeline_months: int = 36
    industry_multipliers: Mapping[Industry, float] = field(default_factory=lambda: INDUSTRY_MULTIPLIERS)
    company_size_multipliers: Mapping[CompanySize, float] = field(
        default_factory=lambda: COMPANY_SIZE_MULTIPLIERS
    )


DEFAULT_CONFIG = EngineConfig()


@dataclass(frozen=True)
class NormalizedInput:
    db_spend: int = 0
    dbt_spend: int = 0
    team_size: int = 1
    stakeholders: int = 1
    data_products: int = 1
    model_time: int = 30
    rework_percent: int = 15
    revision_percent: int = 20
    current_tools: Tool = Tool.OTHER
    industry: Industry = Industry.OTHER
    company_size: CompanySize = CompanySize.MEDIUM
    region: str = "americas"
    uses_cicd: bool = False
    uses_governance: bool = False
    cloud_only: bool = False
    business_email: str = ""
    first_name: str = ""
    last_name: str = ""
    company: str = ""
    job_title: str = ""
    industry_multiplier: float = 1.0
    company_size_multiplier: float = 1.0
    overall_multiplier: float = 1.0


@dataclass(frozen=True)
class SavingsComponent:
    annual_savings: int
    details: str


@dataclass(frozen=True)
class LaborEfficiency(SavingsComponent):
    time_saved_percent: int = 0


@dataclass(frozen=True)
class ReworkReduction(SavingsComponent):
    rework_avoided_percent: int = 0


@dataclass(frozen=True)
class DownstreamProductivity(SavingsComponent):
    hours_saved_per_month: float = 0.0


@dataclass(frozen=True)
class ToolConsolidation(SavingsComponent):
    current_tool_spend: int = 0
    consulting_spend: int = 0
    reduction_percent: int = 0


@dataclass(frozen=True)
class Savings:
    labor_efficiency: LaborEfficiency
    rework_reduction: ReworkReduction
    downstream_productivity: DownstreamProductivity
    tool_consolidation: ToolConsolidation

    def components(self) -> List[SavingsComponent]:
        # Fixed order: labor, rework, downstream, tooling.
        return [
            self.labor_efficiency,
            self.rework_reduction,
            self.downstream_productivity,
            self.tool_consolidation,
        ]


@dataclass(frozen=True)
class RoiMetrics:
    total_annual_value: int
    net_annual_value: int
    payback_months: float
    three_year_roi: float
    three_year_value: int
    break_even_month: int


@dataclass(frozen=True)
class BreakdownEntry:
    category: str
    amount: int
    percentage: int
    description: str


@dataclass(frozen=True)
class TimelinePoint:
    month: int
    monthly_value: int
    cumulative_value: int
    cumulative_cost: int
    net_value: int
    roi: float


@dataclass(frozen=True)
class RoiResult:
    inputs: NormalizedInput
    savings: Savings
    metrics: RoiMetrics
    breakdown: List[BreakdownEntry] = field(default_factory=list)
    timeline: List[TimelinePoint] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return to_plain(self)
