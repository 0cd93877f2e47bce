from typing import Any, Mapping, Optional, Type, TypeVar

from .schemas import DEFAULT_CONFIG, CompanySize, EngineConfig, Industry, NormalizedInput, Tool
from .utils import parse_bool, parse_int

E = TypeVar("E", Tool, Industry, CompanySize)

# form key -> fallback used when the value is missing, unparseable or zero
NUMERIC_DEFAULTS = {
    "dbSpend": 0,
    "dbtSpend": 0,
    "teamSize": 1,
    "stakeholders": 1,
    "dataProducts": 1,
    "modelTime": 30,
    "reworkPercent": 15,
    "revisionPercent": 20,
}

TOOL_ALIASES = {
    "drawio": Tool.DRAWIO,
    "draw io": Tool.DRAWIO,
    "power designer": Tool.POWERDESIGNER,
    "erwin data modeler": Tool.ERWIN,
    "ms excel": Tool.EXCEL,
    "microsoft excel": Tool.EXCEL,
    "ms visio": Tool.VISIO,
    "microsoft visio": Tool.VISIO,
}


def _int_or_default(raw: Mapping[str, Any], key: str) -> int:
    # A parsed 0 is treated like a missing value, as the form always did.
    return parse_int(raw.get(key)) or NUMERIC_DEFAULTS[key]


def _text(raw: Mapping[str, Any], key: str, default: str = "") -> str:
    value = raw.get(key)
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def resolve_choice(enum_cls: Type[E], value: Optional[str], fallback: E) -> E:
    if not value:
        return fallback
    cleaned = str(value).strip().lower()
    try:
        return enum_cls(cleaned)
    except ValueError:
        pass
    if enum_cls is Tool and cleaned in TOOL_ALIASES:
        return TOOL_ALIASES[cleaned]
    return fallback


def resolve_tool(value: Optional[str]) -> Tool:
    return resolve_choice(Tool, value, Tool.OTHER)


def resolve_industry(value: Optional[str]) -> Industry:
    return resolve_choice(Industry, value, Industry.OTHER)


def resolve_company_size(value: Optional[str]) -> CompanySize:
    return resolve_choice(CompanySize, value, CompanySize.MEDIUM)


def normalize(raw: Optional[Mapping[str, Any]], config: EngineConfig = DEFAULT_CONFIG) -> NormalizedInput:
    """
    Turn a raw form record (camelCase keys) into a complete NormalizedInput.
    Missing or malformed values fall back to defaults; this never raises for a mapping or None.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise TypeError(f"Expected a mapping of form values, got {type(raw).__name__}")

    industry = resolve_industry(raw.get("industry"))
    company_size = resolve_company_size(raw.get("companySize"))
    industry_multiplier = config.industry_multipliers.get(
        industry, config.industry_multipliers.get(Industry.OTHER, 1.0)
    )
    company_size_multiplier = config.company_size_multipliers.get(
        company_size, config.company_size_multipliers.get(CompanySize.MEDIUM, 1.0)
    )

    return NormalizedInput(
        db_spend=_int_or_default(raw, "dbSpend"),
        dbt_spend=_int_or_default(raw, "dbtSpend"),
        team_size=_int_or_default(raw, "teamSize"),
        stakeholders=_int_or_default(raw, "stakeholders"),
        data_products=_int_or_default(raw, "dataProducts"),
        model_time=_int_or_default(raw, "modelTime"),
        rework_percent=_int_or_default(raw, "reworkPercent"),
        revision_percent=_int_or_default(raw, "revisionPercent"),
        current_tools=resolve_tool(raw.get("currentTools")),
        industry=industry,
        company_size=company_size,
        region=_text(raw, "region", "americas"),
        uses_cicd=parse_bool(raw.get("usesCICD", False)),
        uses_governance=parse_bool(raw.get("usesGovernance", False)),
        cloud_only=parse_bool(raw.get("cloudOnly", False)),
        business_email=_text(raw, "businessEmail"),
        first_name=_text(raw, "firstName"),
        last_name=_text(raw, "lastName"),
        company=_text(raw, "company"),
        job_title=_text(raw, "jobTitle"),
        industry_multiplier=industry_multiplier,
        company_size_multiplier=company_size_multiplier,
        overall_multiplier=industry_multiplier * company_size_multiplier,
    )
