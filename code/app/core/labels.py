from typing import Dict

TOOL_LABELS: Dict[str, str] = {
    "sqldbm": "SqlDBM",
    "erwin": "Erwin",
    "powerdesigner": "PowerDesigner",
    "excel": "Excel",
    "visio": "Visio",
    "lucidchart": "Lucidchart",
    "draw.io": "Draw.io",
    "other": "Other",
}

INDUSTRY_LABELS: Dict[str, str] = {
    "financial-services": "Financial Services",
    "insurance": "Insurance",
    "healthcare": "Healthcare",
    "retail-ecommerce": "Retail & E-commerce",
    "technology": "Technology",
    "manufacturing": "Manufacturing",
    "telecommunications": "Telecommunications",
    "energy": "Energy & Utilities",
    "government": "Government",
    "education": "Education",
    "media": "Media & Entertainment",
    "other": "Other",
}

COMPANY_SIZE_LABELS: Dict[str, str] = {
    "medium": "Medium (< $500M)",
    "large": "Large ($500M - $5B)",
    "enterprise": "Enterprise (> $5B)",
}

REGION_LABELS: Dict[str, str] = {
    "americas": "Americas",
    "emea": "EMEA",
    "apac": "APAC",
}


def _label(table: Dict[str, str], value) -> str:
    key = getattr(value, "value", value)
    return table.get(key, str(key))


def format_tool(value) -> str:
    return _label(TOOL_LABELS, value)


def format_industry(value) -> str:
    return _label(INDUSTRY_LABELS, value)


def format_company_size(value) -> str:
    return _label(COMPANY_SIZE_LABELS, value)


def format_region(value) -> str:
    return _label(REGION_LABELS, value)
