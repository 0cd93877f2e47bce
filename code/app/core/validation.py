import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from roi.utils import parse_int

TOTAL_STEPS = 4

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

BUSINESS_DOMAINS = {
    "company.com", "corp.com", "business.com",
    "microsoft.com", "apple.com", "google.com", "amazon.com", "salesforce.com",
    "oracle.com", "ibm.com", "sap.com", "cisco.com", "adobe.com",
}
PERSONAL_DOMAINS = {
    "gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "aol.com",
    "icloud.com", "mail.com", "protonmail.com", "zoho.com", "yandex.com",
}
PERSONAL_PATTERNS = (
    re.compile(r"^(mail|email|webmail|personal)"),
    re.compile(r"\d+mail"),
    re.compile(r"(free|temp|disposable)"),
)

STEP_TITLES = {
    1: "Team & spend",
    2: "Current practices",
    3: "Company profile",
    4: "Contact details",
}
STEP_FIELDS: Dict[int, Tuple[str, ...]] = {
    1: ("dbSpend", "dbtSpend", "teamSize", "stakeholders", "dataProducts"),
    2: ("currentTools", "modelTime", "reworkPercent", "revisionPercent", "usesCICD", "usesGovernance", "cloudOnly"),
    3: ("industry", "companySize", "region"),
    4: ("firstName", "lastName", "businessEmail", "company", "jobTitle"),
}
REQUIRED_FIELDS: Dict[int, Tuple[str, ...]] = {
    1: ("teamSize", "stakeholders", "dataProducts"),
    2: ("currentTools",),
    3: ("industry", "companySize"),
    4: ("firstName", "lastName", "businessEmail", "company"),
}

# field -> (min, max, message)
NUMERIC_RANGES = {
    "teamSize": (1, 100, "Team size must be between 1 and 100"),
    "stakeholders": (1, 1000, "Number of stakeholders must be between 1 and 1000"),
    "dataProducts": (1, 1000, "Number of data products must be between 1 and 1000"),
}
MIN_LENGTHS = {
    "firstName": (2, "Name must be at least 2 characters"),
    "lastName": (2, "Name must be at least 2 characters"),
    "company": (2, "Company name must be at least 2 characters"),
}


@dataclass
class ValidationResult:
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    field_errors: Dict[str, str] = field(default_factory=dict)

    def add(self, field_name: str, message: str) -> None:
        self.valid = False
        self.errors.append(f"{field_name}: {message}")
        self.field_errors.setdefault(field_name, message)

    def merge(self, other: "ValidationResult") -> None:
        self.valid = self.valid and other.valid
        self.errors.extend(other.errors)
        for name, message in other.field_errors.items():
            self.field_errors.setdefault(name, message)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def is_business_email(email: str) -> bool:
    if not is_valid_email(email):
        return False
    domain = email.split("@")[1].lower()
    if domain in PERSONAL_DOMAINS:
        return False
    if domain in BUSINESS_DOMAINS:
        return True
    return not any(p.search(domain) for p in PERSONAL_PATTERNS)


def validate_business_email(email: str) -> Tuple[bool, str]:
    if not email:
        return False, "Email is required"
    if not is_valid_email(email):
        return False, "Please enter a valid email address"
    if not is_business_email(email):
        return False, "Please use your business email address (no personal emails like Gmail, Yahoo, etc.)"
    return True, "Valid business email"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_step(step: int, form: Mapping[str, Any]) -> ValidationResult:
    if step not in STEP_FIELDS:
        raise ValueError(f"Unknown wizard step: {step}")
    result = ValidationResult()
    for name in REQUIRED_FIELDS[step]:
        value = _text(form.get(name))
        if not value:
            result.add(name, "This field is required")
            continue

        if name in NUMERIC_RANGES:
            lo, hi, message = NUMERIC_RANGES[name]
            number = parse_int(value)
            if number is None or number < lo or number > hi:
                result.add(name, message)
        elif name == "businessEmail":
            ok, message = validate_business_email(value)
            if not ok:
                result.add(name, message)
        elif name in MIN_LENGTHS:
            min_len, message = MIN_LENGTHS[name]
            if len(value) < min_len:
                result.add(name, message)
    return result


def validate_all_steps(form: Mapping[str, Any]) -> ValidationResult:
    result = ValidationResult()
    for step in range(1, TOTAL_STEPS + 1):
        result.merge(validate_step(step, form))
    return result
