import math
import re
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TRUTHY = {"true", "on", "yes", "1"}


def safe_div(a, b, default=None):
    if not b:
        return default
    return a / b


def round_half_up(value: float, ndigits: int = 0) -> float:
    # Ties round toward +infinity so -2.5 -> -2, matching the browser build of the form.
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_currency(value: float) -> int:
    return int(round_half_up(value))


def parse_int(value: Any) -> Optional[int]:
    """Leading-integer parse: "12abc" -> 12, 3.7 -> 3, "" / None / True -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def format_number(value: float) -> str:
    """Render 2.0 as "2" and 2.4 as "2.4"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def to_plain(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [to_plain(v) for v in obj]
    if isinstance(obj, dict):
        return {to_plain(k): to_plain(v) for k, v in obj.items()}
    return obj
