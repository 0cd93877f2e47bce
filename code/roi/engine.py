import logging
from typing import Any, Mapping, Optional

from .metrics import aggregate, breakdown, timeline
from .normalize import normalize
from .savings import compute_savings
from .schemas import DEFAULT_CONFIG, EngineConfig, RoiResult
from .summary import SummaryText, summary_text

log = logging.getLogger(__name__)

CALCULATION_FAILED = "Failed to calculate ROI. Please check your inputs and try again."


class CalculationError(RuntimeError):
    """Unexpected failure inside the pipeline; fatal to one calculation only."""

    def __init__(self, message: str = CALCULATION_FAILED):
        super().__init__(message)


class RoiEngine:
    """
    Maps a raw form record to a fully derived RoiResult.
    Holds nothing but its immutable EngineConfig, so one instance can serve any number of calls.
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config

    def calculate(self, raw: Optional[Mapping[str, Any]]) -> RoiResult:
        try:
            inputs = normalize(raw, self.config)
            savings = compute_savings(inputs, self.config)
            metrics = aggregate(savings, self.config)
            return RoiResult(
                inputs=inputs,
                savings=savings,
                metrics=metrics,
                breakdown=breakdown(savings),
                timeline=timeline(metrics, self.config),
            )
        except Exception as e:
            log.error("ROI calculation error: %s", e)
            raise CalculationError() from e

    def summarize(self, result: RoiResult) -> SummaryText:
        return summary_text(result)


def calculate_roi(raw: Optional[Mapping[str, Any]], config: EngineConfig = DEFAULT_CONFIG) -> RoiResult:
    return RoiEngine(config).calculate(raw)
