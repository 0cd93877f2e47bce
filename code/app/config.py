"""
Runtime configuration for the calculator app.
Values come from the environment (or a local .env). The engine's cost constants are not configured here.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LEAD_WEBHOOK_URL = os.getenv("LEAD_WEBHOOK_URL", "").strip()
LEAD_WEBHOOK_TIMEOUT = float(os.getenv("LEAD_WEBHOOK_TIMEOUT", "10"))
LEAD_SOURCE = os.getenv("LEAD_SOURCE", "roi-calculator")

# Pause before showing results so the wizard's progress overlay is visible.
CALCULATION_DELAY = max(0.0, float(os.getenv("ROI_CALCULATION_DELAY", "2.0")))

_reports_dir = os.getenv("ROI_REPORTS_DIR", "").strip()
REPORTS_DIR: Optional[Path] = Path(_reports_dir) if _reports_dir else None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
