import logging
import threading
from datetime import datetime, timezone
from typing import Optional

import requests

from app.config import LEAD_SOURCE, LEAD_WEBHOOK_TIMEOUT, LEAD_WEBHOOK_URL
from app.core.models import ExecutiveSummary, LeadPayload
from roi.schemas import RoiResult

log = logging.getLogger(__name__)


def build_lead_payload(result: RoiResult, source: str = LEAD_SOURCE) -> LeadPayload:
    inputs = result.inputs
    metrics = result.metrics
    return LeadPayload(
        first_name=inputs.first_name,
        last_name=inputs.last_name,
        business_email=inputs.business_email,
        job_title=inputs.job_title,
        company=inputs.company,
        industry=inputs.industry.value,
        company_size=inputs.company_size.value,
        region=inputs.region,
        current_tools=inputs.current_tools.value,
        team_size=inputs.team_size,
        stakeholders=inputs.stakeholders,
        data_products=inputs.data_products,
        executive_summary=ExecutiveSummary(
            payback_period_months=metrics.payback_months,
            annual_value_created=metrics.total_annual_value,
            three_year_roi=metrics.three_year_roi,
            net_three_year_value=metrics.three_year_value,
            net_annual_value=metrics.net_annual_value,
        ),
        source=source,
        submitted_at=datetime.now(timezone.utc).isoformat(),
    )


def deliver_lead(
    payload: LeadPayload,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> bool:
    """
    Single best-effort POST of the lead to the webhook. No retry.
    Returns True on a 2xx response; every failure is logged and reported as False.
    """
    target = url if url is not None else LEAD_WEBHOOK_URL
    if not target:
        log.info("Lead webhook not configured; skipping delivery")
        return False

    try:
        resp = requests.post(
            target,
            json=payload.to_json_dict(),
            timeout=timeout if timeout is not None else LEAD_WEBHOOK_TIMEOUT,
        )
    except requests.RequestException as e:
        log.warning("Lead webhook delivery failed: %s", e)
        return False

    if not 200 <= resp.status_code < 300:
        log.warning("Lead webhook returned HTTP %s", resp.status_code)
        return False
    log.info("Lead delivered for %s", payload.company or "unknown company")
    return True


def deliver_lead_in_background(
    payload: LeadPayload,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> threading.Thread:
    worker = threading.Thread(
        target=deliver_lead,
        args=(payload,),
        kwargs={"url": url, "timeout": timeout},
        name="lead-webhook",
        daemon=True,
    )
    worker.start()
    return worker
