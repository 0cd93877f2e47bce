import requests

from app.core.sample_payloads import SAMPLE_FORM
from app.integrations import webhook
from app.integrations.webhook import build_lead_payload, deliver_lead, deliver_lead_in_background
from roi.engine import calculate_roi

HOOK = "https://hooks.example.com/lead"


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400


def _payload():
    return build_lead_payload(calculate_roi(SAMPLE_FORM), source="test")


def test_payload_wire_format():
    body = _payload().to_json_dict()
    assert body["firstName"] == "Dana"
    assert body["businessEmail"] == "dana.reyes@acme-analytics.com"
    assert body["companySize"] == "medium"
    assert body["currentTools"] == "excel"
    assert body["teamSize"] == 10
    assert body["source"] == "test"
    assert body["submittedAt"]
    assert body["executiveSummary"] == {
        "paybackPeriodMonths": 2.4,
        "annualValueCreated": 588300,
        "threeYearROI": 3.9,
        "netThreeYearValue": 1404900,
        "netAnnualValue": 468300,
    }


def test_deliver_posts_json(monkeypatch):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return FakeResponse(200)

    monkeypatch.setattr(webhook.requests, "post", fake_post)
    assert deliver_lead(_payload(), url=HOOK, timeout=3)
    url, body, timeout = calls[0]
    assert url == HOOK
    assert timeout == 3
    assert body["company"] == "Acme Analytics"


def test_deliver_without_url_is_skipped(monkeypatch):
    def fail_post(*args, **kwargs):
        raise AssertionError("should not post")

    monkeypatch.setattr(webhook.requests, "post", fail_post)
    assert deliver_lead(_payload(), url="") is False


def test_deliver_non_2xx(monkeypatch):
    monkeypatch.setattr(webhook.requests, "post", lambda *a, **kw: FakeResponse(500))
    assert deliver_lead(_payload(), url=HOOK) is False


def test_deliver_redirect_is_not_success(monkeypatch):
    monkeypatch.setattr(webhook.requests, "post", lambda *a, **kw: FakeResponse(302))
    assert deliver_lead(_payload(), url=HOOK) is False


def test_deliver_network_error(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(webhook.requests, "post", boom)
    assert deliver_lead(_payload(), url=HOOK) is False


def test_background_delivery(monkeypatch):
    calls = []
    monkeypatch.setattr(webhook.requests, "post", lambda url, json=None, timeout=None: calls.append(url) or FakeResponse(204))
    worker = deliver_lead_in_background(_payload(), url=HOOK)
    assert worker.daemon
    worker.join(timeout=5)
    assert calls == [HOOK]
