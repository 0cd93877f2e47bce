import pytest

from app.core.sample_payloads import DEFAULT_FORM, SAMPLE_FORM
from app.core.validation import (
    is_business_email,
    is_valid_email,
    validate_all_steps,
    validate_business_email,
    validate_step,
)


def test_email_format():
    assert is_valid_email("dana.reyes@acme-analytics.com")
    assert not is_valid_email("dana.reyes@acme")
    assert not is_valid_email("dana reyes@acme.com")
    assert not is_valid_email("")


def test_personal_domains_rejected():
    assert not is_business_email("someone@gmail.com")
    assert not is_business_email("someone@Yahoo.com")
    assert not is_business_email("someone@freemailer.net")
    assert not is_business_email("someone@webmail.example.org")
    assert is_business_email("someone@acme-analytics.com")
    assert is_business_email("someone@microsoft.com")


def test_validate_business_email_messages():
    assert validate_business_email("") == (False, "Email is required")
    ok, msg = validate_business_email("not-an-email")
    assert not ok and "valid email" in msg
    ok, msg = validate_business_email("me@hotmail.com")
    assert not ok and "business email" in msg
    assert validate_business_email("me@acme.io")[0]


def test_default_form_passes_numeric_step():
    assert validate_step(1, DEFAULT_FORM).valid


def test_team_size_range():
    form = dict(DEFAULT_FORM, teamSize=0)
    result = validate_step(1, form)
    assert not result.valid
    assert result.field_errors["teamSize"] == "Team size must be between 1 and 100"

    assert not validate_step(1, dict(DEFAULT_FORM, teamSize=101)).valid
    assert validate_step(1, dict(DEFAULT_FORM, teamSize="100")).valid


def test_missing_required_field():
    result = validate_step(1, dict(DEFAULT_FORM, stakeholders=""))
    assert result.field_errors == {"stakeholders": "This field is required"}


def test_contact_step_requires_contact_fields_but_not_job_title():
    result = validate_step(4, DEFAULT_FORM)
    assert set(result.field_errors) == {"firstName", "lastName", "businessEmail", "company"}

    form = dict(SAMPLE_FORM, jobTitle="")
    assert validate_step(4, form).valid


def test_short_names_rejected():
    result = validate_step(4, dict(SAMPLE_FORM, firstName="D", company="A"))
    assert result.field_errors["firstName"] == "Name must be at least 2 characters"
    assert result.field_errors["company"] == "Company name must be at least 2 characters"


def test_unknown_step():
    with pytest.raises(ValueError):
        validate_step(5, SAMPLE_FORM)


def test_all_steps():
    assert validate_all_steps(SAMPLE_FORM).valid
    result = validate_all_steps(dict(SAMPLE_FORM, businessEmail="dana@gmail.com", teamSize=0))
    assert not result.valid
    assert set(result.field_errors) == {"businessEmail", "teamSize"}
    assert len(result.errors) == 2
