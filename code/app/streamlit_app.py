# streamlit_app.py
import os
import sys
import time
from typing import Dict

import streamlit as st

# Ensure the code/ root is on sys.path so `app` and `roi` import when Streamlit runs this file directly.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.config import CALCULATION_DELAY, configure_logging  # noqa: E402
from app.core.charts import format_currency, format_multiple, format_payback  # noqa: E402
from app.core.labels import (  # noqa: E402
    COMPANY_SIZE_LABELS,
    INDUSTRY_LABELS,
    REGION_LABELS,
    TOOL_LABELS,
)
from app.core.pipeline import generate_report, run_calculation, submit_lead  # noqa: E402
from app.core.sample_payloads import DEFAULT_FORM  # noqa: E402
from app.core.validation import STEP_TITLES, TOTAL_STEPS, validate_all_steps, validate_step  # noqa: E402
from roi.engine import CalculationError  # noqa: E402

configure_logging()

st.set_page_config(page_title="SqlDBM ROI Calculator", layout="wide")
st.title("SqlDBM ROI Calculator")

# --- Session state -----------------------------------------------------------
if "step" not in st.session_state:
    st.session_state.step = 1
if "form" not in st.session_state:
    st.session_state.form = dict(DEFAULT_FORM)
if "field_errors" not in st.session_state:
    st.session_state.field_errors = {}
if "outcome" not in st.session_state:
    st.session_state.outcome = None
if "report" not in st.session_state:
    st.session_state.report = None

form = st.session_state.form


def reset():
    for key in ("step", "form", "field_errors", "outcome", "report"):
        st.session_state.pop(key, None)


def field_error(name: str):
    message = st.session_state.field_errors.get(name)
    if message:
        st.caption(f":red[{message}]")


def choice(label: str, name: str, options: Dict[str, str]):
    keys = list(options)
    current = form.get(name) if form.get(name) in options else keys[-1]
    form[name] = st.selectbox(label, keys, index=keys.index(current), format_func=options.get, key=f"w_{name}")
    field_error(name)


def number(label: str, name: str, **kwargs):
    form[name] = st.number_input(label, value=int(form.get(name) or 0), step=1, key=f"w_{name}", **kwargs)
    field_error(name)


def text(label: str, name: str, **kwargs):
    form[name] = st.text_input(label, value=form.get(name, ""), key=f"w_{name}", **kwargs)
    field_error(name)


# --- Wizard steps -------------------------------------------------------------
def render_step_one():
    number("Annual database / warehouse spend ($)", "dbSpend", min_value=0)
    number("Annual dbt / transformation spend ($)", "dbtSpend", min_value=0)
    number("Data architects & engineers on the team", "teamSize", min_value=0)
    number("Downstream stakeholders using data models", "stakeholders", min_value=0)
    number("Data products / models delivered per year", "dataProducts", min_value=0)


def render_step_two():
    choice("Current modeling tool", "currentTools", TOOL_LABELS)
    number("Hours to build a typical model", "modelTime", min_value=0)
    form["reworkPercent"] = st.slider("Share of modeling work that is rework (%)", 0, 100,
                                      int(form.get("reworkPercent") or 0), key="w_reworkPercent")
    form["revisionPercent"] = st.slider("Share of models revised after release (%)", 0, 100,
                                        int(form.get("revisionPercent") or 0), key="w_revisionPercent")
    form["usesCICD"] = st.checkbox("We deploy models through CI/CD", value=bool(form.get("usesCICD")), key="w_usesCICD")
    form["usesGovernance"] = st.checkbox("We use a data governance / catalog tool",
                                         value=bool(form.get("usesGovernance")), key="w_usesGovernance")
    form["cloudOnly"] = st.checkbox("Our data platform is cloud-only", value=bool(form.get("cloudOnly")),
                                    key="w_cloudOnly")


def render_step_three():
    choice("Industry", "industry", INDUSTRY_LABELS)
    choice("Company size (annual revenue)", "companySize", COMPANY_SIZE_LABELS)
    choice("Region", "region", REGION_LABELS)


def render_step_four():
    text("First name", "firstName")
    text("Last name", "lastName")
    text("Business email", "businessEmail", placeholder="you@company.com")
    text("Company", "company")
    text("Job title (optional)", "jobTitle")


STEP_RENDERERS = {
    1: render_step_one,
    2: render_step_two,
    3: render_step_three,
    4: render_step_four,
}


def calculate():
    validation = validate_all_steps(form)
    if not validation.valid:
        st.session_state.field_errors = validation.field_errors
        st.error("Please fix the highlighted fields before calculating.")
        return
    with st.spinner("Calculating your ROI..."):
        time.sleep(CALCULATION_DELAY)
        try:
            outcome = run_calculation(form)
        except CalculationError:
            st.error("An error occurred while calculating your ROI. Please try again.")
            return
    st.session_state.outcome = outcome
    st.session_state.report = None
    submit_lead(outcome.result)
    st.rerun()


def render_wizard():
    step = st.session_state.step
    st.progress(step / TOTAL_STEPS, text=f"Step {step} of {TOTAL_STEPS}: {STEP_TITLES[step]}")
    STEP_RENDERERS[step]()

    back_col, next_col, _ = st.columns([1, 1, 4])
    with back_col:
        if step > 1 and st.button("Back"):
            st.session_state.step -= 1
            st.session_state.field_errors = {}
            st.rerun()
    with next_col:
        if step < TOTAL_STEPS:
            if st.button("Next", type="primary"):
                validation = validate_step(step, form)
                st.session_state.field_errors = validation.field_errors
                if validation.valid:
                    st.session_state.step += 1
                st.rerun()
        elif st.button("Calculate ROI", type="primary"):
            calculate()


# --- Results ------------------------------------------------------------------
def render_results():
    outcome = st.session_state.outcome
    result = outcome.result
    metrics = result.metrics

    st.progress(1.0, text="Analysis Complete")
    st.subheader(outcome.text.summary)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("3-Year ROI", format_multiple(metrics.three_year_roi))
    c2.metric("Payback Period", format_payback(metrics.payback_months))
    c3.metric("Annual Value", format_currency(metrics.total_annual_value))
    c4.metric("Net 3-Year Value", format_currency(metrics.three_year_value))
    st.write(outcome.text.narrative)

    left, right = st.columns(2)
    with left:
        st.markdown("**Annual savings by category**")
        series = outcome.breakdown_series
        st.bar_chart(
            [{"Category": label, "Annual Savings": amount} for label, amount in zip(series["labels"], series["amounts"])],
            x="Category",
            y="Annual Savings",
        )
    with right:
        st.markdown("**Cumulative value vs. cost**")
        series = outcome.timeline_series
        st.line_chart(
            [
                {"Month": month, "Cumulative Value": value, "Cumulative Cost": cost, "Net Value": net}
                for month, value, cost, net in zip(
                    series["months"], series["cumulative_value"], series["cumulative_cost"], series["net_value"]
                )
            ],
            x="Month",
            y=["Cumulative Value", "Cumulative Cost", "Net Value"],
        )

    st.markdown("**Detailed breakdown**")
    rows = [{"Category": e.category, "Annual Savings": format_currency(e.amount), "% of Total": f"{e.percentage}%",
             "How": e.description} for e in result.breakdown]
    rows.append({"Category": "Total Annual Value", "Annual Savings": format_currency(metrics.total_annual_value),
                 "% of Total": "", "How": ""})
    rows.append({"Category": "Less: SqlDBM Annual Cost",
                 "Annual Savings": f"({format_currency(metrics.total_annual_value - metrics.net_annual_value)})",
                 "% of Total": "", "How": ""})
    rows.append({"Category": "Net Annual Value", "Annual Savings": format_currency(metrics.net_annual_value),
                 "% of Total": "", "How": ""})
    st.table(rows)

    if st.session_state.report is None:
        st.session_state.report = generate_report(result, config=outcome.config)
    report = st.session_state.report
    if report.success:
        st.download_button("Download PDF report", data=report.data, file_name=report.filename,
                           mime="application/pdf")
    else:
        st.error(f"Failed to generate PDF: {report.error}")

    if st.button("Start over"):
        reset()
        st.rerun()


if st.session_state.outcome is None:
    render_wizard()
else:
    render_results()

with st.expander("Structured calculation output"):
    if st.session_state.outcome is not None:
        st.json(st.session_state.outcome.result.to_dict())
