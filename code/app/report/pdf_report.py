"""
PDF report for a finished ROI calculation.
Renders the result tree with reportlab into an A4 document and returns the bytes (optionally also writes a file).
Failures come back as ReportOutcome.error; nothing here raises to the caller.
"""

import io
import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import KeepTogether, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.core.charts import format_currency
from app.core.labels import format_company_size, format_industry, format_region, format_tool
from roi.schemas import DEFAULT_CONFIG, EngineConfig, RoiResult, Tool
from roi.summary import PRODUCT_NAME
from roi.utils import format_number

log = logging.getLogger(__name__)

MARGIN = 20 * mm
CONTENT_WIDTH = A4[0] - 2 * MARGIN
PRIMARY = colors.Color(102 / 255, 126 / 255, 234 / 255)
MUTED = colors.Color(100 / 255, 100 / 255, 100 / 255)
PANEL = colors.Color(248 / 255, 249 / 255, 250 / 255)
BORDER = colors.Color(233 / 255, 236 / 255, 239 / 255)
METRIC_COLORS = (
    colors.Color(40 / 255, 167 / 255, 69 / 255),
    PRIMARY,
    colors.Color(118 / 255, 75 / 255, 162 / 255),
    colors.Color(23 / 255, 162 / 255, 184 / 255),
)

CONTACT_URL = "https://content.sqldbm.com/contact-us"
DISCLAIMER = "This ROI analysis is based on the inputs provided and industry benchmarks. Actual results may vary."
BUSINESS_INSIGHT = (
    f"While data modeling may not directly generate revenue, {PRODUCT_NAME} transforms it into a business "
    "accelerator through efficiency gains, reduced rework, and enhanced downstream productivity."
)
DEMO_BENEFITS = [
    f"See how {PRODUCT_NAME} accelerates workflows and reduces cycle times",
    "Discover how better models drive downstream productivity gains",
    "Learn cost reduction strategies through improved efficiency",
    "Understand how to achieve the projected savings in your environment",
    "See integrations that maximize your existing tool investments",
]


@dataclass
class ReportOutcome:
    success: bool
    filename: str = ""
    data: bytes = b""
    path: Optional[str] = None
    error: Optional[str] = None


def report_filename(company: str, on: Optional[date] = None) -> str:
    safe = re.sub(r"[^a-zA-Z0-9]", "_", company or "") or "Company"
    stamp = (on or date.today()).isoformat()
    return f"{PRODUCT_NAME}_ROI_Analysis_{safe}_{stamp}.pdf"


def format_payback_period(months: float) -> str:
    if months <= 12:
        return f"{math.floor(months + 0.5)} months"
    return f"{format_number(math.floor(months / 12 * 10 + 0.5) / 10)} years"


def narrative_summary(result: RoiResult) -> str:
    m = result.metrics
    return (
        f"While data modeling may not directly generate revenue, this analysis demonstrates how {PRODUCT_NAME} "
        "transforms it into a powerful business accelerator. Through improved efficiency, reduced rework, and "
        f"enhanced downstream productivity, {PRODUCT_NAME} delivers a {format_payback_period(m.payback_months)} "
        f"payback period with {format_number(m.three_year_roi)}x ROI over three years. The projected "
        f"{format_currency(m.total_annual_value)} in annual value proves that smart modeling infrastructure "
        "drives measurable business impact beyond traditional cost center thinking."
    )


def _esc(text: str) -> str:
    return str(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class _FooterCanvas(canvas.Canvas):
    """Defers page output until the page count is known so each footer can say "Page i of N"."""

    def __init__(self, *args, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._pages = []

    def showPage(self):
        self._pages.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._pages)
        for state in self._pages:
            self.__dict__.update(state)
            self._draw_footer(total)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    def _draw_footer(self, total: int) -> None:
        width, _ = A4
        self.saveState()
        self.setFont("Helvetica", 8)
        self.setFillColor(MUTED)
        self.drawString(MARGIN, 15 * mm, DISCLAIMER)
        self.drawRightString(width - MARGIN, 10 * mm, f"Page {self._pageNumber} of {total}")
        self.restoreState()


class ReportBuilder:
    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        base = getSampleStyleSheet()
        self.styles = {
            "title": ParagraphStyle("title", parent=base["Title"], alignment=0, textColor=PRIMARY, fontSize=24),
            "date": ParagraphStyle("date", parent=base["Normal"], textColor=MUTED, fontSize=10),
            "h1": ParagraphStyle("h1", parent=base["Heading1"], fontSize=16, spaceBefore=12),
            "h2": ParagraphStyle("h2", parent=base["Heading2"], fontSize=14, textColor=PRIMARY),
            "h3": ParagraphStyle("h3", parent=base["Heading3"], fontSize=12, textColor=PRIMARY),
            "body": ParagraphStyle("body", parent=base["Normal"], fontSize=11, leading=15),
            "small": ParagraphStyle("small", parent=base["Normal"], fontSize=9, leading=12),
            "note": ParagraphStyle("note", parent=base["Italic"], fontSize=8, textColor=MUTED),
            "metric_label": ParagraphStyle("metric_label", parent=base["Normal"], fontSize=10, textColor=MUTED),
            "banner": ParagraphStyle("banner", parent=base["Heading2"], textColor=colors.white, fontSize=16),
            "cta": ParagraphStyle("cta", parent=base["Heading2"], textColor=colors.white, alignment=1),
            "link": ParagraphStyle("link", parent=base["Normal"], textColor=PRIMARY, alignment=1, fontSize=12),
        }

    # --- Sections ---

    def _header(self, on: date) -> List:
        return [
            Paragraph(f"{PRODUCT_NAME} ROI Analysis", self.styles["title"]),
            Paragraph(f"Generated on {on.strftime('%B')} {on.day}, {on.year}", self.styles["date"]),
            Spacer(1, 4 * mm),
        ]

    def _company_info(self, result: RoiResult) -> List:
        n = result.inputs
        contact = f"{n.first_name} {n.last_name}".strip()
        rows = [
            ["Company:", n.company],
            ["Contact:", contact],
            ["Email:", n.business_email],
            ["Job Title:", n.job_title or "N/A"],
            ["Industry:", format_industry(n.industry)],
            ["Company Size:", format_company_size(n.company_size)],
            ["Region:", format_region(n.region)],
        ]
        table = Table(rows, colWidths=[35 * mm, CONTENT_WIDTH - 35 * mm], hAlign="LEFT")
        table.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 11),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
        ]))
        return [Paragraph("Company Information", self.styles["h1"]), table]

    def _metric_cell(self, label: str, value: str, color) -> List:
        style = ParagraphStyle("metric_value", parent=self.styles["body"], fontName="Helvetica-Bold",
                               fontSize=14, leading=18, textColor=color)
        return [Paragraph(label, self.styles["metric_label"]), Paragraph(_esc(value), style)]

    def _executive_summary(self, result: RoiResult) -> List:
        m = result.metrics
        cells = [
            ("Payback Period", format_payback_period(m.payback_months)),
            ("Annual Value Created", format_currency(m.total_annual_value)),
            ("3-Year ROI", f"{format_number(m.three_year_roi)}x"),
            ("Net 3-Year Value", format_currency(m.three_year_value)),
        ]
        boxes = [self._metric_cell(label, value, color) for (label, value), color in zip(cells, METRIC_COLORS)]
        grid = Table([boxes[:2], boxes[2:]], colWidths=[CONTENT_WIDTH / 2] * 2, hAlign="LEFT")
        grid.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), PANEL),
            ("BOX", (0, 0), (0, 0), 0.5, BORDER),
            ("BOX", (1, 0), (1, 0), 0.5, BORDER),
            ("BOX", (0, 1), (0, 1), 0.5, BORDER),
            ("BOX", (1, 1), (1, 1), 0.5, BORDER),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]))
        insight = Table(
            [[[Paragraph("<b>Key Business Insight:</b>", self.styles["small"]),
               Paragraph(_esc(BUSINESS_INSIGHT), self.styles["small"])]]],
            colWidths=[CONTENT_WIDTH],
            hAlign="LEFT",
        )
        insight.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), PANEL),
            ("BOX", (0, 0), (-1, -1), 0.5, PRIMARY),
        ]))
        return [
            Paragraph("Executive Summary", self.styles["h1"]),
            grid,
            Spacer(1, 6 * mm),
            insight,
            Spacer(1, 6 * mm),
            Paragraph(_esc(narrative_summary(result)), self.styles["body"]),
        ]

    def _breakdown(self, result: RoiResult) -> List:
        rows = [["Value Category", "Annual Savings", "% of Total"]]
        rows += [[e.category, format_currency(e.amount), f"{e.percentage}%"] for e in result.breakdown]
        table = Table(rows, colWidths=[95 * mm, 45 * mm, 30 * mm], hAlign="LEFT", repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), PRIMARY),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [PANEL, colors.white]),
            ("BOX", (0, 0), (-1, -1), 0.25, colors.lightgrey),
            ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ]))
        cost = format_currency(self.config.platform_annual_cost)
        assumptions = [
            f"{PRODUCT_NAME} annual platform cost: {cost}",
            f"Average loaded FTE cost: {format_currency(self.config.fte_annual_cost)}",
            "Default efficiency improvement: 20-40%",
            "Rework reduction: 15-25%",
            "Stakeholder time savings: 2-4 hours/month",
            "Industry and company size adjustments applied",
        ]
        story = [Paragraph("Detailed Value Breakdown", self.styles["h1"]), table, Spacer(1, 8 * mm),
                 Paragraph("Key Assumptions", self.styles["h2"])]
        story += [Paragraph(f"• {_esc(a)}", self.styles["small"]) for a in assumptions]
        return story

    def _banner(self, text: str, style: str = "banner") -> Table:
        banner = Table([[Paragraph(_esc(text), self.styles[style])]], colWidths=[CONTENT_WIDTH])
        banner.setStyle(TableStyle([("BACKGROUND", (0, 0), (-1, -1), PRIMARY)]))
        return banner

    def _call_to_action(self, result: RoiResult) -> List:
        m = result.metrics
        message = (
            f"Your analysis demonstrates how {PRODUCT_NAME} transforms data modeling from a cost center into a "
            f"business accelerator, delivering {format_currency(m.total_annual_value)} in annual value through "
            "efficiency gains, reduced rework, and enhanced downstream productivity. With a "
            f"{math.ceil(m.payback_months)}-month payback period, {PRODUCT_NAME} proves that smart modeling "
            "infrastructure drives real business impact."
        )
        story = [
            self._banner("Transform Data Modeling into a Business Accelerator"),
            Spacer(1, 8 * mm),
            Paragraph(_esc(message), self.styles["body"]),
            Spacer(1, 6 * mm),
            Paragraph("What You'll Discover in Your Demo:", self.styles["h2"]),
        ]
        story += [Paragraph(f"• {_esc(b)}", self.styles["body"]) for b in DEMO_BENEFITS]
        button = Table([[Paragraph("Schedule a Live Demo", self.styles["cta"])]], colWidths=[80 * mm])
        button.setStyle(TableStyle([("BACKGROUND", (0, 0), (-1, -1), PRIMARY)]))
        story += [Spacer(1, 12 * mm), button, Spacer(1, 6 * mm),
                  Paragraph(f'<link href="{CONTACT_URL}">{CONTACT_URL}</link>', self.styles["link"])]
        return story

    def _calculation_section(self, title: str, lines: List[str], explanation: str) -> KeepTogether:
        parts = [Paragraph(_esc(title), self.styles["h3"])]
        parts += [Paragraph(_esc(line), self.styles["small"]) for line in lines]
        parts.append(Paragraph(_esc(explanation), self.styles["note"]))
        parts.append(Spacer(1, 4 * mm))
        return KeepTogether(parts)

    def _calculation_details(self, result: RoiResult) -> List:
        n = result.inputs
        s = result.savings
        m = result.metrics
        fte = format_currency(self.config.fte_annual_cost)
        hourly = self.config.hourly_cost
        hours = self.config.hours_per_model
        stakeholder_rate = self.config.stakeholder_hourly_cost

        labor = s.labor_efficiency
        rework = s.rework_reduction
        downstream = s.downstream_productivity
        tools = s.tool_consolidation
        already_adopted = n.current_tools is Tool.SQLDBM

        inputs = [
            f"Team Size: {n.team_size} engineers",
            f"Stakeholders: {n.stakeholders} downstream users",
            f"Data Products/Year: {n.data_products}",
            f"Current Tool: {format_tool(n.current_tools)}",
            f"Industry: {format_industry(n.industry)} ({format_number(n.industry_multiplier)}x multiplier)",
            f"Company Size: {format_company_size(n.company_size)} "
            f"({format_number(n.company_size_multiplier)}x multiplier)",
            f"Rework %: {n.rework_percent}%",
            f"Revision %: {n.revision_percent}%",
        ]
        story = [
            self._banner("How Did We Get to This Number?"),
            Spacer(1, 4 * mm),
            Paragraph(
                "Below are the detailed calculations that generated your ROI analysis, using your specific "
                "inputs and industry-standard benchmarks.",
                self.styles["body"],
            ),
            Paragraph("Your Inputs:", self.styles["h2"]),
        ]
        story += [Paragraph(f"• {_esc(line)}", self.styles["small"]) for line in inputs]
        story.append(Spacer(1, 4 * mm))

        story.append(self._calculation_section("1. Labor Efficiency Savings", [
            "Formula: Team Size × FTE Cost × Time Saved %",
            f"Calculation: {n.team_size} × {fte} × {labor.time_saved_percent}%",
            f"= {n.team_size} × {fte} × {format_number(labor.time_saved_percent / 100)}",
            f"= {format_currency(labor.annual_savings)}/year",
        ], "Time savings adjusted for current tools and practices. " + (
            f"Minimal additional savings since already using {PRODUCT_NAME}."
            if already_adopted else "Significant savings from modernizing current tools."
        )))
        story.append(self._calculation_section("2. Rework Reduction Savings", [
            "Formula: Models/Year × Hours/Model × Hourly Rate × Rework Avoided %",
            f"Calculation: {n.data_products} × {hours} × ${hourly} × {rework.rework_avoided_percent}%",
            f"= {n.data_products} × {hours} × ${hourly} × {format_number(rework.rework_avoided_percent / 100)}",
            f"= {format_currency(rework.annual_savings)}/year",
        ], f"Rework reduction based on improved model clarity and standardization through {PRODUCT_NAME}."))
        story.append(self._calculation_section("3. Downstream Productivity Gains", [
            "Formula: Stakeholders × Hours Saved/Month × Rate × 12 months",
            f"Calculation: {n.stakeholders} × {format_number(downstream.hours_saved_per_month)} × "
            f"${stakeholder_rate} × 12",
            f"= {format_currency(downstream.annual_savings)}/year",
        ], "Time savings for business analysts and data consumers through better model documentation "
           "and accessibility."))
        story.append(self._calculation_section("4. Tool Consolidation Savings", [
            f"Current Tool Spend: {format_currency(tools.current_tool_spend)}",
            f"Consulting Costs: {format_currency(tools.consulting_spend)}",
            f"Total Current Spend: {format_currency(tools.current_tool_spend + tools.consulting_spend)}",
            f"Reduction: {tools.reduction_percent}%",
            f"Savings: {format_currency(tools.annual_savings)}/year",
        ], "Savings from consolidating existing tools and reducing consulting needs."))

        totals = [
            f"Total Annual Value: {format_currency(m.total_annual_value)}",
            f"Less {PRODUCT_NAME} Cost: {format_currency(self.config.platform_annual_cost)}",
            f"Net Annual Benefit: {format_currency(m.net_annual_value)}",
            f"Payback Period: {format_number(m.payback_months)} months",
            f"3-Year ROI: {format_number(m.three_year_roi)}x return",
        ]
        box = Table([[[Paragraph("Total ROI Calculation:", self.styles["h3"])]
                      + [Paragraph(_esc(t), self.styles["small"]) for t in totals]]], colWidths=[CONTENT_WIDTH])
        box.setStyle(TableStyle([("BACKGROUND", (0, 0), (-1, -1), PANEL)]))
        story.append(KeepTogether([box]))
        return story

    # --- Assembly ---

    def story(self, result: RoiResult, on: Optional[date] = None) -> List:
        on = on or date.today()
        story = []
        story += self._header(on)
        story += self._company_info(result)
        story += self._executive_summary(result)
        story.append(PageBreak())
        story += self._breakdown(result)
        story.append(PageBreak())
        story += self._call_to_action(result)
        story.append(PageBreak())
        story += self._calculation_details(result)
        return story

    def render(self, result: RoiResult, on: Optional[date] = None) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=25 * mm,
            title=f"{PRODUCT_NAME} ROI Analysis",
            author=PRODUCT_NAME,
        )
        doc.build(self.story(result, on), canvasmaker=_FooterCanvas)
        return buffer.getvalue()


def build_report(
    result: RoiResult,
    output_dir: Optional[Path] = None,
    on: Optional[date] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ReportOutcome:
    """
    Build the PDF for a calculation. Returns ReportOutcome(success, filename, data, path, error).
    output_dir: when given, the PDF is also written there.
    """
    filename = report_filename(result.inputs.company, on)
    try:
        data = ReportBuilder(config).render(result, on)
        path = None
        if output_dir is not None:
            out = Path(output_dir)
            out.mkdir(parents=True, exist_ok=True)
            target = out / filename
            target.write_bytes(data)
            path = str(target)
        return ReportOutcome(success=True, filename=filename, data=data, path=path)
    except Exception as e:
        log.error("PDF generation error: %s", e)
        return ReportOutcome(success=False, filename=filename, error=str(e))
