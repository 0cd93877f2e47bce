from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExecutiveSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payback_period_months: float = Field(alias="paybackPeriodMonths", ge=0)
    annual_value_created: int = Field(alias="annualValueCreated")
    three_year_roi: float = Field(alias="threeYearROI")
    net_three_year_value: int = Field(alias="netThreeYearValue")
    net_annual_value: int = Field(alias="netAnnualValue")


class LeadPayload(BaseModel):
    """Body posted to the lead webhook. Field names on the wire are camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    # contact
    first_name: str = Field(alias="firstName", default="")
    last_name: str = Field(alias="lastName", default="")
    business_email: str = Field(alias="businessEmail", default="")
    job_title: str = Field(alias="jobTitle", default="")
    company: str = ""

    # company profile
    industry: str = "other"
    company_size: str = Field(alias="companySize", default="medium")
    region: str = "americas"
    current_tools: str = Field(alias="currentTools", default="other")
    team_size: int = Field(alias="teamSize", default=1)
    stakeholders: int = 1
    data_products: int = Field(alias="dataProducts", default=1)

    executive_summary: ExecutiveSummary = Field(alias="executiveSummary")
    source: str = "roi-calculator"
    submitted_at: Optional[str] = Field(alias="submittedAt", default=None)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
