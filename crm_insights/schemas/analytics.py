from datetime import datetime

from pydantic import BaseModel, Field

from crm_insights.schemas.campaign import CampaignRecord
from crm_insights.schemas.client import ClientRecord
from crm_insights.schemas.lead import LeadRecord
from crm_insights.schemas.payment import PaymentRecord


class Snapshot(BaseModel):
    """The four collections the dashboard is computed from."""

    leads: list[LeadRecord] = Field(default_factory=list)
    clients: list[ClientRecord] = Field(default_factory=list)
    payments: list[PaymentRecord] = Field(default_factory=list)
    campaigns: list[CampaignRecord] = Field(default_factory=list)


class Trend(BaseModel):
    value: str
    is_up: bool


class DashboardTrends(BaseModel):
    leads: Trend
    clients: Trend
    services: Trend
    revenue: Trend


class ChartPoint(BaseModel):
    label: str
    date: str
    contacted: int
    converted: int


class CampaignStats(BaseModel):
    sent: int
    opens: int
    click_rate: str


class DashboardSummary(BaseModel):
    generated_at: datetime
    leads_count: int
    clients_count: int
    active_services_count: int
    monthly_revenue: float
    trends: DashboardTrends
    chart: list[ChartPoint]
    country_distribution: dict[str, int]
    campaign_stats: CampaignStats


class DateRange(BaseModel):
    key: str
    label: str
    start: datetime
    end: datetime


class FunnelStats(BaseModel):
    total: int = 0
    new: int = 0
    contacted: int = 0
    interested: int = 0
    meeting: int = 0
    converted: int = 0
    not_interested: int = 0


class EmailPerformance(BaseModel):
    sent: int = 0
    opened: int = 0
    clicked: int = 0
    # Whole percentages.
    open_rate: int = 0
    click_rate: int = 0


class RevenuePoint(BaseModel):
    label: str
    amount: float


class PerformanceReport(BaseModel):
    range: DateRange
    funnel: FunnelStats
    email: EmailPerformance
    revenue: list[RevenuePoint]
