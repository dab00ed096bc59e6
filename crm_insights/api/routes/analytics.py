from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from crm_insights.core.config import get_settings
from crm_insights.core.database import get_db
from crm_insights.core.deps import get_now
from crm_insights.schemas.analytics import DashboardSummary, PerformanceReport, Snapshot
from crm_insights.services.analytics import build_dashboard
from crm_insights.services.performance import email_performance, lead_funnel, resolve_date_range, revenue_by_month
from crm_insights.services.snapshot import load_snapshot

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardSummary)
def dashboard(
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    return build_dashboard(load_snapshot(db), now)


@router.post("/dashboard", response_model=DashboardSummary)
def dashboard_from_snapshot(
    payload: Snapshot,
    now: datetime = Depends(get_now),
):
    return build_dashboard(payload, now)


@router.get("/performance", response_model=PerformanceReport)
def performance(
    range_key: str = Query(default="7d", alias="range"),
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    date_range = resolve_date_range(range_key, now, custom_start=start, custom_end=end)
    snapshot = load_snapshot(db)
    return PerformanceReport(
        range=date_range,
        funnel=lead_funnel(snapshot.leads, date_range),
        email=email_performance(snapshot.campaigns, date_range),
        revenue=revenue_by_month(snapshot.payments, now, months=get_settings().REVENUE_CHART_MONTHS),
    )
