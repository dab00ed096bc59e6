from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from crm_insights.core.config import get_settings
from crm_insights.core.database import get_db
from crm_insights.core.deps import get_now
from crm_insights.services.analytics import build_dashboard
from crm_insights.services.reports import dashboard_csv, dashboard_pdf
from crm_insights.services.snapshot import load_snapshot

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/dashboard.csv")
def export_dashboard_csv(
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    summary = build_dashboard(load_snapshot(db), now)
    return Response(
        content=dashboard_csv(summary),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=dashboard.csv"},
    )


@router.get("/dashboard.pdf")
def export_dashboard_pdf(
    now: datetime = Depends(get_now),
    db: Session = Depends(get_db),
):
    summary = build_dashboard(load_snapshot(db), now)
    pdf = dashboard_pdf(summary, title=get_settings().PROJECT_NAME)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=dashboard.pdf"},
    )
