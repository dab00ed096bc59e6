from fastapi import APIRouter

from crm_insights.api.routes import analytics, reports

api_router = APIRouter()
api_router.include_router(analytics.router)
api_router.include_router(reports.router)
