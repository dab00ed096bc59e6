from crm_insights.api.routes import analytics, reports

__all__ = [
    "analytics",
    "reports",
]
