from datetime import datetime

from fastapi import Query

from crm_insights.services.dates import to_utc_naive, utc_now


def get_now(
    now: datetime | None = Query(default=None, description="Evaluate as of this instant (defaults to the current time)"),
) -> datetime:
    # The clock is read here, once per request, and passed down explicitly.
    if now is None:
        return utc_now()
    return to_utc_naive(now)
