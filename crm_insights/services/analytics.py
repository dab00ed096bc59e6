"""
Dashboard analytics.

Pure functions over an in-memory snapshot of leads, clients, payments and
campaigns. Every time-bucketing function takes an explicit `now`; none of
them read the clock. Records may be pydantic models, ORM rows or plain
mappings. Unparseable timestamps are left out of every bucket.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Context, Decimal
import logging
import math
from typing import Any

from crm_insights.models.client import ServiceStatus
from crm_insights.models.lead import LeadStatus
from crm_insights.models.payment import PaymentStatus
from crm_insights.schemas.analytics import (
    CampaignStats,
    ChartPoint,
    DashboardSummary,
    DashboardTrends,
    Snapshot,
    Trend,
)
from crm_insights.services.dates import parse_timestamp, to_utc_naive

logger = logging.getLogger(__name__)

CHART_DAYS = 7
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
CONVERTED_STATUSES = (LeadStatus.converted.value, LeadStatus.closed_won.value)
# Wide enough to quantize any finite float without InvalidOperation.
ROUNDING = Context(prec=400, rounding=ROUND_HALF_UP)


def field_value(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round the exact binary value of `value`, halves away from zero.

    Same result as JavaScript's `toFixed`: 1.005 is stored just below the
    half and rounds to 1.00, while 6.25 is exact and rounds to 6.3.
    """
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, context=ROUNDING)


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def trend(items: Iterable[Any], date_field: str, amount_field: str | None = None, *, now: datetime) -> Trend:
    """Month-over-month change of a count (or of a summed amount).

    Items dated in `now`'s calendar month are compared with items dated in
    the month before it. With nothing in the prior month the change is
    reported as "+100%" when the current month has anything, else "0%".
    """
    now = to_utc_naive(now)
    current_key = (now.year, now.month)
    previous_key = previous_month(now.year, now.month)

    current_val = 0
    previous_val = 0
    skipped = 0
    for item in items:
        when = parse_timestamp(field_value(item, date_field))
        if when is None:
            skipped += 1
            continue
        value = (field_value(item, amount_field) or 0) if amount_field else 1
        key = (when.year, when.month)
        if key == current_key:
            current_val += value
        elif key == previous_key:
            previous_val += value

    if skipped:
        logger.debug("trend(%s): skipped %d items without a usable date", date_field, skipped)

    if previous_val == 0:
        if current_val > 0:
            return Trend(value="+100%", is_up=True)
        return Trend(value="0%", is_up=False)

    percent = (current_val - previous_val) / previous_val * 100
    if not math.isfinite(percent):
        # A sum overflowed to inf (or held NaN); only the direction is kept.
        logger.warning("trend(%s): non-finite change between %r and %r", date_field, previous_val, current_val)
        return Trend(value="0%", is_up=current_val >= previous_val)
    rounded = int(round_half_up(percent))
    sign = "+" if percent > 0 else ""
    return Trend(value=f"{sign}{rounded}%", is_up=percent >= 0)


def country_distribution(leads: Iterable[Any]) -> dict[str, int]:
    # Countries are used verbatim; leads without one are not counted.
    stats: dict[str, int] = {}
    for lead in leads:
        country = field_value(lead, "country")
        if country is None:
            continue
        stats[country] = stats.get(country, 0) + 1
    return stats


def chart_data(leads: Iterable[Any], now: datetime) -> list[ChartPoint]:
    """Contacted/converted counts for each of the last seven calendar days.

    Each day counts the leads *created* that day by their current status.
    A lead created last week and contacted today still lands on its creation
    day, so this approximates daily funnel activity rather than replaying it.
    """
    today = to_utc_naive(now).date()

    contacted: Counter = Counter()
    converted: Counter = Counter()
    for lead in leads:
        created = parse_timestamp(field_value(lead, "created_at"))
        if created is None:
            continue
        status = field_value(lead, "status")
        if status == LeadStatus.contacted.value:
            contacted[created.date()] += 1
        elif status in CONVERTED_STATUSES:
            converted[created.date()] += 1

    points: list[ChartPoint] = []
    for offset in range(CHART_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        points.append(
            ChartPoint(
                label=WEEKDAY_LABELS[day.weekday()],
                date=day.isoformat(),
                contacted=contacted[day],
                converted=converted[day],
            )
        )
    return points


def campaign_stats(campaigns: Iterable[Any]) -> CampaignStats:
    sent = 0
    opens = 0
    clicks = 0
    for campaign in campaigns:
        sent += int(field_value(campaign, "sent_count") or 0)
        opens += int(field_value(campaign, "open_count") or 0)
        clicks += int(field_value(campaign, "click_count") or 0)

    if sent == 0:
        click_rate = "0%"
    else:
        click_rate = f"{round_half_up(clicks / sent * 100, 1)}%"
    return CampaignStats(sent=sent, opens=opens, click_rate=click_rate)


def active_services(clients: Iterable[Any]) -> list[Any]:
    return [
        service
        for client in clients
        for service in (field_value(client, "services") or [])
        if field_value(service, "status") == ServiceStatus.active.value
    ]


def paid_payments(payments: Iterable[Any]) -> list[Any]:
    return [p for p in payments if field_value(p, "status") == PaymentStatus.paid.value]


def monthly_revenue(payments: Iterable[Any], now: datetime) -> float:
    """Sum of paid amounts dated in `now`'s calendar month."""
    now = to_utc_naive(now)
    total = 0.0
    for payment in paid_payments(payments):
        when = parse_timestamp(field_value(payment, "date"))
        if when is not None and (when.year, when.month) == (now.year, now.month):
            total += field_value(payment, "amount") or 0
    return total


def build_dashboard(snapshot: Snapshot, now: datetime) -> DashboardSummary:
    now = to_utc_naive(now)
    services = active_services(snapshot.clients)

    trends = DashboardTrends(
        leads=trend(snapshot.leads, "created_at", now=now),
        clients=trend(snapshot.clients, "onboarded_at", now=now),
        services=trend(services, "start_date", now=now),
        revenue=trend(paid_payments(snapshot.payments), "date", "amount", now=now),
    )

    summary = DashboardSummary(
        generated_at=now,
        leads_count=len(snapshot.leads),
        clients_count=len(snapshot.clients),
        active_services_count=len(services),
        monthly_revenue=monthly_revenue(snapshot.payments, now),
        trends=trends,
        chart=chart_data(snapshot.leads, now),
        country_distribution=country_distribution(snapshot.leads),
        campaign_stats=campaign_stats(snapshot.campaigns),
    )
    logger.debug(
        "Dashboard built for %s: %d leads, %d clients, %d payments, %d campaigns",
        now.date().isoformat(),
        len(snapshot.leads),
        len(snapshot.clients),
        len(snapshot.payments),
        len(snapshot.campaigns),
    )
    return summary
