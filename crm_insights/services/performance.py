"""
Range-filtered analytics: lead funnel, email performance, monthly revenue.
"""

import calendar
from collections.abc import Iterable
from datetime import datetime, time, timedelta
import logging
from typing import Any

from crm_insights.core.exceptions import InvalidDateRangeError
from crm_insights.models.lead import LeadStatus
from crm_insights.schemas.analytics import DateRange, EmailPerformance, FunnelStats, RevenuePoint
from crm_insights.services.analytics import field_value, paid_payments, previous_month, round_half_up
from crm_insights.services.dates import parse_timestamp, to_utc_naive

logger = logging.getLogger(__name__)

RANGE_LABELS = {
    "7d": "Last 7 Days",
    "30d": "Last 30 Days",
    "6m": "Last 6 Months",
    "1y": "Last Year",
    "custom": "Custom Range",
}
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

MEETING_STATUSES = (LeadStatus.proposal.value, LeadStatus.negotiation.value)


def shift_months(value: datetime, months: int) -> datetime:
    """Move by whole calendar months, clamping the day to the target month's length."""
    index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)


def resolve_date_range(
    range_key: str,
    now: datetime,
    custom_start: Any = None,
    custom_end: Any = None,
) -> DateRange:
    """Turn a named range into inclusive [start, end] bounds ending today."""
    if range_key not in RANGE_LABELS:
        raise InvalidDateRangeError(f"Unknown range: {range_key}", details={"allowed": list(RANGE_LABELS)})

    now = to_utc_naive(now)
    end = end_of_day(now)
    today = start_of_day(now)

    if range_key == "7d":
        start = today - timedelta(days=7)
    elif range_key == "30d":
        start = today - timedelta(days=30)
    elif range_key == "6m":
        start = shift_months(today, -6)
    elif range_key == "1y":
        start = shift_months(today, -12)
    else:
        parsed_start = parse_timestamp(custom_start)
        parsed_end = parse_timestamp(custom_end)
        if custom_start not in (None, "") and parsed_start is None:
            raise InvalidDateRangeError("Invalid custom start date", details={"start": str(custom_start)})
        if custom_end not in (None, "") and parsed_end is None:
            raise InvalidDateRangeError("Invalid custom end date", details={"end": str(custom_end)})
        start = start_of_day(parsed_start) if parsed_start else today - timedelta(days=30)
        if parsed_end:
            end = end_of_day(parsed_end)
        if start > end:
            raise InvalidDateRangeError(
                "Custom range starts after it ends",
                details={"start": start.isoformat(), "end": end.isoformat()},
            )

    return DateRange(key=range_key, label=RANGE_LABELS[range_key], start=start, end=end)


def _in_range(item: Any, date_field: str, date_range: DateRange) -> bool:
    when = parse_timestamp(field_value(item, date_field))
    return when is not None and date_range.start <= when <= date_range.end


def lead_funnel(leads: Iterable[Any], date_range: DateRange) -> FunnelStats:
    stats = FunnelStats()
    for lead in leads:
        if not _in_range(lead, "created_at", date_range):
            continue
        stats.total += 1
        status = field_value(lead, "status")
        if status == LeadStatus.new.value:
            stats.new += 1
        elif status == LeadStatus.contacted.value:
            stats.contacted += 1
        elif status == LeadStatus.qualified.value:
            stats.interested += 1
        elif status in MEETING_STATUSES:
            stats.meeting += 1
        elif status == LeadStatus.closed_won.value:
            stats.converted += 1
        elif status == LeadStatus.closed_lost.value:
            stats.not_interested += 1
    return stats


def _whole_percent(part: int, total: int) -> int:
    if total <= 0:
        return 0
    return int(round_half_up(part / total * 100))


def email_performance(campaigns: Iterable[Any], date_range: DateRange) -> EmailPerformance:
    sent = opened = clicked = 0
    for campaign in campaigns:
        if not _in_range(campaign, "created_at", date_range):
            continue
        sent += int(field_value(campaign, "sent_count") or 0)
        opened += int(field_value(campaign, "open_count") or 0)
        clicked += int(field_value(campaign, "click_count") or 0)

    return EmailPerformance(
        sent=sent,
        opened=opened,
        clicked=clicked,
        open_rate=_whole_percent(opened, sent),
        click_rate=_whole_percent(clicked, sent),
    )


def revenue_by_month(payments: Iterable[Any], now: datetime, months: int = 6) -> list[RevenuePoint]:
    """Paid revenue per calendar month, oldest first, ending with `now`'s month."""
    now = to_utc_naive(now)
    keys: list[tuple[int, int]] = []
    year, month = now.year, now.month
    for _ in range(max(1, months)):
        keys.append((year, month))
        year, month = previous_month(year, month)
    keys.reverse()

    totals: dict[tuple[int, int], float] = {key: 0.0 for key in keys}
    for payment in paid_payments(payments):
        when = parse_timestamp(field_value(payment, "date"))
        if when is None:
            continue
        key = (when.year, when.month)
        if key in totals:
            totals[key] += field_value(payment, "amount") or 0

    return [
        RevenuePoint(label=f"{MONTH_LABELS[m - 1]} {y % 100:02d}", amount=totals[(y, m)])
        for y, m in keys
    ]
