"""Disruption metrics: cause-code investigation times and the flights funnel."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta, timezone

from pax_presence.loaders import parse_timestamp
from pax_presence.models import (
    CauseCodeSummary,
    FunnelData,
    FunnelRow,
    Period,
    ResolvedFlight,
    UnknownFlight,
)
from pax_presence.presence import round_half_up

CREATION_LEAD = timedelta(minutes=15)

PERIOD_LABELS: dict[Period, str] = {
    "today": "Today",
    "this_week": "This Week",
    "this_month": "This Month",
    "last_month": "Last Month",
    "last_3_months": "Last 3 Months",
    "this_year": "This Year",
    "all_time": "All Time",
}


def _to_datetime(value: str | datetime) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    epoch = parse_timestamp(value)
    if epoch is None:
        raise ValueError("Missing timestamp")
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def format_duration(hours: float) -> str:
    """Human duration: minutes under an hour, hours under a day, else days."""
    if hours < 1:
        return f"{round_half_up(hours * 60)} min"
    if hours < 24:
        return f"{hours:.1f} hrs"
    return f"{hours / 24:.1f} days"


def waiting_time_hours(created_at: str | datetime, now: datetime | None = None) -> float:
    """Hours a still-unknown flight has been waiting since it was created."""
    if now is None:
        now = datetime.now(tz=timezone.utc)
    return _hours_between(_to_datetime(created_at), _to_datetime(now))


def is_created_on_time(created_at: str | datetime, scheduled: str | datetime) -> bool:
    """True when the record existed at least 15 minutes before scheduled departure."""
    return _to_datetime(created_at) <= _to_datetime(scheduled) - CREATION_LEAD


def is_resolved_on_time(resolved_at: str | datetime, scheduled: str | datetime) -> bool:
    """True when the cause code was resolved before scheduled departure."""
    return _to_datetime(resolved_at) < _to_datetime(scheduled)


def resolution_time_hours(created_at: str | datetime, changed_at: str | datetime) -> float:
    """Hours from creation to cause-code change, never negative."""
    hours = _hours_between(_to_datetime(created_at), _to_datetime(changed_at))
    return hours if hours >= 0 else 0.0


def summarize_cause_codes(
    unknown: list[UnknownFlight],
    resolved: list[ResolvedFlight],
    now: datetime | None = None,
) -> CauseCodeSummary:
    """Aggregate on-time rates and resolution times over already-fetched rows."""
    summary = CauseCodeSummary(unknown_count=len(unknown), resolved_count=len(resolved))

    everything: list[UnknownFlight | ResolvedFlight] = [*unknown, *resolved]
    if everything:
        on_time = sum(
            is_created_on_time(f.created_at, f.d_scheduled_time_utc) for f in everything
        )
        summary.created_on_time_rate = round(on_time / len(everything) * 100, 1)

        # pending flights count as not resolved on time
        resolved_on_time = sum(
            is_resolved_on_time(f.resolved_at, f.d_scheduled_time_utc) for f in resolved
        )
        summary.resolved_on_time_rate = round(resolved_on_time / len(everything) * 100, 1)

    if resolved:
        summary.avg_resolution_hours = round(
            sum(f.resolution_time_hours for f in resolved) / len(resolved), 2
        )
        summary.resolved_by_cause = dict(
            Counter(f.new_cause_code for f in resolved).most_common()
        )

    if unknown:
        summary.max_waiting_hours = round(
            max(waiting_time_hours(f.created_at, now) for f in unknown), 2
        )

    return summary


def funnel_for_period(rows: list[FunnelRow], period: Period) -> FunnelData:
    """Counts for *period*, all zero when the summary has no such row.

    Raises ValueError for a period outside PERIOD_LABELS.
    """
    label = PERIOD_LABELS.get(period)
    if label is None:
        raise ValueError(f"Unknown funnel period: {period!r}")

    row = next((r for r in rows if r.period == period), None)
    if row is None:
        return FunnelData(label=label)
    return FunnelData(
        label=label,
        flights=row.flights_count,
        disrupted_flights=row.disrupted_count,
        campaigns=row.campaigns_count,
    )


def conversion_rates(data: FunnelData) -> tuple[float, float]:
    """Disrupted-per-flight and campaign-per-disruption percentages, 1 decimal."""
    disrupted_rate = (
        round(data.disrupted_flights / data.flights * 100, 1) if data.flights > 0 else 0.0
    )
    campaign_rate = (
        round(data.campaigns / data.disrupted_flights * 100, 1)
        if data.disrupted_flights > 0
        else 0.0
    )
    return disrupted_rate, campaign_rate
