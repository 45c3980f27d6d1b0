"""
Periodic trigger for the sale price sweep.

Celery beat runs in UTC. The store's midnight is turned into a UTC
hour/minute from a fixed offset, which is an operational setting and not a
timezone database lookup.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta
from datetime import timezone as dt_timezone

from celery.schedules import crontab, schedule

DAY = 24 * 60 * 60


def _offset(utc_offset_hours: float) -> timedelta:
    return timedelta(minutes=round(utc_offset_hours * 60))


def next_local_midnight(now: datetime, utc_offset_hours: float = 0) -> datetime:
    """
    Return the next midnight of the store's local day, as an aware UTC datetime.
    """
    offset = _offset(utc_offset_hours)
    local_now = now.astimezone(dt_timezone.utc) + offset
    next_day = local_now.date() + timedelta(days=1)
    local_midnight = datetime.combine(next_day, time.min, tzinfo=dt_timezone.utc)
    return local_midnight - offset


def sweep_schedule(interval_seconds: int = DAY, utc_offset_hours: float = 0):
    """
    Build the beat schedule for the sweep.

    A daily interval fires at local midnight; any other interval runs every
    ``interval_seconds``.
    """
    if interval_seconds <= 0:
        raise ValueError('interval_seconds must be positive')
    if interval_seconds != DAY:
        return schedule(run_every=timedelta(seconds=interval_seconds))
    minutes = (-round(utc_offset_hours * 60)) % (24 * 60)
    return crontab(hour=minutes // 60, minute=minutes % 60)


def next_sweep_at(now: datetime, interval_seconds: int = DAY, utc_offset_hours: float = 0) -> datetime:
    """
    Return when the beat entry from ``sweep_schedule`` fires next after ``now``.

    Sub-daily intervals are measured from ``now`` since beat does not anchor them.
    """
    if interval_seconds != DAY:
        return now + timedelta(seconds=interval_seconds)
    return next_local_midnight(now, utc_offset_hours)
