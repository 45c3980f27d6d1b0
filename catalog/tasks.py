from celery import shared_task
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .services import import_sale_schedules
from .sweeper import sweep_sale_prices


def _parse_sweep_time(value: str):
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f'Invalid sweep timestamp: {value}')
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


@shared_task(soft_time_limit=settings.SALE_SWEEP_SOFT_TIME_LIMIT)
def sweep_sale_prices_task(now: str | None = None) -> dict:
    report = sweep_sale_prices(now=_parse_sweep_time(now) if now else None)
    return report.as_dict()


@shared_task
def import_sale_schedules_task(source_url: str | None = None) -> dict:
    report = import_sale_schedules(source_url=source_url)
    return {
        'updated': report.updated,
        'rejected': report.rejected,
        'missing': report.missing,
        'total_rows': report.total_rows,
    }
