"""
Scheduled sale price reconciliation.

Two scans run per sweep, both at the same ``now``:

* the starting-sale scan copies ``discount_price`` into ``effective_price``
  for items whose window has opened and consumes ``window_start``;
* the ending-sale scan restores ``regular_price`` for items whose window has
  closed and consumes ``discount_price`` and ``window_end``.

Reconciling an item clears the field that made it match its scan, so
re-running a sweep (or resuming an aborted one) only touches items that still
disagree with their window.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, transaction
from django.utils import timezone

from . import signals
from .cache import invalidate_item
from .models import Item
from .schedule import next_sweep_at
from .windows import has_valid_discount

logger = logging.getLogger('catalog.sweeper')

SWEEP_LOCK_KEY = 'catalog:sale-sweep:lock'


class SweepInProgress(Exception):
    pass


@dataclass
class ScanResult:
    candidates: List[int] = field(default_factory=list)
    succeeded: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)


@dataclass
class SweepReport:
    swept_at: datetime
    activation: ScanResult = field(default_factory=ScanResult)
    expiry: ScanResult = field(default_factory=ScanResult)
    skipped: bool = False
    next_sweep_at: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            'swept_at': self.swept_at.isoformat(),
            'skipped': self.skipped,
            'next_sweep_at': self.next_sweep_at.isoformat() if self.next_sweep_at else None,
            'activation': asdict(self.activation),
            'expiry': asdict(self.expiry),
        }


@contextmanager
def sweep_guard():
    """
    Hold the run-in-progress lock for the duration of a sweep.

    The lock lives in the Django cache so every worker sharing that cache
    sees it. It expires after SALE_SWEEP_LOCK_TIMEOUT in case a worker dies
    mid-sweep.
    """
    token = uuid.uuid4().hex
    if not cache.add(SWEEP_LOCK_KEY, token, timeout=settings.SALE_SWEEP_LOCK_TIMEOUT):
        raise SweepInProgress('A sale price sweep is already running.')
    try:
        yield token
    finally:
        if cache.get(SWEEP_LOCK_KEY) == token:
            cache.delete(SWEEP_LOCK_KEY)


def _activation_changes(item: Item) -> Dict[str, object]:
    if has_valid_discount(item):
        return {'effective_price': item.discount_price, 'window_start': None}
    changes = {'effective_price': item.regular_price, 'window_start': None}
    if item.discount_price is None:
        # Nothing left for the ending scan to restore.
        changes['window_end'] = None
    return changes


def _expiry_changes(item: Item) -> Dict[str, object]:
    return {'effective_price': item.regular_price, 'discount_price': None, 'window_end': None}


def _pricing_guard(item: Item) -> Dict[str, object]:
    guard = {}
    for name in Item.PRICING_FIELDS:
        value = getattr(item, name)
        if value is None:
            guard[f'{name}__isnull'] = True
        else:
            guard[name] = value
    return guard


def _write_item(item: Item, guard: Dict[str, object], changes: Dict[str, object]) -> bool:
    """
    Persist ``changes`` with one conditional UPDATE.

    ``guard`` pins every pricing field the changes were derived from; if an
    edit moved any of them in the meantime nothing is written and False is
    returned.
    """
    with transaction.atomic():
        rows = Item.objects.filter(pk=item.pk, **guard).update(
            modified_at=timezone.now(), **changes
        )
    if not rows:
        return False
    for name, value in changes.items():
        setattr(item, name, value)
    return True


def _run_scan(
    queryset,
    *,
    now: datetime,
    build_changes: Callable[[Item], Dict[str, object]],
    before_signal,
    after_signal,
    label: str,
) -> ScanResult:
    candidates = list(queryset.nocache().order_by('pk'))
    result = ScanResult(candidates=[item.pk for item in candidates])
    if not candidates:
        logger.info('%s scan: no items to reconcile at %s', label, now.isoformat())
        return result

    signals.notify(before_signal, Item, result.candidates, now)

    for item in candidates:
        try:
            written = _write_item(item, _pricing_guard(item), build_changes(item))
        except DatabaseError:
            logger.exception('%s scan: failed to reconcile item %s; skipping', label, item.pk)
            result.failed.append(item.pk)
            continue
        if not written:
            logger.info('%s scan: item %s changed during the sweep; leaving it for the next run', label, item.pk)
            result.skipped.append(item.pk)
            continue
        invalidate_item(item)
        result.succeeded.append(item.pk)

    signals.notify(after_signal, Item, result.succeeded, now)
    logger.info(
        '%s scan completed: %s reconciled, %s failed, %s skipped (candidates: %s)',
        label,
        len(result.succeeded),
        len(result.failed),
        len(result.skipped),
        len(result.candidates),
    )
    return result


def activate_starting_sales(now: datetime) -> ScanResult:
    return _run_scan(
        Item.objects.starting_sales(now),
        now=now,
        build_changes=_activation_changes,
        before_signal=signals.before_activation,
        after_signal=signals.after_activation,
        label='Starting-sale',
    )


def expire_ending_sales(now: datetime) -> ScanResult:
    return _run_scan(
        Item.objects.ending_sales(now),
        now=now,
        build_changes=_expiry_changes,
        before_signal=signals.before_expiry,
        after_signal=signals.after_expiry,
        label='Ending-sale',
    )


def sweep_sale_prices(now: Optional[datetime] = None) -> SweepReport:
    now = now or timezone.now()
    report = SweepReport(
        swept_at=now,
        next_sweep_at=next_sweep_at(now, settings.SALE_SWEEP_INTERVAL, settings.SALE_SWEEP_UTC_OFFSET_HOURS),
    )
    try:
        with sweep_guard():
            report.activation = activate_starting_sales(now)
            report.expiry = expire_ending_sales(now)
    except SweepInProgress:
        logger.warning('Sale price sweep for %s skipped: another sweep is in progress.', now.isoformat())
        report.skipped = True
    return report
