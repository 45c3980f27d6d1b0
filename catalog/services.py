from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime
from datetime import timezone as dt_timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional
from urllib.parse import urlparse

import pandas as pd
import requests
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .models import Item
from .windows import should_discount

logger = logging.getLogger('catalog.importer')

EDITABLE_PRICING_FIELDS = ('regular_price', 'discount_price', 'window_start', 'window_end')

SCHEDULE_COLUMNS = ['source_uid', 'regular_price', 'discount_price', 'window_start', 'window_end']
COLUMN_ALIASES = {
    'id': 'source_uid',
    'item_id': 'source_uid',
    'sku': 'source_uid',
    'external_id': 'source_uid',
    'price': 'regular_price',
    'list_price': 'regular_price',
    'sale_price': 'discount_price',
    'discount': 'discount_price',
    'sale_from': 'window_start',
    'sale_start': 'window_start',
    'starts_at': 'window_start',
    'sale_to': 'window_end',
    'sale_end': 'window_end',
    'ends_at': 'window_end',
}


def update_item_pricing(item: Item, now: Optional[datetime] = None, **changes) -> Item:
    """
    Apply a direct pricing edit to ``item``.

    Malformed windows are rejected with ``ValidationError`` before anything is
    written. The cached ``effective_price`` is brought in line with the window
    at ``now`` so the edit never leaves a price that no sweep scan would pick
    up. Cache invalidation happens in the ``post_save`` receiver.
    """
    unknown = set(changes) - set(EDITABLE_PRICING_FIELDS)
    if unknown:
        raise TypeError(f'Unsupported pricing fields: {", ".join(sorted(unknown))}')

    now = now or timezone.now()
    for name, value in changes.items():
        setattr(item, name, value)
    if item.effective_price is None:
        item.effective_price = item.regular_price
    item.full_clean()

    item.effective_price = item.discount_price if should_discount(item, now) else item.regular_price
    with transaction.atomic():
        item.save()
    return item


@dataclass
class ScheduleImportReport:
    updated: int
    rejected: int
    missing: int
    total_rows: int


def _read_remote_content(source_url: str) -> pd.DataFrame:
    logger.info('Fetching sale schedules from %s', source_url)
    response = requests.get(source_url, timeout=30)
    response.raise_for_status()
    content_type = response.headers.get('Content-Type', '')
    parsed = urlparse(source_url)
    if 'json' in content_type or parsed.path.endswith('.json'):
        return pd.read_json(io.BytesIO(response.content))
    return pd.read_csv(io.BytesIO(response.content))


def _read_local_sample(path: str) -> pd.DataFrame:
    logger.info('Loading fallback sale schedules from %s', path)
    if path.endswith('.json'):
        return pd.read_json(path)
    return pd.read_csv(path)


def load_raw_dataframe(source_url: Optional[str] = None) -> pd.DataFrame:
    source_url = source_url or settings.SALE_SCHEDULE_SOURCE_URL
    if source_url:
        try:
            return _read_remote_content(source_url)
        except requests.RequestException as exc:
            logger.warning('Remote load failed (%s); falling back to local sample.', exc)
    return _read_local_sample(str(settings.LOCAL_SAMPLE_SCHEDULE_PATH))


def _to_price(value) -> Optional[Decimal]:
    if pd.isna(value):
        return None
    return Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def _to_datetime(value) -> Optional[datetime]:
    if value is None or pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if timezone.is_naive(value):
        value = timezone.make_aware(value, timezone=dt_timezone.utc)
    return value


def normalize_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize arbitrary schedule columns into the expected schema.

    Blank discount or window cells mean "no discount" / "open bound"; a blank
    regular price leaves the stored one untouched.
    """
    if df.empty:
        return df

    df = df.copy()
    df.columns = [str(column).strip().lower() for column in df.columns]
    df.rename(columns={col: COLUMN_ALIASES.get(col, col) for col in df.columns}, inplace=True)

    for column in SCHEDULE_COLUMNS:
        if column not in df.columns:
            df[column] = pd.NA
    df = df[SCHEDULE_COLUMNS].copy()

    df = df.dropna(subset=['source_uid'])
    df['source_uid'] = df['source_uid'].astype(str).str.strip()
    df = df[df['source_uid'] != ''].copy()

    for column in ('regular_price', 'discount_price'):
        df[column] = pd.to_numeric(df[column], errors='coerce').apply(_to_price).astype(object)
    for column in ('window_start', 'window_end'):
        df[column] = pd.to_datetime(df[column], utc=True, errors='coerce')

    return df.reset_index(drop=True)


def apply_sale_schedules(normalized_df: pd.DataFrame, now: Optional[datetime] = None) -> ScheduleImportReport:
    if normalized_df.empty:
        return ScheduleImportReport(updated=0, rejected=0, missing=0, total_rows=0)

    updated = 0
    rejected = 0
    missing = 0

    records: Iterable[dict] = normalized_df.to_dict(orient='records')
    for record in records:
        source_uid = record['source_uid']
        try:
            item = Item.objects.all().nocache().get(source_uid=source_uid)
        except Item.DoesNotExist:
            logger.warning('No item with source_uid %s; skipping schedule row.', source_uid)
            missing += 1
            continue

        changes = {
            'discount_price': _to_price(record['discount_price']),
            'window_start': _to_datetime(record['window_start']),
            'window_end': _to_datetime(record['window_end']),
        }
        regular_price = _to_price(record['regular_price'])
        if regular_price is not None:
            changes['regular_price'] = regular_price

        try:
            update_item_pricing(item, now=now, **changes)
        except ValidationError as exc:
            logger.warning('Rejected sale schedule for %s: %s', source_uid, exc.messages)
            rejected += 1
            continue
        updated += 1

    total_rows = normalized_df.shape[0]
    logger.info(
        'Schedule import completed: %s updated, %s rejected, %s missing (rows processed: %s)',
        updated,
        rejected,
        missing,
        total_rows,
    )
    return ScheduleImportReport(updated=updated, rejected=rejected, missing=missing, total_rows=total_rows)


def import_sale_schedules(source_url: Optional[str] = None, now: Optional[datetime] = None) -> ScheduleImportReport:
    raw_df = load_raw_dataframe(source_url)
    normalized_df = normalize_dataframe(raw_df)
    return apply_sale_schedules(normalized_df, now=now)
