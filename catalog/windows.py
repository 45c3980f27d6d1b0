"""
Sale window evaluation.

Pure functions shared by the sweeper (write path) and the price resolver
(read path). Both window bounds are inclusive and a missing bound is open.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional


def is_active(now: datetime, window_start: Optional[datetime], window_end: Optional[datetime]) -> bool:
    if window_start is not None and window_start > now:
        return False
    if window_end is not None and window_end < now:
        return False
    return True


def has_valid_discount(item) -> bool:
    return item.discount_price is not None and item.discount_price < item.regular_price


def should_discount(item, now: datetime) -> bool:
    return has_valid_discount(item) and is_active(now, item.window_start, item.window_end)
