"""
Read-path price resolution.

``resolve`` deliberately combines two sources: the committed
``effective_price`` written by the sweeper and a live window check. The two
can disagree until the next sweep runs (window opened but not yet activated,
or closed but not yet expired); callers pick the one they need. Charging uses
``price``; labelling (strikethrough, "on sale" badges) uses ``is_discounted``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from django.utils import timezone

from .windows import should_discount


@dataclass(frozen=True)
class PricingSnapshot:
    id: int
    regular_price: Decimal
    discount_price: Optional[Decimal]
    window_start: Optional[datetime]
    window_end: Optional[datetime]
    effective_price: Decimal

    @classmethod
    def from_item(cls, item) -> 'PricingSnapshot':
        return cls(
            id=item.pk,
            regular_price=item.regular_price,
            discount_price=item.discount_price,
            window_start=item.window_start,
            window_end=item.window_end,
            effective_price=item.effective_price,
        )


@dataclass(frozen=True)
class ResolvedPrice:
    price: Decimal
    is_discounted: bool
    regular_price: Decimal
    discount_price: Optional[Decimal]


def resolve(item, now: Optional[datetime] = None) -> ResolvedPrice:
    now = now or timezone.now()
    return ResolvedPrice(
        price=item.effective_price,
        is_discounted=should_discount(item, now),
        regular_price=item.regular_price,
        discount_price=item.discount_price,
    )


def formatter_amounts(item, now: Optional[datetime] = None) -> Tuple[Decimal, Optional[Decimal]]:
    """
    Return ``(regular_price, sale_amount)`` for an external price formatter.

    ``sale_amount`` is the cached price when the item is live-discounted and
    ``None`` otherwise.
    """
    resolved = resolve(item, now)
    if resolved.is_discounted:
        return resolved.regular_price, resolved.price
    return resolved.regular_price, None
