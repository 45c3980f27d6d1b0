from decimal import Decimal

import pytest
from cacheops.conf import settings as cacheops_settings

from catalog import cache as pricing_cache
from catalog.models import Item
from catalog.resolver import PricingSnapshot


@pytest.fixture
def calls(monkeypatch):
    recorded = []
    monkeypatch.setattr(pricing_cache, 'invalidate_obj', lambda obj: recorded.append(('row', obj.pk)))
    monkeypatch.setattr(
        pricing_cache.get_item_pricing,
        'invalidate',
        lambda item_id: recorded.append(('fragment', item_id)),
    )
    monkeypatch.setattr(
        pricing_cache.get_discounted_items,
        'invalidate',
        lambda: recorded.append(('aggregate', None)),
    )
    return recorded


def test_invalidate_item_drops_item_and_aggregate_scopes(calls, monkeypatch):
    monkeypatch.setattr(cacheops_settings, 'CACHEOPS_ENABLED', True)

    pricing_cache.invalidate_item(Item(pk=7, regular_price=Decimal('10.00')))

    assert calls == [('row', 7), ('fragment', 7), ('aggregate', None)]


def test_invalidate_item_with_caching_disabled(calls):
    pricing_cache.invalidate_item(Item(pk=7, regular_price=Decimal('10.00')))

    assert calls == [('row', 7)]


@pytest.mark.django_db
def test_get_discounted_items(make_item, django_assert_num_queries):
    on_sale = make_item(name='Hammer', discount_price=Decimal('8.00'), effective_price=Decimal('8.00'))
    make_item(name='Saw', discount_price=Decimal('8.00'), effective_price=Decimal('10.00'))
    make_item(name='Drill')

    with django_assert_num_queries(1):
        data = pricing_cache.get_discounted_items()

    assert [row['id'] for row in data] == [on_sale.pk]
    assert data[0]['effective_price'] == Decimal('8.00')


@pytest.mark.django_db
def test_get_item_pricing_returns_snapshot(make_item):
    item = make_item(discount_price=Decimal('8.00'))

    snapshot = pricing_cache.get_item_pricing(item.pk)

    assert snapshot == PricingSnapshot.from_item(item)
