from decimal import Decimal
from types import SimpleNamespace

from catalog import signals
from catalog.models import Item
from catalog.resolver import PricingSnapshot, formatter_amounts, resolve
from catalog.sweeper import activate_starting_sales
from catalog.tests.utils import NOW, TOMORROW, YESTERDAY


def _pricing(effective, discount='8.00', window_start=None, window_end=None):
    return SimpleNamespace(
        regular_price=Decimal('10.00'),
        discount_price=Decimal(discount) if discount is not None else None,
        window_start=window_start,
        window_end=window_end,
        effective_price=Decimal(effective),
    )


def test_resolve_before_activation_sweep_keeps_cached_price():
    resolved = resolve(_pricing('10.00', window_start=YESTERDAY), NOW)

    assert resolved.price == Decimal('10.00')
    assert resolved.is_discounted is True


def test_resolve_before_expiry_sweep_keeps_cached_price():
    resolved = resolve(_pricing('8.00', window_end=YESTERDAY), NOW)

    assert resolved.price == Decimal('8.00')
    assert resolved.is_discounted is False


def test_resolve_consistent_item():
    resolved = resolve(_pricing('8.00', window_end=TOMORROW), NOW)

    assert resolved.price == Decimal('8.00')
    assert resolved.is_discounted is True
    assert resolved.regular_price == Decimal('10.00')
    assert resolved.discount_price == Decimal('8.00')


def test_formatter_amounts():
    assert formatter_amounts(_pricing('8.00'), NOW) == (Decimal('10.00'), Decimal('8.00'))
    assert formatter_amounts(_pricing('10.00', discount=None), NOW) == (Decimal('10.00'), None)
    assert formatter_amounts(_pricing('8.00', window_end=YESTERDAY), NOW) == (Decimal('10.00'), None)


def test_snapshot_resolves_like_item(make_item):
    item = make_item(discount_price=Decimal('8.00'), window_start=YESTERDAY)

    snapshot = PricingSnapshot.from_item(item)

    assert snapshot.id == item.pk
    assert resolve(snapshot, NOW) == resolve(item, NOW)


def test_reader_during_sweep_sees_pre_or_post_price(make_item):
    item = make_item(discount_price=Decimal('8.00'), window_start=YESTERDAY)
    observed = []

    def _reader(sender, item_ids, **kwargs):
        observed.append(resolve(Item.objects.get(pk=item.pk), NOW).price)

    signals.before_activation.connect(_reader, weak=False)
    signals.after_activation.connect(_reader, weak=False)
    try:
        activate_starting_sales(NOW)
    finally:
        signals.before_activation.disconnect(_reader)
        signals.after_activation.disconnect(_reader)

    assert observed == [Decimal('10.00'), Decimal('8.00')]
    assert all(price > 0 for price in observed)
