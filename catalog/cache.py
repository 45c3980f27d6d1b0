import logging

from cacheops import cached, invalidate_obj
from cacheops.conf import settings as cacheops_settings
from django.conf import settings

from .models import Item
from .resolver import PricingSnapshot

logger = logging.getLogger('catalog.cache')


@cached(timeout=settings.ITEM_PRICING_CACHE_TIMEOUT)
def get_item_pricing(item_id: int) -> PricingSnapshot:
    item = Item.objects.all().nocache().get(pk=item_id)
    return PricingSnapshot.from_item(item)


@cached(timeout=settings.DISCOUNTED_ITEMS_CACHE_TIMEOUT)
def get_discounted_items():
    qs = (
        Item.objects.all().nocache()
        .currently_discounted()
        .values('id', 'name', 'category', 'regular_price', 'effective_price')
        .order_by('category', 'name')
    )
    return list(qs)


def invalidate_item(item: Item) -> None:
    """
    Drop every cached view derived from ``item``'s pricing state.

    The item scope covers the cacheops row cache and the pricing fragment.
    The aggregate listing is a single key and is dropped on every change.
    """
    invalidate_obj(item)
    if not cacheops_settings.CACHEOPS_ENABLED:
        return
    get_item_pricing.invalidate(item.pk)
    get_discounted_items.invalidate()
    logger.debug('Invalidated pricing caches for item %s', item.pk)
