import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cache import invalidate_item
from .models import Item
from .signals import after_activation, after_expiry

audit_logger = logging.getLogger('catalog.audit')


@receiver(post_save, sender=Item)
def invalidate_on_pricing_save(sender, instance, update_fields=None, **kwargs):
    if update_fields is not None and not set(update_fields) & set(Item.PRICING_FIELDS):
        return
    invalidate_item(instance)


@receiver(post_delete, sender=Item)
def invalidate_on_delete(sender, instance, **kwargs):
    invalidate_item(instance)


@receiver(after_activation)
def audit_activation(sender, item_ids, swept_at, **kwargs):
    if item_ids:
        audit_logger.info('Sale prices activated at %s for items %s', swept_at.isoformat(), item_ids)


@receiver(after_expiry)
def audit_expiry(sender, item_ids, swept_at, **kwargs):
    if item_ids:
        audit_logger.info('Sale prices expired at %s for items %s', swept_at.isoformat(), item_ids)
