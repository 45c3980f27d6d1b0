import logging

from django.dispatch import Signal

logger = logging.getLogger('catalog.signals')

# Sent with sender=Item, item_ids=[...], swept_at=<datetime>.
before_activation = Signal()
after_activation = Signal()
before_expiry = Signal()
after_expiry = Signal()


def notify(signal, sender, item_ids, swept_at):
    """
    Dispatch a sweep notification to every subscriber in registration order.

    Subscriber failures are logged and never propagate: by the time an
    ``after_*`` signal is sent the writes and cache invalidation are committed.
    """
    responses = signal.send_robust(sender=sender, item_ids=list(item_ids), swept_at=swept_at)
    for receiver, response in responses:
        if isinstance(response, Exception):
            logger.error(
                'Subscriber %r failed while handling sweep notification: %s',
                receiver,
                response,
                exc_info=(type(response), response, response.__traceback__),
            )
    return responses
