import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'saleprice.settings')

app = Celery('saleprice')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()


@app.on_after_finalize.connect
def setup_periodic_tasks(sender, **kwargs):
    from django.conf import settings

    from catalog.schedule import sweep_schedule
    from catalog.tasks import sweep_sale_prices_task

    sender.add_periodic_task(
        sweep_schedule(settings.SALE_SWEEP_INTERVAL, settings.SALE_SWEEP_UTC_OFFSET_HOURS),
        sweep_sale_prices_task.s(),
        name='sweep-sale-prices',
    )
