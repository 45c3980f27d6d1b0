import pytest
from cacheops.conf import settings as cacheops_settings
from django.core.cache import cache


@pytest.fixture(autouse=True)
def disable_cacheops(settings):
    settings.CACHEOPS_ENABLED = False
    cacheops_settings.CACHEOPS_ENABLED = False
    yield
    cacheops_settings.CACHEOPS_ENABLED = False


@pytest.fixture(autouse=True)
def clear_django_cache():
    cache.clear()
    yield
    cache.clear()
