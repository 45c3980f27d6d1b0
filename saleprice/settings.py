import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'insecure-dev-key')
DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'
ALLOWED_HOSTS = [host for host in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if host]

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'django_filters',
    'cacheops',
    'catalog',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'saleprice.urls'
WSGI_APPLICATION = 'saleprice.wsgi.application'

DATABASES = {
    'default': {
        'ENGINE': os.getenv('DATABASE_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': os.getenv('DATABASE_NAME', str(BASE_DIR / 'db.sqlite3')),
        'USER': os.getenv('DATABASE_USER', ''),
        'PASSWORD': os.getenv('DATABASE_PASSWORD', ''),
        'HOST': os.getenv('DATABASE_HOST', ''),
        'PORT': os.getenv('DATABASE_PORT', ''),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

# The sweep run guard lives here, so production should point this at a cache shared by all workers.
if os.getenv('DJANGO_CACHE_URL'):
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.redis.RedisCache',
            'LOCATION': os.getenv('DJANGO_CACHE_URL'),
        }
    }
else:
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        }
    }

CACHEOPS_REDIS = os.getenv('CACHEOPS_REDIS', REDIS_URL)
CACHEOPS_ENABLED = os.getenv('CACHEOPS_ENABLED', 'true').lower() == 'true'
CACHEOPS_DEGRADE_ON_FAILURE = True
CACHEOPS_DEFAULTS = {'timeout': 60 * 15}
CACHEOPS = {
    'catalog.item': {'ops': 'all'},
}

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': int(os.getenv('API_PAGE_SIZE', '50')),
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
        'rest_framework.filters.OrderingFilter',
    ],
}

CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', REDIS_URL)
CELERY_TIMEZONE = 'UTC'
CELERY_TASK_ALWAYS_EAGER = os.getenv('CELERY_TASK_ALWAYS_EAGER', 'false').lower() == 'true'

SALE_SWEEP_INTERVAL = int(os.getenv('SALE_SWEEP_INTERVAL', str(24 * 60 * 60)))
SALE_SWEEP_UTC_OFFSET_HOURS = float(os.getenv('SALE_SWEEP_UTC_OFFSET_HOURS', '0'))
SALE_SWEEP_LOCK_TIMEOUT = int(os.getenv('SALE_SWEEP_LOCK_TIMEOUT', '3600'))
SALE_SWEEP_SOFT_TIME_LIMIT = int(os.getenv('SALE_SWEEP_SOFT_TIME_LIMIT', '1800'))

ITEM_PRICING_CACHE_TIMEOUT = int(os.getenv('ITEM_PRICING_CACHE_TIMEOUT', '900'))
DISCOUNTED_ITEMS_CACHE_TIMEOUT = int(os.getenv('DISCOUNTED_ITEMS_CACHE_TIMEOUT', '900'))

SALE_SCHEDULE_SOURCE_URL = os.getenv('SALE_SCHEDULE_SOURCE_URL', '')
LOCAL_SAMPLE_SCHEDULE_PATH = os.getenv('LOCAL_SAMPLE_SCHEDULE_PATH', str(BASE_DIR / 'data' / 'sale_schedules.csv'))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'default',
        },
    },
    'loggers': {
        'catalog': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': True,
        },
    },
}
