from datetime import timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from catalog.models import Item


@pytest.mark.django_db
def test_items_endpoint_filters_by_effective_price_range(client, settings):
    settings.CACHEOPS_ENABLED = False
    Item.objects.create(
        source_uid='item-1',
        name='Budget Mouse',
        category='Electronics',
        regular_price=Decimal('25.00'),
        discount_price=Decimal('15.00'),
        effective_price=Decimal('15.00'),
    )
    Item.objects.create(
        source_uid='item-2',
        name='Premium Mouse',
        category='Electronics',
        regular_price=Decimal('55.00'),
    )

    url = reverse('item-list')
    response = client.get(url, {'price_min': 10, 'price_max': 20})

    assert response.status_code == 200
    payload = response.json()
    assert payload['count'] == 1
    assert payload['results'][0]['name'] == 'Budget Mouse'
    assert payload['results'][0]['effective_price'] == '15.00'


@pytest.mark.django_db
def test_price_endpoint_reports_cached_price_and_live_flag(client):
    item = Item.objects.create(
        source_uid='item-1',
        name='Keyboard',
        category='Electronics',
        regular_price=Decimal('10.00'),
        discount_price=Decimal('8.00'),
        window_start=timezone.now() - timedelta(days=1),
    )

    response = client.get(reverse('item-price', kwargs={'pk': item.pk}))

    assert response.status_code == 200
    assert response.json() == {
        'price': '10.00',
        'is_discounted': True,
        'regular_price': '10.00',
        'discount_price': '8.00',
    }


@pytest.mark.django_db
def test_price_endpoint_unknown_item(client):
    response = client.get(reverse('item-price', kwargs={'pk': 999}))

    assert response.status_code == 404


@pytest.mark.django_db
def test_discounted_endpoint_lists_committed_discounts(client):
    Item.objects.create(
        source_uid='item-1',
        name='Keyboard',
        category='Electronics',
        regular_price=Decimal('10.00'),
        discount_price=Decimal('8.00'),
        effective_price=Decimal('8.00'),
    )
    Item.objects.create(
        source_uid='item-2',
        name='Monitor',
        category='Electronics',
        regular_price=Decimal('100.00'),
        discount_price=Decimal('80.00'),
    )

    response = client.get(reverse('discounted-item-list'))

    assert response.status_code == 200
    payload = response.json()
    assert [row['name'] for row in payload] == ['Keyboard']
    assert payload[0]['effective_price'] == '8.00'
