from decimal import Decimal
from itertools import count

import pytest

from catalog.models import Item


@pytest.fixture
def make_item(db):
    sequence = count(1)

    def _make_item(**overrides):
        number = next(sequence)
        values = {
            'source_uid': f'item-{number}',
            'name': f'Widget {number}',
            'category': 'Tools',
            'regular_price': Decimal('10.00'),
        }
        values.update(overrides)
        return Item.objects.create(**values)

    return _make_item
