from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q


class ItemQuerySet(models.QuerySet):
    def starting_sales(self, now):
        """
        Items whose sale window has opened but whose cached price has not caught up.

        An item with a start date and no discount is selected too, so the
        sweeper can consume the dangling window.
        """
        return self.filter(window_start__isnull=False, window_start__lte=now).filter(
            Q(discount_price__isnull=True) | ~Q(effective_price=F('discount_price'))
        )

    def ending_sales(self, now):
        """
        Items whose sale window has closed but still carry a reduced cached price.
        """
        return self.filter(window_end__isnull=False, window_end__lt=now).exclude(
            effective_price=F('regular_price')
        )

    def currently_discounted(self):
        return self.filter(
            discount_price__isnull=False,
            discount_price__lt=F('regular_price'),
            effective_price=F('discount_price'),
        )


class Item(models.Model):
    PRICING_FIELDS = ('regular_price', 'discount_price', 'window_start', 'window_end', 'effective_price')

    source_uid = models.CharField(max_length=255, unique=True)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=255)
    regular_price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0'))]
    )
    discount_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0'))],
    )
    window_start = models.DateTimeField(null=True, blank=True, db_index=True)
    window_end = models.DateTimeField(null=True, blank=True, db_index=True)
    # Denormalized copy of regular_price or discount_price; written by the sweeper and the edit boundary.
    effective_price = models.DecimalField(max_digits=12, decimal_places=2, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    objects = ItemQuerySet.as_manager()

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['category'], name='catalog_item_category_idx'),
            models.Index(fields=['effective_price'], name='catalog_item_effective_idx'),
        ]

    def __str__(self) -> str:
        return f'{self.name} ({self.category}) - {self.effective_price}'

    def clean(self):
        super().clean()
        if self.window_start is not None and self.window_end is not None:
            if self.window_end < self.window_start:
                raise ValidationError({
                    'window_end': 'window_end must not be earlier than window_start'
                })

    def save(self, *args, **kwargs):
        if self.effective_price is None:
            self.effective_price = self.regular_price
        super().save(*args, **kwargs)
