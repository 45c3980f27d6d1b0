from rest_framework import serializers

from .models import Item


class ItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = [
            'id',
            'name',
            'category',
            'regular_price',
            'discount_price',
            'window_start',
            'window_end',
            'effective_price',
        ]


class DiscountedItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    regular_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    effective_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class ResolvedPriceSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_discounted = serializers.BooleanField()
    regular_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    discount_price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
