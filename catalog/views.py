from django.http import Http404
from django_filters import rest_framework as filters
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .cache import get_discounted_items, get_item_pricing
from .models import Item
from .resolver import resolve
from .serializers import DiscountedItemSerializer, ItemSerializer, ResolvedPriceSerializer


class ItemFilter(filters.FilterSet):
    price_min = filters.NumberFilter(field_name='effective_price', lookup_expr='gte')
    price_max = filters.NumberFilter(field_name='effective_price', lookup_expr='lte')

    class Meta:
        model = Item
        fields = ['category']


class ItemListView(generics.ListAPIView):
    queryset = Item.objects.all()
    serializer_class = ItemSerializer
    filterset_class = ItemFilter
    ordering_fields = ['effective_price', 'regular_price', 'name']


class DiscountedItemListView(APIView):
    serializer_class = DiscountedItemSerializer

    def get(self, request, *args, **kwargs):
        data = get_discounted_items()
        serializer = self.serializer_class(data, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


class ItemPriceView(APIView):
    serializer_class = ResolvedPriceSerializer

    def get(self, request, pk, *args, **kwargs):
        try:
            snapshot = get_item_pricing(pk)
        except Item.DoesNotExist:
            raise Http404('No item matches the given query.')
        serializer = self.serializer_class(resolve(snapshot))
        return Response(serializer.data, status=status.HTTP_200_OK)
