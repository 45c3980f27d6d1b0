from django.urls import path

from .views import DiscountedItemListView, ItemListView, ItemPriceView

urlpatterns = [
    path('items', ItemListView.as_view(), name='item-list'),
    path('items/discounted', DiscountedItemListView.as_view(), name='discounted-item-list'),
    path('items/<int:pk>/price', ItemPriceView.as_view(), name='item-price'),
]
