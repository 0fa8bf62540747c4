import django_filters
from django.db.models import Q

from .models import Product


class ProductFilter(django_filters.FilterSet):
    """
    Query-string filters for the product catalogue.

    ``published`` defaults to published-only; pass ``published=false`` to
    include drafts as well.
    """

    shop_id = django_filters.UUIDFilter(field_name="shop_id")
    product_id = django_filters.UUIDFilter(field_name="id")
    category_id = django_filters.UUIDFilter(field_name="category_id")
    featured = django_filters.BooleanFilter(method="filter_featured")
    published = django_filters.BooleanFilter(method="filter_published")

    # Price range filters
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    search = django_filters.CharFilter(method="filter_search")
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")

    class Meta:
        model = Product
        fields = ["shop_id", "product_id", "category_id"]

    @property
    def qs(self):
        queryset = super().qs
        if self.form.cleaned_data.get("published") is None:
            queryset = queryset.filter(is_published=True)
        return queryset

    def filter_featured(self, queryset, name, value):
        return queryset.filter(is_featured=True) if value else queryset

    def filter_published(self, queryset, name, value):
        return queryset.filter(is_published=True) if value else queryset

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_in_stock(self, queryset, name, value):
        return queryset.filter(inventory__gt=0) if value else queryset.filter(inventory=0)
