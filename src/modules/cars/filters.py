import django_filters

from modules.cars.models import Car


class CarFilter(django_filters.FilterSet):
    make = django_filters.CharFilter(field_name="make", lookup_expr="icontains")
    model = django_filters.CharFilter(field_name="model", lookup_expr="icontains")
    year = django_filters.NumberFilter(field_name="year")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    is_available = django_filters.BooleanFilter(field_name="is_available")

    class Meta:
        model = Car
        fields = ["make", "model", "year", "min_price", "max_price", "is_available"]
