from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.cars.models import Car
from modules.orders.constants import OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.unit


class TestSeedData:
    def test_seeds_users_cars_and_orders(self):
        out = StringIO()
        call_command("seed_data", stdout=out)

        assert "Seed completed" in out.getvalue()
        assert get_user_model().objects.filter(is_staff=True).count() == 1
        assert Car.objects.count() == 10
        assert Order.objects.count() == 4
        assert Car.objects.filter(price__gt=3000).count() == 0

    def test_availability_matches_orders(self):
        call_command("seed_data", stdout=StringIO())

        for order in Order.objects.select_related("car"):
            holds_car = order.status != OrderStatus.CANCELLED
            assert order.car.is_available is not holds_car

    def test_is_idempotent(self):
        call_command("seed_data", stdout=StringIO())
        out = StringIO()
        call_command("seed_data", stdout=out)

        assert "users=0" in out.getvalue()
        assert "orders=0" in out.getvalue()
        assert Car.objects.count() == 10
        assert Order.objects.count() == 4
