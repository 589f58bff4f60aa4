from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.cars.models import Car
from modules.cars.repositories.django_repository import CarDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CustomerInfoDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def user():
    return User.objects.create_user(
        username="buyer",
        email="buyer@mail.com",
        password="Buyer123",
        phone="+15550100",
    )


@pytest.fixture()
def other_user():
    return User.objects.create_user(
        username="someone", email="someone@mail.com", password="Someone123"
    )


@pytest.fixture()
def admin_user():
    return User.objects.create_user(
        username="boss",
        email="boss@mail.com",
        password="Admin123",
        is_staff=True,
        is_superuser=True,
    )


@pytest.fixture()
def auth_client(user):
    """APIClient force-authenticated as a regular user."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def admin_client(admin_user):
    """APIClient force-authenticated as an admin."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture()
def make_car():
    """Factory creating cars straight through the ORM."""

    def _make_car(**overrides) -> Car:
        fields = {
            "make": "Honda",
            "model": "Civic",
            "year": 2006,
            "price": Decimal("2800.00"),
            "mileage": 182000,
            "fuel_type": "Gasoline",
            "transmission": "Manual",
            "description": "Reliable commuter.",
            "images": ["cars/civic.jpg"],
            "features": ["Air Conditioning"],
        }
        fields.update(overrides)
        return Car.objects.create(**fields)

    return _make_car


@pytest.fixture()
def car(make_car):
    return make_car()


@pytest.fixture()
def order_service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        car_repository=CarDjangoRepository(),
    )


@pytest.fixture()
def customer_info():
    return CustomerInfoDTO(
        name="Jane Doe",
        email="jane@mail.com",
        phone="+1 (555) 123-4567",
        address="12 Elm Street, Springfield",
    )


@pytest.fixture()
def place_order(order_service, customer_info):
    """Create an order through the service (the normal reservation path)."""

    def _place_order(car, user=None, payment_method="Zelle", notes=""):
        return order_service.create_order(
            CreateOrderDTO(
                car_id=car.id,
                customer=customer_info,
                payment_method=payment_method,
                notes=notes,
                user_id=user.id if user else None,
            )
        )

    return _place_order


@pytest.fixture()
def order_payload(car):
    return {
        "car_id": str(car.id),
        "customer_name": "Jane Doe",
        "customer_email": "jane@mail.com",
        "customer_phone": "+1 (555) 123-4567",
        "customer_address": "12 Elm Street, Springfield",
        "payment_method": "Zelle",
        "notes": "Please call after 5pm",
    }
