"""Unit tests for ``CarService``.

Covers:
- Create / update keep the availability flag out of admin edits.
- Delete is refused while an open order holds the car.
- Admin availability override and its release policy.
- Public visibility (``get_available_car``).
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.cars.dtos import CreateCarDTO, UpdateCarDTO
from modules.cars.exceptions import CarHasOpenOrders, CarNotFound
from modules.cars.models import Car
from modules.cars.repositories.django_repository import CarDjangoRepository
from modules.cars.services import CarService
from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return CarService(
        repository=CarDjangoRepository(),
        order_repository=OrderDjangoRepository(),
    )


class TestCreateCar:
    def test_create_persists_all_fields(self, service):
        dto = CreateCarDTO(
            make="Mazda",
            model="3",
            year=2006,
            price=Decimal("2400.00"),
            mileage=176000,
            transmission="Manual",
            description="Fun to drive.",
            images=["cars/a.jpg", "cars/b.jpg"],
            features="Sport Package, Sunroof",
        )

        car = service.create_car(dto)

        stored = Car.objects.get(id=car.id)
        assert stored.title == "2006 Mazda 3"
        assert stored.images == ["cars/a.jpg", "cars/b.jpg"]
        assert stored.features == ["Sport Package", "Sunroof"]
        assert stored.transmission == "Manual"
        assert stored.is_available is True


class TestUpdateCar:
    def test_updates_only_supplied_fields(self, service, car):
        service.update_car(str(car.id), UpdateCarDTO(price=Decimal("1999.99")))
        car.refresh_from_db()
        assert car.price == Decimal("1999.99")
        assert car.make == "Honda"

    def test_new_images_are_appended(self, service, car):
        service.update_car(str(car.id), UpdateCarDTO(new_images=["cars/new.jpg"]))
        car.refresh_from_db()
        assert car.images == ["cars/civic.jpg", "cars/new.jpg"]

    def test_does_not_overwrite_reservation(self, service, car, place_order):
        stale_copy = Car.objects.get(id=car.id)
        assert stale_copy.is_available is True
        place_order(car)

        service.update_car(str(car.id), UpdateCarDTO(mileage=10))

        car.refresh_from_db()
        assert car.mileage == 10
        assert car.is_available is False

    def test_missing_car(self, service):
        with pytest.raises(CarNotFound):
            service.update_car(str(uuid.uuid4()), UpdateCarDTO(mileage=1))


class TestDeleteCar:
    def test_delete_without_orders(self, service, car):
        service.delete_car(str(car.id))
        assert not Car.objects.filter(id=car.id).exists()

    @pytest.mark.parametrize(
        "steps",
        [[], [OrderStatus.CONFIRMED], [OrderStatus.CONFIRMED, OrderStatus.PROCESSING]],
    )
    def test_refused_while_order_is_open(self, service, car, place_order, order_service, steps):
        order = place_order(car)
        for step in steps:
            order_service.update_status(order.id, step)

        with pytest.raises(CarHasOpenOrders):
            service.delete_car(str(car.id))
        assert Car.objects.filter(id=car.id).exists()

    def test_allowed_after_completion_and_order_keeps_record(
        self, service, car, place_order, order_service
    ):
        order = place_order(car)
        for step in (OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.COMPLETED):
            order_service.update_status(order.id, step)

        service.delete_car(str(car.id))

        order = Order.objects.get(id=order.id)
        assert order.car_id is None
        assert order.total_amount == Decimal("2800.00")

    def test_allowed_after_cancellation(self, service, car, place_order, order_service):
        order = place_order(car)
        order_service.update_status(order.id, OrderStatus.CANCELLED)
        service.delete_car(str(car.id))
        assert not Car.objects.filter(id=car.id).exists()

    def test_missing_car(self, service):
        with pytest.raises(CarNotFound):
            service.delete_car(str(uuid.uuid4()))


class TestAvailabilityOverride:
    def test_mark_unavailable(self, service, car):
        assert service.set_availability(str(car.id), False).is_available is False

    def test_toggle_twice_restores(self, service, car):
        assert service.toggle_availability(str(car.id)).is_available is False
        assert service.toggle_availability(str(car.id)).is_available is True

    def test_release_refused_while_order_holds_car(self, service, car, place_order):
        place_order(car)
        with pytest.raises(CarHasOpenOrders):
            service.set_availability(str(car.id), True)
        car.refresh_from_db()
        assert car.is_available is False

    def test_release_refused_for_completed_sale(
        self, service, car, place_order, order_service
    ):
        order = place_order(car)
        for step in (OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.COMPLETED):
            order_service.update_status(order.id, step)
        with pytest.raises(CarHasOpenOrders):
            service.toggle_availability(str(car.id))

    def test_release_after_manual_hold(self, service, car):
        service.set_availability(str(car.id), False)
        assert service.set_availability(str(car.id), True).is_available is True

    def test_missing_car(self, service):
        with pytest.raises(CarNotFound):
            service.set_availability(str(uuid.uuid4()), False)


class TestRowLocking:
    """Policy checks run after the car row is locked."""

    @pytest.fixture()
    def locking_repo(self):
        return MagicMock(wraps=CarDjangoRepository())

    @pytest.fixture()
    def locking_service(self, locking_repo):
        return CarService(repository=locking_repo, order_repository=OrderDjangoRepository())

    def test_delete_locks_the_car(self, locking_service, locking_repo, car):
        locking_service.delete_car(str(car.id))
        locking_repo.get_for_update.assert_called_once_with(str(car.id))

    def test_availability_override_locks_the_car(self, locking_service, locking_repo, car):
        locking_service.set_availability(str(car.id), False)
        locking_service.toggle_availability(str(car.id))
        assert locking_repo.get_for_update.call_count == 2

    def test_order_placed_while_lock_is_taken_blocks_delete(
        self, locking_service, locking_repo, car, place_order
    ):
        # The reservation lands between the lock and the open-order count.
        def lock_then_reserve(id):
            locked = CarDjangoRepository().get_for_update(id)
            place_order(car)
            return locked

        locking_repo.get_for_update.side_effect = lock_then_reserve

        with pytest.raises(CarHasOpenOrders):
            locking_service.delete_car(str(car.id))
        assert Car.objects.filter(id=car.id).exists()


class TestQueries:
    def test_get_available_car_hides_sold_cars(self, service, make_car):
        sold = make_car(is_available=False)
        with pytest.raises(CarNotFound):
            service.get_available_car(str(sold.id))
        assert service.get_car(str(sold.id)) == sold

    def test_featured_returns_available_cars(self, service, make_car):
        available = make_car()
        make_car(is_available=False)
        assert service.featured_cars() == [available]

    def test_similar_excludes_the_car_itself(self, service, make_car):
        car = make_car()
        other = make_car()
        assert service.similar_cars(car) == [other]
