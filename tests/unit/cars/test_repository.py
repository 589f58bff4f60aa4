"""Unit tests for ``CarDjangoRepository``.

Covers:
- Availability compare-and-set (``reserve``) and admin override.
- Public search filters, visibility and ordering.
- Featured / similar / filter options.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from modules.cars.dtos import CarSearchDTO
from modules.cars.models import Car
from modules.cars.repositories.django_repository import CarDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return CarDjangoRepository()


class TestGetById:
    def test_existing(self, repo, car):
        assert repo.get_by_id(str(car.id)) == car

    def test_missing_returns_none(self, repo):
        assert repo.get_by_id(str(uuid.uuid4())) is None

    def test_malformed_id_returns_none(self, repo):
        assert repo.get_by_id("not-a-uuid") is None


class TestGetForUpdate:
    def test_existing(self, repo, car):
        assert repo.get_for_update(str(car.id)) == car

    def test_missing_returns_none(self, repo):
        assert repo.get_for_update(str(uuid.uuid4())) is None

    def test_malformed_id_returns_none(self, repo):
        assert repo.get_for_update("not-a-uuid") is None


class TestReserve:
    def test_first_reservation_wins(self, repo, car):
        assert repo.reserve(car.id) is True
        car.refresh_from_db()
        assert car.is_available is False

    def test_second_reservation_loses(self, repo, car):
        assert repo.reserve(car.id) is True
        assert repo.reserve(car.id) is False

    def test_reserve_refreshes_updated_at(self, repo, car):
        before = car.updated_at
        repo.reserve(car.id)
        car.refresh_from_db()
        assert car.updated_at > before

    def test_reserve_missing_car(self, repo):
        assert repo.reserve(uuid.uuid4()) is False


class TestSetAvailability:
    def test_returns_refreshed_car(self, repo, car):
        updated = repo.set_availability(car.id, False)
        assert updated.is_available is False
        assert updated.updated_at > car.updated_at

    def test_is_idempotent(self, repo, car):
        repo.set_availability(car.id, True)
        assert repo.set_availability(car.id, True).is_available is True

    def test_missing_car_returns_none(self, repo):
        assert repo.set_availability(uuid.uuid4(), True) is None


class TestSearch:
    @pytest.fixture()
    def inventory(self, make_car):
        return {
            "civic": make_car(make="Honda", model="Civic", year=2006, price=Decimal("2800")),
            "accord": make_car(make="Honda", model="Accord", year=2003, price=Decimal("1500")),
            "prius": make_car(
                make="Toyota",
                model="Prius",
                year=2005,
                price=Decimal("2950"),
                fuel_type="Hybrid",
                transmission="CVT",
            ),
            "sold": make_car(make="Honda", model="Fit", year=2008, is_available=False),
        }

    def test_no_filters_lists_only_available(self, repo, inventory):
        result = list(repo.search(CarSearchDTO()))
        assert inventory["sold"] not in result
        assert len(result) == 3

    def test_newest_first(self, repo, inventory):
        result = list(repo.search(CarSearchDTO()))
        assert result == [inventory["prius"], inventory["accord"], inventory["civic"]]

    def test_make_is_case_insensitive_substring(self, repo, inventory):
        result = set(repo.search(CarSearchDTO(make="hon")))
        assert result == {inventory["civic"], inventory["accord"]}

    def test_model_filter(self, repo, inventory):
        assert list(repo.search(CarSearchDTO(model="acc"))) == [inventory["accord"]]

    def test_year_exact(self, repo, inventory):
        assert list(repo.search(CarSearchDTO(year=2005))) == [inventory["prius"]]

    def test_price_range_inclusive(self, repo, inventory):
        result = set(
            repo.search(CarSearchDTO(min_price=Decimal("1500"), max_price=Decimal("2800")))
        )
        assert result == {inventory["civic"], inventory["accord"]}

    def test_fuel_and_transmission(self, repo, inventory):
        result = list(repo.search(CarSearchDTO(fuel_type="Hybrid", transmission="CVT")))
        assert result == [inventory["prius"]]

    def test_filters_combine(self, repo, inventory):
        assert list(repo.search(CarSearchDTO(make="Honda", year=2005))) == []


class TestFeaturedAndSimilar:
    def test_featured_limit_and_visibility(self, repo, make_car):
        cars = [make_car(model=f"Model {i}") for i in range(4)]
        make_car(model="Sold", is_available=False)
        featured = repo.featured(3)
        assert featured == [cars[3], cars[2], cars[1]]

    def test_similar_by_make_or_price(self, repo, make_car):
        base = make_car(make="Honda", price=Decimal("2000"))
        same_make = make_car(make="HONDA", price=Decimal("100"))
        close_price = make_car(make="Kia", price=Decimal("2400"))
        make_car(make="Kia", price=Decimal("100"))
        make_car(make="Honda", is_available=False)

        similar = repo.similar(base, 4)

        assert set(similar) == {same_make, close_price}
        assert base not in similar


class TestFilterOptions:
    def test_distinct_values_of_available_cars(self, repo, make_car):
        make_car(make="Toyota", year=2004, fuel_type="Hybrid")
        make_car(make="Honda", year=2006)
        make_car(make="Honda", year=2004)
        make_car(make="Saab", year=2001, is_available=False)

        options = repo.filter_options()

        assert options["makes"] == ["Honda", "Toyota"]
        assert options["years"] == [2006, 2004]
        assert options["fuel_types"] == ["Gasoline", "Hybrid"]
        assert options["transmissions"] == ["Manual"]


class TestSaveAndDelete:
    def test_save_with_update_fields_keeps_other_columns(self, repo, car):
        stale = Car.objects.get(id=car.id)
        repo.reserve(car.id)

        stale.mileage = 5
        repo.save(stale, update_fields=["mileage"])

        car.refresh_from_db()
        assert car.mileage == 5
        assert car.is_available is False

    def test_delete(self, repo, car):
        assert repo.delete(str(car.id)) is True
        assert not Car.objects.filter(id=car.id).exists()

    def test_delete_missing(self, repo):
        assert repo.delete(str(uuid.uuid4())) is False
