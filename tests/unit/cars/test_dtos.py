"""Unit tests for Car DTOs (validation at the service boundary)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.utils import timezone
from pydantic import ValidationError

from modules.cars.dtos import (
    CarSearchDTO,
    CreateCarDTO,
    FuelTypeEnum,
    UpdateCarDTO,
    normalize_features,
)

pytestmark = pytest.mark.unit


def _payload(**overrides):
    data = {
        "make": "Ford",
        "model": "Focus",
        "year": 2008,
        "price": Decimal("2200.00"),
        "mileage": 164000,
        "description": "Runs great.",
        "images": ["cars/focus.jpg"],
    }
    data.update(overrides)
    return data


class TestCreateCarDTO:
    def test_defaults(self):
        dto = CreateCarDTO(**_payload())
        assert dto.fuel_type == FuelTypeEnum.GASOLINE
        assert dto.transmission == "Automatic"
        assert dto.features == []

    def test_strips_whitespace(self):
        dto = CreateCarDTO(**_payload(make="  Ford  "))
        assert dto.make == "Ford"

    @pytest.mark.parametrize("price", [Decimal("-1"), Decimal("3000.01")])
    def test_price_out_of_range(self, price):
        with pytest.raises(ValidationError):
            CreateCarDTO(**_payload(price=price))

    def test_price_boundaries_accepted(self):
        assert CreateCarDTO(**_payload(price=Decimal("0"))).price == Decimal("0")
        assert CreateCarDTO(**_payload(price=Decimal("3000"))).price == Decimal("3000")

    def test_year_upper_bound_is_next_year(self):
        next_year = timezone.now().year + 1
        assert CreateCarDTO(**_payload(year=next_year)).year == next_year
        with pytest.raises(ValidationError):
            CreateCarDTO(**_payload(year=next_year + 1))

    def test_year_lower_bound(self):
        with pytest.raises(ValidationError):
            CreateCarDTO(**_payload(year=1899))

    def test_requires_an_image(self):
        with pytest.raises(ValidationError):
            CreateCarDTO(**_payload(images=[]))

    def test_negative_mileage_rejected(self):
        with pytest.raises(ValidationError):
            CreateCarDTO(**_payload(mileage=-5))

    def test_unknown_fuel_type_rejected(self):
        with pytest.raises(ValidationError):
            CreateCarDTO(**_payload(fuel_type="Steam"))

    def test_features_from_comma_string(self):
        dto = CreateCarDTO(**_payload(features="Sunroof, , Heated Seats,Sunroof"))
        assert dto.features == ["Sunroof", "Heated Seats"]

    def test_is_frozen(self):
        dto = CreateCarDTO(**_payload())
        with pytest.raises(ValidationError):
            dto.make = "Other"


class TestUpdateCarDTO:
    def test_all_fields_optional(self):
        dto = UpdateCarDTO()
        assert dto.make is None
        assert dto.features is None
        assert dto.new_images == []

    def test_price_still_validated(self):
        with pytest.raises(ValidationError):
            UpdateCarDTO(price=Decimal("4000"))

    def test_blank_features_string_clears(self):
        assert UpdateCarDTO(features="").features == []


class TestCarSearchDTO:
    def test_empty_search(self):
        dto = CarSearchDTO()
        assert dto.make is None
        assert dto.min_price is None

    def test_blank_make_means_no_filter(self):
        assert CarSearchDTO(make="   ").make is None

    def test_filters_are_not_bound_by_creation_limits(self):
        dto = CarSearchDTO(year=1850, max_price=Decimal("5000"))
        assert dto.year == 1850
        assert dto.max_price == Decimal("5000")

    def test_min_price_greater_than_max_rejected(self):
        with pytest.raises(ValidationError):
            CarSearchDTO(min_price=Decimal("2000"), max_price=Decimal("1000"))


class TestNormalizeFeatures:
    def test_none(self):
        assert normalize_features(None) == []

    def test_list_input_preserves_order(self):
        assert normalize_features([" A ", "B", "A"]) == ["A", "B"]
