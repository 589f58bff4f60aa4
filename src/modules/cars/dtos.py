"""Car DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateCarDTO``: input for car creation (images already stored).
- ``UpdateCarDTO``: partial update; ``new_images`` are appended.
- ``CarSearchDTO``: public search filters, all optional.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Any, List, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.cars.constants import (
    DESCRIPTION_MAX_LENGTH,
    FEATURE_MAX_LENGTH,
    MAKE_MAX_LENGTH,
    MAX_PRICE,
    MIN_PRICE,
    MIN_YEAR,
    MODEL_MAX_LENGTH,
    max_year,
)

# ---------------------------------------------------------------------------
# Enums (framework-agnostic, NOT Django TextChoices)
# ---------------------------------------------------------------------------


class FuelTypeEnum(StrEnum):
    GASOLINE = "Gasoline"
    DIESEL = "Diesel"
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    OTHER = "Other"


class TransmissionEnum(StrEnum):
    MANUAL = "Manual"
    AUTOMATIC = "Automatic"
    CVT = "CVT"


def normalize_features(value: Any) -> List[str]:
    """Accept a comma-separated string or a list; strip, drop blanks, dedupe."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    seen: dict[str, None] = {}
    for item in items:
        tag = str(item).strip()
        if tag:
            seen.setdefault(tag[:FEATURE_MAX_LENGTH], None)
    return list(seen)


def _check_year(value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    upper = max_year()
    if not MIN_YEAR <= value <= upper:
        raise ValueError(f"Year must be between {MIN_YEAR} and {upper}.")
    return value


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateCarDTO(BaseModel):
    """Immutable DTO for car creation requests.

    Validates:
    - ``year`` within [1900, next year] (upper bound computed at call time).
    - ``price`` within [0, 3000].
    - at least one stored image reference.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    make: str = Field(min_length=1, max_length=MAKE_MAX_LENGTH)
    model: str = Field(min_length=1, max_length=MODEL_MAX_LENGTH)
    year: int
    price: Decimal = Field(ge=MIN_PRICE, le=MAX_PRICE, decimal_places=2)
    mileage: int = Field(ge=0)
    fuel_type: FuelTypeEnum = FuelTypeEnum.GASOLINE
    transmission: TransmissionEnum = TransmissionEnum.AUTOMATIC
    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    images: List[str] = Field(min_length=1)
    features: List[str] = Field(default_factory=list)

    @field_validator("year")
    @classmethod
    def year_in_range(cls, v: int) -> int:
        return _check_year(v)

    @field_validator("features", mode="before")
    @classmethod
    def clean_features(cls, v: Any) -> List[str]:
        return normalize_features(v)


class UpdateCarDTO(BaseModel):
    """Immutable DTO for car update requests.

    All fields are optional; only supplied fields will be updated.
    ``new_images`` are appended to the existing gallery.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    make: Optional[str] = Field(default=None, min_length=1, max_length=MAKE_MAX_LENGTH)
    model: Optional[str] = Field(default=None, min_length=1, max_length=MODEL_MAX_LENGTH)
    year: Optional[int] = None
    price: Optional[Decimal] = Field(default=None, ge=MIN_PRICE, le=MAX_PRICE, decimal_places=2)
    mileage: Optional[int] = Field(default=None, ge=0)
    fuel_type: Optional[FuelTypeEnum] = None
    transmission: Optional[TransmissionEnum] = None
    description: Optional[str] = Field(
        default=None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH
    )
    features: Optional[List[str]] = None
    new_images: List[str] = Field(default_factory=list)

    @field_validator("year")
    @classmethod
    def year_in_range(cls, v: Optional[int]) -> Optional[int]:
        return _check_year(v)

    @field_validator("features", mode="before")
    @classmethod
    def clean_features(cls, v: Any) -> Optional[List[str]]:
        if v is None:
            return None
        return normalize_features(v)


class CarSearchDTO(BaseModel):
    """Immutable DTO for inventory search.

    Every filter is optional and independently combinable.  An empty DTO
    means "all available cars".
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    make: Optional[str] = Field(default=None, max_length=MAKE_MAX_LENGTH)
    model: Optional[str] = Field(default=None, max_length=MODEL_MAX_LENGTH)
    year: Optional[int] = None
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)
    fuel_type: Optional[FuelTypeEnum] = None
    transmission: Optional[TransmissionEnum] = None

    @field_validator("make", "model", mode="after")
    @classmethod
    def blank_as_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @model_validator(mode="after")
    def price_range_is_ordered(self) -> Self:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price cannot be greater than max_price.")
        return self
