"""Car model: the inventory item orders reserve.

Business rules implemented:
- Year bounded to [1900, current year + 1].
- Price bounded to [0, 3000] (DB check constraint + validators).
- ``is_available`` is only flipped through the repository's atomic
  single-row updates (order reservation / release, admin override).
- ``images`` keeps the ordered list of stored file names; ``features``
  the free-text tags.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.cars.constants import (
    DESCRIPTION_MAX_LENGTH,
    MAKE_MAX_LENGTH,
    MAX_PRICE,
    MIN_PRICE,
    MIN_YEAR,
    MODEL_MAX_LENGTH,
    FuelType,
    Transmission,
    max_year,
)
from modules.core.models import BaseModel


class Car(BaseModel):
    make = models.CharField(max_length=MAKE_MAX_LENGTH)
    model = models.CharField(max_length=MODEL_MAX_LENGTH)
    year = models.PositiveIntegerField(validators=[MinValueValidator(MIN_YEAR)])
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(MIN_PRICE), MaxValueValidator(MAX_PRICE)],
    )
    mileage = models.PositiveIntegerField()
    fuel_type = models.CharField(
        max_length=20,
        choices=FuelType.choices,
        default=FuelType.GASOLINE,
    )
    transmission = models.CharField(
        max_length=20,
        choices=Transmission.choices,
        default=Transmission.AUTOMATIC,
    )
    description = models.TextField(max_length=DESCRIPTION_MAX_LENGTH)
    images = models.JSONField(default=list)
    features = models.JSONField(default=list, blank=True)
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = "cars"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["is_available", "-created_at"],
                name="cars_available_created_idx",
            ),
            models.Index(fields=["make"], name="cars_make_idx"),
            models.Index(fields=["price"], name="cars_price_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=MIN_PRICE) & models.Q(price__lte=MAX_PRICE),
                name="cars_price_in_range",
            ),
            models.CheckConstraint(
                condition=models.Q(year__gte=MIN_YEAR),
                name="cars_year_min",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.year is not None and self.year > max_year():
            raise ValidationError({"year": "Year cannot be in the future."})
        if not self.images:
            raise ValidationError({"images": "At least one image is required."})

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def title(self) -> str:
        return f"{self.year} {self.make} {self.model}"

    @property
    def formatted_price(self) -> str:
        return f"${self.price:,.2f}"

    def __str__(self) -> str:
        return self.title
