"""Car DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from collections.abc import Mapping

from rest_framework import serializers

from modules.cars.constants import FuelType, Transmission
from modules.cars.models import Car
from modules.cars.storage import image_url

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CarSearchSerializer(serializers.Serializer):
    """Query-string filters of the public search.

    Blank values are accepted and mean "no filter".
    """

    make = serializers.CharField(required=False, allow_blank=True)
    model = serializers.CharField(required=False, allow_blank=True)
    year = serializers.IntegerField(required=False)
    min_price = serializers.DecimalField(max_digits=8, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=8, decimal_places=2, required=False)
    fuel_type = serializers.ChoiceField(
        choices=FuelType.choices, required=False, allow_blank=True
    )
    transmission = serializers.ChoiceField(
        choices=Transmission.choices, required=False, allow_blank=True
    )

    def to_internal_value(self, data):
        # Empty query params (``?year=``) behave like absent ones.
        cleaned = {key: value for key, value in data.items() if value not in ("", None)}
        return super().to_internal_value(cleaned)


class CarWriteSerializer(serializers.Serializer):
    """Multipart payload for admin create/update.

    ``features`` is a comma separated string (or a repeated field);
    ``images`` are the uploaded files.
    """

    make = serializers.CharField(required=False)
    model = serializers.CharField(required=False)
    year = serializers.IntegerField(required=False)
    price = serializers.DecimalField(max_digits=8, decimal_places=2, required=False)
    mileage = serializers.IntegerField(required=False)
    fuel_type = serializers.ChoiceField(choices=FuelType.choices, required=False)
    transmission = serializers.ChoiceField(choices=Transmission.choices, required=False)
    description = serializers.CharField(required=False)
    features = serializers.CharField(required=False, allow_blank=True)
    images = serializers.ListField(
        child=serializers.FileField(), required=False, allow_empty=True
    )

    def to_internal_value(self, data):
        if not isinstance(data, Mapping):
            return super().to_internal_value(data)
        if hasattr(data, "getlist"):
            values = {key: data.get(key) for key in data.keys() if key != "images"}
            if len(data.getlist("features")) > 1:
                values["features"] = data.getlist("features")
            values["images"] = data.getlist("images")
        else:
            values = dict(data)
        if isinstance(values.get("features"), (list, tuple)):
            values["features"] = ",".join(str(tag) for tag in values["features"])
        return super().to_internal_value(values)


class CarAvailabilitySerializer(serializers.Serializer):
    is_available = serializers.BooleanField()


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class CarSerializer(serializers.ModelSerializer):
    """Read serializer for the full car record."""

    title = serializers.CharField(read_only=True)
    formatted_price = serializers.CharField(read_only=True)
    image_urls = serializers.SerializerMethodField()

    class Meta:
        model = Car
        fields = [
            "id",
            "title",
            "make",
            "model",
            "year",
            "price",
            "formatted_price",
            "mileage",
            "fuel_type",
            "transmission",
            "description",
            "images",
            "image_urls",
            "features",
            "is_available",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_image_urls(self, obj: Car) -> list[str]:
        return [image_url(name) for name in obj.images]


class CarListSerializer(serializers.ModelSerializer):
    """Lightweight card for listings: first image only."""

    title = serializers.CharField(read_only=True)
    formatted_price = serializers.CharField(read_only=True)
    thumbnail = serializers.SerializerMethodField()

    class Meta:
        model = Car
        fields = [
            "id",
            "title",
            "make",
            "model",
            "year",
            "price",
            "formatted_price",
            "mileage",
            "fuel_type",
            "transmission",
            "thumbnail",
            "is_available",
            "created_at",
        ]
        read_only_fields = fields

    def get_thumbnail(self, obj: Car) -> str | None:
        return image_url(obj.images[0]) if obj.images else None
