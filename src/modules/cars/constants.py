"""Car inventory constants.

Enumerations for fuel type / transmission and the domain bounds enforced
on every car record.  The price ceiling is the business niche of the
dealership (cars under $3000).
"""

from decimal import Decimal

from django.db import models
from django.utils import timezone


class FuelType(models.TextChoices):
    GASOLINE = "Gasoline", "Gasoline"
    DIESEL = "Diesel", "Diesel"
    ELECTRIC = "Electric", "Electric"
    HYBRID = "Hybrid", "Hybrid"
    OTHER = "Other", "Other"


class Transmission(models.TextChoices):
    MANUAL = "Manual", "Manual"
    AUTOMATIC = "Automatic", "Automatic"
    CVT = "CVT", "CVT"


MIN_YEAR = 1900
MIN_PRICE = Decimal("0")
MAX_PRICE = Decimal("3000")

MAKE_MAX_LENGTH = 50
MODEL_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 2000
FEATURE_MAX_LENGTH = 100

FEATURED_LIMIT = 6
SIMILAR_LIMIT = 4
SIMILAR_PRICE_WINDOW = Decimal("500")


def max_year() -> int:
    """Newest model year accepted: next calendar year."""
    return timezone.now().year + 1
