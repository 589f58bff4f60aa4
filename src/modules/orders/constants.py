"""Order domain constants.

Defines status choices, payment methods and the order state machine.
``completed`` keeps the car sold; only ``cancelled`` releases it.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    PROCESSING = "processing", "Processing"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class PaymentMethod(models.TextChoices):
    CASH_APP = "Cash App", "Cash App"
    CHIME = "Chime", "Chime"
    ZELLE = "Zelle", "Zelle"
    APPLE_PAY = "Apple Pay", "Apple Pay"
    PAYPAL = "PayPal", "PayPal"
    VARO = "Varo", "Varo"
    GIFT_CARDS = "Gift Cards", "Gift Cards"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

# Orders that still hold their car reserved.
ACTIVE_STATES: set[str] = {
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.COMPLETED,
}

# Active orders that have not finished yet.
OPEN_STATES: set[str] = ACTIVE_STATES - TERMINAL_STATES

CUSTOMER_NAME_MAX_LENGTH = 100
CUSTOMER_ADDRESS_MAX_LENGTH = 200
CUSTOMER_PHONE_MAX_LENGTH = 30
NOTES_MAX_LENGTH = 1000
ORDER_NUMBER_LENGTH = 8
MISSING_CAR_TITLE = "Car not available"
