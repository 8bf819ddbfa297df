"""
Payment model for MongoDB storage
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from resort.core.config import PAYMENT_CURRENCY
from resort.models.common import Timestamped

PaymentStatus = Literal["pending", "paid", "failed", "cancelled"]

MIN_AMOUNT = 50
MAX_AMOUNT = 10_000_000
MAX_METADATA_KEYS = 50


def _check_currency(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip().upper()
    if len(value) != 3 or not value.isalpha():
        raise ValueError("currency must be a 3-letter ISO code")
    return value


def _check_metadata(value: dict | None) -> dict | None:
    if value is not None and len(value) > MAX_METADATA_KEYS:
        raise ValueError(f"metadata accepts at most {MAX_METADATA_KEYS} keys")
    return value


class PaymentCreate(BaseModel):
    """
    Payment payload accepted by POST /api/payments
    Amounts are integers in the currency's minor unit
    """

    reservation: str = Field(..., min_length=1, description="Reservation ID or number")
    amount: int = Field(..., ge=MIN_AMOUNT, le=MAX_AMOUNT)
    currency: str = Field(default=PAYMENT_CURRENCY)
    payment_method: str = Field(..., min_length=1, description="e.g. card, cash, pm_xxx")
    status: PaymentStatus = "pending"
    payment_intent_id: str | None = None
    stripe_charge_id: str | None = None
    user_email: str = Field(..., min_length=3, max_length=254)
    description: str | None = Field(None, max_length=200)
    metadata: dict[str, str | int | float | bool] = Field(default_factory=dict)

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)

    @field_validator("metadata")
    @classmethod
    def validate_metadata(cls, v):
        return _check_metadata(v)

    class Config:
        json_schema_extra = {
            "example": {
                "reservation": "66f1c2a9b4d1e23f9c0a1b2c",
                "amount": 4500000,
                "currency": "LKR",
                "payment_method": "card",
                "user_email": "guest@example.com",
                "description": "Deluxe room, 2 nights",
            }
        }


class Payment(PaymentCreate, Timestamped):
    """
    Stored payment
    Collection name: "payments"
    """

    order_no: int = Field(..., description="Sequential order number")


class PaymentUpdate(BaseModel):
    amount: int | None = Field(None, ge=MIN_AMOUNT, le=MAX_AMOUNT)
    currency: str | None = None
    payment_method: str | None = Field(None, min_length=1)
    status: PaymentStatus | None = None
    payment_intent_id: str | None = None
    stripe_charge_id: str | None = None
    user_email: str | None = Field(None, min_length=3, max_length=254)
    description: str | None = Field(None, max_length=200)
    metadata: dict[str, str | int | float | bool] | None = None

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)

    @field_validator("metadata")
    @classmethod
    def validate_metadata(cls, v):
        return _check_metadata(v)
