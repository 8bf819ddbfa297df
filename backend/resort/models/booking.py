"""
Booking model for MongoDB storage
"""

from datetime import datetime

from pydantic import BaseModel, Field

from resort.models.common import Timestamped


class Booking(Timestamped):
    """
    A guest's purchase of a safari package
    Collection name: "bookings"
    """

    user_id: str | None = Field(None, description="ID of the guest account that booked")
    package_id: str | None = Field(None, description="Safari package ID (ObjectId hex)")
    name: str = Field(..., min_length=1, max_length=120, description="Guest name")
    phone: str | None = Field(None, max_length=40, description="Contact phone")
    email: str | None = Field(None, max_length=254, description="Contact email")
    visitors: int | None = Field(None, ge=0, description="Package value applies when unset")
    price: float | None = Field(None, ge=0, description="Package price applies when unset")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "u_102",
                "package_id": "66f1c2a9b4d1e23f9c0a1b2c",
                "name": "Nimal Perera",
                "phone": "+94 77 123 4567",
                "email": "nimal@example.com",
                "visitors": 3,
                "price": 45000,
            }
        }


class BookingUpdate(BaseModel):
    """Partial update; only supplied fields are written"""

    user_id: str | None = None
    package_id: str | None = None
    name: str | None = Field(None, min_length=1, max_length=120)
    phone: str | None = Field(None, max_length=40)
    email: str | None = Field(None, max_length=254)
    visitors: int | None = Field(None, ge=0)
    price: float | None = Field(None, ge=0)
    created_at: datetime | None = None
