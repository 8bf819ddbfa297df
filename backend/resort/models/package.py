"""
Safari package model for MongoDB storage
"""

from pydantic import BaseModel, Field

from resort.models.common import Timestamped


class SafariPackage(Timestamped):
    """
    Safari package offered to guests
    Collection name: "packages"
    """

    description: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    date: str = Field(..., description="Departure date as shown to guests")
    period: str = Field(..., description="Duration label, e.g. 'Half day'")
    visitors: int = Field(..., ge=1, description="Visitors included")
    price: float = Field(..., ge=0)
    type: str = Field(..., description="Package type, e.g. 'Jeep'")
    image: str | None = Field(None, description="Image URL")

    class Config:
        json_schema_extra = {
            "example": {
                "description": "Morning game drive with breakfast",
                "destination": "Yala",
                "date": "2025-03-14",
                "period": "Half day",
                "visitors": 4,
                "price": 38000,
                "type": "Jeep",
            }
        }


class SafariPackageUpdate(BaseModel):
    description: str | None = None
    destination: str | None = None
    date: str | None = None
    period: str | None = None
    visitors: int | None = Field(None, ge=1)
    price: float | None = Field(None, ge=0)
    type: str | None = None
    image: str | None = None
