"""
Menu item model for MongoDB storage
"""

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from resort.models.common import Timestamped

MenuCategory = Literal["BREAKFAST", "LUNCH", "DINNER", "SNACKS", "BEVERAGE", "DESSERT", "OTHER"]

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _split_tags(value):
    # Forms post tags as "vegan, gluten-free"
    if value is None:
        return value
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return [str(t).strip() for t in value if str(t).strip()]


class TimeWindow(BaseModel):
    start: str = Field(..., description="HH:MM, e.g. 06:30")
    end: str = Field(..., description="HH:MM, e.g. 10:30")

    @field_validator("start", "end")
    @classmethod
    def validate_hhmm(cls, v: str) -> str:
        if not _HHMM.match(v):
            raise ValueError("time must be HH:MM")
        return v


class Availability(BaseModel):
    is_available: bool = True
    days_of_week: list[int] | None = Field(None, description="0=Sun ... 6=Sat")
    time_windows: list[TimeWindow] = Field(default_factory=list)
    seasons: list[str] | None = Field(None, description="e.g. HIGH, LOW")

    @field_validator("days_of_week")
    @classmethod
    def validate_days(cls, v):
        if v is not None and any(d < 0 or d > 6 for d in v):
            raise ValueError("days_of_week must be numbers 0-6")
        return v


class MenuItemIn(BaseModel):
    """
    Menu item payload; `price` is given in USD
    """

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: MenuCategory
    price: float = Field(..., ge=0, description="Price in USD")
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    spicy_level: int = Field(default=0, ge=0, le=3)
    available: Availability | None = None
    is_archived: bool = False

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _split_tags(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Kiribath",
                "description": "Milk rice with lunu miris",
                "category": "BREAKFAST",
                "price": 4.5,
                "tags": ["vegetarian"],
                "spicy_level": 1,
                "available": {"is_available": True, "days_of_week": [0, 6]},
            }
        }


class MenuItem(Timestamped):
    """
    Stored menu item, price in LKR
    Collection name: "menu_items"
    """

    name: str
    description: str
    category: MenuCategory
    price: float = Field(..., ge=0, description="Price in LKR")
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    spicy_level: int = Field(default=0, ge=0, le=3)
    available: Availability | None = None
    is_archived: bool = False


class MenuItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    category: MenuCategory | None = None
    price: float | None = Field(None, ge=0, description="Price in USD")
    image: str | None = None
    tags: list[str] | None = None
    spicy_level: int | None = Field(None, ge=0, le=3)
    available: Availability | None = None
    is_archived: bool | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _split_tags(v)
