"""
Room and room reservation models for MongoDB storage
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from resort.models.common import Timestamped

RoomStatus = Literal["available", "reserved", "maintenance"]


class RoomFeatures(BaseModel):
    free_wifi: bool = True
    air_conditioning: bool = False
    patio: bool = False
    bidet: bool = False
    balcony: bool = False
    dishwasher: bool = False


class RoomPerks(BaseModel):
    garden_view: bool = False
    landmark_view: bool = False
    inner_courtyard_view: bool = False
    private_bathroom: bool = True
    private_pool: bool = False


class GalleryImage(BaseModel):
    url: str
    position: int = Field(..., ge=1)


class RoomIn(BaseModel):
    """
    Room payload accepted by POST /api/rooms
    room_id is generated by the server
    """

    room_type: str = Field(..., min_length=1, description="e.g. double-room-with-balcony")
    bed_label: str = Field(..., min_length=1)
    size_sqm: float = Field(..., gt=0)
    capacity_adults: int = Field(default=2, ge=0)
    capacity_children: int = Field(default=0, ge=0)
    features: RoomFeatures = Field(default_factory=RoomFeatures)
    perks: RoomPerks = Field(default_factory=RoomPerks)
    image_gallery: list[GalleryImage] = Field(default_factory=list)
    active: bool = True
    available_count: int = Field(default=1, ge=0)
    status: RoomStatus = "available"

    class Config:
        json_schema_extra = {
            "example": {
                "room_type": "double-room-with-balcony",
                "bed_label": "1 extra-large double bed",
                "size_sqm": 18,
                "features": {"free_wifi": True, "patio": True, "balcony": True},
                "perks": {"garden_view": True, "private_bathroom": True},
            }
        }


class Room(RoomIn, Timestamped):
    """
    Stored room
    Collection name: "rooms"
    """

    room_id: str = Field(..., description="Business key, e.g. doubleroomwithbalcony_3")


class RoomUpdate(BaseModel):
    room_type: str | None = Field(None, min_length=1)
    bed_label: str | None = Field(None, min_length=1)
    size_sqm: float | None = Field(None, gt=0)
    capacity_adults: int | None = Field(None, ge=0)
    capacity_children: int | None = Field(None, ge=0)
    features: RoomFeatures | None = None
    perks: RoomPerks | None = None
    image_gallery: list[GalleryImage] | None = Field(None, description="Images to append")
    remove_images: list[str] = Field(default_factory=list, description="Gallery URLs to drop")
    active: bool | None = None
    available_count: int | None = Field(None, ge=0)
    status: RoomStatus | None = None


class RoomReservation(BaseModel):
    """
    Schemaless reservation document
    Collection name: "room_reservations"
    """

    model_config = ConfigDict(extra="allow")
