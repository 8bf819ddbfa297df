"""
Rooms Router
Rooms are addressed by their business key `room_id`, not the Mongo _id
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException

from resort.db.counters import ROOM_ID_COUNTER, next_sequence
from resort.db.database import get_rooms_collection
from resort.models.common import APIResponse, serialize_doc
from resort.models.room import Room, RoomFeatures, RoomIn, RoomPerks, RoomUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rooms", tags=["Rooms"])

SAMPLE_ROOM_TYPE = "double-room-with-balcony"


def make_room_id(room_type: str, seq: int) -> str:
    return f"{room_type.replace('-', '')}_{seq}"


async def _insert_room(body: RoomIn) -> dict:
    seq = await next_sequence(ROOM_ID_COUNTER)
    room = Room(**body.model_dump(), room_id=make_room_id(body.room_type, seq))
    doc = room.model_dump()
    result = await get_rooms_collection().insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info("Created room %s", doc["room_id"])
    return doc


def merge_gallery(existing: list[dict], remove: list[str], added: list[dict]) -> list[dict]:
    """
    Drop gallery entries whose URL is in `remove`, then append `added`
    with positions continuing after the kept images.
    """
    to_remove = set(remove)
    kept = [img for img in existing or [] if img.get("url") not in to_remove]
    start = len(kept)
    appended = [
        {"url": img["url"], "position": start + index + 1} for index, img in enumerate(added)
    ]
    return kept + appended


@router.get("/available", response_model=APIResponse)
async def get_available_rooms():
    """
    Active rooms with at least one unit left
    """
    try:
        cursor = get_rooms_collection().find({"active": True, "available_count": {"$gt": 0}})
        rooms = await cursor.to_list(length=None)
        return APIResponse(code=0, msg="ok", data=serialize_doc(rooms))
    except Exception as e:
        logger.exception("[get_available_rooms] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch rooms: {str(e)}")


@router.get("/ids", response_model=APIResponse)
async def get_room_ids():
    try:
        cursor = get_rooms_collection().find({"active": True}, {"room_id": 1, "_id": 0})
        rooms = await cursor.to_list(length=None)
        return APIResponse(code=0, msg="ok", data=[r["room_id"] for r in rooms])
    except Exception as e:
        logger.exception("[get_room_ids] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch room ids: {str(e)}")


@router.get("/all", response_model=APIResponse)
async def get_all_rooms():
    try:
        rooms = await get_rooms_collection().find({}).to_list(length=None)
        return APIResponse(code=0, msg="ok", data=serialize_doc(rooms))
    except Exception as e:
        logger.exception("[get_all_rooms] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch rooms: {str(e)}")


@router.post("/seed", status_code=201, response_model=APIResponse)
async def seed_sample_room():
    try:
        exists = await get_rooms_collection().find_one({"room_type": SAMPLE_ROOM_TYPE})
        if exists:
            raise HTTPException(status_code=409, detail="Sample already exists")
        doc = await _insert_room(
            RoomIn(
                room_type=SAMPLE_ROOM_TYPE,
                bed_label="1 extra-large double bed",
                size_sqm=18,
                features=RoomFeatures(free_wifi=True, patio=True, bidet=True, balcony=True),
                perks=RoomPerks(garden_view=True, inner_courtyard_view=True, private_bathroom=True),
            )
        )
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("[seed_sample_room] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to seed room: {str(e)}")


@router.post("/", status_code=201, response_model=APIResponse)
async def create_room(body: RoomIn):
    try:
        doc = await _insert_room(body)
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except Exception as e:
        logger.exception("[create_room] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create room: {str(e)}")


@router.get("/{room_id}", response_model=APIResponse)
async def get_room(room_id: str):
    try:
        room = await get_rooms_collection().find_one({"room_id": room_id})
    except Exception as e:
        logger.exception("[get_room] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch room: {str(e)}")
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return APIResponse(code=0, msg="ok", data=serialize_doc(room))


@router.put("/{room_id}", response_model=APIResponse)
async def update_room(room_id: str, body: RoomUpdate):
    try:
        col = get_rooms_collection()
        room = await col.find_one({"room_id": room_id})
        if not room:
            raise HTTPException(status_code=404, detail="Room not found")

        changes = body.model_dump(exclude_unset=True, exclude={"remove_images", "image_gallery"})
        changes = {k: v for k, v in changes.items() if v is not None}

        if body.remove_images or body.image_gallery:
            added = [img.model_dump() for img in body.image_gallery or []]
            changes["image_gallery"] = merge_gallery(
                room.get("image_gallery", []), body.remove_images, added
            )

        changes["updated_at"] = datetime.utcnow()
        await col.update_one({"room_id": room_id}, {"$set": changes})
        room.update(changes)
        return APIResponse(code=0, msg="ok", data=serialize_doc(room))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("[update_room] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update room: {str(e)}")


@router.delete("/{room_id}", response_model=APIResponse)
async def delete_room(room_id: str):
    try:
        result = await get_rooms_collection().delete_one({"room_id": room_id})
    except Exception as e:
        logger.exception("[delete_room] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to delete room: {str(e)}")
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Room not found")
    return APIResponse(code=0, msg="ok", data={"message": "Room deleted successfully"})
