"""
Room Reservations Router
Reservations are schemaless: whatever JSON object the client sends is stored
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException

from resort.db.database import get_room_reservations_collection, to_object_id
from resort.models.common import APIResponse, serialize_doc
from resort.models.room import RoomReservation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/room-reservations", tags=["Room Reservations"])

# Server-managed keys a client cannot overwrite
_RESERVED_KEYS = {"_id", "id", "created_at", "updated_at"}


def _client_fields(body: RoomReservation) -> dict:
    return {k: v for k, v in body.model_dump().items() if k not in _RESERVED_KEYS}


@router.post("/", status_code=201, response_model=APIResponse)
async def create_room_reservation(body: RoomReservation):
    try:
        now = datetime.utcnow()
        doc = {**_client_fields(body), "created_at": now, "updated_at": now}
        result = await get_room_reservations_collection().insert_one(doc)
        doc["_id"] = result.inserted_id
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except Exception as e:
        logger.exception("[create_room_reservation] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create reservation: {str(e)}")


@router.get("/", response_model=APIResponse)
async def list_room_reservations():
    try:
        cursor = get_room_reservations_collection().find({}).sort("created_at", -1)
        docs = await cursor.to_list(length=None)
        return APIResponse(code=0, msg="ok", data=serialize_doc(docs))
    except Exception as e:
        logger.exception("[list_room_reservations] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to list reservations: {str(e)}")


@router.get("/{reservation_id}", response_model=APIResponse)
async def get_room_reservation(reservation_id: str):
    oid = to_object_id(reservation_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Reservation not found")
    try:
        doc = await get_room_reservations_collection().find_one({"_id": oid})
    except Exception as e:
        logger.exception("[get_room_reservation] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch reservation: {str(e)}")
    if not doc:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return APIResponse(code=0, msg="ok", data=serialize_doc(doc))


@router.put("/{reservation_id}", response_model=APIResponse)
async def update_room_reservation(reservation_id: str, body: RoomReservation):
    oid = to_object_id(reservation_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Reservation not found")
    try:
        changes = {**_client_fields(body), "updated_at": datetime.utcnow()}
        col = get_room_reservations_collection()
        result = await col.update_one({"_id": oid}, {"$set": changes})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Reservation not found")
        doc = await col.find_one({"_id": oid})
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("[update_room_reservation] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update reservation: {str(e)}")


@router.delete("/{reservation_id}", response_model=APIResponse)
async def delete_room_reservation(reservation_id: str):
    oid = to_object_id(reservation_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Reservation not found")
    try:
        result = await get_room_reservations_collection().delete_one({"_id": oid})
    except Exception as e:
        logger.exception("[delete_room_reservation] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to delete reservation: {str(e)}")
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return APIResponse(code=0, msg="ok", data={"id": reservation_id, "deleted": True})
