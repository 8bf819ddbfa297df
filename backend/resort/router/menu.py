"""
Menu Router
Restaurant menu items; prices arrive in USD and are stored in LKR
"""

import logging
import re
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query

from resort.core.config import USD_TO_LKR_RATE
from resort.db.database import get_menu_items_collection, to_object_id
from resort.models.common import APIResponse, serialize_doc
from resort.models.menu_item import MenuCategory, MenuItem, MenuItemIn, MenuItemUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/menu", tags=["Menu"])


def usd_to_lkr(amount: float) -> float:
    return round(float(amount) * USD_TO_LKR_RATE, 2)


def build_menu_filter(
    category: str | None = None,
    q: str | None = None,
    archived: str | None = None,
    tag: str | None = None,
) -> dict:
    query_filter: dict = {}
    if category:
        query_filter["category"] = category
    if archived == "true":
        query_filter["is_archived"] = True
    elif archived == "false":
        query_filter["is_archived"] = False
    if tag:
        query_filter["tags"] = {"$in": [tag]}
    if q:
        pattern = re.escape(q.strip())
        query_filter["$or"] = [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    return query_filter


@router.post("/", status_code=201, response_model=APIResponse)
async def create_menu_item(body: MenuItemIn):
    """
    Create a menu item. Prices arrive in USD and are stored in LKR.
    """
    try:
        data = body.model_dump()
        data["price"] = usd_to_lkr(body.price)
        doc = MenuItem(**data).model_dump()
        result = await get_menu_items_collection().insert_one(doc)
        doc["_id"] = result.inserted_id
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except Exception as e:
        logger.exception("[create_menu_item] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create menu item: {str(e)}")


@router.get("/", response_model=APIResponse)
async def list_menu_items(
    category: MenuCategory | None = Query(None),
    q: str | None = Query(None, description="Search name or description"),
    archived: str | None = Query(None, description="true or false"),
    tag: str | None = Query(None),
):
    """
    List menu items by category, text, archive flag or tag.
    """
    try:
        cursor = get_menu_items_collection().find(build_menu_filter(category, q, archived, tag))
        items = await cursor.sort("created_at", -1).to_list(length=None)
        return APIResponse(code=0, msg="ok", data=serialize_doc(items))
    except Exception as e:
        logger.exception("[list_menu_items] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to list menu items: {str(e)}")


@router.get("/{item_id}", response_model=APIResponse)
async def get_menu_item(item_id: str):
    """
    Get a menu item by id.
    """
    oid = to_object_id(item_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    try:
        doc = await get_menu_items_collection().find_one({"_id": oid})
    except Exception as e:
        logger.exception("[get_menu_item] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch menu item: {str(e)}")
    if not doc:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return APIResponse(code=0, msg="ok", data=serialize_doc(doc))


@router.put("/{item_id}", response_model=APIResponse)
async def update_menu_item(item_id: str, body: MenuItemUpdate):
    """
    Update a menu item; a new price is converted from USD.
    """
    oid = to_object_id(item_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    try:
        # Only fields present in the request overwrite stored values
        changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
        if "price" in changes:
            changes["price"] = usd_to_lkr(changes["price"])
        changes["updated_at"] = datetime.utcnow()

        col = get_menu_items_collection()
        result = await col.update_one({"_id": oid}, {"$set": changes})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Menu item not found")
        doc = await col.find_one({"_id": oid})
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("[update_menu_item] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update menu item: {str(e)}")


@router.delete("/{item_id}", response_model=APIResponse)
async def delete_menu_item(item_id: str):
    """
    Delete a menu item by id.
    """
    oid = to_object_id(item_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    try:
        result = await get_menu_items_collection().delete_one({"_id": oid})
    except Exception as e:
        logger.exception("[delete_menu_item] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to delete menu item: {str(e)}")
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return APIResponse(code=0, msg="ok", data={"message": "Menu item deleted", "id": item_id})
