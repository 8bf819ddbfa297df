"""
Safari Packages Router
"""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException

from resort.db.database import get_packages_collection, to_object_id
from resort.models.common import APIResponse, serialize_doc
from resort.models.package import SafariPackage, SafariPackageUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/packages", tags=["Packages"])


@router.post("/", status_code=201, response_model=APIResponse)
async def create_package(body: SafariPackage):
    """
    Create a safari package
    """
    try:
        doc = body.model_dump()
        result = await get_packages_collection().insert_one(doc)
        doc["_id"] = result.inserted_id
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except Exception as e:
        logger.exception("[create_package] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create package: {str(e)}")


@router.get("/", response_model=APIResponse)
async def list_packages():
    """
    List all safari packages, newest first
    """
    try:
        cursor = get_packages_collection().find({}).sort("created_at", -1)
        packages = await cursor.to_list(length=None)
        return APIResponse(code=0, msg="ok", data=serialize_doc(packages))
    except Exception as e:
        logger.exception("[list_packages] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to list packages: {str(e)}")


@router.get("/{package_id}", response_model=APIResponse)
async def get_package(package_id: str):
    """
    Get a safari package by id
    """
    oid = to_object_id(package_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Package not found")
    try:
        doc = await get_packages_collection().find_one({"_id": oid})
    except Exception as e:
        logger.exception("[get_package] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch package: {str(e)}")
    if not doc:
        raise HTTPException(status_code=404, detail="Package not found")
    return APIResponse(code=0, msg="ok", data=serialize_doc(doc))


@router.put("/{package_id}", response_model=APIResponse)
async def update_package(package_id: str, body: SafariPackageUpdate):
    """
    Update the supplied package fields
    """
    oid = to_object_id(package_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Package not found")
    try:
        changes = body.model_dump(exclude_unset=True)
        changes["updated_at"] = datetime.utcnow()
        col = get_packages_collection()
        result = await col.update_one({"_id": oid}, {"$set": changes})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Package not found")
        doc = await col.find_one({"_id": oid})
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("[update_package] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update package: {str(e)}")


@router.delete("/{package_id}", response_model=APIResponse)
async def delete_package(package_id: str):
    """
    Delete a safari package by id
    """
    oid = to_object_id(package_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Package not found")
    try:
        result = await get_packages_collection().delete_one({"_id": oid})
    except Exception as e:
        logger.exception("[delete_package] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to delete package: {str(e)}")
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Package not found")
    return APIResponse(code=0, msg="ok", data={"id": package_id, "deleted": True})
