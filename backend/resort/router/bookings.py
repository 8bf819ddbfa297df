"""
Bookings Router
Handles booking CRUD, paged listing, analytics and report exports
"""

import asyncio
import logging
import os
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response

from resort.core.config import REPORT_TIMEZONE, REPORTS_DIR
from resort.db.database import get_bookings_collection, to_object_id
from resort.models.booking import Booking, BookingUpdate
from resort.models.common import APIResponse, serialize_doc
from resort.services.booking_queries import (
    build_analytics_pipeline,
    build_count_pipeline,
    build_list_pipeline,
    build_report_pipeline,
    date_range,
    normalize_period,
)
from resort.services.booking_report import report_filename, summarize_rows, write_csv
from resort.services.pdf_report import render_booking_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])

MAX_PAGE_SIZE = 500


def _booking_document(data: dict) -> dict:
    # package_id is stored as an ObjectId so $lookup can join on packages._id
    if data.get("package_id") is not None:
        oid = to_object_id(data["package_id"])
        if oid is None:
            raise HTTPException(status_code=400, detail="package_id is not a valid id")
        data["package_id"] = oid
    return data


@router.post("/", status_code=201, response_model=APIResponse)
async def create_booking(body: Booking):
    """
    Create a booking; package_id must be a valid package id
    """
    try:
        doc = _booking_document(body.model_dump())
        col = get_bookings_collection()
        result = await col.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created booking %s for %s", result.inserted_id, body.email or body.name)
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("[create_booking] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create booking: {str(e)}")


@router.get("/", response_model=APIResponse)
async def list_bookings(
    from_: str | None = Query(None, alias="from", description="Start date YYYY-MM-DD"),
    to: str | None = Query(None, description="End date YYYY-MM-DD (inclusive)"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    search: str = Query("", description="Matches name, email, phone or package"),
):
    """
    Page through bookings, newest first, joined with their safari package.
    """
    try:
        start, end = date_range(from_, to)
        col = get_bookings_collection()

        rows, total_docs = await asyncio.gather(
            col.aggregate(build_list_pipeline(start, end, search, page, limit)).to_list(length=None),
            col.aggregate(build_count_pipeline(start, end, search)).to_list(length=None),
        )
        total = total_docs[0]["total"] if total_docs else 0

        return APIResponse(
            code=0,
            msg="ok",
            data={"rows": serialize_doc(rows), "total": total, "page": page, "limit": limit},
        )
    except Exception as e:
        logger.exception("[list_bookings] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to list bookings: {str(e)}")


@router.get("/analytics", response_model=APIResponse)
async def booking_analytics(
    period: str = Query("monthly", description="weekly or monthly"),
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
):
    """
    Totals of sales, visitors and bookings per ISO week or calendar month.
    """
    try:
        period = normalize_period(period)
        start, end = date_range(from_, to)
        col = get_bookings_collection()
        data = await col.aggregate(
            build_analytics_pipeline(period, start, end, REPORT_TIMEZONE)
        ).to_list(length=None)
        return APIResponse(code=0, msg="ok", data={"period": period, "data": data})
    except Exception as e:
        logger.exception("[booking_analytics] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to compute analytics: {str(e)}")


@router.get("/report", response_model=APIResponse)
async def booking_report(
    request: Request,
    period: str = Query("monthly"),
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
):
    """
    Render the bookings in range to a PDF under /reports and return its URL.
    """
    try:
        period = normalize_period(period)
        start, end = date_range(from_, to)
        col = get_bookings_collection()
        rows = await col.aggregate(build_report_pipeline(start, end)).to_list(length=None)

        filename = report_filename(period, datetime.utcnow())
        # reportlab writes synchronously; keep the event loop free
        rendered = await asyncio.to_thread(
            render_booking_report,
            rows,
            summarize_rows(rows),
            period=period,
            start=start,
            end=end,
            output_path=os.path.join(REPORTS_DIR, filename),
        )

        path = f"/reports/{filename}"
        return APIResponse(
            code=0,
            msg="ok",
            data={
                "message": "Report generated",
                "url": str(request.base_url).rstrip("/") + path,
                "path": path,
                "pages": rendered.pages,
                "rows": rendered.rows,
            },
        )
    except Exception as e:
        logger.exception("[booking_report] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to generate report: {str(e)}")


@router.get("/export")
async def export_bookings_csv(
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
):
    """
    Download the report rows as CSV.
    """
    try:
        start, end = date_range(from_, to)
        col = get_bookings_collection()
        rows = await col.aggregate(build_report_pipeline(start, end)).to_list(length=None)
        filename = f"bookings-{start:%Y%m%d}-{end:%Y%m%d}.csv"
        return Response(
            content=write_csv(rows),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
    except Exception as e:
        logger.exception("[export_bookings_csv] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to export bookings: {str(e)}")


@router.get("/{booking_id}", response_model=APIResponse)
async def get_booking(booking_id: str):
    """
    Get a single booking by id
    """
    oid = to_object_id(booking_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    try:
        doc = await get_bookings_collection().find_one({"_id": oid})
    except Exception as e:
        logger.exception("[get_booking] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch booking: {str(e)}")
    if not doc:
        raise HTTPException(status_code=404, detail="Booking not found")
    return APIResponse(code=0, msg="ok", data=serialize_doc(doc))


@router.put("/{booking_id}", response_model=APIResponse)
async def update_booking(booking_id: str, body: BookingUpdate):
    """
    Update the supplied booking fields
    """
    oid = to_object_id(booking_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    try:
        changes = _booking_document(body.model_dump(exclude_unset=True))
        changes["updated_at"] = datetime.utcnow()
        col = get_bookings_collection()
        result = await col.update_one({"_id": oid}, {"$set": changes})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Booking not found")
        doc = await col.find_one({"_id": oid})
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("[update_booking] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update booking: {str(e)}")


@router.delete("/{booking_id}", response_model=APIResponse)
async def delete_booking(booking_id: str):
    """
    Delete a booking by id
    """
    oid = to_object_id(booking_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    try:
        result = await get_bookings_collection().delete_one({"_id": oid})
    except Exception as e:
        logger.exception("[delete_booking] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to delete booking: {str(e)}")
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Booking not found")
    return APIResponse(code=0, msg="ok", data={"id": booking_id, "deleted": True})
