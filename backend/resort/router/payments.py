"""
Payments Router
Records payments against reservations; no payment provider is called here
"""

import asyncio
import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query
from pymongo.errors import DuplicateKeyError

from resort.db.counters import PAYMENT_ORDER_COUNTER, next_sequence
from resort.db.database import get_payments_collection, to_object_id
from resort.models.common import APIResponse, serialize_doc
from resort.models.payment import Payment, PaymentCreate, PaymentStatus, PaymentUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["Payments"])

# Order numbers continue from the legacy reservation numbering
ORDER_NO_START = 1000


@router.post("/", status_code=201, response_model=APIResponse)
async def create_payment(body: PaymentCreate):
    """
    Record a payment and assign it the next order number.
    """
    try:
        order_no = await next_sequence(PAYMENT_ORDER_COUNTER, start=ORDER_NO_START)
        payment = Payment(**body.model_dump(), order_no=order_no)
        doc = payment.model_dump()
        if doc.get("payment_intent_id") is None:
            # keep the sparse unique index happy
            doc.pop("payment_intent_id")
        result = await get_payments_collection().insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(
            "Recorded payment #%s (%s %s) for %s",
            order_no,
            doc["amount"],
            doc["currency"],
            doc["reservation"],
        )
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="A payment with this payment_intent_id already exists")
    except Exception as e:
        logger.exception("[create_payment] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create payment: {str(e)}")


@router.get("/", response_model=APIResponse)
async def list_payments(
    status: PaymentStatus | None = Query(None),
    user_email: str | None = Query(None),
    reservation: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
):
    """
    List payments, newest first, filtered by status, email or reservation.
    """
    try:
        query_filter = {}
        if status:
            query_filter["status"] = status
        if user_email:
            query_filter["user_email"] = user_email
        if reservation:
            query_filter["reservation"] = reservation

        col = get_payments_collection()
        cursor = col.find(query_filter).sort("created_at", -1).skip((page - 1) * limit).limit(limit)
        rows, total = await asyncio.gather(
            cursor.to_list(length=None), col.count_documents(query_filter)
        )
        return APIResponse(
            code=0,
            msg="ok",
            data={"rows": serialize_doc(rows), "total": total, "page": page, "limit": limit},
        )
    except Exception as e:
        logger.exception("[list_payments] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to list payments: {str(e)}")


@router.get("/{payment_id}", response_model=APIResponse)
async def get_payment(payment_id: str):
    """
    Get a payment by id.
    """
    oid = to_object_id(payment_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Payment not found")
    try:
        doc = await get_payments_collection().find_one({"_id": oid})
    except Exception as e:
        logger.exception("[get_payment] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch payment: {str(e)}")
    if not doc:
        raise HTTPException(status_code=404, detail="Payment not found")
    return APIResponse(code=0, msg="ok", data=serialize_doc(doc))


@router.patch("/{payment_id}", response_model=APIResponse)
async def update_payment(payment_id: str, body: PaymentUpdate):
    """
    Update payment status or provider references.
    A null payment_intent_id removes the field so the sparse unique index still holds.
    """
    oid = to_object_id(payment_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Payment not found")
    try:
        changes = body.model_dump(exclude_unset=True)
        changes["updated_at"] = datetime.utcnow()
        update = {"$set": changes}
        if "payment_intent_id" in changes and changes["payment_intent_id"] is None:
            changes.pop("payment_intent_id")
            update["$unset"] = {"payment_intent_id": ""}
        col = get_payments_collection()
        result = await col.update_one({"_id": oid}, update)
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="Payment not found")
        doc = await col.find_one({"_id": oid})
        if "status" in changes:
            logger.info("Payment %s is now %s", payment_id, changes["status"])
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except HTTPException:
        raise
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="A payment with this payment_intent_id already exists")
    except Exception as e:
        logger.exception("[update_payment] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update payment: {str(e)}")


@router.delete("/{payment_id}", response_model=APIResponse)
async def delete_payment(payment_id: str):
    """
    Delete a payment by id.
    """
    oid = to_object_id(payment_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Payment not found")
    try:
        result = await get_payments_collection().delete_one({"_id": oid})
    except Exception as e:
        logger.exception("[delete_payment] Error: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to delete payment: {str(e)}")
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Payment not found")
    return APIResponse(code=0, msg="ok", data={"id": payment_id, "deleted": True})
