"""
Named sequence counters stored in MongoDB
"""

from datetime import datetime

from pymongo import ReturnDocument

from resort.db.database import get_counters_collection

PAYMENT_ORDER_COUNTER = "paymentOrderNo"
ROOM_ID_COUNTER = "roomId"


async def next_sequence(name: str, start: int = 0) -> int:
    """
    Atomically increment the counter called `name` and return `start + seq`.
    The counter document is created on first use with seq=1.
    """
    col = get_counters_collection()
    now = datetime.utcnow()
    doc = await col.find_one_and_update(
        {"name": name},
        {"$inc": {"seq": 1}, "$set": {"updated_at": now}, "$setOnInsert": {"created_at": now}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return start + int(doc["seq"])
