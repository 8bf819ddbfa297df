"""
Common API models
"""

from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """
    Unified API response envelope
    """

    code: int = Field(default=0, description="0 means success; non-zero means error")
    msg: str = Field(default="ok", description="Human-readable message")
    data: Any | None = Field(default=None, description="Payload data")

    class Config:
        json_schema_extra = {"example": {"code": 0, "msg": "ok", "data": {"items": []}}}


class Timestamped(BaseModel):
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")
    updated_at: datetime = Field(
        default_factory=datetime.utcnow, description="Last update timestamp"
    )


def serialize_doc(value: Any) -> Any:
    """
    Make a MongoDB document JSON friendly.
    `_id` becomes `id` and every ObjectId becomes its hex string.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [serialize_doc(v) for v in value]
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            out["id" if key == "_id" else key] = serialize_doc(item)
        return out
    return value
