"""
Aggregation pipelines over the bookings collection

Every function here is pure: it only builds pipeline lists, so routers can
run them with motor and tests can inspect them without a database.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

DEFAULT_START = datetime(2000, 1, 1)
DEFAULT_END = datetime(2100, 1, 1)

WEEKLY = "weekly"
MONTHLY = "monthly"

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")

PACKAGE_LOOKUP = [
    {
        "$lookup": {
            "from": "packages",
            "localField": "package_id",
            "foreignField": "_id",
            "as": "package",
        }
    },
    {"$unwind": {"path": "$package", "preserveNullAndEmptyArrays": True}},
]

SEARCH_FIELDS = ("name", "email", "phone", "package.destination", "package.description")


def parse_date_safe(value: str | None, fallback: datetime, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO date or datetime string into a naive UTC datetime.

    Returns `fallback` for empty or unparseable input. With `end_of_day`, a
    bare YYYY-MM-DD value is pushed to the last millisecond of that day so an
    upper bound includes the whole day.
    """
    if not value:
        return fallback
    text = str(value).strip()
    try:
        if _DATE_ONLY.match(text):
            parsed = datetime.strptime(text, "%Y-%m-%d")
            if end_of_day:
                parsed = parsed.replace(hour=23, minute=59, second=59, microsecond=999000)
            return parsed
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return fallback
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def date_range(start: str | None, end: str | None) -> tuple[datetime, datetime]:
    return (
        parse_date_safe(start, DEFAULT_START),
        parse_date_safe(end, DEFAULT_END, end_of_day=True),
    )


def normalize_period(period: str | None) -> str:
    # Anything that is not "weekly" is reported monthly
    return WEEKLY if (period or "").strip().lower() == WEEKLY else MONTHLY


def _match_created(start: datetime, end: datetime) -> dict:
    return {"$match": {"created_at": {"$gte": start, "$lte": end}}}


def _search_stage(search: str) -> dict:
    pattern = re.escape(search.strip())
    return {
        "$match": {
            "$or": [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS]
        }
    }


def _filter_stages(start: datetime, end: datetime, search: str | None) -> list[dict]:
    stages = [_match_created(start, end), *PACKAGE_LOOKUP]
    if search and search.strip():
        stages.append(_search_stage(search))
    return stages


def build_list_pipeline(
    start: datetime, end: datetime, search: str | None = None, page: int = 1, limit: int = 50
) -> list[dict]:
    """
    Newest-first page of bookings joined with their package.
    """
    page = max(1, int(page))
    limit = max(1, int(limit))
    return [
        *_filter_stages(start, end, search),
        {"$sort": {"created_at": -1}},
        {
            "$project": {
                "_id": 1,
                "created_at": 1,
                "user_id": 1,
                "name": 1,
                "phone": 1,
                "email": 1,
                "visitors": 1,
                "price": 1,
                "package_id": 1,
                "package": {"destination": 1, "type": 1, "price": 1, "description": 1},
            }
        },
        {"$skip": (page - 1) * limit},
        {"$limit": limit},
    ]


def build_count_pipeline(start: datetime, end: datetime, search: str | None = None) -> list[dict]:
    """
    Total number of bookings the list pipeline would page through.
    """
    if search and search.strip():
        stages = _filter_stages(start, end, search)
    else:
        # The join is only needed when searching package fields
        stages = [_match_created(start, end)]
    return [*stages, {"$count": "total"}]


def build_analytics_pipeline(
    period: str, start: datetime, end: datetime, tz: str = "Asia/Colombo"
) -> list[dict]:
    """
    Sales, visitors and booking count per ISO week or calendar month.

    Periods are grouped on the stored UTC timestamp; `period_start` is
    rebuilt as midnight of the first day of the period in `tz`.
    """
    sums = {
        "total_sales": {"$sum": "$price"},
        "total_visitors": {"$sum": "$visitors"},
        "count": {"$sum": 1},
    }

    if normalize_period(period) == WEEKLY:
        group = {
            "_id": {"y": {"$isoWeekYear": "$created_at"}, "w": {"$isoWeek": "$created_at"}},
            **sums,
        }
        sort = {"_id.y": 1, "_id.w": 1}
        period_start = {
            "$dateFromParts": {
                "isoWeekYear": "$_id.y",
                "isoWeek": "$_id.w",
                "isoDayOfWeek": 1,
                "timezone": tz,
            }
        }
    else:
        group = {"_id": {"y": {"$year": "$created_at"}, "m": {"$month": "$created_at"}}, **sums}
        sort = {"_id.y": 1, "_id.m": 1}
        period_start = {
            "$dateFromParts": {"year": "$_id.y", "month": "$_id.m", "day": 1, "timezone": tz}
        }

    return [
        _match_created(start, end),
        {"$group": group},
        {"$sort": sort},
        {
            "$project": {
                "_id": 0,
                "period_start": period_start,
                "total_sales": 1,
                "total_visitors": 1,
                "count": 1,
            }
        },
    ]


def build_report_pipeline(start: datetime, end: datetime) -> list[dict]:
    """
    Flat rows for the PDF and CSV exports, newest first.
    Booking values win; the package's values fill in when a booking lacks them.
    """
    return [
        _match_created(start, end),
        *PACKAGE_LOOKUP,
        {"$sort": {"created_at": -1}},
        {
            "$project": {
                "_id": 0,
                "created_at": 1,
                "name": 1,
                "phone": 1,
                "email": 1,
                "visitors": {"$ifNull": ["$visitors", "$package.visitors"]},
                "price": {"$ifNull": ["$price", "$package.price"]},
                "package_destination": "$package.destination",
                "package_type": "$package.type",
            }
        },
    ]
