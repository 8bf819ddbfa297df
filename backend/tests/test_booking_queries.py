"""
Tests for the booking aggregation pipeline builders
"""

from datetime import datetime

from resort.services.booking_queries import (
    DEFAULT_END,
    DEFAULT_START,
    build_analytics_pipeline,
    build_count_pipeline,
    build_list_pipeline,
    build_report_pipeline,
    date_range,
    normalize_period,
    parse_date_safe,
)


def _stage(pipeline, name):
    return [s[name] for s in pipeline if name in s]


def test_parse_date_safe_falls_back_on_bad_input():
    fallback = datetime(2000, 1, 1)
    assert parse_date_safe(None, fallback) is fallback
    assert parse_date_safe("", fallback) is fallback
    assert parse_date_safe("not-a-date", fallback) is fallback
    assert parse_date_safe("2024-13-40", fallback) is fallback


def test_parse_date_safe_handles_dates_and_datetimes():
    fallback = datetime(2000, 1, 1)
    assert parse_date_safe("2024-03-05", fallback) == datetime(2024, 3, 5)
    assert parse_date_safe("2024-03-05", fallback, end_of_day=True) == datetime(
        2024, 3, 5, 23, 59, 59, 999000
    )
    # aware values are converted to naive UTC
    assert parse_date_safe("2024-03-05T10:00:00+05:30", fallback) == datetime(2024, 3, 5, 4, 30)
    assert parse_date_safe("2024-03-05T10:00:00Z", fallback) == datetime(2024, 3, 5, 10, 0)


def test_date_range_defaults():
    assert date_range(None, None) == (DEFAULT_START, DEFAULT_END)
    start, end = date_range("2024-01-01", "2024-01-31")
    assert start == datetime(2024, 1, 1)
    assert end.date() == datetime(2024, 1, 31).date()
    assert end.hour == 23


def test_normalize_period():
    assert normalize_period("weekly") == "weekly"
    assert normalize_period("WEEKLY ") == "weekly"
    assert normalize_period("monthly") == "monthly"
    assert normalize_period("yearly") == "monthly"
    assert normalize_period(None) == "monthly"


def test_list_pipeline_pagination_and_order():
    pipeline = build_list_pipeline(DEFAULT_START, DEFAULT_END, page=3, limit=20)

    assert pipeline[0] == {"$match": {"created_at": {"$gte": DEFAULT_START, "$lte": DEFAULT_END}}}
    assert _stage(pipeline, "$lookup")[0]["from"] == "packages"
    assert _stage(pipeline, "$sort") == [{"created_at": -1}]
    assert _stage(pipeline, "$skip") == [40]
    assert _stage(pipeline, "$limit") == [20]
    # skip and limit come last so they bound the returned page
    assert list(pipeline[-2]) == ["$skip"]
    assert list(pipeline[-1]) == ["$limit"]


def test_list_pipeline_clamps_page_and_limit():
    pipeline = build_list_pipeline(DEFAULT_START, DEFAULT_END, page=0, limit=0)
    assert _stage(pipeline, "$skip") == [0]
    assert _stage(pipeline, "$limit") == [1]


def test_list_pipeline_search_is_escaped_and_case_insensitive():
    pipeline = build_list_pipeline(DEFAULT_START, DEFAULT_END, search="a+b (yala)")
    matches = _stage(pipeline, "$match")
    assert len(matches) == 2
    clauses = matches[1]["$or"]
    fields = [next(iter(c)) for c in clauses]
    assert fields == ["name", "email", "phone", "package.destination", "package.description"]
    for clause in clauses:
        condition = next(iter(clause.values()))
        assert condition == {"$regex": r"a\+b\ \(yala\)", "$options": "i"}


def test_blank_search_adds_no_stage():
    pipeline = build_list_pipeline(DEFAULT_START, DEFAULT_END, search="   ")
    assert len(_stage(pipeline, "$match")) == 1


def test_count_pipeline_follows_search_filter():
    plain = build_count_pipeline(DEFAULT_START, DEFAULT_END)
    assert plain == [
        {"$match": {"created_at": {"$gte": DEFAULT_START, "$lte": DEFAULT_END}}},
        {"$count": "total"},
    ]

    searched = build_count_pipeline(DEFAULT_START, DEFAULT_END, search="yala")
    assert _stage(searched, "$lookup")
    assert len(_stage(searched, "$match")) == 2
    assert searched[-1] == {"$count": "total"}


def test_weekly_analytics_groups_by_iso_week():
    pipeline = build_analytics_pipeline("weekly", DEFAULT_START, DEFAULT_END, "Asia/Colombo")
    group = _stage(pipeline, "$group")[0]

    assert group["_id"] == {
        "y": {"$isoWeekYear": "$created_at"},
        "w": {"$isoWeek": "$created_at"},
    }
    assert group["total_sales"] == {"$sum": "$price"}
    assert group["total_visitors"] == {"$sum": "$visitors"}
    assert group["count"] == {"$sum": 1}
    assert _stage(pipeline, "$sort") == [{"_id.y": 1, "_id.w": 1}]

    parts = _stage(pipeline, "$project")[0]["period_start"]["$dateFromParts"]
    assert parts["isoDayOfWeek"] == 1
    assert parts["timezone"] == "Asia/Colombo"


def test_other_periods_group_by_month():
    for period in ("monthly", "daily", ""):
        pipeline = build_analytics_pipeline(period, DEFAULT_START, DEFAULT_END)
        group = _stage(pipeline, "$group")[0]
        assert group["_id"] == {"y": {"$year": "$created_at"}, "m": {"$month": "$created_at"}}
        project = _stage(pipeline, "$project")[0]
        assert project["_id"] == 0
        assert project["period_start"]["$dateFromParts"]["day"] == 1


def test_report_pipeline_prefers_booking_values():
    pipeline = build_report_pipeline(DEFAULT_START, DEFAULT_END)
    project = _stage(pipeline, "$project")[0]

    assert project["_id"] == 0
    assert project["price"] == {"$ifNull": ["$price", "$package.price"]}
    assert project["visitors"] == {"$ifNull": ["$visitors", "$package.visitors"]}
    assert project["package_destination"] == "$package.destination"
    assert not _stage(pipeline, "$limit")
