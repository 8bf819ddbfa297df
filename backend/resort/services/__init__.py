"""
services package

Pure query builders and report rendering used by the routers. Nothing here
touches the database at import time, e.g.:

    from resort.services.booking_queries import build_list_pipeline
"""

__all__: list[str] = []
