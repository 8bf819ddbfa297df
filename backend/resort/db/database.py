"""
MongoDB Database Configuration and Connection
"""

import logging

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.server_api import ServerApi

from resort.core.config import DATABASE_NAME, MONGODB_URI

logger = logging.getLogger(__name__)

# Global database client
_client = None
_database = None


def get_database():
    """
    Get MongoDB database instance
    Creates a new connection if one doesn't exist
    """
    global _client, _database

    if _database is None:
        if not MONGODB_URI:
            raise ValueError("MONGODB_URI environment variable is not set")

        _client = AsyncIOMotorClient(MONGODB_URI, server_api=ServerApi("1"))
        _database = _client[DATABASE_NAME]

        logger.info("Connected to MongoDB database: %s", DATABASE_NAME)

    return _database


async def init_indexes():
    """
    Initialize database indexes for better query performance
    """
    try:
        bookings = get_bookings_collection()
        counters = get_counters_collection()
        rooms = get_rooms_collection()
        payments = get_payments_collection()
        menu_items = get_menu_items_collection()

        # Bookings: date range scans and package lookups
        await bookings.create_index("created_at")
        await bookings.create_index("package_id")

        await counters.create_index("name", unique=True)

        # Rooms are addressed by their business key
        await rooms.create_index("room_id", unique=True)
        await rooms.create_index("room_type")

        await payments.create_index("order_no", unique=True)
        await payments.create_index("payment_intent_id", unique=True, sparse=True)
        await payments.create_index([("status", 1), ("created_at", -1)], name="status_recent")

        await menu_items.create_index("category")
        await menu_items.create_index("tags")

        logger.info("Database indexes created successfully")
    except Exception as e:
        logger.warning("Index creation warning: %s", e)


async def close_database_connection():
    """
    Close the MongoDB connection
    Call this when shutting down the application
    """
    global _client, _database

    if _client:
        _client.close()
        _client = None
        _database = None
        logger.info("Closed MongoDB connection")


async def test_connection():
    """
    Test the MongoDB connection
    """
    try:
        db = get_database()
        await db.command("ping")
        logger.info("MongoDB connection successful")
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


def to_object_id(value) -> ObjectId | None:
    """Convert a path/body id to an ObjectId, or None when it is malformed."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def get_bookings_collection():
    """
    Get the bookings collection from the database
    """
    return get_database().bookings


def get_packages_collection():
    """
    Get the safari packages collection (lookup target of bookings)
    """
    return get_database().packages


def get_payments_collection():
    return get_database().payments


def get_menu_items_collection():
    return get_database().menu_items


def get_rooms_collection():
    return get_database().rooms


def get_room_reservations_collection():
    """
    Get the schemaless room reservations collection
    """
    return get_database().room_reservations


def get_counters_collection():
    return get_database().counters
