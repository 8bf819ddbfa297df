"""
Models package for database schemas
"""

from resort.models.booking import Booking
from resort.models.menu_item import MenuItem
from resort.models.package import SafariPackage
from resort.models.payment import Payment
from resort.models.room import Room, RoomReservation

__all__ = ["Booking", "SafariPackage", "Payment", "MenuItem", "Room", "RoomReservation"]
