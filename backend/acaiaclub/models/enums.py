"""
Closed value sets stored in enum columns.

Members are str subclasses so they compare equal to their wire value
("RECEIVED" == PurchaseOrderStatus.RECEIVED) and serialize without help.
"""

import enum


class VenueObjectType(str, enum.Enum):
    TABLE = "TABLE"
    WORKSTATION = "WORKSTATION"
    WORKSTATION_STORAGE = "WORKSTATION_STORAGE"
    STORAGE = "STORAGE"
    FREEZER = "FREEZER"
    SHELF = "SHELF"
    DOOR = "DOOR"
    WINDOW = "WINDOW"
    IMPASSABLE = "IMPASSABLE"
    OTHER = "OTHER"


# Venue objects that can hold stock
STORAGE_LOCATION_TYPES = (
    VenueObjectType.STORAGE,
    VenueObjectType.FREEZER,
    VenueObjectType.SHELF,
    VenueObjectType.WORKSTATION_STORAGE,
)


class PurchaseOrderStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    PARTIALLY_RECEIVED = "PARTIALLY_RECEIVED"
    RECEIVED = "RECEIVED"
    CANCELLED = "CANCELLED"


class DJSessionStatus(str, enum.Enum):
    LIVE = "LIVE"
    ENDED = "ENDED"


class Role(str, enum.Enum):
    OWNER = "OWNER"
    MANAGER = "MANAGER"
    FINANCIAL = "FINANCIAL"
    SALES = "SALES"
    COOK = "COOK"
    BARTENDER = "BARTENDER"
    CASHIER = "CASHIER"
    SERVER = "SERVER"
    DJ = "DJ"
    DRIVER = "DRIVER"
