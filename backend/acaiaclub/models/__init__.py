"""
Acaia Club Backend — ORM Models
================================

Importing this package registers every table on `Base.metadata`, which is
what Alembic autogenerate and `Database.create_all()` read.
"""

from acaiaclub.models.company_client import CompanyClient
from acaiaclub.models.enums import (
    STORAGE_LOCATION_TYPES,
    DJSessionStatus,
    PurchaseOrderStatus,
    Role,
    VenueObjectType,
)
from acaiaclub.models.floor_plan import FloorPlan, VenueObject
from acaiaclub.models.purchasing import PurchaseOrder, PurchaseOrderItem, Supplier
from acaiaclub.models.user import User
from acaiaclub.models.vinyl import DJSession, DJSetTrack, VinylLibrarySlot, VinylRecord
from acaiaclub.models.workstation import Workstation

__all__ = [
    "CompanyClient",
    "DJSession",
    "DJSessionStatus",
    "DJSetTrack",
    "FloorPlan",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "PurchaseOrderStatus",
    "Role",
    "STORAGE_LOCATION_TYPES",
    "Supplier",
    "User",
    "VenueObject",
    "VenueObjectType",
    "VinylLibrarySlot",
    "VinylRecord",
    "Workstation",
]
