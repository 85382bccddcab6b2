"""
Acaia Club Backend — Floor Plan, Venue Object and Workstation Services
=======================================================================

What:  Gateways for floor plans, the objects placed on them, the storage
       locations among those objects, and workstations.
Why:   Venue objects carry the only cross-field rule in this area: an
       object of type WORKSTATION must point at a workstation, and a
       workstation may be placed on the map at most once.
How:   Plain CrudService instances where the defaults suffice; a subclass
       for venue objects to enforce the workstation rule on update.

Default Orders:
    floor plans          name
    plan objects         name, created_at  (relationship order_by)
    venue objects        name
    storage locations    name
    workstations         name
"""

import logging
import uuid
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from acaiaclub.exceptions import ValidationError
from acaiaclub.models import (
    STORAGE_LOCATION_TYPES,
    FloorPlan,
    VenueObject,
    VenueObjectType,
    Workstation,
)
from acaiaclub.services.crud import CrudService

logger = logging.getLogger(__name__)


class VenueObjectService(CrudService[VenueObject]):
    """
    Venue objects with the workstation link rules.

    Update rules:
        - the type after the update decides whether a workstation is needed
        - changing the type away from WORKSTATION without sending a
          workstationId unlinks the workstation
        - ending up as WORKSTATION with no workstation is a 400
    """

    def __init__(self):
        super().__init__(
            VenueObject,
            resource="venue object",
            order_by=(VenueObject.name, VenueObject.created_at),
            load_options=(selectinload(VenueObject.workstation),),
            conflict_message="This workstation is already placed on the map",
        )

    async def update(
        self, db: AsyncSession, obj_id: uuid.UUID, values: Dict[str, Any]
    ) -> VenueObject:
        obj = await self.get(db, obj_id)

        new_type = values.get("type", obj.type)
        if "type" in values and new_type != VenueObjectType.WORKSTATION:
            values.setdefault("workstation_id", None)
        workstation_id = values.get("workstation_id", obj.workstation_id)
        if new_type == VenueObjectType.WORKSTATION and workstation_id is None:
            raise ValidationError(
                message="WORKSTATION objects must be linked to a workstation",
                field="workstationId",
            )

        self.apply(obj, values)
        await self.flush(db, action="update")
        return await self.get(db, obj_id, refresh=True)

    async def list_storage_locations(self, db: AsyncSession) -> List[VenueObject]:
        """Venue objects that can hold stock, by name."""
        return await self.list(db, VenueObject.type.in_(STORAGE_LOCATION_TYPES))


# ── Singleton Instances ───────────────────────────────────────────────────
# Stateless: every call receives its own AsyncSession
floor_plan_service = CrudService(
    FloorPlan,
    resource="floor plan",
    order_by=(FloorPlan.name,),
)

# Detail view: the plan, its objects and each object's workstation
floor_plan_detail_service = CrudService(
    FloorPlan,
    resource="floor plan",
    order_by=(FloorPlan.name,),
    load_options=(selectinload(FloorPlan.objects).selectinload(VenueObject.workstation),),
)

venue_object_service = VenueObjectService()

workstation_service = CrudService(
    Workstation,
    resource="workstation",
    order_by=(Workstation.name,),
    conflict_message="A workstation with this name already exists",
)
