"""
Acaia Club Backend — Vinyl Library and DJ Session Services
===========================================================

What:  Gateways for library slots, records, and live DJ sessions.
Why:   Slots and records are plain CRUD; DJ sessions add a small state
       machine (LIVE → ENDED) and the rule that only one session is live.

DJ Session Flow:
    go_live      no other LIVE session → create with actual_start_time = now
    add_track    session must exist and be LIVE; played_at = now
    end_session  LIVE → ENDED with actual_end_time = now, one UPDATE

The single-live rule is a read-then-insert check, not a database lock; two
simultaneous go-live requests could both pass. The booth has one DJ
terminal, so this is accepted.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from acaiaclub.exceptions import ConflictError, NotFoundError
from acaiaclub.models import (
    DJSession,
    DJSessionStatus,
    DJSetTrack,
    VinylLibrarySlot,
    VinylRecord,
)
from acaiaclub.models.base import utcnow
from acaiaclub.services.crud import CrudService

logger = logging.getLogger(__name__)


class DJSessionService(CrudService[DJSession]):
    def __init__(self):
        super().__init__(
            DJSession,
            resource="DJ session",
            order_by=(DJSession.actual_start_time.desc(),),
            load_options=(
                selectinload(DJSession.tracks).selectinload(DJSetTrack.vinyl_record),
            ),
        )
        self.tracks = CrudService(
            DJSetTrack,
            resource="track",
            load_options=(selectinload(DJSetTrack.vinyl_record),),
        )

    async def get_live(self, db: AsyncSession) -> DJSession:
        """
        The session currently on air.

        Raises:
            NotFoundError: Nobody is playing (→ 404)
        """
        live = await self.first(db, DJSession.status == DJSessionStatus.LIVE)
        if live is None:
            raise NotFoundError(resource="live DJ session")
        return live

    async def go_live(self, db: AsyncSession, name: str) -> DJSession:
        existing: Optional[DJSession] = await self.first(
            db, DJSession.status == DJSessionStatus.LIVE
        )
        if existing is not None:
            raise ConflictError(
                message="A DJ session is already live. End it first.",
                context={"live_session_id": str(existing.id)},
            )
        return await self.create(
            db,
            {"name": name, "status": DJSessionStatus.LIVE, "actual_start_time": utcnow()},
        )

    async def end_session(self, db: AsyncSession, session_id: uuid.UUID) -> DJSession:
        session = await self.get(db, session_id)
        if session.status != DJSessionStatus.LIVE:
            raise ConflictError(
                message="This DJ session has already ended",
                context={"session_id": str(session_id)},
            )
        self.apply(session, {"status": DJSessionStatus.ENDED, "actual_end_time": utcnow()})
        await self.flush(db, action="end")
        logger.info("DJ session ended: %s", session_id)
        return await self.get(db, session_id, refresh=True)

    async def add_track(
        self, db: AsyncSession, session_id: uuid.UUID, vinyl_record_id: uuid.UUID
    ) -> DJSetTrack:
        """Log a record as played now. Unknown record ids map to 404."""
        session = await self.get(db, session_id)
        if session.status != DJSessionStatus.LIVE:
            raise ConflictError(
                message="Tracks can only be added to a live DJ session",
                context={"session_id": str(session_id)},
            )
        return await self.tracks.create(
            db,
            {
                "session_id": session_id,
                "vinyl_record_id": vinyl_record_id,
                "played_at": utcnow(),
            },
        )


# ── Singleton Instances ───────────────────────────────────────────────────
vinyl_slot_service = CrudService(
    VinylLibrarySlot,
    resource="vinyl slot",
    order_by=(VinylLibrarySlot.row, VinylLibrarySlot.column),
    conflict_message="A slot already exists at this row and column",
)

vinyl_record_service = CrudService(
    VinylRecord,
    resource="vinyl record",
    order_by=(VinylRecord.artist, VinylRecord.title),
    load_options=(selectinload(VinylRecord.slot),),
    conflict_message="Another record already occupies this position in the slot",
)

dj_session_service = DJSessionService()
