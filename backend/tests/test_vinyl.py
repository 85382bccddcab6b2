"""
Acaia Club Backend — Vinyl Library and DJ Session Tests
========================================================

What:  Endpoint tests for /api/vinyl-slots, /api/vinyl-records and
       /api/djsessions.

What we test:
    ✅ One slot per (row, column); a slot holding records cannot be deleted
    ✅ One record per position in a slot; records embed their slot
    ✅ GET /api/djsessions is 404 until someone goes live
    ✅ Only one live session at a time
    ✅ Tracks are logged with played_at, only while the session is live
    ✅ DJ actions need a login; the now-playing read does not
    ✅ Rows, columns and positions beyond INTEGER range are 400, not 500
"""

import uuid

import pytest

from conftest import create_record, create_slot


class TestVinylSlots:

    @pytest.mark.asyncio
    async def test_create_defaults_capacity(self, test_client):
        slot = await create_slot(test_client, row=1, column=2)

        assert (slot["row"], slot["column"], slot["capacity"]) == (1, 2, 30)

    @pytest.mark.asyncio
    async def test_duplicate_position_is_conflict(self, test_client):
        await create_slot(test_client, row=0, column=3)

        response = await test_client.post("/api/vinyl-slots", json={"row": 0, "column": 3})

        assert response.status_code == 409
        assert response.json()["error"] == "A slot already exists at this row and column"

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_row_then_column(self, test_client):
        await create_slot(test_client, row=1, column=0)
        await create_slot(test_client, row=0, column=1)
        await create_slot(test_client, row=0, column=0)

        response = await test_client.get("/api/vinyl-slots")

        cells = [(slot["row"], slot["column"]) for slot in response.json()["data"]]
        assert cells == [(0, 0), (0, 1), (1, 0)]

    @pytest.mark.asyncio
    async def test_slot_with_records_cannot_be_deleted(self, test_client):
        slot = await create_slot(test_client)
        await create_record(test_client, slot["id"])

        response = await test_client.delete(f"/api/vinyl-slots/{slot['id']}")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_empty_slot_can_be_deleted(self, test_client):
        slot = await create_slot(test_client)

        response = await test_client.delete(f"/api/vinyl-slots/{slot['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == slot["id"]


class TestVinylRecords:

    @pytest.mark.asyncio
    async def test_record_embeds_its_slot(self, test_client):
        slot = await create_slot(test_client, row=2, column=5)

        record = await create_record(test_client, slot["id"], position=4)

        assert record["slot"]["row"] == 2
        assert record["slot"]["column"] == 5
        assert record["positionInSlot"] == 4

    @pytest.mark.asyncio
    async def test_position_in_slot_is_unique(self, test_client):
        slot = await create_slot(test_client)
        await create_record(test_client, slot["id"], position=0)

        response = await test_client.post(
            "/api/vinyl-records",
            json={"title": "Blue Train", "artist": "John Coltrane", "slotId": slot["id"], "positionInSlot": 0},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_slot_is_404(self, test_client):
        response = await test_client.post(
            "/api/vinyl-records",
            json={"title": "Blue Train", "artist": "John Coltrane", "slotId": str(uuid.uuid4()), "positionInSlot": 0},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_artist_then_title(self, test_client):
        slot = await create_slot(test_client)
        await create_record(test_client, slot["id"], 0, artist="Nina Simone", title="Pastel Blues")
        await create_record(test_client, slot["id"], 1, artist="Miles Davis", title="Kind of Blue")
        await create_record(test_client, slot["id"], 2, artist="Miles Davis", title="Bitches Brew")

        response = await test_client.get("/api/vinyl-records")

        titles = [record["title"] for record in response.json()["data"]]
        assert titles == ["Bitches Brew", "Kind of Blue", "Pastel Blues"]


class TestDJSessions:

    @pytest.mark.asyncio
    async def test_no_live_session_is_404(self, test_client):
        response = await test_client.get("/api/djsessions")

        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_go_live_requires_login(self, test_client):
        response = await test_client.post("/api/djsessions", json={"name": "Friday"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_go_live_then_read_live_session(self, auth_client):
        created = await auth_client.post("/api/djsessions", json={"name": "Friday Night"})

        assert created.status_code == 201
        assert created.json()["data"]["status"] == "LIVE"
        assert created.json()["data"]["actualEndTime"] is None

        live = await auth_client.get("/api/djsessions")
        assert live.status_code == 200
        assert live.json()["data"]["id"] == created.json()["data"]["id"]
        assert live.json()["data"]["tracks"] == []

    @pytest.mark.asyncio
    async def test_second_live_session_is_conflict(self, auth_client):
        await auth_client.post("/api/djsessions", json={"name": "Early set"})

        response = await auth_client.post("/api/djsessions", json={"name": "Late set"})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_end_session_stamps_end_time(self, auth_client):
        created = await auth_client.post("/api/djsessions", json={"name": "Friday"})
        session_id = created.json()["data"]["id"]

        ended = await auth_client.patch(f"/api/djsessions/{session_id}/end")

        assert ended.status_code == 200
        assert ended.json()["data"]["status"] == "ENDED"
        assert ended.json()["data"]["actualEndTime"] is not None
        assert (await auth_client.get("/api/djsessions")).status_code == 404

        again = await auth_client.patch(f"/api/djsessions/{session_id}/end")
        assert again.status_code == 409

    @pytest.mark.asyncio
    async def test_add_track_to_live_session(self, auth_client):
        slot = await create_slot(auth_client)
        record = await create_record(auth_client, slot["id"])
        created = await auth_client.post("/api/djsessions", json={"name": "Friday"})
        session_id = created.json()["data"]["id"]

        response = await auth_client.post(
            "/api/djsessions/tracks",
            json={"sessionId": session_id, "vinylRecordId": record["id"]},
        )

        assert response.status_code == 201
        track = response.json()["data"]
        assert track["playedAt"]
        assert track["vinylRecord"]["title"] == "Kind of Blue"

        live = await auth_client.get("/api/djsessions")
        assert [t["id"] for t in live.json()["data"]["tracks"]] == [track["id"]]

    @pytest.mark.asyncio
    async def test_add_track_to_unknown_session_is_404(self, auth_client):
        slot = await create_slot(auth_client)
        record = await create_record(auth_client, slot["id"])

        response = await auth_client.post(
            "/api/djsessions/tracks",
            json={"sessionId": str(uuid.uuid4()), "vinylRecordId": record["id"]},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_add_unknown_record_is_404(self, auth_client):
        created = await auth_client.post("/api/djsessions", json={"name": "Friday"})

        response = await auth_client.post(
            "/api/djsessions/tracks",
            json={"sessionId": created.json()["data"]["id"], "vinylRecordId": str(uuid.uuid4())},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_played_record_cannot_be_deleted(self, auth_client):
        slot = await create_slot(auth_client)
        record = await create_record(auth_client, slot["id"])
        created = await auth_client.post("/api/djsessions", json={"name": "Friday"})
        await auth_client.post(
            "/api/djsessions/tracks",
            json={"sessionId": created.json()["data"]["id"], "vinylRecordId": record["id"]},
        )

        response = await auth_client.delete(f"/api/vinyl-records/{record['id']}")

        assert response.status_code == 409


class TestVinylLimits:

    @pytest.mark.asyncio
    async def test_huge_row_is_rejected(self, test_client):
        response = await test_client.post("/api/vinyl-slots", json={"row": 10**20, "column": 0})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "row"

    @pytest.mark.asyncio
    async def test_largest_row_is_accepted(self, test_client):
        slot = await create_slot(test_client, row=2**31 - 1)

        assert slot["row"] == 2**31 - 1

    @pytest.mark.asyncio
    async def test_huge_position_in_slot_is_rejected(self, test_client):
        slot = await create_slot(test_client)

        response = await test_client.post(
            "/api/vinyl-records",
            json={"title": "Blue Train", "artist": "John Coltrane", "slotId": slot["id"], "positionInSlot": 2**31},
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "positionInSlot"
