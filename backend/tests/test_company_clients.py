"""
Acaia Club Backend — Company Client Endpoint Tests
===================================================

What:  Tests for /api/company-clients and its sales-stage action.

What we test:
    ✅ Defaults on create (stage LEAD, consumption factor 1.00)
    ✅ Company name and contact phone are unique
    ✅ The sales-stage action changes only the stage
    ✅ Login required for every route
"""

import uuid

import pytest


async def create_client(client, **fields) -> dict:
    body = {"companyName": "Globex", "contactPhone": "+55 11 5555-0100"}
    body.update(fields)
    response = await client.post("/api/company-clients", json=body)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCompanyClients:

    @pytest.mark.asyncio
    async def test_requires_login(self, test_client):
        response = await test_client.get("/api/company-clients")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_applies_defaults(self, auth_client):
        created = await create_client(auth_client)

        assert created["salesPipelineStage"] == "LEAD"
        assert created["consumptionFactor"] == "1.00"
        assert created["employeeCount"] is None

    @pytest.mark.asyncio
    async def test_duplicate_company_name_is_conflict(self, auth_client):
        await create_client(auth_client)

        response = await auth_client.post(
            "/api/company-clients",
            json={"companyName": "Globex", "contactPhone": "+55 11 5555-0199"},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_duplicate_phone_is_conflict(self, auth_client):
        await create_client(auth_client)

        response = await auth_client.post(
            "/api/company-clients",
            json={"companyName": "Initech", "contactPhone": "+55 11 5555-0100"},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_contact_phone_is_required(self, auth_client):
        response = await auth_client.post("/api/company-clients", json={"companyName": "Initech"})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "contactPhone"

    @pytest.mark.asyncio
    async def test_sales_stage_update(self, auth_client):
        created = await create_client(auth_client, notes="Met at the fair")

        response = await auth_client.patch(
            f"/api/company-clients/{created['id']}/sales-stage",
            json={"salesPipelineStage": "PROPOSAL"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["salesPipelineStage"] == "PROPOSAL"
        assert data["notes"] == "Met at the fair"
        assert data["companyName"] == "Globex"

    @pytest.mark.asyncio
    async def test_sales_stage_on_unknown_client_is_404(self, auth_client):
        response = await auth_client.patch(
            f"/api/company-clients/{uuid.uuid4()}/sales-stage",
            json={"salesPipelineStage": "WON"},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_is_ordered_by_company_name(self, auth_client):
        await create_client(auth_client, companyName="Umbrella", contactPhone="1")
        await create_client(auth_client, companyName="Acme", contactPhone="2")

        response = await auth_client.get("/api/company-clients")

        names = [c["companyName"] for c in response.json()["data"]]
        assert names == ["Acme", "Umbrella"]

    @pytest.mark.asyncio
    async def test_delete(self, auth_client):
        created = await create_client(auth_client)

        response = await auth_client.delete(f"/api/company-clients/{created['id']}")

        assert response.status_code == 200
        assert (
            await auth_client.get(f"/api/company-clients/{created['id']}")
        ).status_code == 404

    @pytest.mark.asyncio
    async def test_update_unknown_client_is_404(self, auth_client):
        response = await auth_client.patch(
            f"/api/company-clients/{uuid.uuid4()}", json={"notes": "call back"}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_consumption_factor_precision_is_enforced(self, auth_client):
        response = await auth_client.post(
            "/api/company-clients",
            json={"companyName": "Initech", "contactPhone": "+55 11 5555-0199", "consumptionFactor": "1.125"},
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "consumptionFactor"
