"""Integration tests for donation campaigns and allocations."""

import uuid

import pytest

from tests.conftest import donation_payload

pytestmark = pytest.mark.asyncio


async def _create_donation(client, **overrides) -> dict:
    resp = await client.post("/api/v1/donations", json=donation_payload(**overrides))
    assert resp.status_code == 201
    return resp.json()


async def _allocate(client, donation_id: str, *items: dict):
    return await client.post(f"/api/v1/donations/{donation_id}/allocations", json=list(items))


class TestDonations:
    async def test_create_starts_at_zero(self, operator_client):
        donation = await _create_donation(operator_client)
        assert donation["collected_amount"] == 0
        assert donation["percent"] == 0
        assert donation["allocations"] == []
        assert donation["google_form_url"] == "https://forms.gle/example"

    async def test_collected_amount_in_create_ignored(self, operator_client):
        donation = await _create_donation(operator_client, collected_amount=5_000_000)
        assert donation["collected_amount"] == 0

    async def test_create_requires_staff(self, client):
        resp = await client.post("/api/v1/donations", json=donation_payload())
        assert resp.status_code == 401

    async def test_validation(self, operator_client):
        resp = await operator_client.post(
            "/api/v1/donations", json=donation_payload(target_amount=0)
        )
        assert resp.status_code == 422

    async def test_update_recomputes_percent(self, operator_client):
        donation = await _create_donation(operator_client)

        resp = await operator_client.put(
            f"/api/v1/donations/{donation['id']}",
            json={"collected_amount": 2_500_000, "donor_count": 12},
        )
        assert resp.status_code == 200
        assert resp.json()["percent"] == 25
        assert resp.json()["donor_count"] == 12

        resp = await operator_client.put(
            f"/api/v1/donations/{donation['id']}", json={"target_amount": 5_000_000}
        )
        assert resp.json()["percent"] == 50

    async def test_partial_date_update_checked_against_stored_dates(self, operator_client):
        donation = await _create_donation(operator_client)
        url = f"/api/v1/donations/{donation['id']}"

        resp = await operator_client.put(url, json={"start_date": "2026-01-01"})
        assert resp.status_code == 422
        assert "start_date" in resp.json()["detail"]

        resp = await operator_client.put(url, json={"end_date": "2024-12-31"})
        assert resp.status_code == 422

        resp = await operator_client.get(url)
        assert resp.json()["start_date"] == "2025-01-01"
        assert resp.json()["end_date"] == "2025-03-01"

        resp = await operator_client.put(url, json={"end_date": "2025-01-01"})
        assert resp.status_code == 200

    async def test_public_read_and_filter(self, operator_client, client):
        donation = await _create_donation(operator_client)
        operator_client.headers.pop("Authorization")

        resp = await client.get(f"/api/v1/donations/{donation['id']}")
        assert resp.status_code == 200

        resp = await client.get("/api/v1/donations", params={"status": "finished"})
        assert resp.json()["total"] == 0

    async def test_unknown_donation(self, client):
        assert (await client.get(f"/api/v1/donations/{uuid.uuid4()}")).status_code == 404

    async def test_delete_removes_allocations(self, operator_client):
        donation = await _create_donation(operator_client)
        created = (
            await _allocate(operator_client, donation["id"], {"title": "Semen", "amount": 1000})
        ).json()

        resp = await operator_client.delete(f"/api/v1/donations/{donation['id']}")
        assert resp.status_code == 204

        resp = await operator_client.get(
            f"/api/v1/donations/{donation['id']}/allocations/{created[0]['id']}"
        )
        assert resp.status_code == 404


class TestAllocations:
    async def test_bulk_create_with_explicit_percent(self, operator_client):
        donation = await _create_donation(operator_client)

        resp = await _allocate(
            operator_client,
            donation["id"],
            {"title": "Material Bangunan", "amount": 1_500_000, "percent": 60},
            {"title": "Upah Tukang", "amount": 1_000_000, "percent": 40},
        )
        assert resp.status_code == 201
        assert [a["percent"] for a in resp.json()] == [60, 40]

        resp = await operator_client.get(f"/api/v1/donations/{donation['id']}")
        assert [a["title"] for a in resp.json()["allocations"]] == [
            "Material Bangunan",
            "Upah Tukang",
        ]

    async def test_percent_derived_from_target(self, operator_client):
        donation = await _create_donation(operator_client, target_amount=1_000)

        resp = await _allocate(operator_client, donation["id"], {"title": "Semen", "amount": 125})
        assert resp.json()[0]["percent"] == 13

    async def test_total_over_hundred_rejected(self, operator_client):
        donation = await _create_donation(operator_client)
        await _allocate(
            operator_client, donation["id"], {"title": "A", "amount": 1, "percent": 70}
        )

        resp = await _allocate(
            operator_client, donation["id"], {"title": "B", "amount": 1, "percent": 31}
        )
        assert resp.status_code == 422
        assert "100%" in resp.json()["detail"]

        resp = await operator_client.get(f"/api/v1/donations/{donation['id']}/allocations")
        assert resp.json()["total"] == 1

    async def test_exactly_hundred_allowed(self, operator_client):
        donation = await _create_donation(operator_client)
        resp = await _allocate(
            operator_client,
            donation["id"],
            {"title": "A", "amount": 1, "percent": 70},
            {"title": "B", "amount": 1, "percent": 30},
        )
        assert resp.status_code == 201

    async def test_unknown_donation(self, operator_client):
        resp = await _allocate(operator_client, str(uuid.uuid4()), {"title": "A", "amount": 1})
        assert resp.status_code == 404

    async def test_list_requires_staff(self, client, operator_client):
        donation = await _create_donation(operator_client)
        operator_client.headers.pop("Authorization")

        resp = await client.get(f"/api/v1/donations/{donation['id']}/allocations")
        assert resp.status_code == 401

    async def test_single_allocation_is_public(self, operator_client, client):
        donation = await _create_donation(operator_client)
        [allocation] = (
            await _allocate(operator_client, donation["id"], {"title": "A", "amount": 1})
        ).json()
        operator_client.headers.pop("Authorization")

        url = f"/api/v1/donations/{donation['id']}/allocations/{allocation['id']}"
        resp = await client.get(url)
        assert resp.status_code == 200
        assert resp.json()["title"] == "A"

    async def test_allocation_of_other_donation_not_found(self, operator_client):
        first = await _create_donation(operator_client)
        second = await _create_donation(operator_client, title="Donasi Buku")
        [allocation] = (
            await _allocate(operator_client, first["id"], {"title": "A", "amount": 1})
        ).json()

        resp = await operator_client.get(
            f"/api/v1/donations/{second['id']}/allocations/{allocation['id']}"
        )
        assert resp.status_code == 404

    async def test_update_amount_rederives_percent(self, operator_client):
        donation = await _create_donation(operator_client, target_amount=1_000)
        [allocation] = (
            await _allocate(operator_client, donation["id"], {"title": "A", "amount": 100})
        ).json()

        resp = await operator_client.put(
            f"/api/v1/donations/{donation['id']}/allocations/{allocation['id']}",
            json={"amount": 455},
        )
        assert resp.status_code == 200
        assert resp.json()["percent"] == 46

    async def test_update_respects_limit_excluding_itself(self, operator_client):
        donation = await _create_donation(operator_client)
        first, second = (
            await _allocate(
                operator_client,
                donation["id"],
                {"title": "A", "amount": 1, "percent": 50},
                {"title": "B", "amount": 1, "percent": 50},
            )
        ).json()
        url = f"/api/v1/donations/{donation['id']}/allocations"

        resp = await operator_client.put(f"{url}/{first['id']}", json={"percent": 50})
        assert resp.status_code == 200

        resp = await operator_client.put(f"{url}/{second['id']}", json={"percent": 51})
        assert resp.status_code == 422

    async def test_delete_allocation(self, operator_client):
        donation = await _create_donation(operator_client)
        [allocation] = (
            await _allocate(operator_client, donation["id"], {"title": "A", "amount": 1})
        ).json()
        url = f"/api/v1/donations/{donation['id']}/allocations/{allocation['id']}"

        assert (await operator_client.delete(url)).status_code == 204
        assert (await operator_client.delete(url)).status_code == 404
