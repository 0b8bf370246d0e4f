"""Integration tests for announcements."""

import uuid

import pytest

pytestmark = pytest.mark.asyncio


async def _create(client, **overrides):
    payload = {"title": "Libur Nasional", "category": "libur", "content": "Sekolah libur."}
    payload.update(overrides)
    return await client.post("/api/v1/announcements", json=payload)


class TestAnnouncements:
    async def test_public_list_empty(self, client):
        resp = await client.get("/api/v1/announcements")
        assert resp.status_code == 200
        assert resp.json()["items"] == []

    async def test_create_requires_staff(self, client):
        assert (await _create(client)).status_code == 401

    async def test_create_and_read(self, operator_client):
        resp = await _create(operator_client)
        assert resp.status_code == 201
        announcement_id = resp.json()["id"]

        resp = await operator_client.get(f"/api/v1/announcements/{announcement_id}")
        assert resp.status_code == 200
        assert resp.json()["category"] == "libur"

    async def test_unknown_category(self, operator_client):
        assert (await _create(operator_client, category="promo")).status_code == 422

    async def test_newest_first_and_filters(self, operator_client):
        await _create(operator_client, title="Jadwal Baru", category="jadwal")
        await _create(operator_client, title="Event Parenting", category="event")

        resp = await operator_client.get("/api/v1/announcements")
        assert [a["title"] for a in resp.json()["items"]] == ["Event Parenting", "Jadwal Baru"]

        resp = await operator_client.get("/api/v1/announcements", params={"category": "jadwal"})
        assert [a["title"] for a in resp.json()["items"]] == ["Jadwal Baru"]

        resp = await operator_client.get(
            "/api/v1/announcements", params={"title__ilike": "parenting"}
        )
        assert resp.json()["total"] == 1

    async def test_update_and_delete(self, operator_client):
        announcement_id = (await _create(operator_client)).json()["id"]

        resp = await operator_client.put(
            f"/api/v1/announcements/{announcement_id}", json={"content": "Libur tiga hari."}
        )
        assert resp.status_code == 200
        assert resp.json()["content"] == "Libur tiga hari."
        assert resp.json()["title"] == "Libur Nasional"

        resp = await operator_client.delete(f"/api/v1/announcements/{announcement_id}")
        assert resp.status_code == 204
        resp = await operator_client.get(f"/api/v1/announcements/{announcement_id}")
        assert resp.status_code == 404

    async def test_update_unknown(self, operator_client):
        resp = await operator_client.put(
            f"/api/v1/announcements/{uuid.uuid4()}", json={"title": "X"}
        )
        assert resp.status_code == 404
