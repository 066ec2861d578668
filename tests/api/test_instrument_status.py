"""
Test cases for instrument status routes
"""
import uuid

from httpx import AsyncClient

from app.core.config import settings
from app.models import Instrument

API = settings.API_V1_STR


async def test_record_and_overwrite_status(
    client: AsyncClient, instrument: Instrument, statuses: dict, member_headers: dict
):
    url = f"{API}/instruments/{instrument.id}/status"
    response = await client.post(
        url,
        json=[
            {"status_id": str(statuses["active"].id), "time": "2024-01-01T00:00:00Z"},
            {"status_id": str(statuses["active"].id), "time": "2024-06-01T00:00:00Z"},
        ],
        headers=member_headers,
    )
    assert response.status_code == 201
    assert response.json() == {}

    # Same time again replaces the status
    response = await client.post(
        url,
        json={"status_id": str(statuses["inactive"].id), "time": "2024-06-01T00:00:00Z"},
        headers=member_headers,
    )
    assert response.status_code == 201

    response = await client.get(url)
    assert response.status_code == 200
    history = response.json()
    assert [s["status"] for s in history] == ["inactive", "active"]
    assert history[0]["time"] == "2024-06-01T00:00:00Z"

    response = await client.get(f"{url}/{history[0]['id']}")
    assert response.status_code == 200
    assert response.json()["status_id"] == str(statuses["inactive"].id)


async def test_status_for_unknown_instrument(client: AsyncClient, statuses: dict, member_headers: dict):
    response = await client.post(
        f"{API}/instruments/{uuid.uuid4()}/status",
        json={"status_id": str(statuses["active"].id), "time": "2024-01-01T00:00:00Z"},
        headers=member_headers,
    )
    assert response.status_code == 404


async def test_delete_status(client: AsyncClient, instrument: Instrument, statuses: dict, member_headers: dict):
    url = f"{API}/instruments/{instrument.id}/status"
    await client.post(
        url,
        json={"status_id": str(statuses["active"].id), "time": "2024-01-01T00:00:00Z"},
        headers=member_headers,
    )
    status_id = (await client.get(url)).json()[0]["id"]

    response = await client.delete(f"{url}/{status_id}", headers=member_headers)
    assert response.status_code == 200

    response = await client.get(f"{url}/{status_id}")
    assert response.status_code == 404
    response = await client.get(url)
    assert response.json() == []
