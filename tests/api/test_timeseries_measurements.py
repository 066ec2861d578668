"""
Test cases for measurement routes
"""
import uuid

from httpx import AsyncClient

from app.core.config import settings
from app.models import Instrument, Timeseries

API = settings.API_V1_STR
INTERNAL_HEADERS = {"X-API-Key": "test-internal-key"}


def window(after: str, before: str) -> dict:
    return {"after": after, "before": before}


async def test_read_measurements_window(client: AsyncClient, timeseries: Timeseries):
    response = await client.get(
        f"{API}/timeseries/{timeseries.id}/measurements",
        params=window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["timeseries_id"] == str(timeseries.id)
    assert data["items"] == [
        {"time": "2024-01-01T11:00:00Z", "value": 2.0},
        {"time": "2024-01-01T10:00:00Z", "value": 1.0},
    ]


async def test_read_measurements_bounds_are_exclusive(client: AsyncClient, timeseries: Timeseries):
    response = await client.get(
        f"{API}/timeseries/{timeseries.id}/measurements",
        params=window("2024-01-01T10:00:00Z", "2024-01-01T11:00:00Z"),
    )
    assert response.status_code == 200
    assert response.json()["items"] == []


async def test_read_measurements_default_window_is_recent(client: AsyncClient, timeseries: Timeseries):
    """Without bounds only the last week is returned; the seeded points are older"""
    response = await client.get(f"{API}/timeseries/{timeseries.id}/measurements")
    assert response.status_code == 200
    assert response.json()["items"] == []


async def test_read_measurements_inverted_window(client: AsyncClient, timeseries: Timeseries):
    response = await client.get(
        f"{API}/timeseries/{timeseries.id}/measurements",
        params=window("2024-01-02T00:00:00Z", "2024-01-01T00:00:00Z"),
    )
    assert response.status_code == 400


async def test_read_measurements_malformed_time(client: AsyncClient, timeseries: Timeseries):
    response = await client.get(
        f"{API}/timeseries/{timeseries.id}/measurements",
        params={"after": "yesterday"},
    )
    assert response.status_code == 400


async def test_upsert_measurements(client: AsyncClient, timeseries: Timeseries, member_headers: dict):
    payload = {
        "timeseries_id": str(timeseries.id),
        "items": [
            {"time": "2024-01-01T11:00:00Z", "value": 3.0},
            {"time": "2024-01-01T12:00:00Z", "value": 4.0},
        ],
    }
    response = await client.post(f"{API}/timeseries_measurements", json=payload, headers=member_headers)

    assert response.status_code == 201
    assert response.json()[0]["items"] == payload["items"]

    response = await client.get(
        f"{API}/timeseries/{timeseries.id}/measurements",
        params=window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"),
    )
    assert response.json()["items"] == [
        {"time": "2024-01-01T12:00:00Z", "value": 4.0},
        {"time": "2024-01-01T11:00:00Z", "value": 3.0},
        {"time": "2024-01-01T10:00:00Z", "value": 1.0},
    ]


async def test_upsert_measurements_requires_auth(client: AsyncClient, timeseries: Timeseries):
    response = await client.post(
        f"{API}/timeseries_measurements",
        json={"timeseries_id": str(timeseries.id), "items": []},
    )
    assert response.status_code == 401


async def test_upsert_measurements_auth_checked_before_body(client: AsyncClient):
    response = await client.post(f"{API}/timeseries_measurements", content=b"[{\"items\": 1}]")
    assert response.status_code == 401

    response = await client.post(f"{API}/internal/timeseries_measurements", content=b"[{\"items\": 1}]")
    assert response.status_code == 401
    assert response.json()["detail"] == "API key required"


async def test_upsert_measurements_unknown_timeseries(client: AsyncClient, timeseries: Timeseries, member_headers: dict):
    """The whole batch is rejected when any point cannot be stored"""
    timeseries_id = timeseries.id
    payload = [
        {"timeseries_id": str(timeseries_id), "items": [{"time": "2024-01-01T13:00:00Z", "value": 5.0}]},
        {"timeseries_id": str(uuid.uuid4()), "items": [{"time": "2024-01-01T13:00:00Z", "value": 5.0}]},
    ]
    response = await client.post(f"{API}/timeseries_measurements", json=payload, headers=member_headers)
    assert response.status_code == 400

    response = await client.get(
        f"{API}/timeseries/{timeseries_id}/measurements",
        params=window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"),
    )
    assert len(response.json()["items"]) == 2


async def test_internal_upsert_with_api_key(client: AsyncClient, timeseries: Timeseries):
    payload = [{"timeseries_id": str(timeseries.id), "items": [{"time": "2024-01-01T12:00:00Z", "value": 7.5}]}]
    response = await client.post(f"{API}/internal/timeseries_measurements", json=payload, headers=INTERNAL_HEADERS)
    assert response.status_code == 201
    assert response.json() == payload


async def test_internal_upsert_rejects_bad_key(client: AsyncClient, timeseries: Timeseries):
    payload = {"timeseries_id": str(timeseries.id), "items": []}
    response = await client.post(f"{API}/internal/timeseries_measurements", json=payload)
    assert response.status_code == 401
    assert response.json()["detail"] == "API key required"

    response = await client.post(
        f"{API}/internal/timeseries_measurements", json=payload, headers={"X-API-Key": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid API key"


async def test_delete_measurement(client: AsyncClient, timeseries: Timeseries, member_headers: dict):
    response = await client.delete(
        f"{API}/timeseries/{timeseries.id}/measurements",
        params={"time": "2024-01-01T10:00:00Z"},
        headers=member_headers,
    )
    assert response.status_code == 200

    response = await client.get(
        f"{API}/timeseries/{timeseries.id}/measurements",
        params=window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"),
    )
    assert response.json()["items"] == [{"time": "2024-01-01T11:00:00Z", "value": 2.0}]


async def test_computed_timeseries(client: AsyncClient, instrument: Instrument, timeseries: Timeseries):
    response = await client.get(
        f"{API}/instruments/{instrument.id}/computed_timeseries",
        params={**window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"), "interval": 86400},
    )
    assert response.status_code == 200
    assert response.json() == [
        {"timeseries_id": str(timeseries.id), "items": [{"time": "2024-01-01T00:00:00Z", "value": 1.5}]}
    ]


async def test_computed_timeseries_invalid_interval(client: AsyncClient, instrument: Instrument):
    response = await client.get(
        f"{API}/instruments/{instrument.id}/computed_timeseries",
        params={**window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"), "interval": 0},
    )
    assert response.status_code == 400


async def test_computed_timeseries_interval_too_wide(client: AsyncClient, instrument: Instrument):
    response = await client.get(
        f"{API}/instruments/{instrument.id}/computed_timeseries",
        params={**window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"), "interval": 10**18},
    )
    assert response.status_code == 400

    # One leap year is the widest accepted bucket
    response = await client.get(
        f"{API}/instruments/{instrument.id}/computed_timeseries",
        params={**window("2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"), "interval": 366 * 24 * 3600},
    )
    assert response.status_code == 200
