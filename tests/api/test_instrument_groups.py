"""
Test cases for instrument group routes
"""
import uuid

from httpx import AsyncClient

from app.core.config import settings
from app.models import Instrument, Project

GROUPS_URL = f"{settings.API_V1_STR}/instrument_groups"


async def create_group(client: AsyncClient, headers: dict, project: Project, name: str = "Left Abutment") -> dict:
    response = await client.post(
        GROUPS_URL,
        json={"name": name, "description": "Piezometers on the left abutment", "project_id": str(project.id)},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()[0]


async def test_create_and_get_group(client: AsyncClient, project: Project, member_headers: dict):
    group = await create_group(client, member_headers, project)
    assert group["slug"] == "left-abutment"
    assert group["instrument_count"] == 0

    response = await client.get(f"{GROUPS_URL}/{group['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Left Abutment"

    response = await client.get(GROUPS_URL)
    assert [g["id"] for g in response.json()] == [group["id"]]

    response = await client.get(f"{settings.API_V1_STR}/projects/{project.id}/instrument_groups")
    assert [g["id"] for g in response.json()] == [group["id"]]


async def test_create_groups_from_array(client: AsyncClient, member_headers: dict):
    response = await client.post(
        GROUPS_URL, json=[{"name": "Crest"}, {"name": "Toe"}], headers=member_headers
    )
    assert response.status_code == 201
    assert [g["slug"] for g in response.json()] == ["crest", "toe"]


async def test_group_membership_and_counts(
    client: AsyncClient, project: Project, instrument: Instrument, member_headers: dict
):
    group = await create_group(client, member_headers, project)
    member_url = f"{GROUPS_URL}/{group['id']}/instruments/{instrument.id}"

    # Adding twice keeps one membership
    for _ in range(2):
        response = await client.post(member_url, headers=member_headers)
        assert response.status_code == 200

    response = await client.get(f"{GROUPS_URL}/{group['id']}/instruments")
    assert [i["id"] for i in response.json()] == [str(instrument.id)]

    response = await client.get(f"{GROUPS_URL}/{group['id']}")
    assert response.json()["instrument_count"] == 1
    assert response.json()["timeseries_count"] == 1

    response = await client.delete(member_url, headers=member_headers)
    assert response.status_code == 200
    response = await client.get(f"{GROUPS_URL}/{group['id']}/instruments")
    assert response.json() == []


async def test_add_unknown_instrument_to_group(client: AsyncClient, project: Project, member_headers: dict):
    group = await create_group(client, member_headers, project)
    response = await client.post(f"{GROUPS_URL}/{group['id']}/instruments/{uuid.uuid4()}", headers=member_headers)
    assert response.status_code == 404


async def test_update_group(client: AsyncClient, project: Project, member_headers: dict):
    group = await create_group(client, member_headers, project)
    response = await client.put(
        f"{GROUPS_URL}/{group['id']}",
        json={"id": group["id"], "name": "Right Abutment", "project_id": str(project.id)},
        headers=member_headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Right Abutment"
    assert response.json()["description"] is None


async def test_update_group_id_mismatch(client: AsyncClient, project: Project, member_headers: dict):
    group = await create_group(client, member_headers, project)
    response = await client.put(
        f"{GROUPS_URL}/{group['id']}",
        json={"id": str(uuid.uuid4()), "name": "Mismatch"},
        headers=member_headers,
    )
    assert response.status_code == 400


async def test_delete_group_is_soft(client: AsyncClient, project: Project, member_headers: dict):
    group = await create_group(client, member_headers, project)
    response = await client.delete(f"{GROUPS_URL}/{group['id']}", headers=member_headers)
    assert response.status_code == 200

    response = await client.get(f"{GROUPS_URL}/{group['id']}")
    assert response.status_code == 404
    response = await client.get(GROUPS_URL)
    assert response.json() == []
