"""Integration tests for the /records endpoints."""

import pytest
from httpx import AsyncClient

from anime_api.models import Anime
from tests.seeds import ADMIN_AUTH, USER_AUTH

DOMAIN_DEVELOPER_MESSAGE = "A ResponseStatusException Happened"


@pytest.mark.asyncio
async def test_list_returns_all_animes(client: AsyncClient, seeded_animes: list[Anime]) -> None:
    resp = await client.get("/records", auth=USER_AUTH)
    assert resp.status_code == 200
    body = resp.json()
    assert [item["name"] for item in body] == [anime.name for anime in seeded_animes]
    assert all(isinstance(item["id"], int) for item in body)


@pytest.mark.asyncio
async def test_list_empty_store_returns_empty_array(client: AsyncClient, users: None) -> None:
    resp = await client.get("/records", auth=USER_AUTH)
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_find_by_id_returns_anime(client: AsyncClient, seeded_animes: list[Anime]) -> None:
    anime = seeded_animes[1]
    resp = await client.get(f"/records/{anime.id}", auth=USER_AUTH)
    assert resp.status_code == 200
    assert resp.json() == {"id": anime.id, "name": anime.name}


@pytest.mark.asyncio
async def test_find_by_id_missing_returns_404(client: AsyncClient, users: None) -> None:
    resp = await client.get("/records/999", auth=USER_AUTH)
    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == 404
    assert body["error"] == "Not Found"
    assert body["message"] == "Anime not found"
    assert body["developerMessage"] == DOMAIN_DEVELOPER_MESSAGE
    assert body["path"] == "/records/999"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_create_then_fetch_round_trip(client: AsyncClient, users: None) -> None:
    resp = await client.post("/records", json={"name": "X"}, auth=ADMIN_AUTH)
    assert resp.status_code == 201
    created = resp.json()
    assert isinstance(created["id"], int)
    assert created["name"] == "X"

    resp = await client.get(f"/records/{created['id']}", auth=USER_AUTH)
    assert resp.status_code == 200
    assert resp.json()["name"] == "X"


@pytest.mark.asyncio
async def test_create_ignores_client_supplied_id(client: AsyncClient, seeded_animes: list[Anime]) -> None:
    taken_id = seeded_animes[0].id
    resp = await client.post("/records", json={"id": taken_id, "name": "Dororo"}, auth=ADMIN_AUTH)
    assert resp.status_code == 201
    assert resp.json()["id"] != taken_id

    resp = await client.get(f"/records/{taken_id}", auth=USER_AUTH)
    assert resp.json()["name"] == seeded_animes[0].name


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "], ids=["empty", "blank"])
async def test_create_with_empty_name_returns_400(
    client: AsyncClient, users: None, name: str
) -> None:
    resp = await client.post("/records", json={"name": name}, auth=ADMIN_AUTH)
    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == 400
    assert body["message"] == "Invalid Name"
    assert body["developerMessage"] == DOMAIN_DEVELOPER_MESSAGE

    resp = await client.get("/records", auth=USER_AUTH)
    assert resp.json() == []


@pytest.mark.asyncio
async def test_batch_creates_all_in_order(client: AsyncClient, users: None) -> None:
    resp = await client.post(
        "/records/batch", json=[{"name": "Mob Psycho 100"}, {"name": "Haikyuu"}], auth=ADMIN_AUTH
    )
    assert resp.status_code == 201
    body = resp.json()
    assert [item["name"] for item in body] == ["Mob Psycho 100", "Haikyuu"]
    assert body[0]["id"] != body[1]["id"]


@pytest.mark.asyncio
async def test_batch_with_one_empty_name_persists_nothing(client: AsyncClient, users: None) -> None:
    resp = await client.post("/records/batch", json=[{"name": "A"}, {"name": ""}], auth=ADMIN_AUTH)
    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == 400
    assert body["message"] == "Invalid Name"

    resp = await client.get("/records", auth=USER_AUTH)
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_update_replaces_name(client: AsyncClient, seeded_animes: list[Anime]) -> None:
    anime = seeded_animes[0]
    resp = await client.put(
        f"/records/{anime.id}", json={"name": "Tensei Shitara Slime Datta Ken 2"}, auth=ADMIN_AUTH
    )
    assert resp.status_code == 204
    assert resp.content == b""

    resp = await client.get(f"/records/{anime.id}", auth=USER_AUTH)
    assert resp.json()["name"] == "Tensei Shitara Slime Datta Ken 2"


@pytest.mark.asyncio
async def test_update_missing_returns_404(client: AsyncClient, users: None) -> None:
    resp = await client.put("/records/999", json={"name": "Anything"}, auth=ADMIN_AUTH)
    assert resp.status_code == 404
    body = resp.json()
    assert body["message"] == "Anime not found"
    assert body["developerMessage"] == DOMAIN_DEVELOPER_MESSAGE


@pytest.mark.asyncio
async def test_update_with_empty_name_returns_400(
    client: AsyncClient, seeded_animes: list[Anime]
) -> None:
    anime = seeded_animes[0]
    resp = await client.put(f"/records/{anime.id}", json={"name": ""}, auth=ADMIN_AUTH)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid Name"

    resp = await client.get(f"/records/{anime.id}", auth=USER_AUTH)
    assert resp.json()["name"] == anime.name


@pytest.mark.asyncio
async def test_delete_removes_anime(client: AsyncClient, seeded_animes: list[Anime]) -> None:
    anime = seeded_animes[2]
    resp = await client.delete(f"/records/{anime.id}", auth=ADMIN_AUTH)
    assert resp.status_code == 204
    assert resp.content == b""

    resp = await client.get(f"/records/{anime.id}", auth=USER_AUTH)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_returns_404(client: AsyncClient, users: None) -> None:
    resp = await client.delete("/records/999", auth=ADMIN_AUTH)
    assert resp.status_code == 404
    body = resp.json()
    assert body["status"] == 404
    assert body["message"] == "Anime not found"
    assert body["developerMessage"] == DOMAIN_DEVELOPER_MESSAGE
