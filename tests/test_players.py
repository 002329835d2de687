import pytest

from app.services.player_service import StoreError, count_players


@pytest.mark.asyncio
async def test_hello_returns_plain_text(app_client):
    response = await app_client.get("/hello")
    assert response.status_code == 200
    assert response.text == "Hello World"
    assert response.headers["content-type"].startswith("text/plain")


@pytest.mark.asyncio
async def test_list_players_matches_store_count(app_client, db_session, seeded_players):
    response = await app_client.get("/player")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"

    body = response.json()
    assert isinstance(body, list)
    assert len(body) == await count_players(db_session) == len(seeded_players)
    assert {p["name"] for p in body} == {p.name for p in seeded_players}


@pytest.mark.asyncio
async def test_list_players_hides_source_slug(app_client, seeded_players):
    response = await app_client.get("/player")
    for player in response.json():
        assert "source_slug" not in player
        assert set(player) >= {"id", "name", "team", "position", "points"}


@pytest.mark.asyncio
async def test_list_players_empty_store_returns_empty_array(app_client):
    response = await app_client.get("/player")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_player_by_id_for_every_stored_id(app_client, seeded_players):
    listing = (await app_client.get("/player")).json()
    for player in listing:
        response = await app_client.get(f"/player/{player['id']}")
        assert response.status_code == 200
        assert response.json() == player


@pytest.mark.asyncio
async def test_get_player_by_id_is_byte_identical_across_calls(app_client, seeded_players):
    player_id = (await app_client.get("/player")).json()[0]["id"]
    first = await app_client.get(f"/player/{player_id}")
    second = await app_client.get(f"/player/{player_id}")
    assert first.content == second.content


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["abc", "1.5", "-1", "+5", "12abc"])
async def test_get_player_invalid_id_returns_400(app_client, seeded_players, bad_id):
    response = await app_client.get(f"/player/{bad_id}")
    assert response.status_code == 400
    assert response.content == b""


@pytest.mark.asyncio
async def test_get_missing_player_returns_500(app_client, seeded_players):
    response = await app_client.get("/player/999999")
    assert response.status_code == 500
    assert response.content == b""


@pytest.mark.asyncio
@pytest.mark.parametrize("big_id", ["9" * 30, "9223372036854775808", "1" * 5000])
async def test_get_player_with_out_of_range_id_returns_400(app_client, seeded_players, big_id):
    response = await app_client.get(f"/player/{big_id}")
    assert response.status_code == 400
    assert response.content == b""


@pytest.mark.asyncio
async def test_get_player_at_max_id_is_not_found(app_client, seeded_players):
    response = await app_client.get("/player/9223372036854775807")
    assert response.status_code == 500


@pytest.mark.asyncio
async def test_random_player_is_member_of_listing(app_client, seeded_players):
    ids = {p["id"] for p in (await app_client.get("/player")).json()}
    for _ in range(10):
        response = await app_client.get("/random")
        assert response.status_code == 200
        assert response.json()["id"] in ids


@pytest.mark.asyncio
async def test_random_player_on_empty_store_returns_500(app_client):
    response = await app_client.get("/random")
    assert response.status_code == 500


@pytest.mark.asyncio
async def test_store_error_on_list_returns_bare_500(app_client, monkeypatch):
    from app.routes import players as players_routes

    async def _boom(db):
        raise StoreError("connection refused")

    monkeypatch.setattr(players_routes, "get_all_players", _boom)
    response = await app_client.get("/player")
    assert response.status_code == 500
    assert b"connection refused" not in response.content
