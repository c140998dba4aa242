"""Integration tests for board teams."""

import pytest
from httpx import AsyncClient

from tests.conftest import RegisterUser


async def _board(client: AsyncClient, headers: dict) -> dict:
    ws = await client.post("/api/workspaces", json={"name": "Product"}, headers=headers)
    board = await client.post(
        "/api/boards",
        json={"title": "Sprint", "workspace_id": ws.json()["data"]["id"]},
        headers=headers,
    )
    return board.json()["data"]


class TestBoardTeams:
    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client: AsyncClient, register_user: RegisterUser) -> None:
        ada = await register_user(name="Ada")
        board = await _board(client, ada["headers"])

        created = await client.post(
            "/api/teams", json={"board_id": board["id"]}, headers=ada["headers"]
        )
        fetched = await client.get(f"/api/teams/board/{board['id']}", headers=ada["headers"])

        assert created.status_code == 201
        assert created.json()["data"]["members"] == [ada["user"]["id"]]
        assert fetched.json()["data"]["id"] == created.json()["data"]["id"]

    @pytest.mark.asyncio
    async def test_one_team_per_board(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        board = await _board(client, ada["headers"])
        await client.post("/api/teams", json={"board_id": board["id"]}, headers=ada["headers"])

        response = await client.post(
            "/api/teams", json={"board_id": board["id"]}, headers=ada["headers"]
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_non_owner_cannot_create(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        bob = await register_user(name="Bob")
        board = await _board(client, ada["headers"])

        response = await client.post(
            "/api/teams", json={"board_id": board["id"]}, headers=bob["headers"]
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_add_and_remove_members(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        bob = await register_user(name="Bob")
        board = await _board(client, ada["headers"])
        team = await client.post(
            "/api/teams", json={"board_id": board["id"]}, headers=ada["headers"]
        )
        team_id = team.json()["data"]["id"]

        added = await client.post(
            f"/api/teams/{team_id}/add",
            json={"user_id": bob["user"]["id"]},
            headers=ada["headers"],
        )
        again = await client.post(
            f"/api/teams/{team_id}/add",
            json={"user_id": bob["user"]["id"]},
            headers=ada["headers"],
        )
        visible_to_bob = await client.get(f"/api/teams/board/{board['id']}", headers=bob["headers"])
        removed = await client.delete(
            f"/api/teams/{team_id}/remove/{bob['user']['id']}", headers=ada["headers"]
        )
        hidden_from_bob = await client.get(
            f"/api/teams/board/{board['id']}", headers=bob["headers"]
        )

        assert bob["user"]["id"] in added.json()["data"]["members"]
        assert again.status_code == 400
        assert visible_to_bob.status_code == 200
        assert removed.status_code == 204
        assert hidden_from_bob.status_code == 403

    @pytest.mark.asyncio
    async def test_missing_team(self, client: AsyncClient, register_user: RegisterUser) -> None:
        ada = await register_user(name="Ada")
        board = await _board(client, ada["headers"])

        response = await client.get(f"/api/teams/board/{board['id']}", headers=ada["headers"])

        assert response.status_code == 404
