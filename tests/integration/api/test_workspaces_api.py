"""Integration tests for Workspaces API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.conftest import RegisterUser, make_admin


async def _create_workspace(client: AsyncClient, headers: dict, name: str = "Product") -> dict:
    response = await client.post(
        "/api/workspaces", json={"name": name, "description": "Roadmap"}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestWorkspaceCrud:
    @pytest.mark.asyncio
    async def test_create_makes_creator_admin(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")

        ws = await _create_workspace(client, ada["headers"])
        members = await client.get(f"/api/workspaces/{ws['id']}/members", headers=ada["headers"])

        assert ws["created_by"] == ada["user"]["id"]
        assert members.json()["data"][0]["user_id"] == ada["user"]["id"]
        assert members.json()["data"][0]["role"] == "admin"
        assert members.json()["data"][0]["email"] == ada["user"]["email"]

    @pytest.mark.asyncio
    async def test_list_only_own_workspaces(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        bob = await register_user(name="Bob")
        await _create_workspace(client, ada["headers"], "Ada's")
        await _create_workspace(client, bob["headers"], "Bob's")

        response = await client.get("/api/workspaces", headers=ada["headers"])

        assert [w["name"] for w in response.json()["data"]] == ["Ada's"]
        assert response.json()["meta"]["total"] == 1

    @pytest.mark.asyncio
    async def test_admin_lists_everything(
        self, client: AsyncClient, register_user: RegisterUser, database
    ) -> None:
        ada = await register_user(name="Ada")
        root = await register_user(name="Root")
        await make_admin(database, root["user"]["id"])
        await _create_workspace(client, ada["headers"])

        response = await client.get("/api/workspaces", headers=root["headers"])

        assert response.json()["meta"]["total"] == 1

    @pytest.mark.asyncio
    async def test_outsider_gets_403(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        bob = await register_user(name="Bob")
        ws = await _create_workspace(client, ada["headers"])

        response = await client.get(f"/api/workspaces/{ws['id']}", headers=bob["headers"])

        assert response.status_code == 403
        assert response.json()["error_code"] == "NOT_A_MEMBER"

    @pytest.mark.asyncio
    async def test_unknown_workspace(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")

        response = await client.get(f"/api/workspaces/{uuid4()}", headers=ada["headers"])

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_and_delete(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        ws = await _create_workspace(client, ada["headers"])

        updated = await client.put(
            f"/api/workspaces/{ws['id']}", json={"name": "Renamed"}, headers=ada["headers"]
        )
        deleted = await client.delete(f"/api/workspaces/{ws['id']}", headers=ada["headers"])
        missing = await client.get(f"/api/workspaces/{ws['id']}", headers=ada["headers"])

        assert updated.json()["data"]["name"] == "Renamed"
        assert updated.json()["data"]["description"] == "Roadmap"
        assert deleted.status_code == 204
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_cascades_to_boards(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        ws = await _create_workspace(client, ada["headers"])
        board = await client.post(
            "/api/boards", json={"title": "Sprint", "workspace_id": ws["id"]}, headers=ada["headers"]
        )

        await client.delete(f"/api/workspaces/{ws['id']}", headers=ada["headers"])
        response = await client.get(
            f"/api/boards/{board.json()['data']['id']}", headers=ada["headers"]
        )

        assert response.status_code == 404


class TestWorkspaceMembers:
    @pytest.mark.asyncio
    async def test_add_change_and_remove_member(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        bob = await register_user(name="Bob")
        ws = await _create_workspace(client, ada["headers"])
        base = f"/api/workspaces/{ws['id']}/members"

        added = await client.post(
            base, json={"user_id": bob["user"]["id"]}, headers=ada["headers"]
        )
        promoted = await client.put(
            f"{base}/{bob['user']['id']}", json={"role": "admin"}, headers=ada["headers"]
        )
        removed = await client.delete(f"{base}/{bob['user']['id']}", headers=ada["headers"])

        assert added.status_code == 201
        assert added.json()["role"] == "member"
        assert promoted.json()["role"] == "admin"
        assert removed.status_code == 204

    @pytest.mark.asyncio
    async def test_duplicate_member_conflicts(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        ws = await _create_workspace(client, ada["headers"])

        response = await client.post(
            f"/api/workspaces/{ws['id']}/members",
            json={"user_id": ada["user"]["id"]},
            headers=ada["headers"],
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_member_cannot_add_others(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        bob = await register_user(name="Bob")
        carol = await register_user(name="Carol")
        ws = await _create_workspace(client, ada["headers"])
        base = f"/api/workspaces/{ws['id']}/members"
        await client.post(base, json={"user_id": bob["user"]["id"]}, headers=ada["headers"])

        response = await client.post(
            base, json={"user_id": carol["user"]["id"]}, headers=bob["headers"]
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_creator_cannot_be_removed(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ada = await register_user(name="Ada")
        ws = await _create_workspace(client, ada["headers"])

        response = await client.delete(
            f"/api/workspaces/{ws['id']}/members/{ada['user']['id']}", headers=ada["headers"]
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "CANNOT_REMOVE_CREATOR"
