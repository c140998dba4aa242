"""Integration tests for Tasks API."""

import pytest
from httpx import AsyncClient

from tests.conftest import RegisterUser


async def _setup(client: AsyncClient, register_user: RegisterUser) -> dict:
    """Ada owns a workspace with two boards; Bob is a plain member."""
    ada = await register_user(name="Ada")
    bob = await register_user(name="Bob")
    ws = await client.post("/api/workspaces", json={"name": "Product"}, headers=ada["headers"])
    ws_id = ws.json()["data"]["id"]
    await client.post(
        f"/api/workspaces/{ws_id}/members",
        json={"user_id": bob["user"]["id"]},
        headers=ada["headers"],
    )
    boards = []
    for title in ("Sprint", "Backlog"):
        created = await client.post(
            "/api/boards", json={"title": title, "workspace_id": ws_id}, headers=ada["headers"]
        )
        boards.append(created.json()["data"])
    return {"ada": ada, "bob": bob, "workspace_id": ws_id, "boards": boards}


async def _create_task(client: AsyncClient, headers: dict, board_id: str, **fields) -> dict:
    data = {"title": "Write docs", "board": board_id, **fields}
    response = await client.post("/api/tasks", data=data, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateTask:
    @pytest.mark.asyncio
    async def test_defaults_and_positions(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ctx = await _setup(client, register_user)
        board_id = ctx["boards"][0]["id"]

        first = await _create_task(client, ctx["bob"]["headers"], board_id)
        second = await _create_task(client, ctx["bob"]["headers"], board_id, status="doing")

        assert first["status"] == "todo"
        assert first["created_by"] == ctx["bob"]["user"]["id"]
        assert second["status"] == "doing"
        assert second["position"] > first["position"]

    @pytest.mark.asyncio
    async def test_with_attachment(self, client: AsyncClient, register_user: RegisterUser) -> None:
        ctx = await _setup(client, register_user)

        response = await client.post(
            "/api/tasks",
            data={"title": "Spec review", "board": ctx["boards"][0]["id"]},
            files={"attachment": ("notes.txt", b"hello", "text/plain")},
            headers=ctx["ada"]["headers"],
        )

        assert response.status_code == 201
        assert response.json()["data"]["attachment"].startswith("/uploads/")
        assert response.json()["data"]["attachment"].endswith("-notes.txt")

    @pytest.mark.asyncio
    async def test_assignees_in_both_field_styles(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ctx = await _setup(client, register_user)
        ada_id, bob_id = ctx["ada"]["user"]["id"], ctx["bob"]["user"]["id"]

        task = await _create_task(
            client,
            ctx["ada"]["headers"],
            ctx["boards"][0]["id"],
            assigned_to=[ada_id],
            **{"assignedTo[]": [bob_id]},
        )

        assert task["assigned_to"] == [ada_id, bob_id]

    @pytest.mark.asyncio
    async def test_outsider_assignee_rejected(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ctx = await _setup(client, register_user)
        eve = await register_user(name="Eve")

        response = await client.post(
            "/api/tasks",
            data={
                "title": "x",
                "board": ctx["boards"][0]["id"],
                "assigned_to": [eve["user"]["id"]],
            },
            headers=ctx["ada"]["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_MEMBERS"

    @pytest.mark.asyncio
    async def test_title_required(self, client: AsyncClient, register_user: RegisterUser) -> None:
        ctx = await _setup(client, register_user)

        response = await client.post(
            "/api/tasks", data={"board": ctx["boards"][0]["id"]}, headers=ctx["ada"]["headers"]
        )

        assert response.status_code == 400


class TestUpdateTask:
    @pytest.mark.asyncio
    async def test_member_can_move_but_not_edit(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ctx = await _setup(client, register_user)
        sprint, backlog = ctx["boards"]
        task = await _create_task(client, ctx["ada"]["headers"], sprint["id"])
        url = f"/api/tasks/{task['id']}"

        edit = await client.put(
            url, data={"title": "Mine now", "board": backlog["id"]}, headers=ctx["bob"]["headers"]
        )
        move = await client.put(url, data={"board": backlog["id"]}, headers=ctx["bob"]["headers"])

        assert edit.status_code == 403
        assert move.status_code == 200
        assert move.json()["data"]["board_id"] == backlog["id"]
        assert move.json()["data"]["title"] == "Write docs"

    @pytest.mark.asyncio
    async def test_creator_edits(self, client: AsyncClient, register_user: RegisterUser) -> None:
        ctx = await _setup(client, register_user)
        task = await _create_task(client, ctx["bob"]["headers"], ctx["boards"][0]["id"])

        response = await client.put(
            f"/api/tasks/{task['id']}",
            data={"title": "Renamed", "description": "More detail"},
            headers=ctx["bob"]["headers"],
        )

        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Renamed"
        assert response.json()["data"]["description"] == "More detail"

    @pytest.mark.asyncio
    async def test_cross_workspace_move_rejected(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ctx = await _setup(client, register_user)
        task = await _create_task(client, ctx["ada"]["headers"], ctx["boards"][0]["id"])
        other_ws = await client.post(
            "/api/workspaces", json={"name": "Other"}, headers=ctx["ada"]["headers"]
        )
        foreign = await client.post(
            "/api/boards",
            json={"title": "Elsewhere", "workspace_id": other_ws.json()["data"]["id"]},
            headers=ctx["ada"]["headers"],
        )

        response = await client.put(
            f"/api/tasks/{task['id']}",
            data={"board": foreign.json()["data"]["id"]},
            headers=ctx["ada"]["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "CROSS_WORKSPACE_MOVE"


class TestStatusAndDelete:
    @pytest.mark.asyncio
    async def test_any_member_changes_status(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ctx = await _setup(client, register_user)
        task = await _create_task(client, ctx["ada"]["headers"], ctx["boards"][0]["id"])

        response = await client.patch(
            f"/api/tasks/{task['id']}/status",
            json={"status": "done"},
            headers=ctx["bob"]["headers"],
        )
        listed = await client.get(
            f"/api/tasks/board/{ctx['boards'][0]['id']}", headers=ctx["bob"]["headers"]
        )

        assert response.status_code == 200
        assert listed.json()["data"][0]["status"] == "done"

    @pytest.mark.asyncio
    async def test_only_creator_or_admin_deletes(
        self, client: AsyncClient, register_user: RegisterUser
    ) -> None:
        ctx = await _setup(client, register_user)
        task = await _create_task(client, ctx["ada"]["headers"], ctx["boards"][0]["id"])
        url = f"/api/tasks/{task['id']}"

        by_member = await client.delete(url, headers=ctx["bob"]["headers"])
        by_creator = await client.delete(url, headers=ctx["ada"]["headers"])
        after = await client.get(url, headers=ctx["ada"]["headers"])

        assert by_member.status_code == 403
        assert by_creator.status_code == 204
        assert after.status_code == 404
