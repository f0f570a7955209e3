"""
API tests for Project controller.

Covers create deduplication, cursor listings, ETag headers, If-Match
enforcement and rename conflicts.
"""

import uuid

import pytest
from fastapi import status
from httpx import AsyncClient


async def _create(client: AsyncClient, name: str) -> dict:
    response = await client.post("/projects", json={"name": name}, headers={"If-None-Match": "*"})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


class TestProjectController:
    """Test cases for Project API endpoints."""

    @pytest.mark.asyncio
    async def test_create_project_success(self, client: AsyncClient):
        response = await client.post("/projects", json={"name": "Mobile App"})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Mobile App"
        assert uuid.UUID(data["id"])
        assert data["createdAt"].endswith("Z")
        assert data["updatedAt"].endswith("Z")
        assert data["notes"] == []

    @pytest.mark.asyncio
    async def test_create_project_duplicate_name_returns_existing(self, client: AsyncClient):
        first = await _create(client, "Mobile App")
        second = await _create(client, "Mobile App")

        assert second["id"] == first["id"]

    @pytest.mark.asyncio
    async def test_create_project_missing_name(self, client: AsyncClient):
        response = await client.post("/projects", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == ["name: Field required"]

    @pytest.mark.asyncio
    async def test_create_project_blank_name(self, client: AsyncClient):
        response = await client.post("/projects", json={"name": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "name should not be empty" in response.json()["message"][0]

    @pytest.mark.asyncio
    async def test_create_project_unknown_field(self, client: AsyncClient):
        response = await client.post("/projects", json={"name": "X", "description": "nope"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"][0].startswith("description")

    @pytest.mark.asyncio
    async def test_get_projects_list_shape(self, client: AsyncClient):
        await _create(client, "Alpha")
        await _create(client, "Beta")

        response = await client.get("/projects")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [p["name"] for p in data["data"]] == ["Beta", "Alpha"]
        assert data["hasMore"] is False
        assert "nextCursor" not in data

    @pytest.mark.asyncio
    async def test_get_projects_list_pagination(self, client: AsyncClient, many_projects):
        first = (await client.get("/projects", params={"limit": "10"})).json()

        assert len(first["data"]) == 10
        assert first["hasMore"] is True
        assert first["nextCursor"] == first["data"][-1]["id"]

        second = (
            await client.get("/projects", params={"limit": "10", "cursor": first["nextCursor"]})
        ).json()

        assert len(second["data"]) == 5
        assert second["hasMore"] is False
        assert "nextCursor" not in second
        first_ids = {p["id"] for p in first["data"]}
        assert first_ids.isdisjoint(p["id"] for p in second["data"])

    @pytest.mark.asyncio
    async def test_get_projects_limit_clamped(self, client: AsyncClient, many_projects):
        response = await client.get("/projects", params={"limit": "1000"})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["data"]) == 15

    @pytest.mark.asyncio
    async def test_get_projects_invalid_limit(self, client: AsyncClient):
        response = await client.get("/projects", params={"limit": "ten"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"][0].startswith("limit")

    @pytest.mark.asyncio
    async def test_get_projects_invalid_cursor(self, client: AsyncClient):
        response = await client.get("/projects", params={"cursor": "abc"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_get_projects_search(self, client: AsyncClient):
        await _create(client, "Important Project")
        await _create(client, "Regular Project")

        response = await client.get("/projects", params={"search": "important"})

        assert [p["name"] for p in response.json()["data"]] == ["Important Project"]

    @pytest.mark.asyncio
    async def test_get_project_sets_etag(self, client: AsyncClient, test_project, test_note):
        response = await client.get(f"/projects/{test_project.id}")

        assert response.status_code == status.HTTP_200_OK
        etag = response.headers["ETag"]
        assert etag.startswith('"') and etag.endswith('"')
        assert etag.strip('"').isdigit()
        data = response.json()
        assert [n["id"] for n in data["notes"]] == [str(test_note.id)]
        assert data["notes"][0]["color"] == "YELLOW"

    @pytest.mark.asyncio
    async def test_get_project_not_found(self, client: AsyncClient):
        response = await client.get(f"/projects/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_update_project_with_fresh_etag(self, client: AsyncClient, test_project):
        etag = (await client.get(f"/projects/{test_project.id}")).headers["ETag"]

        response = await client.patch(
            f"/projects/{test_project.id}", json={"name": "Renamed"}, headers={"If-Match": etag}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Renamed"
        assert "ETag" in response.headers

    @pytest.mark.asyncio
    async def test_update_project_without_if_match(self, client: AsyncClient, test_project):
        response = await client.patch(f"/projects/{test_project.id}", json={"name": "Renamed"})

        assert response.status_code == status.HTTP_200_OK

    @pytest.mark.asyncio
    async def test_update_project_stale_etag(self, client: AsyncClient, test_project):
        current = (await client.get(f"/projects/{test_project.id}")).headers["ETag"]

        response = await client.patch(
            f"/projects/{test_project.id}", json={"name": "Renamed"}, headers={"If-Match": '"1"'}
        )

        assert response.status_code == status.HTTP_412_PRECONDITION_FAILED
        assert response.headers["ETag"] == current
        assert response.json()["error_code"] == "PRECONDITION_FAILED"
        unchanged = (await client.get(f"/projects/{test_project.id}")).json()
        assert unchanged["name"] == "Test Project"

    @pytest.mark.asyncio
    async def test_update_project_name_conflict(
        self, client: AsyncClient, test_project, test_project_2
    ):
        response = await client.patch(
            f"/projects/{test_project_2.id}", json={"name": test_project.name}
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Project with this name already exists"
        unchanged = (await client.get(f"/projects/{test_project_2.id}")).json()
        assert unchanged["name"] == "Test Project 2"

    @pytest.mark.asyncio
    async def test_delete_project(self, client: AsyncClient, test_project, test_note):
        response = await client.delete(f"/projects/{test_project.id}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        assert (await client.get(f"/projects/{test_project.id}")).status_code == 404
        assert (await client.get(f"/notes/{test_note.id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_project_not_found(self, client: AsyncClient):
        response = await client.delete(f"/projects/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
