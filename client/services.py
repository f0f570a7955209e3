"""Resource services bound to an :class:`~client.api.ApiClient`.

Creates always send ``If-None-Match: *``; the server answers a repeated create
with the record that already exists.
"""

from typing import Any, Optional, Union

from client.api import ApiClient
from client.types import (
    CreateNoteData,
    Note,
    NoteColor,
    NoteStatus,
    PaginationResult,
    Project,
    UpdateNoteData,
    User,
    color_to_api,
)

CREATE_ONLY = "*"


def _query(**params: Any) -> dict[str, str]:
    query = {}
    for key, value in params.items():
        if value is None:
            continue
        query[key] = str(getattr(value, "value", value))
    return query


class ProjectsService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_projects(
        self,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> PaginationResult[Project]:
        result = await self.api.get("/projects", _query(search=search, limit=limit, cursor=cursor))
        return PaginationResult[Project].model_validate(result)

    async def get_project(self, project_id: str) -> Project:
        return Project.model_validate(await self.api.get(f"/projects/{project_id}"))

    async def create_project(self, name: str) -> Project:
        data = await self.api.post("/projects", {"name": name}, etag=CREATE_ONLY)
        return Project.model_validate(data)

    async def update_project(self, project_id: str, name: str, etag: Optional[str] = None) -> Project:
        data = await self.api.patch(f"/projects/{project_id}", {"name": name}, etag=etag)
        return Project.model_validate(data)

    async def delete_project(self, project_id: str) -> None:
        await self.api.delete(f"/projects/{project_id}")


class NotesService:
    """Notes API; converts color between client and wire form."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def get_notes(
        self,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        project_id: Optional[str] = None,
        status: Optional[NoteStatus] = None,
        color: Optional[Union[NoteColor, str]] = None,
    ) -> PaginationResult[Note]:
        params = _query(
            search=search,
            limit=limit,
            cursor=cursor,
            projectId=project_id,
            status=status,
            color=color_to_api(color) if color is not None else None,
        )
        return PaginationResult[Note].model_validate(await self.api.get("/notes", params))

    async def get_note(self, note_id: str) -> Note:
        return Note.model_validate(await self.api.get(f"/notes/{note_id}"))

    async def get_notes_by_project(self, project_id: str) -> list[Note]:
        notes = await self.api.get(f"/notes/project/{project_id}")
        return [Note.model_validate(note) for note in notes]

    async def create_note(self, data: CreateNoteData) -> Note:
        payload = data.model_dump(mode="json", by_alias=True, exclude_none=True)
        payload["color"] = color_to_api(data.color)
        return Note.model_validate(await self.api.post("/notes", payload, etag=CREATE_ONLY))

    async def update_note(
        self, note_id: str, data: UpdateNoteData, etag: Optional[str] = None
    ) -> Note:
        payload = data.model_dump(mode="json", by_alias=True, exclude_unset=True)
        if data.color is not None:
            payload["color"] = color_to_api(data.color)
        return Note.model_validate(await self.api.patch(f"/notes/{note_id}", payload, etag=etag))

    async def delete_note(self, note_id: str) -> None:
        await self.api.delete(f"/notes/{note_id}")


class UsersService:
    def __init__(self, api: ApiClient):
        self.api = api

    async def get_users(
        self,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> PaginationResult[User]:
        result = await self.api.get("/users", _query(search=search, limit=limit, cursor=cursor))
        return PaginationResult[User].model_validate(result)

    async def get_user(self, user_id: str) -> User:
        return User.model_validate(await self.api.get(f"/users/{user_id}"))

    async def get_user_notes(self, user_id: str) -> list[Note]:
        notes = await self.api.get(f"/users/{user_id}/notes")
        return [Note.model_validate(note) for note in notes]

    async def create_user(self, name: str) -> User:
        return User.model_validate(await self.api.post("/users", {"name": name}, etag=CREATE_ONLY))

    async def update_user(self, user_id: str, name: str, etag: Optional[str] = None) -> User:
        return User.model_validate(
            await self.api.patch(f"/users/{user_id}", {"name": name}, etag=etag)
        )

    async def delete_user(self, user_id: str) -> None:
        await self.api.delete(f"/users/{user_id}")
