"""One client session: an API client and the services that share it."""

from typing import Optional

import httpx

from client.api import ApiClient
from client.services import NotesService, ProjectsService, UsersService


class ClientSession:
    """Owns an :class:`ApiClient`, so its ETag cache and in-flight map live
    exactly as long as the session.

    Usage::

        async with ClientSession("http://localhost:3001") as session:
            page = await session.projects.get_projects()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.api = ApiClient(base_url, transport=transport, timeout=timeout)
        self.projects = ProjectsService(self.api)
        self.notes = NotesService(self.api)
        self.users = UsersService(self.api)

    async def __aenter__(self) -> "ClientSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()
