"""Application state with optimistic mutations.

Each mutation is applied to local state first, then sent to the API. A
successful response replaces the optimistic record in place; a failure rolls
back by removing an optimistic insert or by re-fetching the authoritative
list, then shows an error banner. Every mutation is recorded as a
:class:`Mutation` that ends ``CONFIRMED`` or ``ROLLED_BACK``.
"""

import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from client.api import ApiError
from client.config import client_settings
from client.session import ClientSession
from client.types import CreateNoteData, Note, NoteColor, NoteStatus, Project, UpdateNoteData, User

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"

Listener = Callable[["AppStateController"], None]


def is_temp_id(record_id: Optional[str]) -> bool:
    return bool(record_id) and record_id.startswith(TEMP_ID_PREFIX)


class MutationStatus(str, Enum):
    APPLYING = "applying"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


@dataclass
class Mutation:
    """One optimistic change and how it ended."""

    kind: str
    target_id: str
    status: MutationStatus = MutationStatus.APPLYING
    result_id: Optional[str] = None
    error: Optional[str] = None

    def confirm(self, result_id: Optional[str] = None) -> None:
        self.status = MutationStatus.CONFIRMED
        self.result_id = result_id if result_id is not None else self.target_id

    def roll_back(self, error: str) -> None:
        self.status = MutationStatus.ROLLED_BACK
        self.error = error


@dataclass
class ErrorBanner:
    """A dismissible message, optionally hiding itself after a delay."""

    message: Optional[str] = None
    variant: str = "error"
    auto_close_at: Optional[float] = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def show(self, message: str, variant: str = "error", auto_close_delay: Optional[float] = None) -> None:
        self.message = message
        self.variant = variant
        self.auto_close_at = self.clock() + auto_close_delay if auto_close_delay else None

    def dismiss(self) -> None:
        self.message = None
        self.auto_close_at = None

    def is_visible(self, now: Optional[float] = None) -> bool:
        if not self.message:
            return False
        if self.auto_close_at is None:
            return True
        return (now if now is not None else self.clock()) < self.auto_close_at


class AppStateController:
    """In-memory projection of projects, notes and users for one session.

    Args:
        session: Client session used for every request
        auto_close_delay: Seconds before error banners hide; ``0`` keeps them
            until dismissed
    """

    def __init__(self, session: ClientSession, auto_close_delay: Optional[float] = None):
        self.session = session
        self.projects: list[Project] = []
        self.notes_by_project: dict[str, list[Note]] = {}
        self.users: list[User] = []
        self.selected_project_id: Optional[str] = None
        self.is_loading = False
        self.is_note_loading = False
        self.deleting_note_id: Optional[str] = None
        self.error = ErrorBanner()
        self.mutations: list[Mutation] = []
        self._auto_close_delay = (
            client_settings.error_auto_close_delay if auto_close_delay is None else auto_close_delay
        )
        self._listeners: list[Listener] = []
        self._sequence = itertools.count(1)

    # ----- observation -----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    @property
    def selected_project(self) -> Optional[Project]:
        return next((p for p in self.projects if p.id == self.selected_project_id), None)

    @property
    def selected_project_notes(self) -> list[Note]:
        if self.selected_project_id is None:
            return []
        return self.notes_by_project.get(self.selected_project_id, [])

    def find_note(self, note_id: str) -> Optional[Note]:
        located = self._locate_note(note_id)
        if located is None:
            return None
        project_id, index = located
        return self.notes_by_project[project_id][index]

    # ----- errors -----

    def show_error(self, message: str, variant: str = "error") -> None:
        self.error.show(message, variant=variant, auto_close_delay=self._auto_close_delay)
        self._notify()

    def dismiss_error(self) -> None:
        self.error.dismiss()
        self._notify()

    # ----- loading -----

    async def load_projects(self) -> list[Project]:
        self.is_loading = True
        self._notify()
        try:
            page = await self.session.projects.get_projects(limit=client_settings.page_limit)
            self.projects = page.data
            for project in page.data:
                self.notes_by_project.setdefault(project.id, list(project.notes))
        except ApiError as exc:
            self.show_error(f"Failed to load projects: {exc.message}")
        finally:
            self.is_loading = False
            self._notify()
        return self.projects

    async def load_users(self) -> list[User]:
        try:
            page = await self.session.users.get_users(limit=client_settings.page_limit)
            self.users = page.data
        except ApiError as exc:
            self.show_error(f"Failed to load users: {exc.message}")
        self._notify()
        return self.users

    async def load_project_notes(self, project_id: str) -> list[Note]:
        self.is_note_loading = True
        self._notify()
        try:
            notes = await self.session.notes.get_notes_by_project(project_id)
            self.notes_by_project[project_id] = notes
        except ApiError as exc:
            self.show_error(f"Failed to load notes: {exc.message}")
        finally:
            self.is_note_loading = False
            self._notify()
        return self.notes_by_project.get(project_id, [])

    async def select_project(self, project_id: Optional[str], refresh: bool = False) -> None:
        """Select a project and fetch its notes unless they are cached.

        An unconfirmed project has nothing on the server yet, so nothing is fetched.
        """
        self.selected_project_id = project_id
        self._notify()
        if project_id is None or is_temp_id(project_id):
            return
        if refresh or project_id not in self.notes_by_project:
            await self.load_project_notes(project_id)

    # ----- project mutations -----

    async def add_project(self, name: str) -> Optional[Project]:
        name = name.strip()
        if not name:
            return None

        temp = Project(id=self._temp_id(), name=name)
        mutation = self._begin("add_project", temp.id)
        self.projects.insert(0, temp)
        self.notes_by_project[temp.id] = []
        self._notify()

        try:
            created = await self.session.projects.create_project(name)
        except ApiError as exc:
            self._remove_project_locally(temp.id)
            self._fail(mutation, f"Failed to create project: {exc.message}")
            return None

        self.notes_by_project.pop(temp.id, None)
        if any(p.id == created.id for p in self.projects):
            # An existing project with this name came back
            self._remove_project_locally(temp.id)
        elif self._project_index(temp.id) is not None:
            self._replace_project(temp.id, created)
            self.notes_by_project[created.id] = list(created.notes)
        else:
            # A resync replaced the list while the create was pending
            self.projects.insert(0, created)
            self.notes_by_project[created.id] = list(created.notes)
        if self.selected_project_id == temp.id:
            self.selected_project_id = created.id
        mutation.confirm(created.id)
        self._notify()
        return created

    async def rename_project(self, project_id: str, name: str) -> Optional[Project]:
        name = name.strip()
        if not name or self._refuse_temp(project_id):
            return None
        index = self._project_index(project_id)
        if index is None:
            return None

        mutation = self._begin("rename_project", project_id)
        self.projects[index] = self.projects[index].model_copy(update={"name": name})
        self._notify()

        try:
            updated = await self.session.projects.update_project(project_id, name)
        except ApiError as exc:
            await self._resync_projects()
            self._fail(mutation, f"Failed to rename project: {exc.message}")
            return None

        self._replace_project(project_id, updated)
        mutation.confirm(updated.id)
        self._notify()
        return updated

    async def delete_project(self, project_id: str) -> bool:
        if self._refuse_temp(project_id) or self._project_index(project_id) is None:
            return False

        mutation = self._begin("delete_project", project_id)
        self._remove_project_locally(project_id)
        if self.selected_project_id == project_id:
            self.selected_project_id = None
        self._notify()

        try:
            await self.session.projects.delete_project(project_id)
        except ApiError as exc:
            await self._resync_projects()
            self._fail(mutation, f"Failed to delete project: {exc.message}")
            return False

        mutation.confirm()
        self._notify()
        return True

    # ----- note mutations -----

    async def add_note(
        self,
        content: str,
        color: NoteColor = NoteColor.YELLOW,
        status: NoteStatus = NoteStatus.BACKLOG,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> Optional[Note]:
        content = content.strip()
        project_id = project_id or self.selected_project_id
        if not content or project_id is None:
            return None
        if self._refuse_temp(project_id):
            return None

        temp = Note(
            id=self._temp_id(),
            content=content,
            color=color,
            status=status,
            project_id=project_id,
            user_id=user_id,
        )
        mutation = self._begin("add_note", temp.id)
        notes = self.notes_by_project.setdefault(project_id, [])
        notes.insert(0, temp)
        self._notify()

        try:
            created = await self.session.notes.create_note(
                CreateNoteData(
                    content=content,
                    color=color,
                    status=status,
                    project_id=project_id,
                    user_id=user_id,
                )
            )
        except ApiError as exc:
            self._remove_note_locally(temp.id)
            self._fail(mutation, f"Failed to create note: {exc.message}")
            return None

        if self._locate_note(created.id) is not None:
            # The same content already existed in this project
            self._remove_note_locally(temp.id)
        elif self._locate_note(temp.id) is not None:
            self._replace_note(temp.id, created)
        elif created.project_id in self.notes_by_project:
            # A resync replaced the list while the create was pending
            self.notes_by_project[created.project_id].insert(0, created)
        mutation.confirm(created.id)
        self._notify()
        return created

    async def update_note(self, note_id: str, changes: UpdateNoteData) -> Optional[Note]:
        if self._refuse_temp(note_id):
            return None
        located = self._locate_note(note_id)
        if located is None:
            return None
        project_id, index = located

        mutation = self._begin("update_note", note_id)
        current = self.notes_by_project[project_id][index]
        local = changes.model_dump(exclude_unset=True, exclude_none=True)
        self.notes_by_project[project_id][index] = current.model_copy(update=local)
        self._notify()

        try:
            updated = await self.session.notes.update_note(note_id, changes)
        except ApiError as exc:
            await self._resync_notes(project_id)
            self._fail(mutation, f"Failed to update note: {exc.message}")
            return None

        if updated.id != note_id:
            # The server kept the note unchanged and returned the one it collided with
            await self._resync_notes(project_id)
            self._fail(mutation, "A note with this content already exists", variant="warning")
            return updated

        if updated.project_id != project_id:
            self._remove_note_locally(note_id)
            # An uncached target project is fetched when it is selected
            if updated.project_id in self.notes_by_project:
                self.notes_by_project[updated.project_id].insert(0, updated)
        else:
            self._replace_note(note_id, updated)
        mutation.confirm(updated.id)
        self._notify()
        return updated

    async def edit_note(self, note_id: str, content: str) -> Optional[Note]:
        content = content.strip()
        if not content:
            return None
        return await self.update_note(note_id, UpdateNoteData(content=content))

    async def change_note_status(self, note_id: str, status: NoteStatus) -> Optional[Note]:
        return await self.update_note(note_id, UpdateNoteData(status=status))

    async def delete_note(self, note_id: str) -> bool:
        if self.deleting_note_id == note_id or self._refuse_temp(note_id):
            return False
        located = self._locate_note(note_id)
        if located is None:
            return False
        project_id, _ = located

        mutation = self._begin("delete_note", note_id)
        self.deleting_note_id = note_id
        self._remove_note_locally(note_id)
        self._notify()

        try:
            await self.session.notes.delete_note(note_id)
        except ApiError as exc:
            await self._resync_notes(project_id)
            self._fail(mutation, f"Failed to delete note: {exc.message}")
            return False
        finally:
            self.deleting_note_id = None
            self._notify()

        mutation.confirm()
        self._notify()
        return True

    # ----- helpers -----

    def _temp_id(self) -> str:
        return f"{TEMP_ID_PREFIX}{int(time.time() * 1000)}-{next(self._sequence)}"

    def _begin(self, kind: str, target_id: str) -> Mutation:
        mutation = Mutation(kind=kind, target_id=target_id)
        self.mutations.append(mutation)
        return mutation

    def _fail(self, mutation: Mutation, message: str, variant: str = "error") -> None:
        logger.warning("Rolled back %s on %s: %s", mutation.kind, mutation.target_id, message)
        mutation.roll_back(message)
        self.show_error(message, variant=variant)

    def _refuse_temp(self, record_id: str) -> bool:
        if is_temp_id(record_id):
            self.show_error("Please wait until the item has been saved", variant="info")
            return True
        return False

    def _project_index(self, project_id: str) -> Optional[int]:
        return next((i for i, p in enumerate(self.projects) if p.id == project_id), None)

    def _replace_project(self, project_id: str, project: Project) -> None:
        index = self._project_index(project_id)
        if index is not None:
            self.projects[index] = project

    def _remove_project_locally(self, project_id: str) -> None:
        self.projects = [p for p in self.projects if p.id != project_id]
        self.notes_by_project.pop(project_id, None)

    def _locate_note(self, note_id: str) -> Optional[tuple[str, int]]:
        for project_id, notes in self.notes_by_project.items():
            for index, note in enumerate(notes):
                if note.id == note_id:
                    return project_id, index
        return None

    def _replace_note(self, note_id: str, note: Note) -> None:
        located = self._locate_note(note_id)
        if located is not None:
            project_id, index = located
            self.notes_by_project[project_id][index] = note

    def _remove_note_locally(self, note_id: str) -> None:
        located = self._locate_note(note_id)
        if located is not None:
            project_id, index = located
            del self.notes_by_project[project_id][index]

    async def _resync_projects(self) -> None:
        try:
            page = await self.session.projects.get_projects(limit=client_settings.page_limit)
        except ApiError as exc:
            logger.warning("Could not resynchronize projects: %s", exc.message)
            return
        self.projects = page.data
        for project in page.data:
            self.notes_by_project[project.id] = list(project.notes)

    async def _resync_notes(self, project_id: str) -> None:
        try:
            self.notes_by_project[project_id] = await self.session.notes.get_notes_by_project(project_id)
        except ApiError as exc:
            logger.warning("Could not resynchronize notes of %s: %s", project_id, exc.message)
