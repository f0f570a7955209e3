"""Kanban board over the selected project's notes.

The UI layer reports a drop as ``move(note_id, status)``; everything else is
delegated to :class:`~client.state.AppStateController`.
"""

from enum import Enum
from typing import Optional

from client.state import AppStateController
from client.types import Note, NoteColor, NoteStatus

COLUMNS = (NoteStatus.BACKLOG, NoteStatus.DOING, NoteStatus.DONE)

COLUMN_TITLES = {
    NoteStatus.BACKLOG: "Backlog",
    NoteStatus.DOING: "Doing",
    NoteStatus.DONE: "Done",
}


class ViewMode(str, Enum):
    LIST = "list"
    BOARD = "board"


class Board:
    def __init__(self, state: AppStateController, view_mode: ViewMode = ViewMode.BOARD):
        self.state = state
        self.view_mode = view_mode

    @property
    def columns(self) -> tuple[NoteStatus, ...]:
        return COLUMNS

    def set_view_mode(self, view_mode: ViewMode) -> None:
        self.view_mode = ViewMode(view_mode)

    def visible_notes(self) -> list[Note]:
        """Notes of the selected project in list order."""
        return list(self.state.selected_project_notes)

    def notes_for(self, status: NoteStatus) -> list[Note]:
        return [note for note in self.state.selected_project_notes if note.status == status]

    def column_counts(self) -> dict[NoteStatus, int]:
        return {status: len(self.notes_for(status)) for status in COLUMNS}

    def can_add(self, status: NoteStatus) -> bool:
        """Only the backlog column offers inline creation."""
        return status == NoteStatus.BACKLOG

    async def move(self, note_id: str, status: NoteStatus) -> Optional[Note]:
        """Drop a note on a column. Dropping on its own column does nothing."""
        status = NoteStatus(status)
        note = self.state.find_note(note_id)
        if note is None or note.status == status:
            return None
        return await self.state.change_note_status(note_id, status)

    async def add_note(
        self,
        status: NoteStatus,
        content: str,
        color: NoteColor = NoteColor.YELLOW,
        user_id: Optional[str] = None,
    ) -> Optional[Note]:
        if not self.can_add(status):
            raise ValueError(f"Notes cannot be added to the {COLUMN_TITLES[NoteStatus(status)]} column")
        return await self.state.add_note(content, color=color, status=status, user_id=user_id)
