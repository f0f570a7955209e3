"""Note-related exceptions."""

from .base import ConflictError, NotFoundError


class NoteNotFoundError(NotFoundError):
    """Raised when a note is not found."""

    def __init__(self, note_id):
        super().__init__(
            message=f"Note with ID {note_id} not found",
            details={"note_id": str(note_id)},
            error_code="NOTE_NOT_FOUND",
        )


class DuplicateNoteError(ConflictError):
    """Raised when an update would duplicate another note's content in the same project."""

    def __init__(self, existing_note_id):
        super().__init__(
            message="A note with this content already exists in the project",
            details={"existing_note_id": str(existing_note_id)},
            error_code="DUPLICATE_NOTE",
        )
