"""Python client for the Projects & Notes API."""

from client.api import ApiClient, ApiError
from client.board import Board, ViewMode
from client.config import ClientSettings, client_settings
from client.etag_cache import ETagCache
from client.services import NotesService, ProjectsService, UsersService
from client.session import ClientSession
from client.state import AppStateController, ErrorBanner, Mutation, MutationStatus, is_temp_id
from client.types import Note, NoteColor, NoteStatus, PaginationResult, Project, User

__all__ = [
    "ApiClient",
    "ApiError",
    "AppStateController",
    "Board",
    "ClientSession",
    "ClientSettings",
    "ETagCache",
    "ErrorBanner",
    "Mutation",
    "MutationStatus",
    "Note",
    "NoteColor",
    "NoteStatus",
    "NotesService",
    "PaginationResult",
    "Project",
    "ProjectsService",
    "User",
    "UsersService",
    "ViewMode",
    "client_settings",
    "is_temp_id",
]
