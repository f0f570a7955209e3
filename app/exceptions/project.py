"""Project-related exceptions."""

from .base import BadRequestError, ConflictError, NotFoundError


class ProjectNotFoundError(NotFoundError):
    """Raised when a project id does not resolve on a direct lookup."""

    def __init__(self, project_id):
        super().__init__(
            message=f"Project with ID {project_id} not found",
            details={"project_id": str(project_id)},
            error_code="PROJECT_NOT_FOUND",
        )


class ProjectReferenceError(BadRequestError):
    """Raised when a note points at a project that does not exist."""

    def __init__(self, project_id):
        super().__init__(
            message=f"Project with ID {project_id} not found",
            details={"project_id": str(project_id)},
            error_code="PROJECT_REFERENCE_INVALID",
        )


class DuplicateProjectNameError(ConflictError):
    """Raised when renaming a project onto another project's name."""

    def __init__(self, existing_project_id):
        super().__init__(
            message="Project with this name already exists",
            details={"existing_project_id": str(existing_project_id)},
            error_code="DUPLICATE_PROJECT_NAME",
        )
