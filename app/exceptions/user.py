"""User-related exceptions."""

from .base import BadRequestError, ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, user_id):
        super().__init__(
            message=f"User with ID {user_id} not found",
            details={"user_id": str(user_id)},
            error_code="USER_NOT_FOUND",
        )


class UserReferenceError(BadRequestError):
    """Raised when a note is assigned to a user that does not exist."""

    def __init__(self, user_id):
        super().__init__(
            message=f"User with ID {user_id} not found",
            details={"user_id": str(user_id)},
            error_code="USER_REFERENCE_INVALID",
        )


class DuplicateUserNameError(ConflictError):
    """Raised when renaming a user onto another user's name."""

    def __init__(self, existing_user_id):
        super().__init__(
            message="User with this name already exists",
            details={"existing_user_id": str(existing_user_id)},
            error_code="DUPLICATE_USER_NAME",
        )
