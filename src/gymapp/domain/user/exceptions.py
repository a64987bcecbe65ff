"""User domain exceptions.

Both exceptions belong to the auth error taxonomy so the presentation
layer can map them by code like any other auth failure.
"""

from gymapp_auth.exceptions import AuthError, AuthErrorCode


class EmailAlreadyExistsError(AuthError):
    """Email already registered."""

    default_code = AuthErrorCode.ALREADY_EXISTS

    def __init__(self, email: str, cause: BaseException | None = None) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}", cause=cause)


class UserNotFoundError(AuthError):
    """User not found."""

    default_code = AuthErrorCode.NOT_FOUND

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
