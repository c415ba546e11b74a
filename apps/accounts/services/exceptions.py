"""Domain-specific exceptions for accounts services."""

from apps.common.exceptions import NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user identifier does not resolve to a user."""

    def __init__(self, user_id=None, resource: str = 'User'):
        super().__init__(resource, user_id)
