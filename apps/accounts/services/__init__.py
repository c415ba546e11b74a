"""Services for the user directory."""

from .exceptions import UserNotFoundError
from .user_directory import (
    find_user_by_id,
    get_user_by_id,
    get_user_by_external_id,
)

__all__ = [
    # Exceptions
    'UserNotFoundError',
    # Services
    'find_user_by_id',
    'get_user_by_id',
    'get_user_by_external_id',
]
