"""
User directory service.

Read-only user lookups consumed by the friendship, group and meetup
services. Users are never mutated here.
"""

from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError

from apps.accounts.models import User

from .exceptions import UserNotFoundError


def find_user_by_id(*, user_id: UUID) -> Optional[User]:
    """
    Look up an active user by ID.

    Returns:
        User instance, or None if no active user has this ID
    """
    try:
        return User.objects.get(id=user_id, is_active=True)
    except (User.DoesNotExist, ValidationError, ValueError):
        return None


def get_user_by_id(*, user_id: UUID, resource: str = 'User') -> User:
    """
    Get an active user by ID.

    Args:
        user_id: UUID of the user
        resource: Name used in the error message (e.g. 'Receiver user')

    Raises:
        UserNotFoundError: If the user doesn't exist or is inactive
    """
    user = find_user_by_id(user_id=user_id)
    if user is None:
        raise UserNotFoundError(user_id, resource=resource)
    return user


def get_user_by_external_id(*, external_id: str) -> User:
    """
    Resolve the identity provider's subject identifier to a user.

    Raises:
        UserNotFoundError: If no active user carries this subject
    """
    try:
        return User.objects.get(external_id=external_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(external_id)
