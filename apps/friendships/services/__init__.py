"""
Friendships services - Business logic layer.

Pairwise friendship relation: requests, status transitions, removal
and read projections.
"""

from .friendship_management import (
    send_friend_request,
    update_friendship_status,
    delete_friendship,
    get_friendship_between,
    get_friends,
    get_pending_requests,
)

# Domain Exceptions
from .exceptions import (
    FriendshipNotFoundError,
    FriendshipAlreadyExistsError,
    CannotBefriendSelfError,
    NotFriendshipParticipantError,
    OnlyRecipientCanAcceptError,
)

__all__ = [
    # Friendship Management Services
    'send_friend_request',
    'update_friendship_status',
    'delete_friendship',
    'get_friendship_between',
    'get_friends',
    'get_pending_requests',
    # Exceptions
    'FriendshipNotFoundError',
    'FriendshipAlreadyExistsError',
    'CannotBefriendSelfError',
    'NotFriendshipParticipantError',
    'OnlyRecipientCanAcceptError',
]
