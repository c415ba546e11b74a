"""Domain exceptions for friendships app."""

from apps.common.exceptions import (
    NotFoundError,
    ConflictError,
    BusinessRuleError,
    PermissionDeniedError,
    SelfActionError,
)


class FriendshipNotFoundError(NotFoundError):
    """Friendship does not exist."""

    def __init__(self, friendship_id=None):
        super().__init__('Friendship', friendship_id)


class FriendshipAlreadyExistsError(ConflictError):
    """A friendship row already exists for this pair of users."""
    pass


class CannotBefriendSelfError(SelfActionError):
    """User sent a friend request to themselves."""
    pass


class NotFriendshipParticipantError(PermissionDeniedError):
    """User is neither party to the friendship."""
    pass


class OnlyRecipientCanAcceptError(BusinessRuleError):
    """The sender tried to accept their own request."""
    pass
