"""
Domain-specific exceptions for groups app.

Each exception extends one of the shared failure kinds so the HTTP
layer can map it without knowing about groups.
"""

from apps.common.exceptions import (
    NotFoundError,
    DuplicateResourceError,
    BusinessRuleError,
    PermissionDeniedError,
    SelfActionError,
)


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist."""

    def __init__(self, group_id=None):
        super().__init__('Group', group_id)


class MembershipNotFoundError(NotFoundError):
    """Raised when a user has no membership row in a group."""

    def __init__(self, user_id=None, group_id=None):
        self.user_id = user_id
        self.group_id = group_id
        super().__init__('Group membership', f"{user_id} - {group_id}")


class DuplicateGroupNameError(DuplicateResourceError):
    """Raised when a group name is already taken."""

    def __init__(self, name):
        super().__init__('group', 'name', name)


class AlreadyMemberError(BusinessRuleError):
    """Raised when a membership row already exists for (group, user)."""
    pass


class LeaderCannotLeaveError(BusinessRuleError):
    """Raised when the group leader tries to leave."""
    pass


class CannotChangeLeaderRoleError(BusinessRuleError):
    """Raised when attempting to change the current leader's role."""
    pass


class MembershipNotPendingError(BusinessRuleError):
    """Raised when deciding a membership request that is not pending."""
    pass


class MembershipNotAcceptedError(BusinessRuleError):
    """Raised when a role change targets a member who was not accepted."""
    pass


class InsufficientPermissionsError(PermissionDeniedError):
    """Raised when a user lacks the role required for an action."""
    pass


class CannotKickSelfError(SelfActionError):
    """Raised when an admin tries to kick themselves."""
    pass
