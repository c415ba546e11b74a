"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupNotFoundError,
    MembershipNotFoundError,
    DuplicateGroupNameError,
    AlreadyMemberError,
    LeaderCannotLeaveError,
    CannotChangeLeaderRoleError,
    MembershipNotPendingError,
    MembershipNotAcceptedError,
    InsufficientPermissionsError,
    CannotKickSelfError,
)

from .authority import (
    can_manage_group,
    is_group_leader,
    user_has_manage_permissions,
)

from .group_management import (
    create_group,
    get_group_by_id,
    update_group,
    delete_group,
    get_my_groups,
    get_favorite_groups,
)

from .membership_management import (
    HiddenGroupMembers,
    VisibleGroupMembers,
    join_group,
    leave_group,
    kick_member,
    update_membership_request,
    get_pending_requests,
    toggle_favorite,
    check_is_favorite,
    is_accepted_member,
    require_accepted_membership,
    get_group_members,
)

from .role_management import (
    update_member_role,
)


__all__ = [
    # Exceptions
    'GroupNotFoundError',
    'MembershipNotFoundError',
    'DuplicateGroupNameError',
    'AlreadyMemberError',
    'LeaderCannotLeaveError',
    'CannotChangeLeaderRoleError',
    'MembershipNotPendingError',
    'MembershipNotAcceptedError',
    'InsufficientPermissionsError',
    'CannotKickSelfError',

    # Authority
    'can_manage_group',
    'is_group_leader',
    'user_has_manage_permissions',

    # Group Management
    'create_group',
    'get_group_by_id',
    'update_group',
    'delete_group',
    'get_my_groups',
    'get_favorite_groups',

    # Membership Management
    'HiddenGroupMembers',
    'VisibleGroupMembers',
    'join_group',
    'leave_group',
    'kick_member',
    'update_membership_request',
    'get_pending_requests',
    'toggle_favorite',
    'check_is_favorite',
    'is_accepted_member',
    'require_accepted_membership',
    'get_group_members',

    # Role Management
    'update_member_role',
]
