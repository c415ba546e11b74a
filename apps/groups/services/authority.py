"""
Authority predicate for group management.

`can_manage_group` is the only place where role maps to management
rights. Every operation that needs those rights goes through
`user_has_manage_permissions` instead of comparing roles itself.
"""

from typing import Optional
from uuid import UUID

from apps.groups.models import GroupMembership, GroupRole, MembershipStatus


MANAGER_ROLES = frozenset({GroupRole.LEADER, GroupRole.CO_LEADER})


def can_manage_group(membership: Optional[GroupMembership]) -> bool:
    """True iff the membership is ACCEPTED with role LEADER or CO_LEADER."""
    if membership is None:
        return False
    return (
        membership.status == MembershipStatus.ACCEPTED
        and membership.role in MANAGER_ROLES
    )


def is_group_leader(membership: Optional[GroupMembership]) -> bool:
    """True iff the membership is the group's ACCEPTED leader."""
    if membership is None:
        return False
    return (
        membership.status == MembershipStatus.ACCEPTED
        and membership.role == GroupRole.LEADER
    )


def find_membership(*, user_id: UUID, group_id: UUID) -> Optional[GroupMembership]:
    """Return the (group, user) membership row, or None."""
    return (
        GroupMembership.objects
        .filter(group_id=group_id, user_id=user_id)
        .first()
    )


def user_has_manage_permissions(*, user_id: UUID, group_id: UUID) -> bool:
    """True iff the user may manage the group (update, delete, decide requests, kick)."""
    return can_manage_group(find_membership(user_id=user_id, group_id=group_id))
