"""
Role management service.

Handles member role updates and leadership transfer with concurrency
protection.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.groups.models import GroupMembership, GroupRole, MembershipStatus

from .authority import is_group_leader
from .exceptions import (
    MembershipNotFoundError,
    CannotChangeLeaderRoleError,
    MembershipNotAcceptedError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def update_member_role(
    *,
    admin_id: UUID,
    group_id: UUID,
    user_id: UUID,
    new_role: str
) -> GroupMembership:
    """
    Update a member's role (leader only).

    Promoting someone to LEADER is a leadership transfer: the acting
    leader is demoted to CO_LEADER and the target promoted in the same
    transaction, so the group has exactly one leader at every point.

    Both rows are locked with select_for_update in a stable order
    to prevent concurrent role changes.

    Args:
        admin_id: UUID of the user performing the update (must be leader)
        group_id: UUID of the group
        user_id: UUID of the user whose role to update
        new_role: One of LEADER, CO_LEADER, ELDER, MEMBER

    Returns:
        Updated GroupMembership of the target

    Raises:
        ValueError: If new_role is invalid
        InsufficientPermissionsError: If admin is not the leader
        MembershipNotFoundError: If target user is not a member
        CannotChangeLeaderRoleError: If target is the current leader
        MembershipNotAcceptedError: If target's membership is not accepted
    """
    if new_role not in GroupRole.values:
        raise ValueError(f"Invalid role. Must be one of: {GroupRole.values}")

    memberships = {
        str(m.user_id): m
        for m in (
            GroupMembership.objects
            .select_for_update()
            .filter(group_id=group_id, user_id__in=[admin_id, user_id])
            .order_by('id')
        )
    }
    admin_membership = memberships.get(str(admin_id))
    membership = memberships.get(str(user_id))

    if not is_group_leader(admin_membership):
        logger.warning("User %s denied changing roles in group %s", admin_id, group_id)
        raise InsufficientPermissionsError('change member roles of', 'group', group_id)

    if membership is None:
        raise MembershipNotFoundError(user_id, group_id)

    if membership.role == GroupRole.LEADER:
        raise CannotChangeLeaderRoleError(
            "Can't change the role of the leader. Transfer leadership instead."
        )

    if membership.status != MembershipStatus.ACCEPTED:
        raise MembershipNotAcceptedError(
            "Only accepted members can be given a role"
        )

    if new_role == GroupRole.LEADER:
        admin_membership.role = GroupRole.CO_LEADER
        admin_membership.save(update_fields=['role', 'updated_at'])

    membership.role = new_role
    membership.save(update_fields=['role', 'updated_at'])

    if new_role == GroupRole.LEADER:
        logger.info("Leadership of group %s transferred from %s to %s", group_id, admin_id, user_id)
    else:
        logger.info("User %s in group %s is now %s", user_id, group_id, new_role)

    return membership
