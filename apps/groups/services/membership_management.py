"""
Membership management service.

Handles join/leave/kick, join-request decisions, favorites and the
member listing, all with row-level locking on the membership rows
they transition.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from django.core.paginator import Page
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.common.pagination import paginate
from apps.groups.models import Group, GroupMembership, GroupRole, MembershipStatus

from .authority import find_membership, user_has_manage_permissions
from .exceptions import (
    GroupNotFoundError,
    MembershipNotFoundError,
    AlreadyMemberError,
    LeaderCannotLeaveError,
    MembershipNotPendingError,
    InsufficientPermissionsError,
    CannotKickSelfError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HiddenGroupMembers:
    """Member view for outsiders of a private group: the count only."""
    total_members: int
    is_private: bool = True
    members_visible: bool = False


@dataclass(frozen=True)
class VisibleGroupMembers:
    """Member view with the paginated list of accepted memberships."""
    page: Page
    total_members: int
    is_private: bool
    members_visible: bool = True


GroupMembersView = Union[HiddenGroupMembers, VisibleGroupMembers]


def _get_locked_membership(*, user_id: UUID, group_id: UUID) -> GroupMembership:
    try:
        return (
            GroupMembership.objects
            .select_for_update()
            .get(group_id=group_id, user_id=user_id)
        )
    except GroupMembership.DoesNotExist:
        raise MembershipNotFoundError(user_id, group_id)


@transaction.atomic
def join_group(*, user: User, group_id: UUID) -> GroupMembership:
    """
    Request to join a group.

    Public groups accept immediately; private groups leave the request
    PENDING until a leader or co-leader decides it.

    Raises:
        GroupNotFoundError: If group doesn't exist
        AlreadyMemberError: If any membership row already exists,
            whatever its status
    """
    # Lock the group to serialize concurrent joins
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(group_id)

    if GroupMembership.objects.filter(group=group, user=user).exists():
        raise AlreadyMemberError(f"User already has a membership in {group.name}")

    status = MembershipStatus.PENDING if group.is_private else MembershipStatus.ACCEPTED

    try:
        membership = GroupMembership.objects.create(
            user=user,
            group=group,
            status=status,
            role=GroupRole.MEMBER,
            invited_by=user,
            is_favorite=False,
        )
    except IntegrityError:
        raise AlreadyMemberError(f"User already has a membership in {group.name}")

    logger.info("User %s joined group %s as %s", user.id, group.id, status)
    return membership


@transaction.atomic
def leave_group(*, user_id: UUID, group_id: UUID) -> None:
    """
    Leave a group.

    The leader cannot leave; leadership must be transferred first.

    Raises:
        MembershipNotFoundError: If the user has no membership
        LeaderCannotLeaveError: If the user is the leader
    """
    membership = _get_locked_membership(user_id=user_id, group_id=group_id)

    if membership.role == GroupRole.LEADER:
        raise LeaderCannotLeaveError(
            "Leader cannot leave the group. Transfer leadership first."
        )

    membership.delete()
    logger.info("User %s left group %s", user_id, group_id)


@transaction.atomic
def kick_member(*, admin_id: UUID, group_id: UUID, user_id: UUID) -> None:
    """
    Remove a member from a group (leader or co-leader only).

    A co-leader may not remove the leader or another co-leader.

    Raises:
        CannotKickSelfError: If admin and target are the same user
        InsufficientPermissionsError: If admin cannot manage the group,
            or a co-leader targets a leader/co-leader
        MembershipNotFoundError: If target or admin has no membership
    """
    if str(admin_id) == str(user_id):
        raise CannotKickSelfError("You can't kick yourself from the group")

    if not user_has_manage_permissions(user_id=admin_id, group_id=group_id):
        logger.warning("User %s denied kicking from group %s", admin_id, group_id)
        raise InsufficientPermissionsError('kick members from', 'group', group_id)

    membership = _get_locked_membership(user_id=user_id, group_id=group_id)
    admin_membership = _get_locked_membership(user_id=admin_id, group_id=group_id)

    if (
        admin_membership.role == GroupRole.CO_LEADER
        and membership.role in (GroupRole.LEADER, GroupRole.CO_LEADER)
    ):
        logger.warning(
            "Co-leader %s denied kicking %s %s from group %s",
            admin_id, membership.role, user_id, group_id,
        )
        raise InsufficientPermissionsError('kick a leader or co-leader from', 'group', group_id)

    membership.delete()
    logger.info("User %s kicked from group %s by %s", user_id, group_id, admin_id)


@transaction.atomic
def update_membership_request(
    *,
    admin_id: UUID,
    group_id: UUID,
    user_id: UUID,
    new_status: str
) -> Optional[GroupMembership]:
    """
    Accept or reject a pending join request (leader or co-leader only).

    A rejected request is deleted and leaves no trace.

    Returns:
        The accepted membership, or None when rejected

    Raises:
        ValueError: If new_status is not ACCEPTED or REJECTED
        InsufficientPermissionsError: If admin cannot manage the group
        MembershipNotFoundError: If the target has no membership row
        MembershipNotPendingError: If the row is not PENDING
    """
    valid_statuses = [MembershipStatus.ACCEPTED, MembershipStatus.REJECTED]
    if new_status not in valid_statuses:
        raise ValueError(f"Invalid status. Must be one of: {valid_statuses}")

    if not user_has_manage_permissions(user_id=admin_id, group_id=group_id):
        logger.warning("User %s denied deciding requests of group %s", admin_id, group_id)
        raise InsufficientPermissionsError('decide membership requests of', 'group', group_id)

    membership = _get_locked_membership(user_id=user_id, group_id=group_id)

    if membership.status != MembershipStatus.PENDING:
        raise MembershipNotPendingError(
            f"Membership status {membership.status} cannot be changed"
        )

    if new_status == MembershipStatus.REJECTED:
        membership.delete()
        logger.info("Join request of %s to group %s rejected by %s", user_id, group_id, admin_id)
        return None

    membership.status = MembershipStatus.ACCEPTED
    membership.save(update_fields=['status', 'updated_at'])
    logger.info("Join request of %s to group %s accepted by %s", user_id, group_id, admin_id)

    return membership


def get_pending_requests(*, admin_id: UUID, group_id: UUID) -> QuerySet[GroupMembership]:
    """
    Pending join requests of a group (leader or co-leader only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If admin cannot manage the group
    """
    if not Group.objects.filter(id=group_id).exists():
        raise GroupNotFoundError(group_id)

    if not user_has_manage_permissions(user_id=admin_id, group_id=group_id):
        raise InsufficientPermissionsError('view pending requests of', 'group', group_id)

    return (
        GroupMembership.objects
        .filter(group_id=group_id, status=MembershipStatus.PENDING)
        .select_related('user')
        .order_by('joined_at')
    )


@transaction.atomic
def toggle_favorite(*, user_id: UUID, group_id: UUID) -> bool:
    """
    Flip the favorite flag of the user's membership.

    Returns:
        The new flag value

    Raises:
        MembershipNotFoundError: If the user has no membership
    """
    membership = _get_locked_membership(user_id=user_id, group_id=group_id)
    membership.is_favorite = not membership.is_favorite
    membership.save(update_fields=['is_favorite', 'updated_at'])
    return membership.is_favorite


def check_is_favorite(*, user_id: UUID, group_id: UUID) -> bool:
    """
    Raises:
        MembershipNotFoundError: If the user has no membership
    """
    membership = find_membership(user_id=user_id, group_id=group_id)
    if membership is None:
        raise MembershipNotFoundError(user_id, group_id)
    return membership.is_favorite


def is_accepted_member(*, user_id: UUID, group_id: UUID) -> bool:
    """True iff the user holds an ACCEPTED membership in the group."""
    return GroupMembership.objects.filter(
        group_id=group_id,
        user_id=user_id,
        status=MembershipStatus.ACCEPTED,
    ).exists()


def require_accepted_membership(*, user_id: UUID, group_id: UUID) -> GroupMembership:
    """
    Return the user's ACCEPTED membership.

    Raises:
        MembershipNotFoundError: If no membership row exists
        InsufficientPermissionsError: If the row is not ACCEPTED
    """
    membership = find_membership(user_id=user_id, group_id=group_id)
    if membership is None:
        raise MembershipNotFoundError(user_id, group_id)
    if membership.status != MembershipStatus.ACCEPTED:
        raise InsufficientPermissionsError('act as a member of', 'group', group_id)
    return membership


def get_group_members(
    *,
    requester_id: UUID,
    group_id: UUID,
    page: int = 1,
    page_size: int = None
) -> GroupMembersView:
    """
    List the accepted members of a group.

    Outsiders of a private group only get the member count. Callers
    must branch on the returned variant.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        group = Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(group_id)

    accepted = (
        GroupMembership.objects
        .filter(group=group, status=MembershipStatus.ACCEPTED)
        .select_related('user')
        .order_by('joined_at', 'id')
    )
    total_members = accepted.count()

    if group.is_private and not is_accepted_member(user_id=requester_id, group_id=group.id):
        return HiddenGroupMembers(total_members=total_members)

    return VisibleGroupMembers(
        page=paginate(accepted, page=page, page_size=page_size),
        total_members=total_members,
        is_private=group.is_private,
    )
