"""
Group management service.

Handles group CRUD operations with proper transaction safety.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership, GroupRole, MembershipStatus

from .authority import user_has_manage_permissions
from .exceptions import (
    GroupNotFoundError,
    DuplicateGroupNameError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def create_group(
    *,
    name: str,
    owner: User,
    description: str = '',
    is_private: bool = False,
    image_url: str = ''
) -> Group:
    """
    Create a new group and add the creator as its leader.

    Both writes happen in one transaction, so a group is never
    observable without its leader membership.

    Args:
        name: Group name (globally unique)
        owner: User who will lead the group
        description: Optional group description
        is_private: Whether joining requires approval
        image_url: Optional image reference

    Returns:
        Created Group instance

    Raises:
        DuplicateGroupNameError: If the name is already taken
    """
    if Group.objects.filter(name=name).exists():
        raise DuplicateGroupNameError(name)

    try:
        with transaction.atomic():
            group = Group.objects.create(
                name=name,
                description=description,
                is_private=is_private,
                image_url=image_url,
            )

            GroupMembership.objects.create(
                user=owner,
                group=group,
                status=MembershipStatus.ACCEPTED,
                role=GroupRole.LEADER,
                invited_by=owner,
            )
    except IntegrityError:
        # Concurrent creation with the same name
        raise DuplicateGroupNameError(name)

    logger.info("Group %s created by leader %s", group.id, owner.id)
    return group


def get_group_by_id(*, group_id: UUID) -> Group:
    """
    Get a group by ID.

    Raises:
        GroupNotFoundError: If group doesn't exist
    """
    try:
        return Group.objects.get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(group_id)


@transaction.atomic
def update_group(
    *,
    group_id: UUID,
    user_id: UUID,
    description: Optional[str] = None,
    is_private: Optional[bool] = None,
    image_url: Optional[str] = None
) -> Group:
    """
    Update group details (leader or co-leader only).

    The name is the group's unique key and is not editable.

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user cannot manage the group
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(group_id)

    if not user_has_manage_permissions(user_id=user_id, group_id=group.id):
        logger.warning("User %s denied update of group %s", user_id, group.id)
        raise InsufficientPermissionsError('update', 'group', group.id)

    update_fields = ['updated_at']

    if description is not None:
        group.description = description
        update_fields.append('description')

    if is_private is not None:
        group.is_private = is_private
        update_fields.append('is_private')

    if image_url is not None:
        group.image_url = image_url
        update_fields.append('image_url')

    group.save(update_fields=update_fields)

    return group


@transaction.atomic
def delete_group(*, group_id: UUID, user_id: UUID) -> None:
    """
    Delete a group (leader or co-leader only).

    Cascading deletes remove all memberships and meetups.

    Raises:
        GroupNotFoundError: If group doesn't exist
        InsufficientPermissionsError: If user cannot manage the group
    """
    try:
        group = (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(group_id)

    if not user_has_manage_permissions(user_id=user_id, group_id=group.id):
        logger.warning("User %s denied deletion of group %s", user_id, group.id)
        raise InsufficientPermissionsError('delete', 'group', group.id)

    group.delete()
    logger.info("Group %s deleted by %s", group_id, user_id)


def get_my_groups(*, user_id: UUID) -> QuerySet[Group]:
    """Groups where the user holds an accepted membership."""
    return (
        Group.objects
        .filter(
            memberships__user_id=user_id,
            memberships__status=MembershipStatus.ACCEPTED,
        )
        .order_by('name')
    )


def get_favorite_groups(*, user_id: UUID) -> QuerySet[Group]:
    """Accepted groups the user has flagged as favorite."""
    return (
        Group.objects
        .filter(
            memberships__user_id=user_id,
            memberships__status=MembershipStatus.ACCEPTED,
            memberships__is_favorite=True,
        )
        .order_by('name')
    )
