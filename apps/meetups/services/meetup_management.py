"""
Meetup management service.

Meetups live inside groups. Creating one needs an accepted membership
in the group; changing or deleting one is reserved to its host.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.groups.services import (
    get_group_by_id,
    is_accepted_member,
    require_accepted_membership,
)
from apps.meetups.models import (
    Meetup,
    MeetupParticipation,
    MeetupStatus,
    TerrainType,
    TrailDifficulty,
    MAX_PARTICIPANTS_LIMIT,
)

from .exceptions import (
    MeetupNotFoundError,
    MeetupFullError,
    NotMeetupHostError,
    GroupMeetupsHiddenError,
)

logger = logging.getLogger(__name__)


def normalize_terrain_types(terrain_types: Optional[Iterable[str]]) -> List[str]:
    """
    Validate terrain types and drop duplicates, keeping first-seen order.

    Raises:
        ValueError: If a value is not a TerrainType
    """
    if not terrain_types:
        return []

    normalized = []
    for value in terrain_types:
        terrain = TerrainType(value).value
        if terrain not in normalized:
            normalized.append(terrain)
    return normalized


def create_meetup(
    *,
    user: User,
    group_id: UUID,
    title: str,
    meeting_time: datetime,
    latitude: Decimal,
    longitude: Decimal,
    description: str = '',
    meetup_picture: str = '',
    max_participants: int = MAX_PARTICIPANTS_LIMIT,
    difficulty: str = TrailDifficulty.BEGINNER,
    terrain_types: Optional[Iterable[str]] = None,
    distance_km: Optional[Decimal] = None,
    estimated_duration_min: Optional[int] = None
) -> Meetup:
    """
    Create a meetup in a group, hosted by the creator.

    The host is registered as the first participant in the same
    transaction. New meetups start WAITING.

    Args:
        user: Creator and host
        group_id: Owning group
        title: Meetup title
        meeting_time: When the meetup starts
        latitude: Meeting point latitude
        longitude: Meeting point longitude

    Returns:
        Created Meetup instance

    Raises:
        GroupNotFoundError: If group doesn't exist
        MembershipNotFoundError: If the creator has no membership
        InsufficientPermissionsError: If the membership is not accepted
        ValueError: If difficulty or a terrain type is invalid
    """
    group = get_group_by_id(group_id=group_id)
    require_accepted_membership(user_id=user.id, group_id=group.id)

    difficulty = TrailDifficulty(difficulty)
    terrain_types = normalize_terrain_types(terrain_types)

    with transaction.atomic():
        meetup = Meetup.objects.create(
            host=user,
            group=group,
            title=title,
            description=description,
            meetup_picture=meetup_picture,
            max_participants=max_participants,
            difficulty=difficulty,
            terrain_types=terrain_types,
            distance_km=distance_km,
            estimated_duration_min=estimated_duration_min,
            meeting_time=meeting_time,
            latitude=latitude,
            longitude=longitude,
            status=MeetupStatus.WAITING,
        )
        MeetupParticipation.objects.create(meetup=meetup, user=user)

    logger.info("Meetup %s created in group %s by host %s", meetup.id, group.id, user.id)
    return meetup


def get_meetup_by_id(*, meetup_id: UUID) -> Meetup:
    """
    Get a meetup by ID.

    Raises:
        MeetupNotFoundError: If meetup doesn't exist
    """
    try:
        return Meetup.objects.select_related('host', 'group').get(id=meetup_id)
    except Meetup.DoesNotExist:
        raise MeetupNotFoundError(meetup_id)


def lock_meetup(meetup_id: UUID) -> Meetup:
    """Load a meetup with a row lock; call inside a transaction."""
    try:
        return (
            Meetup.objects
            .select_for_update()
            .get(id=meetup_id)
        )
    except Meetup.DoesNotExist:
        raise MeetupNotFoundError(meetup_id)


@transaction.atomic
def update_meetup(
    *,
    meetup_id: UUID,
    user_id: UUID,
    title: Optional[str] = None,
    description: Optional[str] = None,
    meetup_picture: Optional[str] = None,
    max_participants: Optional[int] = None,
    difficulty: Optional[str] = None,
    terrain_types: Optional[Iterable[str]] = None,
    distance_km: Optional[Decimal] = None,
    estimated_duration_min: Optional[int] = None,
    meeting_time: Optional[datetime] = None,
    latitude: Optional[Decimal] = None,
    longitude: Optional[Decimal] = None,
    status: Optional[str] = None
) -> Meetup:
    """
    Update a meetup (host only).

    Only the arguments that are not None are applied.

    Raises:
        MeetupNotFoundError: If meetup doesn't exist
        NotMeetupHostError: If user is not the host
        ValueError: If difficulty, status or a terrain type is invalid
        MeetupFullError: If max_participants drops below the current
            participant count
    """
    meetup = lock_meetup(meetup_id)

    if not meetup.is_host(user_id):
        logger.warning("User %s denied update of meetup %s", user_id, meetup.id)
        raise NotMeetupHostError('update', 'meetup', meetup.id)

    changes = {
        'title': title,
        'description': description,
        'meetup_picture': meetup_picture,
        'distance_km': distance_km,
        'estimated_duration_min': estimated_duration_min,
        'meeting_time': meeting_time,
        'latitude': latitude,
        'longitude': longitude,
    }
    if difficulty is not None:
        changes['difficulty'] = TrailDifficulty(difficulty)
    if status is not None:
        changes['status'] = MeetupStatus(status)
    if terrain_types is not None:
        changes['terrain_types'] = normalize_terrain_types(terrain_types)
    if max_participants is not None:
        participant_count = meetup.participations.count()
        if max_participants < participant_count:
            raise MeetupFullError(
                f"max_participants cannot be lower than the {participant_count} current participants"
            )
        changes['max_participants'] = max_participants

    update_fields = ['updated_at']
    for field, value in changes.items():
        if value is not None:
            setattr(meetup, field, value)
            update_fields.append(field)

    meetup.save(update_fields=update_fields)
    logger.info("Meetup %s updated by host %s", meetup.id, user_id)

    return meetup


@transaction.atomic
def delete_meetup(*, meetup_id: UUID, user_id: UUID) -> None:
    """
    Delete a meetup (host only). Participations are removed with it.

    Raises:
        MeetupNotFoundError: If meetup doesn't exist
        NotMeetupHostError: If user is not the host
    """
    meetup = lock_meetup(meetup_id)

    if not meetup.is_host(user_id):
        logger.warning("User %s denied deletion of meetup %s", user_id, meetup.id)
        raise NotMeetupHostError('delete', 'meetup', meetup.id)

    meetup.delete()
    logger.info("Meetup %s deleted by host %s", meetup_id, user_id)


def get_group_meetups(
    *,
    user_id: UUID,
    group_id: UUID,
    status: Optional[str] = None
) -> QuerySet[Meetup]:
    """
    Meetups of a group, soonest first.

    Meetups of a private group are visible to its accepted members only.

    Raises:
        GroupNotFoundError: If group doesn't exist
        GroupMeetupsHiddenError: If the group is private and the user
            is not an accepted member
        ValueError: If status is not a MeetupStatus
    """
    group = get_group_by_id(group_id=group_id)

    if group.is_private and not is_accepted_member(user_id=user_id, group_id=group.id):
        logger.warning("User %s denied meetups of private group %s", user_id, group.id)
        raise GroupMeetupsHiddenError('view meetups of', 'group', group.id)

    meetups = Meetup.objects.filter(group=group)
    if status is not None:
        meetups = meetups.filter(status=MeetupStatus(status))

    return meetups.select_related('host', 'group').order_by('meeting_time', 'id')


def get_hosted_meetups(*, user_id: UUID) -> QuerySet[Meetup]:
    """Meetups hosted by the user, soonest first."""
    return (
        Meetup.objects
        .filter(host_id=user_id)
        .select_related('host', 'group')
        .order_by('meeting_time', 'id')
    )
