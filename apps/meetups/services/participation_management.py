"""
Participation management service.

Join and leave lock the meetup row, so capacity checks and inserts
for the same meetup are serialized.
"""

import logging
from uuid import UUID

from django.core.paginator import Page
from django.db import transaction, IntegrityError

from apps.common.pagination import paginate
from apps.groups.services import is_accepted_member, InsufficientPermissionsError
from apps.meetups.models import Meetup, MeetupParticipation

from .meetup_management import lock_meetup
from .exceptions import (
    MeetupNotFoundError,
    ParticipationNotFoundError,
    AlreadyParticipatingError,
    HostCannotJoinError,
    MeetupFullError,
    ParticipantsHiddenError,
)

logger = logging.getLogger(__name__)


def is_participant(*, user_id: UUID, meetup_id: UUID) -> bool:
    return MeetupParticipation.objects.filter(meetup_id=meetup_id, user_id=user_id).exists()


@transaction.atomic
def join_meetup(*, user_id: UUID, meetup_id: UUID) -> MeetupParticipation:
    """
    Join a meetup.

    Meetups of a private group are open to its accepted members only.

    Raises:
        MeetupNotFoundError: If meetup doesn't exist
        HostCannotJoinError: If the user hosts the meetup
        InsufficientPermissionsError: If the group is private and the
            user is not an accepted member
        AlreadyParticipatingError: If the user already participates
        MeetupFullError: If max_participants is reached
    """
    meetup = lock_meetup(meetup_id)

    if meetup.is_host(user_id):
        raise HostCannotJoinError("Host cannot join their own meetup")

    if meetup.group.is_private and not is_accepted_member(user_id=user_id, group_id=meetup.group_id):
        logger.warning("User %s denied joining meetup %s of private group", user_id, meetup.id)
        raise InsufficientPermissionsError('join meetups of', 'group', meetup.group_id)

    if is_participant(user_id=user_id, meetup_id=meetup.id):
        raise AlreadyParticipatingError("User already participates in this meetup")

    if meetup.participations.count() >= meetup.max_participants:
        raise MeetupFullError(f"Meetup is full ({meetup.max_participants} participants)")

    try:
        participation = MeetupParticipation.objects.create(meetup=meetup, user_id=user_id)
    except IntegrityError:
        raise AlreadyParticipatingError("User already participates in this meetup")

    logger.info("User %s joined meetup %s", user_id, meetup.id)
    return participation


@transaction.atomic
def leave_meetup(*, user_id: UUID, meetup_id: UUID) -> None:
    """
    Leave a meetup.

    Raises:
        MeetupNotFoundError: If meetup doesn't exist
        ParticipationNotFoundError: If the user does not participate
    """
    meetup = lock_meetup(meetup_id)

    deleted, _ = MeetupParticipation.objects.filter(meetup=meetup, user_id=user_id).delete()
    if not deleted:
        raise ParticipationNotFoundError(meetup.id)

    logger.info("User %s left meetup %s", user_id, meetup.id)


def get_participants(
    *,
    requester_id: UUID,
    meetup_id: UUID,
    page: int = 1,
    page_size: int = None
) -> Page:
    """
    Paginated participants of a meetup, in join order.

    For a private group only participants may see the list; being a
    group member is not enough.

    Raises:
        MeetupNotFoundError: If meetup doesn't exist
        ParticipantsHiddenError: If the requester may not see the list
    """
    try:
        meetup = Meetup.objects.select_related('group').get(id=meetup_id)
    except Meetup.DoesNotExist:
        raise MeetupNotFoundError(meetup_id)

    if meetup.group.is_private and not is_participant(user_id=requester_id, meetup_id=meetup.id):
        logger.warning("User %s denied participants of meetup %s", requester_id, meetup.id)
        raise ParticipantsHiddenError('view participants of', 'meetup', meetup.id)

    participants = (
        MeetupParticipation.objects
        .filter(meetup=meetup)
        .select_related('user')
        .order_by('joined_at', 'id')
    )
    return paginate(participants, page=page, page_size=page_size)
