"""
Friendship management service.

Owns the pairwise friendship relation and its status transitions.
Creation locks both user rows (in id order) so requests for the same
pair serialize; transitions lock the friendship row itself.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.accounts.services import get_user_by_id
from apps.friendships.models import Friendship, FriendshipStatus

from .exceptions import (
    FriendshipNotFoundError,
    FriendshipAlreadyExistsError,
    CannotBefriendSelfError,
    NotFriendshipParticipantError,
    OnlyRecipientCanAcceptError,
)

logger = logging.getLogger(__name__)


def _lock_pair(user_id: UUID, other_user_id: UUID) -> None:
    list(
        User.objects
        .select_for_update()
        .filter(id__in=[user_id, other_user_id])
        .order_by('id')
    )


@transaction.atomic
def send_friend_request(*, sender_id: UUID, receiver_id: UUID) -> Friendship:
    """
    Send a friend request.

    Existing rows always win over creating a new one:
    1. A REJECTED request from sender to receiver is reopened as PENDING
    2. A PENDING request from receiver to sender is accepted (crossing
       requests make the users friends immediately)
    3. Otherwise a new PENDING row is created

    Raises:
        CannotBefriendSelfError: If sender and receiver are the same user
        UserNotFoundError: If either user does not exist
        FriendshipAlreadyExistsError: If a row exists in any other status
    """
    if str(sender_id) == str(receiver_id):
        raise CannotBefriendSelfError("Cannot send friend request to self")

    sender = get_user_by_id(user_id=sender_id, resource='Sender user')
    receiver = get_user_by_id(user_id=receiver_id, resource='Receiver user')

    _lock_pair(sender.id, receiver.id)

    existing = (
        Friendship.objects
        .select_for_update()
        .filter(initiator=sender, recipient=receiver)
        .first()
    )
    if existing is not None:
        if existing.status == FriendshipStatus.REJECTED:
            existing.status = FriendshipStatus.PENDING
            existing.save(update_fields=['status', 'updated_at'])
            logger.info("Friend request %s reopened by %s", existing.id, sender.id)
            return existing

        raise FriendshipAlreadyExistsError("Friendship already exists")

    inverse = (
        Friendship.objects
        .select_for_update()
        .filter(initiator=receiver, recipient=sender)
        .first()
    )
    if inverse is not None:
        if inverse.status == FriendshipStatus.PENDING:
            inverse.status = FriendshipStatus.ACCEPTED
            inverse.save(update_fields=['status', 'updated_at'])
            logger.info("Crossing friend requests: %s auto-accepted by %s", inverse.id, sender.id)
            return inverse

        raise FriendshipAlreadyExistsError("Friendship already exists")

    try:
        friendship = Friendship.objects.create(
            initiator=sender,
            recipient=receiver,
            status=FriendshipStatus.PENDING,
        )
    except IntegrityError:
        raise FriendshipAlreadyExistsError("Friendship already exists")

    logger.info("Friend request %s sent from %s to %s", friendship.id, sender.id, receiver.id)
    return friendship


@transaction.atomic
def update_friendship_status(
    *,
    friendship_id: UUID,
    user_id: UUID,
    new_status: str
) -> Friendship:
    """
    Change the status of a friendship.

    Only the recipient may accept a pending request; either party may
    reject.

    Raises:
        ValueError: If new_status is not a FriendshipStatus
        FriendshipNotFoundError: If the friendship doesn't exist
        NotFriendshipParticipantError: If user is neither party
        OnlyRecipientCanAcceptError: If the sender tries to accept
    """
    if new_status not in FriendshipStatus.values:
        raise ValueError(f"Invalid status. Must be one of: {FriendshipStatus.values}")

    try:
        friendship = (
            Friendship.objects
            .select_for_update()
            .get(id=friendship_id)
        )
    except Friendship.DoesNotExist:
        raise FriendshipNotFoundError(friendship_id)

    if not friendship.involves(user_id):
        logger.warning("User %s denied updating friendship %s", user_id, friendship.id)
        raise NotFriendshipParticipantError('update', 'friendship', friendship.id)

    if (
        new_status == FriendshipStatus.ACCEPTED
        and friendship.status == FriendshipStatus.PENDING
        and str(user_id) != str(friendship.recipient_id)
    ):
        raise OnlyRecipientCanAcceptError("Only the receiver can accept this request")

    friendship.status = new_status
    friendship.save(update_fields=['status', 'updated_at'])
    logger.info("Friendship %s set to %s by %s", friendship.id, new_status, user_id)

    return friendship


@transaction.atomic
def delete_friendship(*, user_id: UUID, friend_id: UUID) -> None:
    """
    Remove the friendship between two users, whatever its status.

    Raises:
        FriendshipNotFoundError: If no row exists for the pair
    """
    friendship = (
        Friendship.objects
        .between(user_id, friend_id)
        .select_for_update()
        .first()
    )
    if friendship is None:
        raise FriendshipNotFoundError()

    friendship.delete()
    logger.info("Friendship between %s and %s deleted", user_id, friend_id)


def get_friendship_between(*, user_id: UUID, friend_id: UUID) -> Friendship:
    """
    Raises:
        FriendshipNotFoundError: If no row exists for the pair
    """
    friendship = Friendship.objects.between(user_id, friend_id).first()
    if friendship is None:
        raise FriendshipNotFoundError()
    return friendship


def _friendships_with_status(user_id: UUID, status: str) -> QuerySet[Friendship]:
    return (
        Friendship.objects
        .involving(user_id)
        .filter(status=status)
        .select_related('initiator', 'recipient')
        .order_by('-updated_at', 'id')
    )


def get_friends(*, user_id: UUID) -> QuerySet[Friendship]:
    """Accepted friendships of the user, either ordering."""
    return _friendships_with_status(user_id, FriendshipStatus.ACCEPTED)


def get_pending_requests(*, user_id: UUID) -> QuerySet[Friendship]:
    """Pending friendships of the user, sent or received."""
    return _friendships_with_status(user_id, FriendshipStatus.PENDING)
