import pytest
from apps.friendships.models import Friendship, FriendshipStatus


@pytest.fixture
def pending_request(db, user, other_user):
    """Pending request from `user` to `other_user`."""
    return Friendship.objects.create(
        initiator=user,
        recipient=other_user,
        status=FriendshipStatus.PENDING,
    )


@pytest.fixture
def friendship(db, user, other_user):
    """Accepted friendship initiated by `user`."""
    return Friendship.objects.create(
        initiator=user,
        recipient=other_user,
        status=FriendshipStatus.ACCEPTED,
    )


@pytest.fixture
def rejected_request(db, user, other_user):
    """Rejected request from `user` to `other_user`."""
    return Friendship.objects.create(
        initiator=user,
        recipient=other_user,
        status=FriendshipStatus.REJECTED,
    )
