import pytest
from apps.groups.models import Group, GroupMembership, GroupRole, MembershipStatus


@pytest.fixture
def leader(user):
    """The user leading the test groups."""
    return user


@pytest.fixture
def add_membership(db):
    """Factory adding a membership row to a group."""

    def _add_membership(group, user, role=GroupRole.MEMBER, status=MembershipStatus.ACCEPTED):
        return GroupMembership.objects.create(
            user=user,
            group=group,
            role=role,
            status=status,
            invited_by=user,
        )

    return _add_membership


@pytest.fixture
def group(db, leader, add_membership):
    """Private group led by `leader`."""
    group = Group.objects.create(
        name='Alpine Hikers',
        description='Weekend trail runs',
        is_private=True,
    )
    add_membership(group, leader, role=GroupRole.LEADER)
    return group


@pytest.fixture
def public_group(db, leader, add_membership):
    """Public group led by `leader`."""
    group = Group.objects.create(
        name='City Walkers',
        description='Open to everyone',
        is_private=False,
    )
    add_membership(group, leader, role=GroupRole.LEADER)
    return group


@pytest.fixture
def co_leader(make_user, group, add_membership):
    """Accepted co-leader of `group`."""
    co_leader = make_user('co_leader')
    add_membership(group, co_leader, role=GroupRole.CO_LEADER)
    return co_leader


@pytest.fixture
def member(other_user, group, add_membership):
    """Accepted member of `group`."""
    add_membership(group, other_user)
    return other_user


@pytest.fixture
def applicant(third_user, group, add_membership):
    """User with a pending join request to `group`."""
    add_membership(group, third_user, status=MembershipStatus.PENDING)
    return third_user
