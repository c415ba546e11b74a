import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from apps.groups.models import Group, GroupMembership, GroupRole, MembershipStatus
from apps.meetups.models import Meetup, MeetupParticipation, TrailDifficulty, TerrainType


def _add_membership(group, user, role=GroupRole.MEMBER, status=MembershipStatus.ACCEPTED):
    return GroupMembership.objects.create(user=user, group=group, role=role, status=status, invited_by=user)


@pytest.fixture
def host(user):
    """Accepted group member hosting the test meetups."""
    return user


@pytest.fixture
def private_group(db, host, other_user):
    """Private group: `host` leads it, `other_user` is an accepted member."""
    group = Group.objects.create(name='Forest Trail Club', is_private=True)
    _add_membership(group, host, role=GroupRole.LEADER)
    _add_membership(group, other_user)
    return group


@pytest.fixture
def public_group(db, host):
    """Public group led by `host`."""
    group = Group.objects.create(name='Open Trails', is_private=False)
    _add_membership(group, host, role=GroupRole.LEADER)
    return group


@pytest.fixture
def meetup_data():
    """Valid keyword arguments for create_meetup, minus user and group."""
    return {
        'title': 'Sunrise ridge hike',
        'description': 'Bring headlamps',
        'meeting_time': timezone.now() + timedelta(days=3),
        'latitude': Decimal('46.558300'),
        'longitude': Decimal('7.835000'),
        'difficulty': TrailDifficulty.INTERMEDIATE,
        'terrain_types': [TerrainType.ROCKY, TerrainType.MOUNTAIN],
        'distance_km': Decimal('12.50'),
        'estimated_duration_min': 240,
    }


def _create_meetup(host, group, **overrides):
    fields = {
        'title': 'Lake loop',
        'meeting_time': timezone.now() + timedelta(days=1),
        'latitude': Decimal('47.000000'),
        'longitude': Decimal('8.000000'),
    }
    fields.update(overrides)
    meetup = Meetup.objects.create(host=host, group=group, **fields)
    MeetupParticipation.objects.create(meetup=meetup, user=host)
    return meetup


@pytest.fixture
def private_meetup(private_group, host):
    """Meetup in the private group, host already participating."""
    return _create_meetup(host, private_group)


@pytest.fixture
def public_meetup(public_group, host):
    """Meetup in the public group, host already participating."""
    return _create_meetup(host, public_group, title='City park stroll')


@pytest.fixture
def small_meetup(public_group, host):
    """Public meetup with room for the host and one more participant."""
    return _create_meetup(host, public_group, title='Tiny trek', max_participants=2)
