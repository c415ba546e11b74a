"""
Meetups app services layer.

Meetup lifecycle and participation. Group visibility and membership
decisions are delegated to the groups services.
"""

from .exceptions import (
    MeetupNotFoundError,
    ParticipationNotFoundError,
    AlreadyParticipatingError,
    HostCannotJoinError,
    MeetupFullError,
    NotMeetupHostError,
    ParticipantsHiddenError,
    GroupMeetupsHiddenError,
)

from .meetup_management import (
    normalize_terrain_types,
    create_meetup,
    get_meetup_by_id,
    update_meetup,
    delete_meetup,
    get_group_meetups,
    get_hosted_meetups,
)

from .participation_management import (
    is_participant,
    join_meetup,
    leave_meetup,
    get_participants,
)


__all__ = [
    # Exceptions
    'MeetupNotFoundError',
    'ParticipationNotFoundError',
    'AlreadyParticipatingError',
    'HostCannotJoinError',
    'MeetupFullError',
    'NotMeetupHostError',
    'ParticipantsHiddenError',
    'GroupMeetupsHiddenError',

    # Meetup Management
    'normalize_terrain_types',
    'create_meetup',
    'get_meetup_by_id',
    'update_meetup',
    'delete_meetup',
    'get_group_meetups',
    'get_hosted_meetups',

    # Participation Management
    'is_participant',
    'join_meetup',
    'leave_meetup',
    'get_participants',
]
