"""Domain exceptions for meetups app."""

from apps.common.exceptions import (
    NotFoundError,
    ConflictError,
    BusinessRuleError,
    PermissionDeniedError,
)


class MeetupNotFoundError(NotFoundError):
    """Meetup does not exist."""

    def __init__(self, meetup_id=None):
        super().__init__('Meetup', meetup_id)


class ParticipationNotFoundError(NotFoundError):
    """User does not participate in the meetup."""

    def __init__(self, meetup_id=None):
        super().__init__('Meetup participation', meetup_id)


class AlreadyParticipatingError(ConflictError):
    """User already participates in the meetup."""
    pass


class HostCannotJoinError(BusinessRuleError):
    """Host tried to join their own meetup."""
    pass


class MeetupFullError(BusinessRuleError):
    """Meetup reached max_participants."""
    pass


class NotMeetupHostError(PermissionDeniedError):
    """Only the host may change or delete a meetup."""
    pass


class ParticipantsHiddenError(PermissionDeniedError):
    """Participants of a private group's meetup are visible to participants only."""
    pass


class GroupMeetupsHiddenError(PermissionDeniedError):
    """Meetups of a private group are visible to accepted members only."""
    pass
