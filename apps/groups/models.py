# ==========================================
# apps/groups/models.py
# ==========================================

from django.db import models
import uuid


class GroupRole(models.TextChoices):
    LEADER = 'LEADER', 'Leader'
    CO_LEADER = 'CO_LEADER', 'Co-leader'
    ELDER = 'ELDER', 'Elder'
    MEMBER = 'MEMBER', 'Member'


class MembershipStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACCEPTED = 'ACCEPTED', 'Accepted'
    REJECTED = 'REJECTED', 'Rejected'


# Descending authority. Used only for permission comparisons.
ROLE_AUTHORITY = {
    GroupRole.LEADER: 3,
    GroupRole.CO_LEADER: 2,
    GroupRole.ELDER: 1,
    GroupRole.MEMBER: 0,
}


def role_authority(role) -> int:
    """Return the authority rank of a role (higher means more authority)."""
    return ROLE_AUTHORITY[GroupRole(role)]


def outranks(role, other) -> bool:
    """True if `role` carries strictly more authority than `other`."""
    return role_authority(role) > role_authority(other)


class Group(models.Model):
    """A user group; meetups are organized inside groups."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    is_private = models.BooleanField(default=False)
    image_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'groups'
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class GroupMembership(models.Model):
    """User membership in a group, with approval status and role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    status = models.CharField(max_length=20, choices=MembershipStatus.choices, default=MembershipStatus.PENDING)
    role = models.CharField(max_length=20, choices=GroupRole.choices, default=GroupRole.MEMBER)
    invited_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    is_favorite = models.BooleanField(default=False)
    joined_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'group_memberships'
        unique_together = [['user', 'group']]
        indexes = [
            models.Index(fields=['group', 'status'], name='membership_group_status_idx'),
            models.Index(fields=['user', 'status'], name='membership_user_status_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user} in {self.group} ({self.role}, {self.status})"

    @property
    def is_accepted(self):
        return self.status == MembershipStatus.ACCEPTED
