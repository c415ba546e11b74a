# ==========================================
# apps/friendships/models.py
# ==========================================

from django.db import models
from django.db.models import Q
import uuid


class FriendshipStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACCEPTED = 'ACCEPTED', 'Accepted'
    REJECTED = 'REJECTED', 'Rejected'


class FriendshipQuerySet(models.QuerySet):

    def between(self, user_id, other_user_id):
        """Rows for the unordered pair, whichever side initiated."""
        return self.filter(
            Q(initiator_id=user_id, recipient_id=other_user_id)
            | Q(initiator_id=other_user_id, recipient_id=user_id)
        )

    def involving(self, user_id):
        """Rows where the user is either party."""
        return self.filter(Q(initiator_id=user_id) | Q(recipient_id=user_id))


class Friendship(models.Model):
    """
    Friendship between two users.

    The pair is directional only for bookkeeping (who asked whom). At
    most one row exists for any unordered pair; the services check
    both orderings before creating one.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    initiator = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='friendships_initiated',
    )
    recipient = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='friendships_received',
    )
    status = models.CharField(max_length=20, choices=FriendshipStatus.choices, default=FriendshipStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = FriendshipQuerySet.as_manager()

    class Meta:
        db_table = 'friendships'
        constraints = [
            models.UniqueConstraint(fields=['initiator', 'recipient'], name='unique_friendship_pair'),
            models.CheckConstraint(condition=~Q(initiator=models.F('recipient')), name='friendship_not_self'),
        ]
        indexes = [
            models.Index(fields=['initiator', 'status'], name='friendship_initiator_idx'),
            models.Index(fields=['recipient', 'status'], name='friendship_recipient_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.initiator_id} -> {self.recipient_id} ({self.status})"

    def involves(self, user_id) -> bool:
        return str(user_id) in (str(self.initiator_id), str(self.recipient_id))

    def other_party_id(self, user_id):
        """ID of the party that is not `user_id`."""
        if str(self.initiator_id) == str(user_id):
            return self.recipient_id
        return self.initiator_id
