# ==========================================
# apps/meetups/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
import uuid


class MeetupStatus(models.TextChoices):
    WAITING = 'WAITING', 'Waiting'
    CURRENT = 'CURRENT', 'Current'
    FINISHED = 'FINISHED', 'Finished'
    CANCELLED = 'CANCELLED', 'Cancelled'


class TrailDifficulty(models.TextChoices):
    BEGINNER = 'BEGINNER', 'Beginner'
    INTERMEDIATE = 'INTERMEDIATE', 'Intermediate'
    ADVANCED = 'ADVANCED', 'Advanced'


class TerrainType(models.TextChoices):
    UNSPECIFIED = 'UNSPECIFIED', 'Unspecified'
    ROCKY = 'ROCKY', 'Rocky'
    MUDDY = 'MUDDY', 'Muddy'
    SANDY = 'SANDY', 'Sandy'
    FOREST = 'FOREST', 'Forest'
    MOUNTAIN = 'MOUNTAIN', 'Mountain'
    DESERT = 'DESERT', 'Desert'
    RIVER = 'RIVER', 'River'
    SNOW = 'SNOW', 'Snow'
    GRAVEL = 'GRAVEL', 'Gravel'
    CLAY = 'CLAY', 'Clay'
    VOLCANIC = 'VOLCANIC', 'Volcanic'


MAX_PARTICIPANTS_LIMIT = 32767


class Meetup(models.Model):
    """
    A scheduled meetup organized inside a group.

    Only the host may change or delete it; group roles play no part.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    host = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='hosted_meetups')
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='meetups')

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    meetup_picture = models.URLField(max_length=500, blank=True)
    max_participants = models.PositiveSmallIntegerField(
        default=MAX_PARTICIPANTS_LIMIT,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_PARTICIPANTS_LIMIT)],
    )
    difficulty = models.CharField(max_length=20, choices=TrailDifficulty.choices, default=TrailDifficulty.BEGINNER)
    # Deduplicated list of TerrainType values
    terrain_types = models.JSONField(default=list, blank=True)
    distance_km = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    estimated_duration_min = models.PositiveIntegerField(null=True, blank=True)

    meeting_time = models.DateTimeField()
    latitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
    )
    longitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
    )

    status = models.CharField(max_length=20, choices=MeetupStatus.choices, default=MeetupStatus.WAITING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'meetups'
        indexes = [
            models.Index(fields=['group', 'status'], name='meetup_group_status_idx'),
            models.Index(fields=['host'], name='meetup_host_idx'),
            models.Index(fields=['meeting_time'], name='meetup_meeting_time_idx'),
        ]
        ordering = ['meeting_time']

    def __str__(self):
        return self.title

    def is_host(self, user_id) -> bool:
        return str(self.host_id) == str(user_id)


class MeetupParticipation(models.Model):
    """A user taking part in a meetup."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    meetup = models.ForeignKey(Meetup, on_delete=models.CASCADE, related_name='participations')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='meetup_participations')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'meetup_participations'
        unique_together = [['meetup', 'user']]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user} at {self.meetup}"
