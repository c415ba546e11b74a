from rest_framework import serializers
from .models import (
    Meetup,
    MeetupParticipation,
    MeetupStatus,
    TerrainType,
    TrailDifficulty,
    MAX_PARTICIPANTS_LIMIT,
)
from apps.accounts.serializers import UserMinimalSerializer


class MeetupSerializer(serializers.ModelSerializer):
    """Main serializer for meetups."""

    host = UserMinimalSerializer(read_only=True)
    participant_count = serializers.SerializerMethodField()

    class Meta:
        model = Meetup
        fields = [
            'id',
            'host',
            'group',
            'title',
            'description',
            'meetup_picture',
            'max_participants',
            'participant_count',
            'difficulty',
            'terrain_types',
            'distance_km',
            'estimated_duration_min',
            'meeting_time',
            'latitude',
            'longitude',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_participant_count(self, obj):
        return obj.participations.count()


class MeetupCreateSerializer(serializers.Serializer):
    """Serializer for creating meetups."""

    group_id = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    meetup_picture = serializers.URLField(required=False, allow_blank=True, default='')
    max_participants = serializers.IntegerField(
        min_value=1,
        max_value=MAX_PARTICIPANTS_LIMIT,
        required=False,
        default=MAX_PARTICIPANTS_LIMIT,
    )
    difficulty = serializers.ChoiceField(choices=TrailDifficulty.choices, required=False, default=TrailDifficulty.BEGINNER)
    terrain_types = serializers.ListField(
        child=serializers.ChoiceField(choices=TerrainType.choices),
        required=False,
        default=list,
    )
    distance_km = serializers.DecimalField(max_digits=8, decimal_places=2, min_value=0, required=False, allow_null=True)
    estimated_duration_min = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    meeting_time = serializers.DateTimeField()
    latitude = serializers.DecimalField(max_digits=9, decimal_places=6, min_value=-90, max_value=90)
    longitude = serializers.DecimalField(max_digits=9, decimal_places=6, min_value=-180, max_value=180)


class MeetupUpdateSerializer(serializers.Serializer):
    """Serializer for updating meetups; every field optional."""

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    meetup_picture = serializers.URLField(required=False, allow_blank=True)
    max_participants = serializers.IntegerField(min_value=1, max_value=MAX_PARTICIPANTS_LIMIT, required=False)
    difficulty = serializers.ChoiceField(choices=TrailDifficulty.choices, required=False)
    terrain_types = serializers.ListField(
        child=serializers.ChoiceField(choices=TerrainType.choices),
        required=False,
    )
    distance_km = serializers.DecimalField(max_digits=8, decimal_places=2, min_value=0, required=False)
    estimated_duration_min = serializers.IntegerField(min_value=0, required=False)
    meeting_time = serializers.DateTimeField(required=False)
    latitude = serializers.DecimalField(max_digits=9, decimal_places=6, min_value=-90, max_value=90, required=False)
    longitude = serializers.DecimalField(max_digits=9, decimal_places=6, min_value=-180, max_value=180, required=False)
    status = serializers.ChoiceField(choices=MeetupStatus.choices, required=False)


class MeetupStatusFilterSerializer(serializers.Serializer):
    """Query parameters for group meetup listings."""

    status = serializers.ChoiceField(choices=MeetupStatus.choices, required=False)


class ParticipantSerializer(serializers.ModelSerializer):
    """Participant with public profile."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = MeetupParticipation
        fields = ['id', 'user', 'meetup', 'joined_at']
        read_only_fields = fields
