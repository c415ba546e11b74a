from django.contrib import admin
from apps.meetups.models import Meetup, MeetupParticipation


class MeetupParticipationInline(admin.TabularInline):
    """Inline participants in the meetup admin."""
    model = MeetupParticipation
    extra = 0
    fields = ['user', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Meetup)
class MeetupAdmin(admin.ModelAdmin):
    """Admin interface for Meetups."""

    list_display = ['title', 'group', 'host', 'status', 'difficulty', 'meeting_time', 'max_participants']
    list_filter = ['status', 'difficulty', 'meeting_time']
    search_fields = ['title', 'description', 'group__name', 'host__username']
    readonly_fields = ['id', 'created_at', 'updated_at']
    date_hierarchy = 'meeting_time'
    inlines = [MeetupParticipationInline]

    fieldsets = (
        ('Meetup', {
            'fields': ('id', 'title', 'description', 'meetup_picture', 'group', 'host', 'status')
        }),
        ('Trail', {
            'fields': ('difficulty', 'terrain_types', 'distance_km', 'estimated_duration_min', 'max_participants')
        }),
        ('Schedule & Location', {
            'fields': ('meeting_time', 'latitude', 'longitude')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('group', 'host')


@admin.register(MeetupParticipation)
class MeetupParticipationAdmin(admin.ModelAdmin):
    """Admin interface for Meetup Participations."""

    list_display = ['meetup', 'user', 'joined_at']
    search_fields = ['meetup__title', 'user__username', 'user__email']
    readonly_fields = ['joined_at']
