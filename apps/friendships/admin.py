from django.contrib import admin
from apps.friendships.models import Friendship


@admin.register(Friendship)
class FriendshipAdmin(admin.ModelAdmin):
    """Admin interface for Friendships."""

    list_display = ['initiator', 'recipient', 'status', 'created_at', 'updated_at']
    list_filter = ['status', 'created_at']
    search_fields = ['initiator__username', 'recipient__username', 'initiator__email', 'recipient__email']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('initiator', 'recipient')
