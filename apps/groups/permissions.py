from rest_framework import permissions

from apps.groups.services import user_has_manage_permissions


class IsGroupManager(permissions.BasePermission):
    """
    Permission: User must be an accepted leader or co-leader of the group.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Group instance
        return user_has_manage_permissions(user_id=request.user.id, group_id=obj.id)
