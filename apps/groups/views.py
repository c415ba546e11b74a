from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.pagination import StandardPagination

from .models import Group, MembershipStatus
from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupUpdateSerializer,
    GroupMemberSerializer,
    UpdateMemberRoleSerializer,
    HiddenGroupMembersSerializer,
)
from .permissions import IsGroupManager

from apps.groups.services import (
    HiddenGroupMembers,
    create_group,
    get_group_by_id,
    update_group,
    delete_group,
    get_my_groups,
    get_favorite_groups,
    join_group,
    leave_group,
    kick_member,
    update_membership_request,
    get_pending_requests,
    toggle_favorite,
    check_is_favorite,
    get_group_members,
    update_member_role,
)

UUID_PATTERN = r'[0-9a-fA-F-]{36}'


class GroupViewSet(viewsets.GenericViewSet):
    """
    ViewSet for groups and their memberships.

    All business logic is handled by services.
    Views are thin HTTP handlers only; service errors are rendered by
    the shared exception handler.
    """

    queryset = Group.objects.all()
    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action == 'partial_update':
            return [IsAuthenticated(), IsGroupManager()]
        return [IsAuthenticated()]

    def _paginated(self, queryset, serializer_class):
        page = self.paginate_queryset(queryset)
        serializer = serializer_class(page, many=True, context={'request': self.request})
        return self.get_paginated_response(serializer.data)

    def create(self, request, *args, **kwargs):
        """Create a new group led by the current user."""
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            name=serializer.validated_data['name'],
            owner=request.user,
            description=serializer.validated_data.get('description', ''),
            is_private=serializer.validated_data['is_private'],
            image_url=serializer.validated_data.get('image_url', ''),
        )

        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        """Get group details."""
        group = get_group_by_id(group_id=pk)
        return Response(GroupSerializer(group, context={'request': request}).data)

    def partial_update(self, request, pk=None):
        """Update group details (leader or co-leader)."""
        self.get_object()
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = update_group(group_id=pk, user_id=request.user.id, **serializer.validated_data)
        return Response(GroupSerializer(group, context={'request': request}).data)

    def destroy(self, request, pk=None):
        """Delete a group (leader or co-leader)."""
        delete_group(group_id=pk, user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def my(self, request):
        """Groups where the current user is an accepted member."""
        return self._paginated(get_my_groups(user_id=request.user.id), GroupSerializer)

    @action(detail=False, methods=['get'])
    def favorites(self, request):
        """Groups the current user flagged as favorite."""
        return self._paginated(get_favorite_groups(user_id=request.user.id), GroupSerializer)

    @action(detail=True, methods=['post'])
    def join(self, request, pk=None):
        """Join a group, or request to join a private one."""
        membership = join_group(user=request.user, group_id=pk)
        return Response(GroupMemberSerializer(membership).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a group."""
        leave_group(user_id=request.user.id, group_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get', 'post'])
    def favorite(self, request, pk=None):
        """Read (GET) or toggle (POST) the favorite flag."""
        if request.method == 'POST':
            is_favorite = toggle_favorite(user_id=request.user.id, group_id=pk)
        else:
            is_favorite = check_is_favorite(user_id=request.user.id, group_id=pk)
        return Response({'is_favorite': is_favorite})

    @extend_schema(description="Accepted members, or only their count for outsiders of a private group.")
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """List accepted members of the group."""
        paginator = self.paginator
        view = get_group_members(
            requester_id=request.user.id,
            group_id=pk,
            page=request.query_params.get('page', 1),
            page_size=paginator.get_page_size(request),
        )

        if isinstance(view, HiddenGroupMembers):
            return Response(HiddenGroupMembersSerializer(view).data)

        return Response({
            'is_private': view.is_private,
            'members_visible': view.members_visible,
            'total_members': view.total_members,
            'page': view.page.number,
            'total_pages': view.page.paginator.num_pages,
            'is_last': not view.page.has_next(),
            'results': GroupMemberSerializer(view.page.object_list, many=True).data,
        })

    @action(detail=True, methods=['get'])
    def requests(self, request, pk=None):
        """Pending join requests (leader or co-leader)."""
        pending = get_pending_requests(admin_id=request.user.id, group_id=pk)
        return self._paginated(pending, GroupMemberSerializer)

    @action(detail=True, methods=['post'], url_path=rf'requests/(?P<user_id>{UUID_PATTERN})/accept')
    def accept_request(self, request, pk=None, user_id=None):
        """Accept a pending join request."""
        membership = update_membership_request(
            admin_id=request.user.id,
            group_id=pk,
            user_id=user_id,
            new_status=MembershipStatus.ACCEPTED,
        )
        return Response(GroupMemberSerializer(membership).data)

    @action(detail=True, methods=['post'], url_path=rf'requests/(?P<user_id>{UUID_PATTERN})/reject')
    def reject_request(self, request, pk=None, user_id=None):
        """Reject (and discard) a pending join request."""
        update_membership_request(
            admin_id=request.user.id,
            group_id=pk,
            user_id=user_id,
            new_status=MembershipStatus.REJECTED,
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['delete'], url_path=rf'members/(?P<user_id>{UUID_PATTERN})')
    def kick(self, request, pk=None, user_id=None):
        """Remove a member from the group."""
        kick_member(admin_id=request.user.id, group_id=pk, user_id=user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'], url_path=rf'members/(?P<user_id>{UUID_PATTERN})/role')
    def role(self, request, pk=None, user_id=None):
        """Change a member's role, or transfer leadership (leader only)."""
        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = update_member_role(
            admin_id=request.user.id,
            group_id=pk,
            user_id=user_id,
            new_role=serializer.validated_data['role'],
        )
        return Response(GroupMemberSerializer(membership).data)
