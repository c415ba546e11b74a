from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.pagination import StandardPagination

from .models import Meetup, MeetupStatus
from .serializers import (
    MeetupSerializer,
    MeetupCreateSerializer,
    MeetupUpdateSerializer,
    MeetupStatusFilterSerializer,
    ParticipantSerializer,
)

from apps.meetups.services import (
    create_meetup,
    get_meetup_by_id,
    update_meetup,
    delete_meetup,
    get_group_meetups,
    get_hosted_meetups,
    join_meetup,
    leave_meetup,
    get_participants,
)

UUID_PATTERN = r'[0-9a-fA-F-]{36}'


class MeetupViewSet(viewsets.GenericViewSet):
    """
    ViewSet for meetups and participation.

    Views are thin HTTP handlers; permission decisions (host-only
    mutation, private group visibility) live in the services.
    """

    queryset = Meetup.objects.all()
    serializer_class = MeetupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StandardPagination
    lookup_value_regex = UUID_PATTERN

    def _paginated(self, queryset):
        page = self.paginate_queryset(queryset)
        serializer = MeetupSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def create(self, request, *args, **kwargs):
        """Create a meetup in a group the user belongs to."""
        serializer = MeetupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        meetup = create_meetup(user=request.user, **serializer.validated_data)
        return Response(MeetupSerializer(meetup).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        """Get meetup details."""
        meetup = get_meetup_by_id(meetup_id=pk)
        return Response(MeetupSerializer(meetup).data)

    def partial_update(self, request, pk=None):
        """Update a meetup (host only)."""
        serializer = MeetupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        meetup = update_meetup(meetup_id=pk, user_id=request.user.id, **serializer.validated_data)
        return Response(MeetupSerializer(meetup).data)

    def destroy(self, request, pk=None):
        """Delete a meetup (host only)."""
        delete_meetup(meetup_id=pk, user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def hosted(self, request):
        """Meetups hosted by the current user."""
        return self._paginated(get_hosted_meetups(user_id=request.user.id))

    @extend_schema(
        parameters=[OpenApiParameter('status', str, enum=MeetupStatus.values, required=False)],
    )
    @action(detail=False, methods=['get'], url_path=rf'group/(?P<group_id>{UUID_PATTERN})')
    def group(self, request, group_id=None):
        """Meetups of a group, optionally filtered by status."""
        filters = MeetupStatusFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        meetups = get_group_meetups(
            user_id=request.user.id,
            group_id=group_id,
            status=filters.validated_data.get('status'),
        )
        return self._paginated(meetups)

    @action(detail=True, methods=['post'])
    def join(self, request, pk=None):
        """Join a meetup."""
        participation = join_meetup(user_id=request.user.id, meetup_id=pk)
        return Response(ParticipantSerializer(participation).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def leave(self, request, pk=None):
        """Leave a meetup."""
        leave_meetup(user_id=request.user.id, meetup_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def participants(self, request, pk=None):
        """Participants of a meetup, in join order."""
        page = get_participants(
            requester_id=request.user.id,
            meetup_id=pk,
            page=request.query_params.get('page', 1),
            page_size=self.paginator.get_page_size(request),
        )
        return Response({
            'count': page.paginator.count,
            'page': page.number,
            'total_pages': page.paginator.num_pages,
            'is_last': not page.has_next(),
            'results': ParticipantSerializer(page.object_list, many=True).data,
        })
