from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.pagination import StandardPagination

from .serializers import (
    FriendshipSerializer,
    SendFriendRequestSerializer,
    UpdateFriendshipSerializer,
)
from apps.friendships.services import (
    send_friend_request,
    update_friendship_status,
    delete_friendship,
    get_friendship_between,
    get_friends,
    get_pending_requests,
)


def _paginated_friendships(request, queryset):
    paginator = StandardPagination()
    page = paginator.paginate_queryset(queryset, request)
    serializer = FriendshipSerializer(page, many=True, context={'viewer_id': request.user.id})
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    responses={200: FriendshipSerializer(many=True)},
    description="Accepted friendships of the current user.",
    tags=['friendships'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def friends(request):
    """List the current user's friends."""
    return _paginated_friendships(request, get_friends(user_id=request.user.id))


@extend_schema(
    responses={200: FriendshipSerializer(many=True)},
    description="Pending friend requests sent or received by the current user.",
    tags=['friendships'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pending_requests(request):
    """List the current user's pending requests."""
    return _paginated_friendships(request, get_pending_requests(user_id=request.user.id))


@extend_schema(
    request=SendFriendRequestSerializer,
    responses={201: FriendshipSerializer},
    tags=['friendships'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_request(request):
    """Send a friend request (accepts a crossing request instead)."""
    serializer = SendFriendRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    friendship = send_friend_request(
        sender_id=request.user.id,
        receiver_id=serializer.validated_data['receiver_id'],
    )
    output = FriendshipSerializer(friendship, context={'viewer_id': request.user.id})
    return Response(output.data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UpdateFriendshipSerializer,
    responses={200: FriendshipSerializer},
    tags=['friendships'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_status(request, friendship_id):
    """Accept or reject a friendship."""
    serializer = UpdateFriendshipSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    friendship = update_friendship_status(
        friendship_id=friendship_id,
        user_id=request.user.id,
        new_status=serializer.validated_data['status'],
    )
    return Response(FriendshipSerializer(friendship, context={'viewer_id': request.user.id}).data)


@extend_schema(responses={200: FriendshipSerializer}, tags=['friendships'])
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def friendship_with(request, user_id):
    """Get (GET) or remove (DELETE) the friendship with another user."""
    if request.method == 'DELETE':
        delete_friendship(user_id=request.user.id, friend_id=user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    friendship = get_friendship_between(user_id=request.user.id, friend_id=user_id)
    return Response(FriendshipSerializer(friendship, context={'viewer_id': request.user.id}).data)
