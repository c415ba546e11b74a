from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import Friendship, FriendshipStatus


class FriendshipSerializer(serializers.ModelSerializer):
    """
    Friendship rendered from the viewer's side.

    `friend` is the other party; `direction` tells whether the viewer
    sent or received the request. Needs `viewer_id` in the context.
    """

    friend = serializers.SerializerMethodField()
    direction = serializers.SerializerMethodField()

    class Meta:
        model = Friendship
        fields = ['id', 'friend', 'direction', 'status', 'created_at', 'updated_at']
        read_only_fields = fields

    def get_friend(self, obj):
        viewer_id = self.context['viewer_id']
        other = obj.recipient if str(obj.initiator_id) == str(viewer_id) else obj.initiator
        return UserMinimalSerializer(other).data

    def get_direction(self, obj):
        viewer_id = self.context['viewer_id']
        return 'sent' if str(obj.initiator_id) == str(viewer_id) else 'received'


class SendFriendRequestSerializer(serializers.Serializer):
    receiver_id = serializers.UUIDField()


class UpdateFriendshipSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=FriendshipStatus.choices)
