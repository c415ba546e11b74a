from rest_framework import serializers
from .models import Group, GroupMembership, GroupRole, MembershipStatus
from apps.accounts.serializers import UserMinimalSerializer


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'description',
            'is_private',
            'image_url',
            'member_count',
            'user_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        """Number of accepted members in the group."""
        return obj.memberships.filter(status=MembershipStatus.ACCEPTED).count()

    def get_user_role(self, obj):
        """Current user's role in the group, if accepted."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            membership = obj.memberships.filter(
                user=request.user,
                status=MembershipStatus.ACCEPTED,
            ).first()
            return membership.role if membership else None
        return None


class GroupCreateSerializer(serializers.Serializer):
    """Serializer for creating groups."""

    name = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    is_private = serializers.BooleanField(required=True)
    image_url = serializers.URLField(required=False, allow_blank=True, default='')


class GroupUpdateSerializer(serializers.Serializer):
    """Serializer for updating groups; every field optional."""

    description = serializers.CharField(required=False, allow_blank=True)
    is_private = serializers.BooleanField(required=False)
    image_url = serializers.URLField(required=False, allow_blank=True)


class GroupMemberSerializer(serializers.ModelSerializer):
    """Detailed member information."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'group', 'status', 'role', 'is_favorite', 'joined_at']
        read_only_fields = fields


class UpdateMemberRoleSerializer(serializers.Serializer):
    """Serializer for updating member role."""

    role = serializers.ChoiceField(choices=GroupRole.choices, required=True)


class HiddenGroupMembersSerializer(serializers.Serializer):
    """Count-only member view of a private group."""

    is_private = serializers.BooleanField()
    members_visible = serializers.BooleanField()
    total_members = serializers.IntegerField()
