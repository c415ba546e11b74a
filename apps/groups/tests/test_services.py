"""
Service layer unit tests for groups app.

Tests cover:
- Role ordering and the authority predicate (no database)
- Group CRUD gated by the authority predicate
- Membership lifecycle: join, decide, leave, kick
- Role changes and atomic leadership transfer
"""

import pytest
from uuid import uuid4
from unittest.mock import patch
from django.db import IntegrityError

from apps.groups.models import (
    Group,
    GroupMembership,
    GroupRole,
    MembershipStatus,
    role_authority,
    outranks,
)
from apps.groups.services import (
    HiddenGroupMembers,
    VisibleGroupMembers,
    can_manage_group,
    is_group_leader,
    user_has_manage_permissions,
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
    is_accepted_member,
    require_accepted_membership,
    get_group_members,
    update_member_role,
)
from apps.groups.services.exceptions import (
    GroupNotFoundError,
    MembershipNotFoundError,
    DuplicateGroupNameError,
    AlreadyMemberError,
    LeaderCannotLeaveError,
    CannotChangeLeaderRoleError,
    MembershipNotPendingError,
    MembershipNotAcceptedError,
    InsufficientPermissionsError,
    CannotKickSelfError,
)


# =============================================================================
# Role Order and Authority Predicate Tests (no database)
# =============================================================================

class TestRoleOrder:
    """Tests for role_authority and outranks."""

    def test_roles_ordered_by_authority(self):
        ranks = [role_authority(role) for role in GroupRole.values]
        assert ranks == sorted(ranks, reverse=True)

    def test_outranks(self):
        assert outranks(GroupRole.LEADER, GroupRole.CO_LEADER)
        assert outranks(GroupRole.CO_LEADER, GroupRole.ELDER)
        assert outranks(GroupRole.ELDER, GroupRole.MEMBER)
        assert not outranks(GroupRole.MEMBER, GroupRole.MEMBER)
        assert not outranks(GroupRole.CO_LEADER, GroupRole.LEADER)

    def test_accepts_raw_values(self):
        assert role_authority('LEADER') == role_authority(GroupRole.LEADER)

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            role_authority('OWNER')


class TestAuthorityPredicate:
    """Tests for can_manage_group and is_group_leader on unsaved rows."""

    @pytest.mark.parametrize('role,status,expected', [
        (GroupRole.LEADER, MembershipStatus.ACCEPTED, True),
        (GroupRole.CO_LEADER, MembershipStatus.ACCEPTED, True),
        (GroupRole.ELDER, MembershipStatus.ACCEPTED, False),
        (GroupRole.MEMBER, MembershipStatus.ACCEPTED, False),
        (GroupRole.LEADER, MembershipStatus.PENDING, False),
        (GroupRole.CO_LEADER, MembershipStatus.REJECTED, False),
    ])
    def test_can_manage_group(self, role, status, expected):
        membership = GroupMembership(role=role, status=status)
        assert can_manage_group(membership) is expected

    def test_no_membership_cannot_manage(self):
        assert can_manage_group(None) is False

    def test_is_group_leader(self):
        assert is_group_leader(GroupMembership(role=GroupRole.LEADER, status=MembershipStatus.ACCEPTED))
        assert not is_group_leader(GroupMembership(role=GroupRole.CO_LEADER, status=MembershipStatus.ACCEPTED))
        assert not is_group_leader(None)


# =============================================================================
# Group Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestGroupManagement:
    """Tests for group_management.py service functions."""

    def test_create_group_makes_creator_leader(self, user):
        group = create_group(name='Ridge Runners', owner=user, description='Fast', is_private=True)

        assert group.name == 'Ridge Runners'
        assert group.is_private is True
        membership = GroupMembership.objects.get(group=group, user=user)
        assert membership.role == GroupRole.LEADER
        assert membership.status == MembershipStatus.ACCEPTED

    def test_create_group_duplicate_name(self, user, group):
        with pytest.raises(DuplicateGroupNameError) as exc_info:
            create_group(name=group.name, owner=user)

        assert exc_info.value.kind == 'conflict'
        assert Group.objects.filter(name=group.name).count() == 1

    def test_get_group_by_id(self, group):
        assert get_group_by_id(group_id=group.id) == group

    def test_get_group_by_id_not_found(self):
        with pytest.raises(GroupNotFoundError):
            get_group_by_id(group_id=uuid4())

    def test_update_group_as_leader(self, group, leader):
        updated = update_group(group_id=group.id, user_id=leader.id, description='New', is_private=False)

        assert updated.description == 'New'
        assert updated.is_private is False

    def test_update_group_as_co_leader(self, group, co_leader):
        updated = update_group(group_id=group.id, user_id=co_leader.id, image_url='https://img.example.com/a.png')
        assert updated.image_url == 'https://img.example.com/a.png'

    def test_update_group_as_member_denied(self, group, member):
        with pytest.raises(InsufficientPermissionsError):
            update_group(group_id=group.id, user_id=member.id, description='Hacked')

        group.refresh_from_db()
        assert group.description == 'Weekend trail runs'

    def test_update_group_not_found(self, leader):
        with pytest.raises(GroupNotFoundError):
            update_group(group_id=uuid4(), user_id=leader.id, description='x')

    def test_delete_group_cascades_memberships(self, group, leader, member):
        delete_group(group_id=group.id, user_id=leader.id)

        assert not Group.objects.filter(id=group.id).exists()
        assert not GroupMembership.objects.filter(group_id=group.id).exists()

    def test_delete_group_as_member_denied(self, group, member):
        with pytest.raises(InsufficientPermissionsError):
            delete_group(group_id=group.id, user_id=member.id)

        assert Group.objects.filter(id=group.id).exists()

    def test_get_my_groups_only_accepted(self, group, public_group, applicant, leader):
        assert list(get_my_groups(user_id=leader.id)) == [group, public_group]
        assert get_my_groups(user_id=applicant.id).count() == 0

    def test_get_favorite_groups(self, group, public_group, leader):
        toggle_favorite(user_id=leader.id, group_id=group.id)

        assert list(get_favorite_groups(user_id=leader.id)) == [group]


# =============================================================================
# Membership Service Tests
# =============================================================================

@pytest.mark.django_db
class TestJoinGroup:
    """Tests for join_group."""

    def test_join_private_group_is_pending(self, group, other_user):
        membership = join_group(user=other_user, group_id=group.id)

        assert membership.status == MembershipStatus.PENDING
        assert membership.role == GroupRole.MEMBER

    def test_join_public_group_is_accepted(self, public_group, other_user):
        membership = join_group(user=other_user, group_id=public_group.id)

        assert membership.status == MembershipStatus.ACCEPTED
        assert membership.role == GroupRole.MEMBER

    def test_join_twice(self, group, applicant):
        with pytest.raises(AlreadyMemberError):
            join_group(user=applicant, group_id=group.id)

    def test_leader_cannot_rejoin(self, group, leader):
        with pytest.raises(AlreadyMemberError):
            join_group(user=leader, group_id=group.id)

    def test_join_missing_group(self, other_user):
        with pytest.raises(GroupNotFoundError):
            join_group(user=other_user, group_id=uuid4())


@pytest.mark.django_db
class TestLeaveGroup:
    """Tests for leave_group."""

    def test_member_leaves(self, group, member):
        leave_group(user_id=member.id, group_id=group.id)

        assert not GroupMembership.objects.filter(group=group, user=member).exists()

    def test_leader_cannot_leave(self, group, leader):
        with pytest.raises(LeaderCannotLeaveError):
            leave_group(user_id=leader.id, group_id=group.id)

    def test_leader_cannot_leave_even_when_alone(self, public_group, leader):
        assert public_group.memberships.count() == 1

        with pytest.raises(LeaderCannotLeaveError):
            leave_group(user_id=leader.id, group_id=public_group.id)

    def test_non_member_cannot_leave(self, group, third_user):
        with pytest.raises(MembershipNotFoundError):
            leave_group(user_id=third_user.id, group_id=group.id)


@pytest.mark.django_db
class TestKickMember:
    """Tests for kick_member."""

    def test_leader_kicks_member(self, group, leader, member):
        kick_member(admin_id=leader.id, group_id=group.id, user_id=member.id)

        assert not GroupMembership.objects.filter(group=group, user=member).exists()

    def test_leader_kicks_co_leader(self, group, leader, co_leader):
        kick_member(admin_id=leader.id, group_id=group.id, user_id=co_leader.id)

        assert not GroupMembership.objects.filter(group=group, user=co_leader).exists()

    def test_co_leader_kicks_member(self, group, co_leader, member):
        kick_member(admin_id=co_leader.id, group_id=group.id, user_id=member.id)

        assert not GroupMembership.objects.filter(group=group, user=member).exists()

    def test_co_leader_cannot_kick_leader(self, group, co_leader, leader):
        with pytest.raises(InsufficientPermissionsError):
            kick_member(admin_id=co_leader.id, group_id=group.id, user_id=leader.id)

    def test_co_leader_cannot_kick_co_leader(self, group, co_leader, make_user, add_membership):
        second = make_user('second_co')
        add_membership(group, second, role=GroupRole.CO_LEADER)

        with pytest.raises(InsufficientPermissionsError):
            kick_member(admin_id=co_leader.id, group_id=group.id, user_id=second.id)

    def test_member_cannot_kick(self, group, member, applicant):
        with pytest.raises(InsufficientPermissionsError):
            kick_member(admin_id=member.id, group_id=group.id, user_id=applicant.id)

    def test_cannot_kick_self(self, group, leader):
        with pytest.raises(CannotKickSelfError) as exc_info:
            kick_member(admin_id=leader.id, group_id=group.id, user_id=leader.id)

        assert exc_info.value.kind == 'self_action'

    def test_kick_non_member(self, group, leader, third_user):
        with pytest.raises(MembershipNotFoundError):
            kick_member(admin_id=leader.id, group_id=group.id, user_id=third_user.id)


@pytest.mark.django_db
class TestMembershipRequests:
    """Tests for update_membership_request and get_pending_requests."""

    def test_accept_request(self, group, leader, applicant):
        membership = update_membership_request(
            admin_id=leader.id,
            group_id=group.id,
            user_id=applicant.id,
            new_status=MembershipStatus.ACCEPTED,
        )

        assert membership.status == MembershipStatus.ACCEPTED
        assert membership.role == GroupRole.MEMBER

    def test_reject_request_deletes_row(self, group, co_leader, applicant):
        result = update_membership_request(
            admin_id=co_leader.id,
            group_id=group.id,
            user_id=applicant.id,
            new_status=MembershipStatus.REJECTED,
        )

        assert result is None
        assert not GroupMembership.objects.filter(group=group, user=applicant).exists()

    def test_rejected_applicant_can_request_again(self, group, leader, applicant):
        update_membership_request(
            admin_id=leader.id,
            group_id=group.id,
            user_id=applicant.id,
            new_status=MembershipStatus.REJECTED,
        )

        membership = join_group(user=applicant, group_id=group.id)
        assert membership.status == MembershipStatus.PENDING

    def test_member_cannot_decide(self, group, member, applicant):
        with pytest.raises(InsufficientPermissionsError):
            update_membership_request(
                admin_id=member.id,
                group_id=group.id,
                user_id=applicant.id,
                new_status=MembershipStatus.ACCEPTED,
            )

    def test_cannot_decide_accepted_membership(self, group, leader, member):
        with pytest.raises(MembershipNotPendingError):
            update_membership_request(
                admin_id=leader.id,
                group_id=group.id,
                user_id=member.id,
                new_status=MembershipStatus.REJECTED,
            )

    def test_decide_missing_request(self, group, leader, third_user):
        with pytest.raises(MembershipNotFoundError):
            update_membership_request(
                admin_id=leader.id,
                group_id=group.id,
                user_id=third_user.id,
                new_status=MembershipStatus.ACCEPTED,
            )

    def test_invalid_status(self, group, leader, applicant):
        with pytest.raises(ValueError, match="Invalid status"):
            update_membership_request(
                admin_id=leader.id,
                group_id=group.id,
                user_id=applicant.id,
                new_status=MembershipStatus.PENDING,
            )

    def test_get_pending_requests(self, group, leader, applicant, member):
        pending = get_pending_requests(admin_id=leader.id, group_id=group.id)

        assert [m.user for m in pending] == [applicant]

    def test_get_pending_requests_denied_for_member(self, group, member):
        with pytest.raises(InsufficientPermissionsError):
            get_pending_requests(admin_id=member.id, group_id=group.id)

    def test_get_pending_requests_missing_group(self, leader):
        with pytest.raises(GroupNotFoundError):
            get_pending_requests(admin_id=leader.id, group_id=uuid4())

    def test_private_group_scenario(self, group, leader, other_user):
        """Join a private group, get accepted, then leave."""
        membership = join_group(user=other_user, group_id=group.id)
        assert (membership.status, membership.role) == (MembershipStatus.PENDING, GroupRole.MEMBER)

        accepted = update_membership_request(
            admin_id=leader.id,
            group_id=group.id,
            user_id=other_user.id,
            new_status=MembershipStatus.ACCEPTED,
        )
        assert (accepted.status, accepted.role) == (MembershipStatus.ACCEPTED, GroupRole.MEMBER)

        leave_group(user_id=other_user.id, group_id=group.id)
        assert not GroupMembership.objects.filter(group=group, user=other_user).exists()


@pytest.mark.django_db
class TestMembershipQueries:
    """Tests for favorites, membership predicates and member listings."""

    def test_toggle_favorite(self, group, member):
        assert check_is_favorite(user_id=member.id, group_id=group.id) is False
        assert toggle_favorite(user_id=member.id, group_id=group.id) is True
        assert check_is_favorite(user_id=member.id, group_id=group.id) is True
        assert toggle_favorite(user_id=member.id, group_id=group.id) is False

    def test_favorite_requires_membership(self, group, third_user):
        with pytest.raises(MembershipNotFoundError):
            toggle_favorite(user_id=third_user.id, group_id=group.id)
        with pytest.raises(MembershipNotFoundError):
            check_is_favorite(user_id=third_user.id, group_id=group.id)

    def test_is_accepted_member(self, group, member, applicant, third_user, make_user):
        assert is_accepted_member(user_id=member.id, group_id=group.id) is True
        assert is_accepted_member(user_id=applicant.id, group_id=group.id) is False
        assert is_accepted_member(user_id=make_user().id, group_id=group.id) is False

    def test_require_accepted_membership(self, group, member):
        membership = require_accepted_membership(user_id=member.id, group_id=group.id)
        assert membership.user == member

    def test_require_accepted_membership_pending(self, group, applicant):
        with pytest.raises(InsufficientPermissionsError):
            require_accepted_membership(user_id=applicant.id, group_id=group.id)

    def test_require_accepted_membership_missing(self, group, make_user):
        with pytest.raises(MembershipNotFoundError):
            require_accepted_membership(user_id=make_user().id, group_id=group.id)

    def test_user_has_manage_permissions(self, group, leader, co_leader, member, applicant):
        assert user_has_manage_permissions(user_id=leader.id, group_id=group.id)
        assert user_has_manage_permissions(user_id=co_leader.id, group_id=group.id)
        assert not user_has_manage_permissions(user_id=member.id, group_id=group.id)
        assert not user_has_manage_permissions(user_id=applicant.id, group_id=group.id)

    def test_private_group_outsider_gets_count_only(self, group, member, applicant):
        view = get_group_members(requester_id=applicant.id, group_id=group.id)

        assert isinstance(view, HiddenGroupMembers)
        assert view.total_members == 2
        assert view.is_private is True
        assert view.members_visible is False

    def test_private_group_member_gets_list(self, group, leader, member, applicant):
        view = get_group_members(requester_id=member.id, group_id=group.id)

        assert isinstance(view, VisibleGroupMembers)
        assert view.is_private is True
        assert view.members_visible is True
        assert view.total_members == 2
        assert [m.user for m in view.page.object_list] == [leader, member]

    def test_public_group_anyone_gets_list(self, public_group, make_user):
        view = get_group_members(requester_id=make_user().id, group_id=public_group.id)

        assert isinstance(view, VisibleGroupMembers)
        assert view.total_members == 1

    def test_member_list_paginates(self, public_group, make_user, add_membership):
        for _ in range(4):
            add_membership(public_group, make_user())

        view = get_group_members(requester_id=uuid4(), group_id=public_group.id, page=2, page_size=2)

        assert view.total_members == 5
        assert view.page.number == 2
        assert len(view.page.object_list) == 2
        assert view.page.paginator.num_pages == 3

    def test_members_missing_group(self, leader):
        with pytest.raises(GroupNotFoundError):
            get_group_members(requester_id=leader.id, group_id=uuid4())


# =============================================================================
# Role Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestUpdateMemberRole:
    """Tests for update_member_role."""

    def test_leader_promotes_member(self, group, leader, member):
        membership = update_member_role(
            admin_id=leader.id,
            group_id=group.id,
            user_id=member.id,
            new_role=GroupRole.ELDER,
        )

        assert membership.role == GroupRole.ELDER

    def test_leadership_transfer(self, group, leader, member):
        """Promoting to LEADER demotes the acting leader to CO_LEADER."""
        membership = update_member_role(
            admin_id=leader.id,
            group_id=group.id,
            user_id=member.id,
            new_role=GroupRole.LEADER,
        )

        assert membership.role == GroupRole.LEADER
        assert GroupMembership.objects.get(group=group, user=leader).role == GroupRole.CO_LEADER
        assert group.memberships.filter(role=GroupRole.LEADER).count() == 1

    def test_one_leader_after_repeated_transfers(self, group, leader, member, co_leader):
        update_member_role(admin_id=leader.id, group_id=group.id, user_id=member.id, new_role=GroupRole.LEADER)
        update_member_role(admin_id=member.id, group_id=group.id, user_id=co_leader.id, new_role=GroupRole.LEADER)
        update_member_role(admin_id=co_leader.id, group_id=group.id, user_id=leader.id, new_role=GroupRole.LEADER)

        leaders = group.memberships.filter(role=GroupRole.LEADER)
        assert leaders.count() == 1
        assert leaders.get().user == leader

    def test_leadership_transfer_is_atomic(self, group, leader, member):
        """If promoting the target fails, the leader's demotion is rolled back."""
        original_save = GroupMembership.save

        def failing_save(instance, *args, **kwargs):
            if instance.user_id == member.id:
                raise IntegrityError("simulated failure")
            return original_save(instance, *args, **kwargs)

        with patch.object(GroupMembership, 'save', autospec=True, side_effect=failing_save):
            with pytest.raises(IntegrityError):
                update_member_role(
                    admin_id=leader.id,
                    group_id=group.id,
                    user_id=member.id,
                    new_role=GroupRole.LEADER,
                )

        assert GroupMembership.objects.get(group=group, user=leader).role == GroupRole.LEADER
        assert GroupMembership.objects.get(group=group, user=member).role == GroupRole.MEMBER

    def test_co_leader_cannot_change_roles(self, group, co_leader, member):
        with pytest.raises(InsufficientPermissionsError):
            update_member_role(
                admin_id=co_leader.id,
                group_id=group.id,
                user_id=member.id,
                new_role=GroupRole.ELDER,
            )

    def test_cannot_change_leader_role(self, group, leader):
        with pytest.raises(CannotChangeLeaderRoleError):
            update_member_role(
                admin_id=leader.id,
                group_id=group.id,
                user_id=leader.id,
                new_role=GroupRole.MEMBER,
            )

    def test_target_must_be_member(self, group, leader, make_user):
        with pytest.raises(MembershipNotFoundError):
            update_member_role(
                admin_id=leader.id,
                group_id=group.id,
                user_id=make_user().id,
                new_role=GroupRole.ELDER,
            )

    def test_target_must_be_accepted(self, group, leader, applicant):
        with pytest.raises(MembershipNotAcceptedError):
            update_member_role(
                admin_id=leader.id,
                group_id=group.id,
                user_id=applicant.id,
                new_role=GroupRole.LEADER,
            )

        assert GroupMembership.objects.get(group=group, user=leader).role == GroupRole.LEADER

    def test_invalid_role(self, group, leader, member):
        with pytest.raises(ValueError, match="Invalid role"):
            update_member_role(
                admin_id=leader.id,
                group_id=group.id,
                user_id=member.id,
                new_role='OWNER',
            )
