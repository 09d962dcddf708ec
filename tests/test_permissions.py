"""
역할/권한 테이블 및 rank 규칙 단위 테스트.
- 역할별 권한 키 보유 여부, 세션 없음 / 알 수 없는 역할의 fail closed,
  "누가 누구를 수정할 수 있는가" 규칙(자기 자신 불가, 같은 rank 불가)을 검증한다.
"""

import itertools
import uuid
from types import SimpleNamespace

import pytest

from sif_cms.core.permissions import (
    DASHBOARD_ITEMS,
    ROLE_TABLE,
    Permission,
    can_assign_role,
    can_delete_user,
    can_edit_user_role,
    has_permission,
    rank,
    visible_dashboard_items,
)
from sif_cms.models.user import Role

ALL_KEYS = [
    Permission.ADMIN,
    Permission.ADMIN_DASHBOARD,
    Permission.HOLDINGS_WRITE,
    Permission.HOLDINGS_READ,
    Permission.SECRETARY,
    Permission.USER,
]


def actor(role: Role, id=None):
    return SimpleNamespace(id=id or uuid.uuid4(), role=role)


@pytest.mark.parametrize("role", list(Role))
def test_has_permission_matches_granted_set(role):
    granted = ROLE_TABLE[role].permissions
    for key in ALL_KEYS:
        assert has_permission(role, key) is (key in granted)


def test_no_session_or_unknown_role_fails_closed():
    for key in ALL_KEYS:
        assert has_permission(None, key) is False
        assert has_permission("treasurer", key) is False
    assert rank(None) == -1
    assert rank("treasurer") == -1


def test_role_string_values_are_accepted():
    assert has_permission("holdings_write", Permission.HOLDINGS_WRITE) is True
    assert has_permission("holdings_read", Permission.HOLDINGS_WRITE) is False


def test_grants_per_role():
    assert has_permission(Role.SECRETARY, Permission.SECRETARY)
    assert not has_permission(Role.SECRETARY, Permission.HOLDINGS_WRITE)
    assert has_permission(Role.HOLDINGS_WRITE, Permission.HOLDINGS_WRITE)
    assert not has_permission(Role.HOLDINGS_WRITE, Permission.ADMIN)
    assert not has_permission(Role.HOLDINGS_READ, Permission.ADMIN_DASHBOARD)
    assert ROLE_TABLE[Role.USER].permissions == frozenset({Permission.USER})
    for role in (Role.ADMIN, Role.PRESIDENT, Role.VICE_PRESIDENT):
        assert ROLE_TABLE[role].permissions == frozenset(ALL_KEYS)


def test_role_table_is_immutable():
    with pytest.raises(TypeError):
        ROLE_TABLE[Role.USER] = ROLE_TABLE[Role.ADMIN]


def test_ranks():
    assert [rank(r) for r in Role] == [4, 3, 2, 1, 1, 1, 0]


@pytest.mark.parametrize("a_role,b_role", list(itertools.product(Role, repeat=2)))
def test_can_edit_user_role_is_strict_rank_order(a_role, b_role):
    a, b = actor(a_role), actor(b_role)
    expected = rank(a_role) > rank(b_role)
    assert can_edit_user_role(a, b) is expected
    assert can_delete_user(a, b) is expected


@pytest.mark.parametrize("role", list(Role))
def test_cannot_edit_self(role):
    me = actor(role)
    assert can_edit_user_role(me, me) is False
    assert can_delete_user(me, SimpleNamespace(id=me.id, role=Role.USER)) is False


def test_scenarios_admin_secretary():
    admin = actor(Role.ADMIN)
    secretary = actor(Role.SECRETARY)
    other_secretary = actor(Role.SECRETARY)
    holdings_write = actor(Role.HOLDINGS_WRITE)

    assert can_edit_user_role(admin, secretary) is True
    assert can_edit_user_role(secretary, admin) is False
    assert can_edit_user_role(secretary, other_secretary) is False
    assert can_edit_user_role(other_secretary, secretary) is False
    # 같은 rank(1)끼리는 권한 키가 달라도 불가
    assert can_edit_user_role(secretary, holdings_write) is False
    assert can_edit_user_role(holdings_write, secretary) is False


def test_can_assign_role_below_own_rank_only():
    vp = actor(Role.VICE_PRESIDENT)
    assert can_assign_role(vp, Role.SECRETARY) is True
    assert can_assign_role(vp, Role.VICE_PRESIDENT) is False
    assert can_assign_role(vp, Role.ADMIN) is False
    assert can_assign_role(vp, "not-a-role") is False


def test_visible_dashboard_items():
    assert visible_dashboard_items(Role.ADMIN) == list(DASHBOARD_ITEMS)
    assert visible_dashboard_items(Role.USER) == []
    assert visible_dashboard_items(None) == []

    titles = {i.title for i in visible_dashboard_items(Role.SECRETARY)}
    assert titles == {"Gallery Management", "Meeting Minutes Management"}

    titles = {i.title for i in visible_dashboard_items(Role.HOLDINGS_WRITE)}
    assert titles == {"Portfolio Management", "Stock Pitch Management"}
