"""
permissions.py

역할(Role) → rank / 권한 키(permission key) 정적 테이블 및 인가 판단 함수.

주요 기능:
- has_permission      : 역할이 특정 권한 키를 가지는지 판단
- rank                : "누가 누구를 수정할 수 있는가" 비교용 정수 순서
- can_edit_user_role  : 역할 / 활성 상태 변경 가능 여부
- can_delete_user     : 회원 삭제 가능 여부
- visible_dashboard_items : 관리자 대시보드에 노출할 항목 필터링

설계 원칙:
- 테이블은 import 시점에 한 번 생성되는 불변 매핑 (DB에 저장하지 않음)
- 세션이 없거나 알 수 없는 역할은 항상 False (fail closed)
- rank 비교는 권한 키와 무관하게 순수하게 rank만 사용
- 부수 효과 없는 순수 함수. 라우트 가드는 sif_cms.core.deps 에서 이 함수를 호출

관련 파일:
- sif_cms.core.deps          : require_permission 의존성
- sif_cms.routers.admin      : 대시보드 / 회원 관리 API

"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from sif_cms.models.user import Role


class Permission:
    ADMIN = "ADMIN"
    ADMIN_DASHBOARD = "ADMIN_DASHBOARD"
    HOLDINGS_WRITE = "HOLDINGS_WRITE"
    HOLDINGS_READ = "HOLDINGS_READ"
    SECRETARY = "SECRETARY"
    USER = "USER"


_ALL = frozenset({
    Permission.ADMIN,
    Permission.ADMIN_DASHBOARD,
    Permission.HOLDINGS_WRITE,
    Permission.HOLDINGS_READ,
    Permission.SECRETARY,
    Permission.USER,
})


@dataclass(frozen=True)
class RoleDefinition:
    rank: int
    permissions: frozenset


ROLE_TABLE: Mapping[Role, RoleDefinition] = MappingProxyType({
    Role.ADMIN: RoleDefinition(4, _ALL),
    Role.PRESIDENT: RoleDefinition(3, _ALL),
    Role.VICE_PRESIDENT: RoleDefinition(2, _ALL),
    Role.SECRETARY: RoleDefinition(1, frozenset({
        Permission.ADMIN_DASHBOARD,
        Permission.SECRETARY,
        Permission.HOLDINGS_READ,
        Permission.USER,
    })),
    Role.HOLDINGS_WRITE: RoleDefinition(1, frozenset({
        Permission.ADMIN_DASHBOARD,
        Permission.HOLDINGS_WRITE,
        Permission.HOLDINGS_READ,
        Permission.USER,
    })),
    Role.HOLDINGS_READ: RoleDefinition(1, frozenset({
        Permission.HOLDINGS_READ,
        Permission.USER,
    })),
    Role.USER: RoleDefinition(0, frozenset({Permission.USER})),
})

# 가입 시 부여되는 최저 rank 역할
DEFAULT_ROLE = Role.USER


def _as_role(role: Any) -> Role | None:
    if role is None:
        return None
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def rank(role: Any) -> int:
    r = _as_role(role)
    if r is None:
        return -1
    return ROLE_TABLE[r].rank


def permissions_for(role: Any) -> frozenset:
    r = _as_role(role)
    if r is None:
        return frozenset()
    return ROLE_TABLE[r].permissions


def has_permission(role: Any, key: str) -> bool:
    """role 이 None(세션 없음)이거나 알 수 없는 값이면 False"""
    return key in permissions_for(role)


"""
역할 / 활성 상태 변경 가능 여부

- 자기 자신은 변경 불가
- actor 의 rank 가 target 보다 엄격하게 높아야 함
- 같은 rank(예: secretary vs holdings_write)끼리는 어느 방향도 불가

"""

def can_edit_user_role(actor, target) -> bool:
    if actor is None or target is None:
        return False
    if actor.id == target.id:
        return False
    return rank(actor.role) > rank(target.role)


def can_delete_user(actor, target) -> bool:
    if actor is None or target is None:
        return False
    if actor.id == target.id:
        return False
    return rank(actor.role) > rank(target.role)


# 새로 부여하려는 역할은 actor 보다 낮은 rank 여야 함
def can_assign_role(actor, new_role: Any) -> bool:
    if actor is None or _as_role(new_role) is None:
        return False
    return rank(actor.role) > rank(new_role)


@dataclass(frozen=True)
class DashboardItem:
    title: str
    description: str
    href: str
    required_permission: str


DASHBOARD_ITEMS: tuple[DashboardItem, ...] = (
    DashboardItem("User Management", "Manage user accounts and permissions", "/admin/users", Permission.ADMIN),
    DashboardItem("Portfolio Management", "Add, edit, or remove holdings", "/admin/holdings", Permission.HOLDINGS_WRITE),
    DashboardItem("Stock Pitch Management", "Create and manage stock pitches", "/admin/pitches", Permission.HOLDINGS_WRITE),
    DashboardItem("Newsletter Management", "Create and edit newsletter posts", "/admin/newsletter", Permission.ADMIN),
    DashboardItem("Guest Speaker Management", "Manage guest speaker events", "/admin/events", Permission.ADMIN),
    DashboardItem("Gallery Management", "Upload and manage gallery images", "/admin/gallery", Permission.SECRETARY),
    DashboardItem("Meeting Minutes Management", "Create and manage meeting minutes", "/admin/notes", Permission.SECRETARY),
    DashboardItem("About Us Management", "Edit sections on the About Us page", "/admin/about", Permission.ADMIN),
    DashboardItem("Home Page Management", "Edit sections on the Home page", "/admin/home", Permission.ADMIN),
)


# 항목별 권한 판단은 서로 독립적이므로 순서를 유지한 채 필터링만 수행
def visible_dashboard_items(role: Any) -> list[DashboardItem]:
    granted = permissions_for(role)
    return [item for item in DASHBOARD_ITEMS if item.required_permission in granted]
