"""
admin.py

관리자 영역 API 모음 (/api/admin).

주요 기능:
- 관리자 대시보드: 현재 역할로 접근 가능한 관리 화면 목록
- 회원 관리: 목록 / 상세 / 역할 변경 / 활성 상태 변경 / 삭제
- 관리자 행위 로그 조회

설계 원칙:
- 모든 엔드포인트는 데이터에 접근하기 전에 권한 키 검사 (require_permission)
- 역할 / 상태 변경, 삭제는 추가로 rank 규칙을 서버에서 다시 검사
- 목록 응답의 can_edit_role / can_delete 는 화면 표시용 힌트

관련 파일:
- sif_cms.core.permissions   : 권한 테이블 / rank 규칙
- sif_cms.services.users     : 회원 관리 로직
- sif_cms.services.admin_log : 관리자 행위 로그

"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sif_cms.core.deps import get_db, require_permission
from sif_cms.core.permissions import (
    Permission,
    can_delete_user,
    can_edit_user_role,
    permissions_for,
    visible_dashboard_items,
)
from sif_cms.models.user import User
from sif_cms.schemas.user import AdminUserResponse, RoleUpdate, StatusUpdate, UserResponse
from sif_cms.services import users as user_service
from sif_cms.services.admin_log import list_admin_logs
from sif_cms.services.storage import get_storage

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _admin_view(actor: User, user: User) -> dict:
    out = AdminUserResponse.model_validate(user)
    out.can_edit_role = can_edit_user_role(actor, user)
    out.can_delete = can_delete_user(actor, user)
    return out.model_dump(mode="json")


"""
관리자 대시보드 API

- ADMIN_DASHBOARD 권한이 있는 역할만 접근
- 각 관리 화면은 자신의 권한 키를 가진 경우에만 노출

"""
@router.get("/dashboard")
def dashboard(current_user: User = Depends(require_permission(Permission.ADMIN_DASHBOARD))):
    return {
        "role": current_user.role.value,
        "permissions": sorted(permissions_for(current_user.role)),
        "items": [
            {
                "title": item.title,
                "description": item.description,
                "href": item.href,
            }
            for item in visible_dashboard_items(current_user.role)
        ],
    }


# 전체 회원 목록 조회 엔드포인트 (최근 가입 순)
@router.get("/users")
def list_users(
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission(Permission.ADMIN)),
):
    return [_admin_view(admin, u) for u in user_service.get_all_users(db)]


# 회원 상세 조회 엔드포인트
@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission(Permission.ADMIN)),
):
    return _admin_view(admin, user_service.get_user_by_id(db, user_id))


"""
회원 역할 변경 엔드포인트

- 자기 자신 변경 불가, 자신보다 rank 가 낮은 회원만 변경 가능 (403)
- 자신과 같거나 높은 rank 의 역할은 부여 불가 (403)
- 이미 같은 역할이면 400

"""
@router.put("/users/{user_id}/role")
def set_role(
    user_id: str,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission(Permission.ADMIN)),
):
    user = user_service.update_user_role(db, admin, user_id, data.role)
    return {
        "message": "Role updated",
        "data": UserResponse.model_validate(user).model_dump(mode="json"),
    }


# 회원 활성 상태 변경 엔드포인트 (rank 규칙은 역할 변경과 동일)
@router.put("/users/{user_id}/status")
def set_status(
    user_id: str,
    data: StatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission(Permission.ADMIN)),
):
    user = user_service.update_user_status(db, admin, user_id, data.is_active)
    return {
        "message": "User activated" if data.is_active else "User deactivated",
        "data": UserResponse.model_validate(user).model_dump(mode="json"),
    }


"""
회원 삭제 엔드포인트 (hard delete)

- rank 규칙 통과 시 레코드 삭제 후 프로필 사진 정리
- 사진 삭제 실패는 로그만 남기고 성공 응답

"""
@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    storage=Depends(get_storage),
    admin: User = Depends(require_permission(Permission.ADMIN)),
):
    snapshot = user_service.delete_user(db, storage, admin, user_id)
    return {
        "message": "User deleted successfully",
        "data": snapshot,
    }


# 관리자 활동 로그 조회 엔드포인트
@router.get("/logs")
def admin_logs(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission(Permission.ADMIN)),
):
    limit = max(1, min(limit, 200))
    result = list_admin_logs(db, limit)
    return {
        "data": result,
        "meta": {
            "limit": limit,
            "count": len(result),
        },
    }
