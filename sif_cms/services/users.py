"""
services/users.py

회원(User) 도메인 비즈니스 로직 모음.

주요 기능:
- 비밀번호 기반 회원 생성 / 외부 인증(Google) 기반 회원 생성
- 로그인 인증 (비밀번호 검증)
- 역할 / 활성 상태 변경 (rank 규칙 적용 + 관리자 로그 기록)
- 프로필 사진 교체 (stage → commit → reap)
- 관리자에 의한 회원 삭제 (레코드 삭제 → 프로필 사진 정리)

설계 원칙:
- 생성 시 요청된 역할과 무관하게 항상 최저 rank 역할(user)
- 평문 비밀번호 / 해시는 호출 측에 반환하지 않음 (응답 스키마에서 제외)
- 권한 판단은 sif_cms.core.permissions 의 순수 함수 사용

관련 파일:
- sif_cms.models.user          : User / Role 모델
- sif_cms.services.admin_log   : 관리자 행위 로그
- sif_cms.routers.admin        : 관리자 회원 관리 API

"""

import uuid
from typing import Any

from sqlalchemy.orm import Session

from sif_cms.core.config import settings
from sif_cms.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    UpstreamFailure,
    ValidationError,
)
from sif_cms.core.permissions import (
    DEFAULT_ROLE,
    can_assign_role,
    can_delete_user,
    can_edit_user_role,
)
from sif_cms.core.security import get_password_hash, verify_password
from sif_cms.models.admin_log import AdminAction
from sif_cms.models.user import Role, User
from sif_cms.services import common
from sif_cms.services.admin_log import write_admin_log
from sif_cms.services.images import reap_if_replaced, reap_image, stage_image

COLLECTION = "users"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_all_users(db: Session) -> list[User]:
    return common.get_all(db, COLLECTION, "created_at", False)


def get_user_by_id(db: Session, user_id: Any) -> User:
    user = common.get_by_id(db, COLLECTION, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return common.get_by_field(db, COLLECTION, "email", _normalize_email(email))


"""
비밀번호 기반 회원 생성

- 이메일 중복 시 ValidationError
- bcrypt(salt 포함) 해시만 저장
- 역할은 항상 user, 활성 상태 True

"""

def create_user_with_password(db: Session, *, name: str, email: str, password: str) -> User:
    if get_user_by_email(db, email):
        raise ValidationError("Email already registered")

    user = common.create(db, COLLECTION, {
        "name": name.strip(),
        "email": _normalize_email(email),
        "password_hash": get_password_hash(password),
        "role": DEFAULT_ROLE,
        "is_active": True,
    })
    if user is None:
        raise UpstreamFailure("Failed to create user")
    return user


"""
외부 인증(Google) 기반 회원 생성 / 조회

- google_id 로 이미 가입돼 있으면 그 회원을 반환
- 같은 이메일의 비밀번호 계정이 있으면 충돌로 거부
- 비밀번호 필드 없이 생성

"""

def create_user_with_external_identity(
    db: Session,
    *,
    name: str,
    email: str,
    google_id: str,
    profile_picture: str | None = None,
) -> User:
    existing = common.get_by_field(db, COLLECTION, "google_id", google_id)
    if existing:
        return existing

    if get_user_by_email(db, email):
        raise ValidationError("Email already registered")

    user = common.create(db, COLLECTION, {
        "name": name.strip(),
        "email": _normalize_email(email),
        "google_id": google_id,
        "profile_picture": profile_picture,
        "role": DEFAULT_ROLE,
        "is_active": True,
    })
    if user is None:
        raise UpstreamFailure("Failed to create user")
    return user


def authenticate(db: Session, *, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")
    if not user.is_active:
        raise ForbiddenError("Account is inactive")
    return user


def update_user_password(db: Session, user: User, *, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise UnauthorizedError("Invalid password")
    if verify_password(new_password, user.password_hash):
        raise ValidationError("New password must be different")
    if not common.update(db, COLLECTION, user.id, {"password_hash": get_password_hash(new_password)}):
        raise UpstreamFailure("Failed to update password")


"""
역할 변경

- actor rank > target rank 이고 자기 자신이 아니어야 함
- 새 역할도 actor 보다 낮은 rank 여야 함
- 동일 역할로의 변경은 ValidationError

"""

def update_user_role(db: Session, actor: User, target_id: Any, new_role: Role) -> User:
    target = get_user_by_id(db, target_id)

    if not can_edit_user_role(actor, target):
        raise ForbiddenError("You don't have permission to change this user's role")
    if not can_assign_role(actor, new_role):
        raise ForbiddenError("Cannot assign a role at or above your own rank")
    if target.role == new_role:
        raise ValidationError(f"User already {new_role.value}")

    before = target.role
    if not common.update(db, COLLECTION, target.id, {"role": new_role}):
        raise UpstreamFailure("Failed to update user role")

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.SET_ROLE,
        target=target,
        before=before.value,
        after=new_role.value,
    )
    return target


def update_user_status(db: Session, actor: User, target_id: Any, is_active: bool) -> User:
    target = get_user_by_id(db, target_id)

    if not can_edit_user_role(actor, target):
        raise ForbiddenError("You don't have permission to change this user's account status")

    before = target.is_active
    if not common.update(db, COLLECTION, target.id, {"is_active": is_active}):
        raise UpstreamFailure("Failed to update user status")

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.SET_STATUS,
        target=target,
        before="active" if before else "inactive",
        after="active" if is_active else "inactive",
    )
    return target


"""
관리자에 의한 회원 삭제 (hard delete)

- rank 규칙은 역할 변경과 동일
- 레코드 삭제가 성공한 뒤 로그 기록 / 프로필 사진 정리 (사진 삭제 실패해도 성공)

"""

def delete_user(db: Session, storage, actor: User, target_id: Any) -> dict:
    target = get_user_by_id(db, target_id)

    if not can_delete_user(actor, target):
        raise ForbiddenError("You don't have permission to delete this user")

    snapshot = {
        "id": str(target.id),
        "name": target.name,
        "email": target.email,
        "role": target.role.value,
    }
    picture = target.profile_picture

    if not common.remove(db, COLLECTION, target.id):
        raise UpstreamFailure("Failed to delete user")

    # 삭제가 확인된 뒤에만 로그 기록
    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.DELETE_USER,
        target_email=snapshot["email"],
        before=snapshot["role"],
        after=None,
    )

    if picture:
        reap_image(storage, picture)

    return snapshot


"""
프로필 사진 교체

- 업로드(stage)가 성공한 뒤 레코드 갱신(commit)
- 갱신이 확인된 뒤에만 DB에 저장돼 있던 이전 사진 삭제(reap)
- 갱신 실패 시 방금 올린 새 파일을 정리하고 UpstreamFailure

"""

def update_profile_picture(
    db: Session,
    storage,
    user: User,
    *,
    filename: str,
    content_type: str | None,
    data: bytes,
) -> User:
    old_url = user.profile_picture

    uploaded = stage_image(
        storage,
        bucket=settings.PROFILE_PICTURE_BUCKET,
        folder=f"profile_pictures/{user.id}",
        filename=filename,
        data=data,
        content_type=content_type,
    )

    if not common.update(db, COLLECTION, user.id, {"profile_picture": uploaded.url}):
        reap_image(storage, uploaded.url)
        raise UpstreamFailure("Failed to update profile picture")

    reap_if_replaced(storage, old_url, uploaded.url)
    return get_user_by_id(db, user.id)


def session_payload(user: User) -> dict:
    return {
        "id": str(user.id),
        "role": user.role.value,
        "name": user.name,
        "profile_picture": user.profile_picture,
    }


def parse_user_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise NotFoundError("User not found")
