import hmac
from typing import Generator
import uuid

from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from sif_cms.core.config import settings
from sif_cms.core.exceptions import ForbiddenError, UnauthorizedError
from sif_cms.core.permissions import has_permission
from sif_cms.core.security import decode_access_token
from sif_cms.db.session import SessionLocal
from sif_cms.models.user import User

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _user_from_token(token: str, db: Session) -> User:
    try:
        # User.id가 UUID라서 변환
        user_id = uuid.UUID(decode_access_token(token))
    except (JWTError, ValueError):
        raise UnauthorizedError("Could not validate credentials")

    user = db.get(User, user_id)
    if not user:
        raise UnauthorizedError("User not found")
    if not user.is_active:
        raise UnauthorizedError("Account is inactive")
    return user


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if cred is None:
        raise UnauthorizedError("Not authenticated")
    return _user_from_token(cred.credentials, db)


"""
권한 키 기반 라우트 가드

- 세션 없음 / 토큰 오류 / 비활성 계정 → 401
- 역할에 권한 키가 없으면 → 403
- 통과하면 현재 사용자 반환

"""

def require_permission(key: str):
    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if not has_permission(current_user.role, key):
            raise ForbiddenError(f"Requires permission {key}")
        return current_user
    return _checker


# 세션 provider(외부 인증) 전용 엔드포인트 보호
def verify_provider_secret(x_provider_secret: str | None = Header(default=None)) -> None:
    expected = settings.AUTH_PROVIDER_SECRET
    if not expected or not x_provider_secret:
        raise UnauthorizedError("Invalid provider secret")
    if not hmac.compare_digest(x_provider_secret.encode(), expected.encode()):
        raise UnauthorizedError("Invalid provider secret")
