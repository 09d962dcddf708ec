"""
security.py

비밀번호 해싱 및 JWT 토큰 생성/검증을 담당하는 보안 유틸리티 모음.

이 파일은 인증(auth) 로직에서 사용하는
저수준(low-level) 보안 기능만을 제공하며,
라우터나 비즈니스 로직은 포함하지 않는다.

주요 기능:
- 비밀번호 해싱 및 검증 (bcrypt, salt 포함)
- JWT Access Token 생성 / 디코딩

설계 원칙:
- 해시 비교는 반드시 CryptContext.verify 사용 (해시 문자열 직접 비교 금지)
- 시간 기반(exp) 만료는 UTC 기준으로 처리

관련 파일:
- sif_cms.core.config        : JWT 시크릿 키 및 만료 설정
- sif_cms.core.deps          : 토큰을 실제로 검증하는 인증 의존성
- sif_cms.services.users     : 회원 생성 / 비밀번호 검증

"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from sif_cms.core.config import settings


# bcrypt 기반 비밀번호 해싱 컨텍스트
# deprecated="auto"로 향후 알고리즘 교체 가능하도록 설정
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


"""
비밀번호 검증 함수

- 평문 비밀번호와 DB에 저장된 해시 값을 비교
- 해시가 없거나(외부 인증 계정) 형식이 잘못된 경우 False

"""

def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {
        "sub": subject,
        "type": "access",
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


"""
Access Token 디코딩 함수

- access 타입만 허용
- subject(user_id) 반환
- 유효하지 않을 경우 JWTError 발생

"""

def decode_access_token(token: str) -> str:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    return sub
