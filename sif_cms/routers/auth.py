"""
auth.py

인증(Authentication) 및 세션 API 모음.

이 파일은 회원 가입, 로그인, 외부 인증(Google) 연동, 현재 세션 조회,
비밀번호 변경과 같이 사용자 인증 흐름 전반을 담당한다.
JWT Access Token 기반 인증 방식을 사용한다.

주요 기능:
- 비밀번호 기반 회원 가입
- 로그인 및 토큰 발급
- 외부 인증 provider 의 회원 생성/조회 + 토큰 발급
- 현재 세션 정보 조회 ({id, role, name, profile_picture})
- 비밀번호 변경

설계 원칙:
- Access Token은 Authorization Header로 전달
- 가입 시 역할은 항상 user (요청 값과 무관)
- 비밀번호 / 해시는 어떤 응답에도 포함하지 않음

관련 파일:
- sif_cms.core.security        : 비밀번호 해시 / JWT 생성·검증
- sif_cms.core.deps            : 인증 의존성(get_current_user)
- sif_cms.services.users       : 회원 생성 / 인증 로직
- sif_cms.schemas.auth         : 인증 관련 요청/응답

"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sif_cms.core.deps import get_current_user, get_db, verify_provider_secret
from sif_cms.core.logging import get_logger
from sif_cms.core.security import create_access_token
from sif_cms.models.user import User
from sif_cms.schemas.auth import (
    ChangePasswordRequest,
    ExternalIdentityRequest,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    TokenResponse,
)
from sif_cms.services import users as user_service

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


"""
회원 가입 API

- 이메일 기준으로 신규 회원 가입
- 이미 가입된 이메일이면 400
- 가입 시 기본 권한은 user

"""

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = user_service.create_user_with_password(
        db,
        name=data.name,
        email=data.email,
        password=data.password,
    )
    logger.info("user registered: id=%s", user.id)
    return {
        "message": "User created successfully",
        "data": RegisterResponse.model_validate(user, from_attributes=True).model_dump(mode="json"),
    }


"""
로그인 API

- 이메일 / 비밀번호 인증
- 비활성 계정은 로그인 불가 (403)
- Access Token은 응답 바디로 반환

"""

@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, email=data.email, password=data.password)
    return TokenResponse(access_token=create_access_token(subject=str(user.id)))


"""
외부 인증(Google) 연동 API

- 세션 provider 가 X-Provider-Secret 헤더와 함께 호출
- google_id 로 회원을 찾거나 새로 생성 (비밀번호 없음, 역할 user)
- 비활성 계정이면 403

"""

@router.post("/external", response_model=TokenResponse, dependencies=[Depends(verify_provider_secret)])
def external_login(data: ExternalIdentityRequest, db: Session = Depends(get_db)):
    user = user_service.create_user_with_external_identity(
        db,
        name=data.name,
        email=data.email,
        google_id=data.google_id,
        profile_picture=data.profile_picture,
    )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is inactive")
    return TokenResponse(access_token=create_access_token(subject=str(user.id)))


# 현재 세션 정보 (프론트엔드 세션 계약)
@router.get("/session", response_model=SessionResponse)
def session(user: User = Depends(get_current_user)):
    return user_service.session_payload(user)


"""
비밀번호 변경 API

- 현재 비밀번호 확인 필수
- 새 비밀번호 / 확인 값 일치 필요
- 새 비밀번호는 기존 비밀번호와 달라야 함

"""

@router.patch("/password")
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if data.new_password != data.confirm_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Passwords do not match")

    user_service.update_user_password(
        db,
        user,
        current_password=data.current_password,
        new_password=data.new_password,
    )
    return {"message": "Password updated"}
