"""
users.py

로그인한 회원 본인의 정보 조회 / 프로필 사진 변경 API.

관리자용 사용자 관리 기능(admin.py)과 분리하여,
권한 범위와 노출 가능한 데이터 범위를 명확히 하기 위한 구조이다.

설계 원칙:
- 로그인한 활성 회원만 접근 가능
- 비밀번호 해시 / google_id 는 노출하지 않음
- 프로필 사진은 업로드 → 레코드 갱신 → 이전 사진 삭제 순서

관련 파일:
- sif_cms.services.users  : 프로필 사진 교체 로직
- sif_cms.core.deps       : 인증 의존성(get_current_user)
"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from sif_cms.core.deps import get_current_user, get_db
from sif_cms.models.user import User
from sif_cms.schemas.user import UserResponse
from sif_cms.services import users as user_service
from sif_cms.services.images import read_upload
from sif_cms.services.storage import get_storage

router = APIRouter(prefix="/api/users", tags=["users"])


# 회원 본인 프로필 조회 API
@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user

"""
프로필 사진 변경 API

- multipart form 의 file 필드
- JPEG / PNG / GIF, 5MB 이하만 허용 (위반 시 400, 버킷 호출 없음)
- 이전 사진은 DB에 저장돼 있던 URL 기준으로 갱신 성공 후 삭제

"""
@router.post("/me/profile-picture")
def upload_profile_picture(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage=Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    user = user_service.update_profile_picture(
        db,
        storage,
        current_user,
        filename=file.filename or "upload",
        content_type=file.content_type,
        data=read_upload(file.file),
    )
    return {
        "message": "Profile picture updated",
        "data": UserResponse.model_validate(user).model_dump(mode="json"),
    }
