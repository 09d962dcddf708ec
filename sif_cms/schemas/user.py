import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from sif_cms.models.user import Role


# 🔹 관리자 role 변경 요청용
class RoleUpdate(BaseModel):
    role: Role


# 🔹 관리자 활성 상태 변경 요청용 (프론트엔드는 isActive 로 전송)
class StatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_active: bool = Field(alias="isActive")


# 🔹 유저 응답용 (비밀번호 해시 / google_id 제외)
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: Role
    is_active: bool
    profile_picture: str | None = None
    created_at: datetime.datetime


# 🔹 관리자 회원 목록용
# can_edit_role / can_delete 는 화면 표시용 힌트일 뿐, 실제 판단은 서버에서 다시 수행
class AdminUserResponse(UserResponse):
    can_edit_role: bool = False
    can_delete: bool = False
