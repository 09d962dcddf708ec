import uuid
from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=64)
    name: str = Field(min_length=1, max_length=100)

class RegisterResponse(BaseModel):
    id: uuid.UUID
    email: EmailStr

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"

# 세션 provider 가 Google 로그인 성공 후 호출
class ExternalIdentityRequest(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=100)
    google_id: str = Field(min_length=1)
    profile_picture: str | None = None

class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=64)
    confirm_password: str = Field(..., min_length=8, max_length=64)

# 현재 사용자 세션 정보 (프론트엔드 세션 계약)
class SessionResponse(BaseModel):
    id: uuid.UUID
    role: str
    name: str
    profile_picture: str | None = None
