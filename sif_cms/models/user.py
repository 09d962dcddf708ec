"""
user.py

사용자(User) 및 역할(Role) 모델 정의 파일.

이 파일은 투자 동아리 회원의 기본 정보와
역할(Role), 활성 상태, 인증 수단(비밀번호 / 외부 인증) 정보를 관리한다.

인증 수단은 password_hash 또는 google_id 중 하나를 갖는 것을 전제로 하지만
서비스 계층에서 둘의 배타성을 강제하지는 않는다.

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import String, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from sif_cms.db.base import Base


"""
사용자 역할(Role) 정의

- ADMIN          : 웹사이트 관리자
- PRESIDENT      : 회장
- VICE_PRESIDENT : 부회장
- SECRETARY      : 서기 (갤러리 / 회의록 관리)
- HOLDINGS_WRITE : 포트폴리오 / 종목 피치 관리
- HOLDINGS_READ  : 포트폴리오 열람
- USER           : 일반 회원 (가입 시 기본값)

"""

class Role(str, Enum):
    ADMIN = "admin"
    PRESIDENT = "president"
    VICE_PRESIDENT = "vice_president"
    SECRETARY = "secretary"
    HOLDINGS_WRITE = "holdings_write"
    HOLDINGS_READ = "holdings_read"
    USER = "user"


"""
사용자(User) 모델

- email 은 고유 식별자
- role 을 통해 접근 권한 / rank 결정
- is_active=False 이면 로그인 및 API 접근 불가
- profile_picture 는 버킷에 저장된 이미지의 공개 URL

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="user_role", values_callable=lambda e: [r.value for r in e]),
        nullable=False,
        default=Role.USER,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    profile_picture: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    google_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
        nullable=False,
    )
