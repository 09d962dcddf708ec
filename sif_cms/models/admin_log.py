"""

admin_log.py

관리자(Admin) 행위 기록(Audit Log) 모델 정의 파일.

회원 역할 변경, 활성 상태 변경, 회원 삭제를 DB에 영구적으로 기록한다.

설계 원칙:
- 실제 데이터 변경과 로그 기록을 분리
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- 회원은 hard delete 되므로 대상 이메일/이름을 스냅샷으로 함께 저장
  (FK 는 ON DELETE SET NULL)

"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from sif_cms.db.base import Base


#  관리자 행위 유형 Enum

class AdminAction(str, Enum):
    SET_ROLE = "SET_ROLE"
    SET_STATUS = "SET_STATUS"
    DELETE_USER = "DELETE_USER"


"""
관리자 행위 로그 모델

- actor_id       : 행위를 수행한 관리자 ID
- target_user_id : 행위 대상 사용자 ID (삭제 후에는 NULL)
- target_email   : 대상 사용자 이메일 스냅샷
- action         : 수행된 관리자 행위 유형
- before / after : 변경 전/후 값 (role 값 또는 active/inactive)
- created_at     : 행위 발생 시각 (UTC)

"""

class AdminActionLog(Base):
    __tablename__ = "admin_action_logs"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    actor_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    target_user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    target_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    action: Mapped[AdminAction] = mapped_column(SAEnum(AdminAction, name="admin_action"), nullable=False)

    before: Mapped[str | None] = mapped_column(String(20), nullable=True)
    after: Mapped[str | None] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
