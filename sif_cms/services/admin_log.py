"""
services/admin_log.py

관리자 행위 로그 기록 / 조회 서비스.

이 파일은 관리자가 수행한 회원 관리 행위(역할 변경, 활성 상태 변경, 삭제)를
AdminActionLog 테이블에 기록하고, 최근 로그 목록을 조회하는 역할을 담당한다.

설계 원칙:
- 로그 기록 실패가 주 기능을 방해하지 않음 (로그만 남기고 계속 진행)
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- 회원이 삭제돼도 읽을 수 있도록 대상 이메일을 스냅샷으로 저장

"""

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from sif_cms.core.logging import get_logger
from sif_cms.models.admin_log import AdminAction, AdminActionLog
from sif_cms.models.user import User

logger = get_logger(__name__)


"""
관리자 행위 로그 기록 함수

- actor_id : 행위를 수행한 관리자 ID
- action   : 수행된 관리자 행위 유형
- target   : 행위 대상 사용자 (id / email 스냅샷)
- before   : 변경 전 값 (선택)
- after    : 변경 후 값 (선택)

"""
def write_admin_log(
    db: Session,
    *,
    actor_id,
    action: AdminAction,
    target: User | None = None,
    target_email: str | None = None,
    before: str | None = None,
    after: str | None = None,
) -> bool:
    # 이미 삭제된 회원은 target 없이 이메일 스냅샷만 기록
    log = AdminActionLog(
        actor_id=actor_id,
        action=action,
        target_user_id=target.id if target else None,
        target_email=target.email if target else target_email,
        before=before,
        after=after,
    )
    try:
        db.add(log)
        db.commit()
        return True
    except SQLAlchemyError:
        logger.exception("admin log write failed: action=%s actor=%s", action.value, actor_id)
        db.rollback()
        return False


def list_admin_logs(db: Session, limit: int = 50) -> list[dict]:
    Actor = aliased(User)
    Target = aliased(User)

    rows = db.execute(
        select(AdminActionLog, Actor, Target)
        .outerjoin(Actor, Actor.id == AdminActionLog.actor_id)
        .outerjoin(Target, Target.id == AdminActionLog.target_user_id)
        .order_by(desc(AdminActionLog.created_at))
        .limit(limit)
    ).all()

    result = []
    for log, actor, target in rows:
        result.append(
            {
                "id": str(log.id),
                "created_at": log.created_at.isoformat(),
                "action": log.action.value,
                "before": log.before,
                "after": log.after,
                "actor": (
                    {
                        "id": str(actor.id),
                        "email": actor.email,
                        "name": actor.name,
                        "role": actor.role.value,
                    }
                    if actor
                    else None
                ),
                "target": (
                    {
                        "id": str(target.id),
                        "email": target.email,
                        "name": target.name,
                        "role": target.role.value,
                    }
                    if target
                    else {"id": None, "email": log.target_email}
                ),
            }
        )
    return result
