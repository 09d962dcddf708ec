"""
create_admin.py

첫 관리자(admin) 계정 부트스트랩.

가입 API 로 만들어진 계정은 모두 user 역할이므로,
관리자 대시보드 / 회원 관리에 들어갈 첫 계정은 이 스크립트로 만든다.

- ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME 환경 변수(.env) 사용
- admin 역할 계정이 이미 있으면 아무것도 하지 않음
- 같은 이메일의 일반 계정이 있으면 승격하지 않고 중단

실행:
    python -m scripts.create_admin

"""

import os

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from sif_cms.core.exceptions import UpstreamFailure
from sif_cms.db.session import SessionLocal
from sif_cms.models.user import Role, User
from sif_cms.services import common
from sif_cms.services import users as user_service


def bootstrap_admin(db: Session, *, email: str, password: str, name: str) -> User | None:
    """admin 이 없을 때만 생성하고 생성된 계정을 반환, 이미 있으면 None"""
    if common.get_by_field(db, "users", "role", Role.ADMIN) is not None:
        return None

    # 비밀번호 해싱 / 이메일 정규화 / 중복 검사는 가입 흐름과 동일
    user = user_service.create_user_with_password(db, name=name, email=email, password=password)
    if not common.update(db, "users", user.id, {"role": Role.ADMIN}):
        raise UpstreamFailure("Failed to grant admin role")
    return user


def main() -> None:
    load_dotenv()

    db = SessionLocal()
    try:
        user = bootstrap_admin(
            db,
            email=os.environ["ADMIN_EMAIL"],
            password=os.environ["ADMIN_PASSWORD"],
            name=os.environ.get("ADMIN_NAME", "Site Admin"),
        )
    finally:
        db.close()

    if user is None:
        print("admin account present, nothing to do")
    else:
        print(f"admin account created: {user.email}")


if __name__ == "__main__":
    main()
