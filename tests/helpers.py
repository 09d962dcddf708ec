# tests/helpers.py
import uuid
from sqlalchemy.orm import Session

from sif_cms.core.config import settings
from sif_cms.core.security import get_password_hash
from sif_cms.models.user import User, Role

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def public_url(path: str, bucket: str | None = None) -> str:
    return f"{settings.SUPABASE_URL}/storage/v1/object/public/{bucket or settings.IMAGE_BUCKET}/{path}"


def create_user_in_db(
    db: Session,
    *,
    role: Role = Role.USER,
    email: str | None = None,
    password: str = "Passw0rd!23",
    is_active: bool = True,
    profile_picture: str | None = None,
) -> User:
    user = User(
        email=email or f"{role.value}_{uuid.uuid4().hex[:6]}@test.com",
        password_hash=get_password_hash(password),
        name=role.value.upper(),
        role=role,
        is_active=is_active,
        profile_picture=profile_picture,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(client, email: str, password: str = "Passw0rd!23") -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def user_with_token(client, db: Session, role: Role, **kwargs) -> tuple[User, dict]:
    """역할별 사용자 생성 + 로그인 후 (user, Authorization 헤더) 반환"""
    user = create_user_in_db(db, role=role, **kwargs)
    return user, auth_header(login(client, user.email))


def get_user(db: Session, user_id) -> User | None:
    db.expire_all()
    return db.get(User, uuid.UUID(str(user_id)))


class FakeStorage:
    """버킷 호출을 기록만 하는 인메모리 스토리지"""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.uploads: list[tuple[str, str]] = []
        self.removed: list[tuple[str, str]] = []
        self.fail_upload = False
        self.fail_remove = False

    def upload(self, bucket, path, data, content_type):
        if self.fail_upload:
            raise RuntimeError("upload failed")
        self.uploads.append((bucket, path))
        self.objects[(bucket, path)] = data

    def remove(self, bucket, path):
        if self.fail_remove:
            raise RuntimeError("remove failed")
        self.removed.append((bucket, path))
        self.objects.pop((bucket, path), None)

    def public_url(self, bucket, path):
        return f"{settings.SUPABASE_URL}/storage/v1/object/public/{bucket}/{path}"

    @property
    def calls(self) -> int:
        return len(self.uploads) + len(self.removed)


class FakeRevalidator:
    def __init__(self):
        self.calls: list[tuple[str, str | None]] = []

    def revalidate(self, page, id=None):
        self.calls.append((page, str(id) if id is not None else None))
        return True
