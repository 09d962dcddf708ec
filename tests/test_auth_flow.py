"""
인증 기본 플로우 통합 테스트.
- 회원가입(항상 user 역할) → 로그인 → 세션 조회, 비밀번호 해시 round-trip,
  외부 인증(Google) 가입, 비활성 계정 차단, 비밀번호 변경까지 검증한다.
"""

import uuid

from sif_cms.core.security import verify_password
from sif_cms.models.user import Role
from sif_cms.services import users as user_service
from tests.helpers import auth_header, create_user_in_db, get_user, login

PROVIDER = {"X-Provider-Secret": "test-provider-secret"}


def test_register_login_session_flow(client, db_session):
    email = f"user_{uuid.uuid4().hex[:6]}@test.com"
    reg = client.post(
        "/auth/register",
        json={"email": email, "password": "UserPassw0rd!", "name": "테스트유저", "role": "admin"},
    )
    assert reg.status_code == 201, reg.text
    body = reg.json()
    assert body["message"] == "User created successfully"
    assert "password" not in str(body)
    user_id = body["data"]["id"]
    assert body["data"] == {"id": user_id, "email": email}

    # 요청에 role 이 있어도 최저 rank 역할로 생성
    assert get_user(db_session, user_id).role == Role.USER

    token = login(client, email, "UserPassw0rd!")

    session = client.get("/auth/session", headers=auth_header(token))
    assert session.status_code == 200, session.text
    assert session.json() == {
        "id": user_id,
        "role": "user",
        "name": "테스트유저",
        "profile_picture": None,
    }

    me = client.get("/api/users/me", headers=auth_header(token))
    assert me.status_code == 200, me.text
    assert me.json()["email"] == email
    assert "password_hash" not in me.json()
    assert "google_id" not in me.json()


def test_password_hash_round_trip(db_session):
    user = user_service.create_user_with_password(
        db_session, name="Round Trip", email="rt@test.com", password="CorrectHorse1"
    )
    assert user.password_hash != "CorrectHorse1"
    assert verify_password("CorrectHorse1", user.password_hash) is True
    assert verify_password("CorrectHorse2", user.password_hash) is False
    assert verify_password("", user.password_hash) is False


def test_register_duplicate_email(client):
    payload = {"email": "dup@test.com", "password": "UserPassw0rd!", "name": "A"}
    assert client.post("/auth/register", json=payload).status_code == 201
    r = client.post("/auth/register", json={**payload, "email": "DUP@test.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "Email already registered"}


def test_register_validation_error_is_400(client):
    r = client.post("/auth/register", json={"email": "bad@test.com", "password": "short", "name": "A"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_login_invalid_credentials(client, db_session):
    user = create_user_in_db(db_session)
    r = client.post("/auth/login", json={"email": user.email, "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}


def test_inactive_user_cannot_login_or_use_token(client, db_session):
    user = create_user_in_db(db_session)
    token = login(client, user.email)

    user.is_active = False
    db_session.commit()

    r = client.post("/auth/login", json={"email": user.email, "password": "Passw0rd!23"})
    assert r.status_code == 403

    r = client.get("/auth/session", headers=auth_header(token))
    assert r.status_code == 401


def test_missing_or_bad_token(client):
    assert client.get("/auth/session").status_code == 401
    r = client.get("/auth/session", headers=auth_header("not-a-jwt"))
    assert r.status_code == 401
    assert r.json() == {"error": "Could not validate credentials"}


def test_external_identity_signup(client, db_session):
    payload = {"email": "g@test.com", "name": "Google User", "google_id": "g-123"}

    r = client.post("/auth/external", json=payload)
    assert r.status_code == 401

    r = client.post("/auth/external", json=payload, headers={"X-Provider-Secret": "wrong"})
    assert r.status_code == 401

    r = client.post("/auth/external", json=payload, headers={"X-Provider-Secret": "test-provider-secreT"})
    assert r.status_code == 401

    r = client.post("/auth/external", json=payload, headers=PROVIDER)
    assert r.status_code == 200, r.text
    token = r.json()["access_token"]

    session = client.get("/auth/session", headers=auth_header(token)).json()
    user = get_user(db_session, session["id"])
    assert user.google_id == "g-123"
    assert user.password_hash is None
    assert user.role == Role.USER

    # 같은 google_id 로 다시 호출하면 같은 회원
    again = client.post("/auth/external", json=payload, headers=PROVIDER)
    assert again.status_code == 200
    assert client.get("/auth/session", headers=auth_header(again.json()["access_token"])).json()["id"] == session["id"]

    # 비밀번호가 없는 계정은 비밀번호 로그인 불가
    r = client.post("/auth/login", json={"email": "g@test.com", "password": "anything"})
    assert r.status_code == 401


def test_external_identity_conflicts_with_password_account(client, db_session):
    user = create_user_in_db(db_session)
    r = client.post(
        "/auth/external",
        json={"email": user.email, "name": "X", "google_id": "g-999"},
        headers=PROVIDER,
    )
    assert r.status_code == 400


def test_change_password(client, db_session):
    user = create_user_in_db(db_session)
    token = login(client, user.email)

    r = client.patch(
        "/auth/password",
        json={"current_password": "wrong", "new_password": "NewPassw0rd!", "confirm_password": "NewPassw0rd!"},
        headers=auth_header(token),
    )
    assert r.status_code == 401

    r = client.patch(
        "/auth/password",
        json={"current_password": "Passw0rd!23", "new_password": "NewPassw0rd!", "confirm_password": "Mismatch12!"},
        headers=auth_header(token),
    )
    assert r.status_code == 400

    r = client.patch(
        "/auth/password",
        json={"current_password": "Passw0rd!23", "new_password": "NewPassw0rd!", "confirm_password": "NewPassw0rd!"},
        headers=auth_header(token),
    )
    assert r.status_code == 200, r.text
    assert r.json() == {"message": "Password updated"}

    login(client, user.email, "NewPassw0rd!")
    r = client.post("/auth/login", json={"email": user.email, "password": "Passw0rd!23"})
    assert r.status_code == 401
