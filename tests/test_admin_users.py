"""
관리자 회원 관리 API 통합 테스트.
- 권한 키 검사(401/403), rank 규칙에 따른 역할 / 상태 변경,
  회원 삭제 시 프로필 사진 정리, 관리자 행위 로그 기록을 검증한다.
"""

import uuid

from sqlalchemy import select

from sif_cms.models.admin_log import AdminActionLog
from sif_cms.models.user import Role
from sif_cms.services import common
from tests.helpers import create_user_in_db, get_user, public_url, user_with_token


def test_admin_users_requires_admin_permission(client, db_session):
    assert client.get("/api/admin/users").status_code == 401

    _, secretary = user_with_token(client, db_session, Role.SECRETARY)
    r = client.get("/api/admin/users", headers=secretary)
    assert r.status_code == 403
    assert "error" in r.json()


def test_list_users_includes_advisory_flags(client, db_session):
    vp, headers = user_with_token(client, db_session, Role.VICE_PRESIDENT)
    president = create_user_in_db(db_session, role=Role.PRESIDENT)
    member = create_user_in_db(db_session, role=Role.USER)

    r = client.get("/api/admin/users", headers=headers)
    assert r.status_code == 200, r.text
    by_id = {u["id"]: u for u in r.json()}

    assert by_id[str(member.id)]["can_edit_role"] is True
    assert by_id[str(member.id)]["can_delete"] is True
    assert by_id[str(president.id)]["can_edit_role"] is False
    assert by_id[str(vp.id)]["can_delete"] is False
    assert all("password_hash" not in u for u in r.json())


def test_get_user_not_found(client, db_session):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    assert client.get(f"/api/admin/users/{uuid.uuid4()}", headers=headers).status_code == 404
    assert client.get("/api/admin/users/not-a-uuid", headers=headers).status_code == 404


def test_admin_changes_secretary_role(client, db_session):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    secretary = create_user_in_db(db_session, role=Role.SECRETARY)

    r = client.put(f"/api/admin/users/{secretary.id}/role", json={"role": "holdings_write"}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Role updated"
    assert r.json()["data"]["role"] == "holdings_write"
    assert get_user(db_session, secretary.id).role == Role.HOLDINGS_WRITE

    # 같은 역할로 변경은 400
    r = client.put(f"/api/admin/users/{secretary.id}/role", json={"role": "holdings_write"}, headers=headers)
    assert r.status_code == 400


def test_secretary_cannot_change_admin_role(client, db_session):
    # secretary 는 ADMIN 권한 키가 없으므로 라우트 가드에서 거부
    admin = create_user_in_db(db_session, role=Role.ADMIN)
    _, secretary = user_with_token(client, db_session, Role.SECRETARY)

    r = client.put(f"/api/admin/users/{admin.id}/role", json={"role": "user"}, headers=secretary)
    assert r.status_code == 403
    assert get_user(db_session, admin.id).role == Role.ADMIN


def test_rank_rules_for_role_changes(client, db_session):
    vp, headers = user_with_token(client, db_session, Role.VICE_PRESIDENT)
    president = create_user_in_db(db_session, role=Role.PRESIDENT)
    other_vp = create_user_in_db(db_session, role=Role.VICE_PRESIDENT)
    member = create_user_in_db(db_session, role=Role.USER)

    # 상위 / 동급 / 자기 자신은 변경 불가
    for target in (president, other_vp, vp):
        r = client.put(f"/api/admin/users/{target.id}/role", json={"role": "user"}, headers=headers)
        assert r.status_code == 403, target.role

    # 자기 rank 이상의 역할은 부여 불가
    r = client.put(f"/api/admin/users/{member.id}/role", json={"role": "vice_president"}, headers=headers)
    assert r.status_code == 403
    r = client.put(f"/api/admin/users/{member.id}/role", json={"role": "secretary"}, headers=headers)
    assert r.status_code == 200, r.text


def test_invalid_role_value_is_400(client, db_session):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    member = create_user_in_db(db_session)
    r = client.put(f"/api/admin/users/{member.id}/role", json={"role": "superuser"}, headers=headers)
    assert r.status_code == 400


def test_status_update(client, db_session):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    member = create_user_in_db(db_session)

    r = client.put(f"/api/admin/users/{member.id}/status", json={"isActive": False}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "User deactivated"
    assert get_user(db_session, member.id).is_active is False

    r = client.post("/auth/login", json={"email": member.email, "password": "Passw0rd!23"})
    assert r.status_code == 403


def test_delete_user_reaps_profile_picture(client, db_session, storage):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    picture = public_url("profile_pictures/x/1_me.png", bucket="profile-pictures")
    member = create_user_in_db(db_session, profile_picture=picture)

    r = client.delete(f"/api/admin/users/{member.id}", headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "User deleted successfully"
    assert r.json()["data"]["email"] == member.email
    assert get_user(db_session, member.id) is None
    assert storage.removed == [("profile-pictures", "profile_pictures/x/1_me.png")]


def test_delete_user_succeeds_when_bucket_delete_fails(client, db_session, storage):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    member = create_user_in_db(db_session, profile_picture=public_url("profile_pictures/x/a.png", "profile-pictures"))
    storage.fail_remove = True

    r = client.delete(f"/api/admin/users/{member.id}", headers=headers)
    assert r.status_code == 200, r.text
    assert get_user(db_session, member.id) is None


def test_cannot_delete_self_or_higher_rank(client, db_session, storage):
    president, headers = user_with_token(client, db_session, Role.PRESIDENT)
    admin = create_user_in_db(db_session, role=Role.ADMIN)

    assert client.delete(f"/api/admin/users/{president.id}", headers=headers).status_code == 403
    assert client.delete(f"/api/admin/users/{admin.id}", headers=headers).status_code == 403
    assert storage.calls == 0


def test_failed_delete_leaves_user_and_no_log(client, db_session, storage, monkeypatch):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    picture = public_url("profile_pictures/x/1_me.png", bucket="profile-pictures")
    member = create_user_in_db(db_session, profile_picture=picture)
    monkeypatch.setattr(common, "remove", lambda db, collection, id: False)

    r = client.delete(f"/api/admin/users/{member.id}", headers=headers)
    assert r.status_code == 500
    assert "error" in r.json()
    assert get_user(db_session, member.id) is not None
    assert db_session.scalars(select(AdminActionLog)).all() == []
    assert storage.removed == []


def test_admin_logs_record_actions(client, db_session):
    _, headers = user_with_token(client, db_session, Role.ADMIN)
    member = create_user_in_db(db_session)

    client.put(f"/api/admin/users/{member.id}/role", json={"role": "holdings_read"}, headers=headers)
    client.delete(f"/api/admin/users/{member.id}", headers=headers)

    r = client.get("/api/admin/logs", headers=headers)
    assert r.status_code == 200, r.text
    actions = {log["action"] for log in r.json()["data"]}
    assert actions == {"SET_ROLE", "DELETE_USER"}
    assert r.json()["meta"]["count"] == 2
    assert all(log["target"]["email"] == member.email for log in r.json()["data"])


def test_dashboard_items_by_role(client, db_session):
    _, holdings_read = user_with_token(client, db_session, Role.HOLDINGS_READ)
    assert client.get("/api/admin/dashboard", headers=holdings_read).status_code == 403

    _, secretary = user_with_token(client, db_session, Role.SECRETARY)
    r = client.get("/api/admin/dashboard", headers=secretary)
    assert r.status_code == 200, r.text
    assert {i["href"] for i in r.json()["items"]} == {"/admin/gallery", "/admin/notes"}

    _, admin = user_with_token(client, db_session, Role.ADMIN)
    assert len(client.get("/api/admin/dashboard", headers=admin).json()["items"]) == 9
