"""

로그인 및 관리자 사용자 관리 테스트.
- 전화번호 로그인 / 실패 메시지, 관리자 전용 접근,
  사용자 생성 시 전화번호 중복 차단, 자기 자신 유형 변경 / 삭제 금지,
  삭제된 사용자 로그인 차단을 검증한다.

"""

import pytest

from golf_intranet.models.user import UserType
from golf_intranet.services.admin import count_admins, ensure_not_last_admin

from tests.helpers import auth_header, create_user_in_db, login, setup_admin_and_manager


def test_login_and_me(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)

    me = client.get("/auth/me", headers=auth_header(ctx["manager_token"]))
    assert me.status_code == 200, me.text
    assert me.json()["type"] == "manager"
    assert me.json()["phone_number"] == ctx["manager_phone"]

    bad = client.post("/auth/login", json={"phone_number": ctx["manager_phone"], "password": "wrong-password"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid phone number or password"

    invalid_token = client.get("/auth/me", headers=auth_header("not-a-token"))
    assert invalid_token.status_code == 401


def test_admin_only(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)

    res = client.get("/admin/users", headers=auth_header(ctx["manager_token"]))
    assert res.status_code == 403
    assert res.json()["detail"] == "Admin only"


def test_create_user_and_login(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)
    admin_token = ctx["admin_token"]

    body = {
        "phone_number": "010-4444-5555",
        "password": "NewManagerPass1",
        "name": "신규매니저",
        "charge_rate": 5.0,
    }
    created = client.post("/admin/users", headers=auth_header(admin_token), json=body)
    assert created.status_code == 200, created.text
    assert created.json()["type"] == "manager"
    assert created.json()["charge_rate"] == 5.0

    dup = client.post("/admin/users", headers=auth_header(admin_token), json=body)
    assert dup.status_code == 400
    assert dup.json()["detail"] == "phone number already registered"

    login(client, "010-4444-5555", "NewManagerPass1")

    managers = client.get("/admin/users", headers=auth_header(admin_token), params={"type": "manager"})
    assert managers.status_code == 200
    assert {u["phone_number"] for u in managers.json()} == {ctx["manager_phone"], "010-4444-5555"}


def test_update_user(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)
    admin_token = ctx["admin_token"]

    res = client.patch(
        f"/admin/users/{ctx['manager_id']}",
        headers=auth_header(admin_token),
        json={"charge_rate": 15.0, "password": "ChangedPass123"},
    )
    assert res.status_code == 200, res.text
    assert res.json()["charge_rate"] == 15.0
    login(client, ctx["manager_phone"], "ChangedPass123")

    own_type = client.patch(
        f"/admin/users/{ctx['admin_id']}", headers=auth_header(admin_token), json={"type": "manager"}
    )
    assert own_type.status_code == 400
    assert own_type.json()["detail"] == "Cannot change your own type"


def test_delete_user(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)
    admin_token = ctx["admin_token"]

    self_delete = client.delete(f"/admin/users/{ctx['admin_id']}", headers=auth_header(admin_token))
    assert self_delete.status_code == 400
    assert self_delete.json()["detail"] == "Cannot delete yourself"

    res = client.delete(f"/admin/users/{ctx['manager_id']}", headers=auth_header(admin_token))
    assert res.status_code == 200, res.text
    assert res.json()["data"]["type"] == "manager"

    # 삭제된 사용자: 로그인 불가, 기존 토큰도 거부
    login_after = client.post(
        "/auth/login", json={"phone_number": ctx["manager_phone"], "password": ctx["manager_password"]}
    )
    assert login_after.status_code == 401
    assert client.get("/auth/me", headers=auth_header(ctx["manager_token"])).status_code == 401

    assert client.get(f"/admin/users/{ctx['manager_id']}", headers=auth_header(admin_token)).status_code == 404


def test_promote_and_demote_admin(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)
    admin_token = ctx["admin_token"]

    promoted = client.patch(
        f"/admin/users/{ctx['manager_id']}", headers=auth_header(admin_token), json={"type": "admin"}
    )
    assert promoted.status_code == 200
    assert promoted.json()["type"] == "admin"

    # 관리자 2명 → 한 명 강등 가능
    demoted = client.patch(
        f"/admin/users/{ctx['manager_id']}", headers=auth_header(admin_token), json={"type": "manager"}
    )
    assert demoted.status_code == 200
    assert demoted.json()["type"] == "manager"


def test_last_admin_guard(db_session):
    only_admin = create_user_in_db(
        db_session, phone_number="010-9000-0001", password="AdminPassw0rd!", type=UserType.ADMIN
    )
    assert count_admins(db_session) == 1

    with pytest.raises(ValueError, match="cannot remove the last admin"):
        ensure_not_last_admin(db_session, only_admin)

    create_user_in_db(db_session, phone_number="010-9000-0002", password="AdminPassw0rd!", type=UserType.ADMIN)
    ensure_not_last_admin(db_session, only_admin)
