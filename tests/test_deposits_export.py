"""

관리자 입금 현황 조회 / XLSX export 테스트.
- ADMIN 접근, 입금 상태 필터(한글 라벨), 잘못된 상태 400,
  attachment 헤더, XLSX 응답 content-type 및 시트 내용(한글 라벨) 확인.

"""

import io

from openpyxl import load_workbook

from tests.helpers import auth_header, create_course_time_in_db, setup_admin_and_manager


def _setup_deposits(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)
    token = ctx["manager_token"]
    course_time = create_course_time_in_db(db_session)

    join_ids = []
    for name, join_type in (("입금고객", "남"), ("대기고객", "여여")):
        res = client.post(
            f"/course-times/{course_time.id}/joins",
            headers=auth_header(token),
            json={"name": name, "phone_number": "010-1212-3434", "join_type": join_type},
        )
        assert res.status_code == 200, res.text
        join_ids.append(res.json()["join_person"]["id"])

    confirmed = client.patch(
        f"/admin/deposits/{join_ids[0]}/status",
        headers=auth_header(ctx["admin_token"]),
        json={"status": "입금완료"},
    )
    assert confirmed.status_code == 200, confirmed.text
    return ctx


def test_deposit_status_filter(client, db_session):
    ctx = _setup_deposits(client, db_session)
    admin_token = ctx["admin_token"]

    all_rows = client.get("/admin/deposits", headers=auth_header(admin_token))
    assert all_rows.status_code == 200, all_rows.text
    assert len(all_rows.json()) == 2

    pending = client.get("/admin/deposits", headers=auth_header(admin_token), params={"status": "입금확인전"})
    assert [r["name"] for r in pending.json()] == ["대기고객"]

    bad = client.get("/admin/deposits", headers=auth_header(admin_token), params={"status": "없는상태"})
    assert bad.status_code == 400

    forbidden = client.get("/admin/deposits", headers=auth_header(ctx["manager_token"]))
    assert forbidden.status_code == 403


def test_admin_deposits_export_xlsx_ok(client, db_session):
    ctx = _setup_deposits(client, db_session)

    res = client.get(
        "/admin/deposits/export.xlsx", headers=auth_header(ctx["admin_token"]), params={"status": "CONFIRMED"}
    )
    assert res.status_code == 200

    # content-type
    ct = res.headers.get("content-type", "")
    assert ct.startswith("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")

    # attachment
    cd = res.headers.get("content-disposition", "")
    assert "attachment" in cd
    assert "deposits_confirmed.xlsx" in cd

    # XLSX는 ZIP 기반 포맷이라 앞부분이 PK로 시작
    assert res.content[:2] == b"PK"

    ws = load_workbook(io.BytesIO(res.content)).active
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0][0] == "reserved_time"
    assert len(rows) == 2
    assert rows[1][2] == "입금고객"
    assert rows[1][4] == "남"
    assert rows[1][7] == "입금완료"


def test_admin_deposits_export_invalid_range_400(client, db_session):
    ctx = setup_admin_and_manager(client, db_session)

    res = client.get(
        "/admin/deposits/export.xlsx",
        headers=auth_header(ctx["admin_token"]),
        params={"start": "2026-10-31T00:00:00", "end": "2026-10-01T00:00:00"},
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "start must be before end"
