"""

조인 좌석 점유 서비스 테스트.
- 조인 추가 / 취소 / 유형 변경 후 join_num == 실제 조인 좌석 합계 불변식,
  정원 초과 거절 시 무변경, 재계산 멱등성, 부분 실패 후 재계산 복구,
  타업체마감 유지 / 해제 흐름을 검증한다.

"""

import logging
import uuid

import pytest
from sqlalchemy import text
from sqlalchemy.orm.exc import StaleDataError

from golf_intranet.models.course_time import CourseTimeStatus
from golf_intranet.models.join_person import JoinPerson, JoinPersonStatus, JoinType
from golf_intranet.services import join_tracker
from golf_intranet.services.errors import (
    CapacityExceeded,
    DataStoreError,
    NotFound,
    PartialWriteFailure,
)
from golf_intranet.services.join_store import JoinStore
from golf_intranet.services.occupancy import occupied_seats

from tests.helpers import create_course_time_in_db, create_user_in_db, get_course_time


def _add(store, time_id, join_type, name="조인고객"):
    return join_tracker.add_join(store, time_id, name=name, phone_number="010-5555-0000", join_type=join_type)


def _assert_invariant(store, time_id):
    course_time = get_course_time(store.db, time_id)
    joins = store.list_join_persons(time_id)
    assert course_time.join_num == occupied_seats(jp.join_type for jp in joins)
    return course_time


@pytest.fixture()
def store(db_session):
    return JoinStore(db_session)


@pytest.fixture()
def course_time(db_session):
    return create_course_time_in_db(db_session)


def test_add_single_join_to_empty_course_time(store, course_time):
    join_person, ct = _add(store, course_time.id, "남")

    assert join_person.join_type == JoinType.M
    assert ct.join_num == 1
    assert ct.status == CourseTimeStatus.UNSOLD
    _assert_invariant(store, course_time.id)


def test_fill_to_capacity_then_reject(store, course_time):
    _add(store, course_time.id, "남남남")
    _, ct = _add(store, course_time.id, "남")
    assert ct.join_num == 4
    assert ct.status == CourseTimeStatus.SOLD_OUT

    with pytest.raises(CapacityExceeded) as exc_info:
        _add(store, course_time.id, "여")
    assert (exc_info.value.current, exc_info.value.requested) == (4, 1)

    # 거절 시 아무것도 쓰지 않음
    after = _assert_invariant(store, course_time.id)
    assert after.join_num == 4
    assert after.status == CourseTimeStatus.SOLD_OUT
    assert len(store.list_join_persons(course_time.id)) == 2


def test_remove_join_recomputes_from_remaining(store, course_time):
    mixed, _ = _add(store, course_time.id, "남여")
    _, ct = _add(store, course_time.id, "여여")
    assert (ct.join_num, ct.status) == (4, CourseTimeStatus.SOLD_OUT)

    ct = join_tracker.remove_join(store, mixed.id)

    assert ct.join_num == 2
    assert ct.status == CourseTimeStatus.UNSOLD
    _assert_invariant(store, course_time.id)


def test_transfer_sells_out_in_one_step(store, course_time):
    _, ct = _add(store, course_time.id, "양도")

    assert ct.join_num == 4
    assert ct.status == CourseTimeStatus.SOLD_OUT


def test_partial_write_failure_is_repaired_by_recompute(store, course_time, monkeypatch, caplog):
    _add(store, course_time.id, "남")

    def fail_occupancy_write(self, time_id, *, join_num, status):
        raise DataStoreError("Database error: OperationalError", operation="update_course_time_occupancy")

    monkeypatch.setattr(JoinStore, "update_course_time_occupancy", fail_occupancy_write)

    with caplog.at_level(logging.ERROR, logger="golf_intranet"):
        with pytest.raises(PartialWriteFailure) as exc_info:
            _add(store, course_time.id, "남남")

    assert exc_info.value.details["needs_reconciliation"] is True
    assert exc_info.value.details["time_id"] == str(course_time.id)
    assert any("reconciliation required" in r.getMessage() for r in caplog.records)

    # 조인은 저장됐지만 캐시는 이전 값
    assert len(store.list_join_persons(course_time.id)) == 2
    assert get_course_time(store.db, course_time.id).join_num == 1

    monkeypatch.undo()
    ct = join_tracker.recompute_occupancy(store, course_time.id)
    assert ct.join_num == 3
    assert ct.status == CourseTimeStatus.UNSOLD
    _assert_invariant(store, course_time.id)


def test_recompute_is_idempotent(store, course_time):
    _add(store, course_time.id, "남")
    _add(store, course_time.id, "여여여")

    first = join_tracker.recompute_occupancy(store, course_time.id)
    first_state = (first.join_num, first.status)
    second = join_tracker.recompute_occupancy(store, course_time.id)

    assert (second.join_num, second.status) == first_state == (4, CourseTimeStatus.SOLD_OUT)


def test_recompute_fixes_drifted_cache(store, db_session, course_time):
    _add(store, course_time.id, "남여")

    # 캐시가 어긋난 상태를 직접 만든다
    ct = get_course_time(db_session, course_time.id)
    ct.join_num = 0
    ct.status = CourseTimeStatus.SOLD_OUT
    db_session.commit()

    ct = join_tracker.recompute_occupancy(store, course_time.id)
    assert (ct.join_num, ct.status) == (2, CourseTimeStatus.UNSOLD)


def test_recompute_reports_overbooking_as_is(store, db_session, course_time):
    # 동시 추가로 정원을 넘긴 상황: 재계산은 실제 합계를 그대로 기록
    for join_type in (JoinType.MMM, JoinType.MF):
        db_session.add(
            JoinPerson(time_id=course_time.id, name="동시", phone_number="010-0000-0000", join_type=join_type)
        )
    db_session.commit()

    ct = join_tracker.recompute_occupancy(store, course_time.id)
    assert ct.join_num == 5
    assert ct.status == CourseTimeStatus.SOLD_OUT


def test_remove_last_join_returns_to_unsold(store, course_time):
    join_person, _ = _add(store, course_time.id, "양도")

    ct = join_tracker.remove_join(store, join_person.id)

    assert (ct.join_num, ct.status) == (0, CourseTimeStatus.UNSOLD)


def test_add_join_defaults_fees_and_charge_rate(store, db_session, course_time):
    manager = create_user_in_db(db_session, phone_number="010-1000-2000", password="ManagerPassw0rd!", charge_rate=12.5)

    join_person, _ = join_tracker.add_join(
        store, course_time.id, name="김조인", phone_number="010-3333-4444", join_type="MF", manager=manager
    )

    assert join_person.manager_id == manager.id
    assert join_person.green_fee == course_time.green_fee
    assert join_person.charge_fee == course_time.charge_fee
    assert join_person.charge_rate == 12.5


def test_add_join_rejects_unknown_join_type(store, course_time):
    with pytest.raises(ValueError):
        _add(store, course_time.id, "남남남남")
    assert store.list_join_persons(course_time.id) == []


def test_add_join_to_missing_course_time(store):
    with pytest.raises(NotFound) as exc_info:
        _add(store, uuid.uuid4(), "남")
    assert exc_info.value.status_code == 404


def test_remove_missing_join(store):
    with pytest.raises(NotFound):
        join_tracker.remove_join(store, uuid.uuid4())


def test_change_join_type_checks_capacity_without_itself(store, course_time):
    _add(store, course_time.id, "남")
    pair, _ = _add(store, course_time.id, "남여")

    # 남여(2) → 남남여(3): 다른 조인 1석 + 3석 = 4석 허용
    pair, ct = join_tracker.change_join_type(store, pair.id, "남남여")
    assert pair.join_type == JoinType.MMF
    assert (ct.join_num, ct.status) == (4, CourseTimeStatus.SOLD_OUT)

    with pytest.raises(CapacityExceeded):
        join_tracker.change_join_type(store, pair.id, "양도")
    assert _assert_invariant(store, course_time.id).join_num == 4


def test_closed_by_other_survives_join_changes(store, course_time):
    ct = join_tracker.close_course_time(store, course_time.id)
    assert ct.status == CourseTimeStatus.CLOSED_BY_OTHER

    join_person, ct = _add(store, course_time.id, "남남")
    assert ct.join_num == 2
    assert ct.status == CourseTimeStatus.CLOSED_BY_OTHER

    ct = join_tracker.recompute_occupancy(store, course_time.id)
    assert ct.status == CourseTimeStatus.CLOSED_BY_OTHER

    ct = join_tracker.remove_join(store, join_person.id)
    assert (ct.join_num, ct.status) == (0, CourseTimeStatus.CLOSED_BY_OTHER)


def test_reopen_restores_status_from_seats(store, course_time):
    _add(store, course_time.id, "양도")
    join_tracker.close_course_time(store, course_time.id)

    ct = join_tracker.reopen_course_time(store, course_time.id)

    assert (ct.join_num, ct.status) == (4, CourseTimeStatus.SOLD_OUT)


def test_stale_course_time_write_becomes_data_store_error(store, db_session, course_time, monkeypatch):
    def stale_commit():
        raise StaleDataError("UPDATE statement on table 'course_times' expected to update 1 row(s); 0 were matched.")

    monkeypatch.setattr(db_session, "commit", stale_commit)

    with pytest.raises(DataStoreError) as exc_info:
        store.update_course_time_occupancy(course_time.id, join_num=1, status=CourseTimeStatus.UNSOLD)

    assert exc_info.value.operation == "update_course_time_occupancy"
    assert exc_info.value.status_code == 503


def test_remove_join_when_course_time_is_gone(store, course_time, monkeypatch):
    join_person, _ = _add(store, course_time.id, "남")

    # 조인 조회 직후 코스 타임이 삭제된 상황
    monkeypatch.setattr(store, "get_course_time", lambda time_id: None)

    with pytest.raises(NotFound) as exc_info:
        join_tracker.remove_join(store, join_person.id)

    assert exc_info.value.details["kind"] == "course time"
    assert exc_info.value.details["id"] == str(course_time.id)

    # 아무것도 쓰지 않음
    monkeypatch.undo()
    assert [jp.id for jp in store.list_join_persons(course_time.id)] == [join_person.id]


def test_racing_adds_are_recorded_as_real_total(store, db_session, course_time, monkeypatch, caplog):
    _add(store, course_time.id, "남남남")

    original_insert = JoinStore.insert_join_person

    def insert_after_rival(self, **fields):
        # 정원 검사를 통과한 직후 다른 요청의 조인이 먼저 저장됨
        monkeypatch.setattr(JoinStore, "insert_join_person", original_insert)
        original_insert(
            self, time_id=course_time.id, name="동시요청", phone_number="010-9999-0000", join_type=JoinType.F
        )
        return original_insert(self, **fields)

    monkeypatch.setattr(JoinStore, "insert_join_person", insert_after_rival)

    with caplog.at_level(logging.WARNING, logger="golf_intranet"):
        _, ct = _add(store, course_time.id, "남")

    assert ct.join_num == 5
    assert ct.status == CourseTimeStatus.SOLD_OUT
    assert any("overbooked" in r.getMessage() for r in caplog.records)
    assert len(store.list_join_persons(course_time.id)) == 3

    ct = join_tracker.recompute_occupancy(store, course_time.id)
    assert ct.join_num == 5
    _assert_invariant(store, course_time.id)


def test_join_enums_are_stored_by_value(store, db_session, course_time):
    assert JoinPerson.__table__.c.join_type.type.enums == [m.value for m in JoinType]
    assert JoinPerson.__table__.c.status.type.enums == [m.value for m in JoinPersonStatus]

    _add(store, course_time.id, "남여")

    row = db_session.execute(text("SELECT join_type, status FROM join_persons")).one()
    assert tuple(row) == ("MF", "PENDING_CONFIRM")
