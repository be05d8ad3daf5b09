"""
services/join_persons.py

조인 입금 상태(입금확인전 → … → 환불완료) 처리 및 입금 현황 조회.

좌석 점유와 무관한 조인 필드만 다룬다.
(좌석에 영향을 주는 추가 / 삭제 / 유형 변경은 services.join_tracker)

"""

import uuid
from datetime import datetime

from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from golf_intranet.models.course_time import CourseTime
from golf_intranet.models.join_person import JoinPerson, JoinPersonStatus
from golf_intranet.services.errors import NotFound
from golf_intranet.services.join_store import JoinStore


# 허용되는 입금 상태 전이
ALLOWED_TRANSITIONS: dict[JoinPersonStatus, frozenset[JoinPersonStatus]] = {
    JoinPersonStatus.PENDING_CONFIRM: frozenset({JoinPersonStatus.CONFIRMING, JoinPersonStatus.CONFIRMED}),
    JoinPersonStatus.CONFIRMING: frozenset({JoinPersonStatus.CONFIRMED}),
    JoinPersonStatus.CONFIRMED: frozenset({JoinPersonStatus.REFUND_PENDING}),
    JoinPersonStatus.REFUND_PENDING: frozenset({JoinPersonStatus.REFUNDED}),
    JoinPersonStatus.REFUNDED: frozenset(),
}


"""
조인 입금 상태 변경

- 입금확인전 → (입금확인중 →) 입금완료 → 환불확인중 → 환불완료
- 위 전이 외의 건너뛰기 / 되돌리기 / 같은 상태 재지정 불가
- 환불확인중으로 바꿀 때는 환불 사유 필수
- 규칙 위반 시 ValueError

"""

def advance_status(
    store: JoinStore,
    join_id: uuid.UUID,
    *,
    status: JoinPersonStatus,
    refund_reason: str | None = None,
    refund_account: str | None = None,
) -> JoinPerson:
    join_person = store.get_join_person(join_id)
    if join_person is None:
        raise NotFound("join person", join_id)

    current = join_person.status
    if status not in ALLOWED_TRANSITIONS[current]:
        raise ValueError(f"status transition not allowed ({current.value} -> {status.value})")

    fields: dict = {"status": status}
    if status == JoinPersonStatus.REFUND_PENDING:
        reason = refund_reason or join_person.refund_reason
        if not reason:
            raise ValueError("refund_reason is required for refund")
        fields["refund_reason"] = reason
    elif refund_reason is not None:
        fields["refund_reason"] = refund_reason

    if refund_account is not None:
        fields["refund_account"] = refund_account

    return store.update_join_person(join_person, **fields)


def list_deposits(
    db: Session,
    *,
    status: JoinPersonStatus | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[tuple[JoinPerson, CourseTime]]:
    """관리자 입금 현황: (조인, 코스 타임) 목록을 예약 시각 최신순으로."""
    stmt = select(JoinPerson, CourseTime).join(CourseTime, CourseTime.id == JoinPerson.time_id)
    if status is not None:
        stmt = stmt.where(JoinPerson.status == status)
    if start is not None:
        stmt = stmt.where(CourseTime.reserved_time >= start)
    if end is not None:
        stmt = stmt.where(CourseTime.reserved_time <= end)
    stmt = stmt.order_by(desc(CourseTime.reserved_time), JoinPerson.created_at)
    return [(jp, ct) for jp, ct in db.execute(stmt).all()]
