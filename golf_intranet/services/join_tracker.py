"""
services/join_tracker.py

코스 타임 좌석 점유(조인) 관리 서비스.

조인 추가 / 취소 / 유형 변경 시 코스 타임의 join_num, status 를
항상 실제 조인 행(ground truth) 기준으로 다시 계산하여 기록한다.
캐시된 join_num 에 증감(+1/-1)만 적용하지 않는다.

처리 순서:
1) 코스 타임 / 조인 존재 확인
2) 실제 조인 행으로 현재 좌석 합계 계산
3) 정원(4석) 검사 → 초과 시 아무것도 쓰지 않고 CapacityExceeded
4) 조인 쓰기 (insert / delete / update)
5) 쓰기 직후 다시 조회한 조인 행으로 좌석 합계를 재계산해 코스 타임 기록

5) 가 실패하면 조인과 코스 타임 캐시가 어긋난 상태이므로
PartialWriteFailure 를 올리고 ERROR 로그를 남긴다.
복구는 recompute_occupancy(time_id) 한 번으로 끝난다 (멱등).

타업체마감 정책:
- 조인 추가 / 취소는 허용하되, 재계산이 타업체마감을 미판매/판매완료로 되돌리지 않는다
- 타업체마감 해제는 reopen_course_time 으로만 가능

관련 파일:
- golf_intranet.services.occupancy   : 좌석 가중치 / 상태 계산 규칙
- golf_intranet.services.join_store  : 조인 / 코스 타임 저장소
- golf_intranet.routers.course_times : 조인 추가 / 재계산 API
- golf_intranet.routers.joins        : 조인 취소 / 유형 변경 API

"""

import logging
import uuid

from golf_intranet.models.course_time import CourseTime, CourseTimeStatus
from golf_intranet.models.join_person import JoinPerson, JoinPersonStatus, JoinType
from golf_intranet.models.user import User
from golf_intranet.services.errors import (
    CapacityExceeded,
    DataStoreError,
    NotFound,
    PartialWriteFailure,
)
from golf_intranet.services.join_store import JoinStore
from golf_intranet.services.occupancy import (
    COURSE_TIME_CAPACITY,
    check_capacity,
    derive_status,
    occupied_seats,
    seat_weight,
)

logger = logging.getLogger(__name__)


def current_occupancy(store: JoinStore, time_id: uuid.UUID) -> int:
    return occupied_seats(jp.join_type for jp in store.list_join_persons(time_id))


def _require_course_time(store: JoinStore, time_id: uuid.UUID) -> CourseTime:
    course_time = store.get_course_time(time_id)
    if course_time is None:
        raise NotFound("course time", time_id)
    return course_time


def _require_join_person(store: JoinStore, join_id: uuid.UUID) -> JoinPerson:
    join_person = store.get_join_person(join_id)
    if join_person is None:
        raise NotFound("join person", join_id)
    return join_person


"""
조인 추가 (AddJoin)

- green_fee / charge_fee 미지정 시 코스 타임의 값을 사용
- charge_rate 미지정 시 등록 매니저의 수수료율 사용
- 반환: (생성된 조인, 갱신된 코스 타임)

"""

def add_join(
    store: JoinStore,
    time_id: uuid.UUID,
    *,
    name: str,
    phone_number: str,
    join_type,
    manager: User | None = None,
    green_fee: int | None = None,
    charge_fee: int | None = None,
    charge_rate: float | None = None,
) -> tuple[JoinPerson, CourseTime]:
    course_time = _require_course_time(store, time_id)
    join_type = JoinType.parse(join_type)

    current_total = current_occupancy(store, time_id)
    try:
        check_capacity(time_id=time_id, current_total=current_total, join_type=join_type)
    except CapacityExceeded as e:
        logger.warning(
            "Join rejected: time=%s type=%s seats=%d+%d/%d",
            time_id, join_type.value, e.current, e.requested, e.capacity,
        )
        raise

    if charge_rate is None:
        charge_rate = manager.charge_rate if manager is not None else 0.0

    join_person = store.insert_join_person(
        time_id=time_id,
        manager_id=manager.id if manager is not None else None,
        name=name,
        phone_number=phone_number,
        join_type=join_type,
        green_fee=course_time.green_fee if green_fee is None else green_fee,
        charge_fee=course_time.charge_fee if charge_fee is None else charge_fee,
        charge_rate=charge_rate,
        status=JoinPersonStatus.PENDING_CONFIRM,
    )
    course_time = _sync_occupancy(store, time_id, join_id=join_person.id)

    logger.info(
        "Join added: time=%s join=%s type=%s -> join_num=%d status=%s",
        time_id, join_person.id, join_type.value, course_time.join_num, course_time.status.value,
    )
    return join_person, course_time


"""
조인 취소 (RemoveJoin)

- 조인 삭제 후 남은 조인 행 기준으로 좌석 재계산
- 반환: 갱신된 코스 타임

"""

def remove_join(store: JoinStore, join_id: uuid.UUID) -> CourseTime:
    join_person = _require_join_person(store, join_id)
    time_id = join_person.time_id
    removed_weight = seat_weight(join_person.join_type)

    _require_course_time(store, time_id)

    store.delete_join_person(join_id)
    course_time = _sync_occupancy(store, time_id, join_id=join_id)

    logger.info(
        "Join removed: time=%s join=%s weight=%d -> join_num=%d status=%s",
        time_id, join_id, removed_weight, course_time.join_num, course_time.status.value,
    )
    return course_time


def change_join_type(store: JoinStore, join_id: uuid.UUID, join_type) -> tuple[JoinPerson, CourseTime]:
    """조인 유형 변경. 자신을 제외한 좌석 합계 기준으로 정원을 검사한다."""
    join_person = _require_join_person(store, join_id)
    new_type = JoinType.parse(join_type)
    time_id = join_person.time_id

    if join_person.join_type == new_type:
        return join_person, recompute_occupancy(store, time_id)

    others_total = occupied_seats(
        jp.join_type for jp in store.list_join_persons(time_id) if jp.id != join_person.id
    )
    try:
        check_capacity(time_id=time_id, current_total=others_total, join_type=new_type)
    except CapacityExceeded as e:
        logger.warning(
            "Join type change rejected: time=%s join=%s type=%s seats=%d+%d/%d",
            time_id, join_id, new_type.value, e.current, e.requested, e.capacity,
        )
        raise

    join_person = store.update_join_person(join_person, join_type=new_type)
    course_time = _sync_occupancy(store, time_id, join_id=join_id)
    return join_person, course_time


"""
좌석 재계산 (RecomputeOccupancy)

- 실제 조인 행만으로 join_num / status 를 다시 기록
- 같은 조인 집합이면 몇 번을 호출해도 같은 결과 (멱등)
- 부분 실패 복구 및 운영자 점검용

"""

def recompute_occupancy(store: JoinStore, time_id: uuid.UUID) -> CourseTime:
    course_time = _require_course_time(store, time_id)
    cached_num, cached_status = course_time.join_num, course_time.status

    total = current_occupancy(store, time_id)
    status = derive_status(total, cached_status)

    if (cached_num, cached_status) != (total, status):
        logger.info(
            "Occupancy updated: time=%s join_num %d->%d status %s->%s",
            time_id, cached_num, total, cached_status.value, status.value,
        )
    return store.update_course_time_occupancy(time_id, join_num=total, status=status)


def close_course_time(store: JoinStore, time_id: uuid.UUID) -> CourseTime:
    """타업체마감 처리. 좌석 수는 실제 조인 기준으로 함께 맞춘다."""
    _require_course_time(store, time_id)
    total = current_occupancy(store, time_id)
    logger.info("Course time closed by other vendor: time=%s join_num=%d", time_id, total)
    return store.update_course_time_occupancy(
        time_id, join_num=total, status=CourseTimeStatus.CLOSED_BY_OTHER
    )


def reopen_course_time(store: JoinStore, time_id: uuid.UUID) -> CourseTime:
    """타업체마감 해제. 상태를 좌석 수 기준(미판매/판매완료)으로 되돌린다."""
    _require_course_time(store, time_id)
    total = current_occupancy(store, time_id)
    status = derive_status(total)
    logger.info("Course time reopened: time=%s join_num=%d status=%s", time_id, total, status.value)
    return store.update_course_time_occupancy(time_id, join_num=total, status=status)


def _sync_occupancy(store: JoinStore, time_id: uuid.UUID, *, join_id: uuid.UUID) -> CourseTime:
    # 조인 쓰기가 끝난 뒤 호출되므로, 여기서의 DB 오류는 캐시 불일치를 의미한다
    try:
        course_time = recompute_occupancy(store, time_id)
    except DataStoreError as e:
        logger.error(
            "Occupancy write failed after join change; reconciliation required: time=%s join=%s operation=%s",
            time_id, join_id, e.operation,
        )
        raise PartialWriteFailure(time_id=time_id, join_id=join_id, cause=e) from e

    if course_time.join_num > COURSE_TIME_CAPACITY:
        logger.warning(
            "Course time overbooked by concurrent joins: time=%s seats=%d/%d",
            time_id, course_time.join_num, COURSE_TIME_CAPACITY,
        )
    return course_time
