"""
services/occupancy.py

코스 타임 좌석 점유 계산 규칙.

DB / HTTP 의존성이 없는 순수 함수만 둔다.
조인 추가 / 취소 / 재계산 흐름은 services.join_tracker 에서 이 함수들을 조합한다.

좌석 가중치:
- 양도(TRANSFER)                    : 4
- 3인 조인 (남남남, 남남여, 남여여, 여여여) : 3
- 2인 조인 (남남, 여여, 남여)          : 2
- 1인 조인 (남, 여)                   : 1
- 알 수 없는 유형                     : 1

"""

from typing import Iterable

from golf_intranet.models.course_time import CourseTimeStatus
from golf_intranet.models.join_person import JoinType
from golf_intranet.services.errors import CapacityExceeded


COURSE_TIME_CAPACITY = 4
DEFAULT_SEAT_WEIGHT = 1

SEAT_WEIGHTS: dict[JoinType, int] = {
    JoinType.TRANSFER: 4,
    JoinType.MMM: 3,
    JoinType.MMF: 3,
    JoinType.MFF: 3,
    JoinType.FFF: 3,
    JoinType.MM: 2,
    JoinType.FF: 2,
    JoinType.MF: 2,
    JoinType.M: 1,
    JoinType.F: 1,
}


def seat_weight(join_type) -> int:
    """조인 유형(태그 또는 한글 라벨)의 좌석 수."""
    try:
        return SEAT_WEIGHTS.get(JoinType.parse(join_type), DEFAULT_SEAT_WEIGHT)
    except ValueError:
        return DEFAULT_SEAT_WEIGHT


def occupied_seats(join_types: Iterable) -> int:
    return sum(seat_weight(t) for t in join_types)


def check_capacity(*, time_id, current_total: int, join_type) -> int:
    """추가 후 좌석 합계를 반환. 정원을 넘으면 CapacityExceeded."""
    requested = seat_weight(join_type)
    new_total = current_total + requested
    if new_total > COURSE_TIME_CAPACITY:
        raise CapacityExceeded(
            time_id=time_id,
            join_type=join_type,
            current=current_total,
            requested=requested,
            capacity=COURSE_TIME_CAPACITY,
        )
    return new_total


def derive_status(total: int, current_status: CourseTimeStatus | None = None) -> CourseTimeStatus:
    # 타업체마감은 관리자가 직접 해제(reopen)하기 전까지 유지
    if current_status == CourseTimeStatus.CLOSED_BY_OTHER:
        return CourseTimeStatus.CLOSED_BY_OTHER
    if total >= COURSE_TIME_CAPACITY:
        return CourseTimeStatus.SOLD_OUT
    return CourseTimeStatus.UNSOLD
