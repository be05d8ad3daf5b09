"""
course_times.py

코스 타임(재판매 티타임) API 모음.

주요 기능:
- 코스 타임 등록 / 목록(기간·상태 필터) / 상세 / 수정 / 삭제
- 코스 타임별 조인 목록 조회 및 조인 추가
- 타업체마감 처리 / 해제 (관리자)
- 좌석 재계산 (부분 실패 복구용, 멱등)

설계 원칙:
- join_num / status 는 수정 API 로 바꿀 수 없다
  → 좌석 관련 변경은 모두 services.join_tracker 경유
- 수정 / 삭제는 등록한 매니저 본인 또는 관리자만 가능
- 좌석 처리 오류(CapacityExceeded, NotFound, PartialWriteFailure ...)는
  main.py 의 예외 핸들러가 응답으로 변환

관련 파일:
- golf_intranet.services.course_times  : 등록 / 수정 / 목록 로직
- golf_intranet.services.join_tracker  : 조인 추가 / 재계산 / 마감 처리

"""

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from golf_intranet.core.deps import get_db, get_current_user, get_current_admin, get_join_store
from golf_intranet.models.course_time import CourseTime, CourseTimeStatus
from golf_intranet.models.user import User
from golf_intranet.schemas.course_time import (
    CourseTimeCreateRequest,
    CourseTimeUpdateRequest,
    CourseTimeResponse,
)
from golf_intranet.schemas.join_person import JoinOccupancyResponse, JoinCreateRequest, JoinPersonResponse
from golf_intranet.services import join_tracker
from golf_intranet.services.course_times import create_course_time, list_course_times, update_course_time
from golf_intranet.services.join_store import JoinStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/course-times", tags=["course-times"])


def _get_course_time(db: Session, time_id: uuid.UUID) -> CourseTime:
    course_time = db.get(CourseTime, time_id)
    if not course_time:
        raise HTTPException(status_code=404, detail="Course time not found")
    return course_time


def _ensure_owner_or_admin(course_time: CourseTime, user: User) -> None:
    if not user.is_admin and course_time.author_id != user.id:
        raise HTTPException(status_code=403, detail="Only the author or an admin can modify this course time")


@router.post("", response_model=CourseTimeResponse)
def register_course_time(
    body: CourseTimeCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        course_time = create_course_time(db, author_id=current_user.id, **body.model_dump())
        db.commit()
        db.refresh(course_time)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise

    logger.info("Course time registered: time=%s author=%s", course_time.id, current_user.id)
    return course_time


"""
코스 타임 목록 조회

- start / end : 예약 시각 범위 (포함)
- status      : 미판매 / 판매완료 / 타업체마감
- 예약 시각 오름차순

"""
@router.get("", response_model=list[CourseTimeResponse])
def list_times(
    start: datetime | None = Query(default=None, description="예: 2026-10-20T00:00:00"),
    end: datetime | None = Query(default=None, description="예: 2026-10-31T23:59:59"),
    status: CourseTimeStatus | None = Query(default=None, description="예: 미판매"),
    course_id: uuid.UUID | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must be before end")
    return list_course_times(db, start=start, end=end, status=status, course_id=course_id)


@router.get("/{time_id}", response_model=CourseTimeResponse)
def get_time(
    time_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return _get_course_time(db, time_id)


@router.patch("/{time_id}", response_model=CourseTimeResponse)
def update_time(
    time_id: uuid.UUID,
    body: CourseTimeUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    course_time = _get_course_time(db, time_id)
    _ensure_owner_or_admin(course_time, current_user)

    # 보낸 필드만 반영 (course_id / site_id / memo 는 null 로 비우기 가능)
    changes = body.model_dump(exclude_unset=True)
    try:
        update_course_time(db, course_time, **changes)
        db.commit()
        db.refresh(course_time)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise
    return course_time


# 코스 타임 삭제 (소속 조인도 함께 삭제)
@router.delete("/{time_id}")
def delete_time(
    time_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    course_time = _get_course_time(db, time_id)
    _ensure_owner_or_admin(course_time, current_user)

    try:
        db.delete(course_time)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("Course time deleted: time=%s by=%s", time_id, current_user.id)
    return {"message": "Course time deleted", "data": {"id": str(time_id)}}


# 조인

@router.get("/{time_id}/joins", response_model=list[JoinPersonResponse])
def list_joins(
    time_id: uuid.UUID,
    store: JoinStore = Depends(get_join_store),
    _: User = Depends(get_current_user),
):
    if store.get_course_time(time_id) is None:
        raise HTTPException(status_code=404, detail="Course time not found")
    return store.list_join_persons(time_id)


"""
조인 추가 API

- 4석 초과 시 409 (현재 / 요청 / 정원 좌석 수 포함)
- 성공 시 생성된 조인과 갱신된 코스 타임(join_num / status) 반환

"""
@router.post("/{time_id}/joins", response_model=JoinOccupancyResponse)
def add_join(
    time_id: uuid.UUID,
    body: JoinCreateRequest,
    store: JoinStore = Depends(get_join_store),
    current_user: User = Depends(get_current_user),
):
    join_person, course_time = join_tracker.add_join(
        store,
        time_id,
        manager=current_user,
        **body.model_dump(),
    )
    return JoinOccupancyResponse(
        join_person=JoinPersonResponse.model_validate(join_person),
        course_time=CourseTimeResponse.model_validate(course_time),
    )


# 좌석 재계산 (실제 조인 기준, 멱등)
@router.post("/{time_id}/recompute", response_model=CourseTimeResponse)
def recompute(
    time_id: uuid.UUID,
    store: JoinStore = Depends(get_join_store),
    _: User = Depends(get_current_user),
):
    return join_tracker.recompute_occupancy(store, time_id)


# 타업체마감 처리 (관리자)
@router.post("/{time_id}/close", response_model=CourseTimeResponse)
def close(
    time_id: uuid.UUID,
    store: JoinStore = Depends(get_join_store),
    _: User = Depends(get_current_admin),
):
    return join_tracker.close_course_time(store, time_id)


# 타업체마감 해제 → 좌석 수 기준 상태로 복귀 (관리자)
@router.post("/{time_id}/reopen", response_model=CourseTimeResponse)
def reopen(
    time_id: uuid.UUID,
    store: JoinStore = Depends(get_join_store),
    _: User = Depends(get_current_admin),
):
    return join_tracker.reopen_course_time(store, time_id)
