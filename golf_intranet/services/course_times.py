"""
services/course_times.py

코스 타임 등록 / 조회 / 수정 비즈니스 로직.

- join_num / status 는 여기서 직접 수정하지 않는다
  (좌석 관련 필드는 services.join_tracker 만 기록)
- 트랜잭션 제어(commit / rollback)는 라우터에서 수행

"""

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from golf_intranet.models.course import Course, SiteId
from golf_intranet.models.course_time import CourseTime, CourseTimeStatus


EDITABLE_FIELDS = (
    "course_id",
    "site_id",
    "reserved_time",
    "reserved_name",
    "green_fee",
    "charge_fee",
    "requirements",
    "flag",
    "memo",
)

# 수정 시 null 로 비울 수 있는 필드
NULLABLE_FIELDS = ("course_id", "site_id", "memo")


def _validate_refs(db: Session, *, course_id: uuid.UUID | None, site_id: uuid.UUID | None) -> None:
    if course_id is not None:
        course = db.scalar(select(Course).where(Course.id == course_id, Course.is_deleted.is_(False)))
        if not course:
            raise ValueError("course not found")
    if site_id is not None:
        site = db.scalar(select(SiteId).where(SiteId.id == site_id, SiteId.is_deleted.is_(False)))
        if not site:
            raise ValueError("site id not found")
        if site.disabled:
            raise ValueError("site id is disabled")


def create_course_time(db: Session, *, author_id: uuid.UUID, **fields) -> CourseTime:
    _validate_refs(db, course_id=fields.get("course_id"), site_id=fields.get("site_id"))

    course_time = CourseTime(
        author_id=author_id,
        status=CourseTimeStatus.UNSOLD,
        join_num=0,
        **{k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None},
    )
    db.add(course_time)
    db.flush()
    return course_time


def update_course_time(db: Session, course_time: CourseTime, **fields) -> CourseTime:
    changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
    for key, value in changes.items():
        if value is None and key not in NULLABLE_FIELDS:
            raise ValueError(f"{key} cannot be null")
    _validate_refs(db, course_id=changes.get("course_id"), site_id=changes.get("site_id"))

    for key, value in changes.items():
        setattr(course_time, key, value)
    db.flush()
    return course_time


def list_course_times(
    db: Session,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
    status: CourseTimeStatus | None = None,
    course_id: uuid.UUID | None = None,
) -> list[CourseTime]:
    stmt = select(CourseTime)
    if start is not None:
        stmt = stmt.where(CourseTime.reserved_time >= start)
    if end is not None:
        stmt = stmt.where(CourseTime.reserved_time <= end)
    if status is not None:
        stmt = stmt.where(CourseTime.status == status)
    if course_id is not None:
        stmt = stmt.where(CourseTime.course_id == course_id)
    return list(db.scalars(stmt.order_by(CourseTime.reserved_time)).all())
