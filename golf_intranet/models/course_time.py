"""
course_time.py

코스 타임(CourseTime) 모델 정의 파일.

코스 타임은 매니저가 확보해 재판매하는 티타임 한 건이며,
정원은 4석으로 고정이다.

- join_num : 조인(JoinPerson) 좌석 가중치 합의 비정규화 캐시
             → 조인 추가/취소 시 항상 실제 조인 행 기준으로 재계산하여 기록
- status   : 미판매 / 판매완료 / 타업체마감
             → 타업체마감은 관리자가 직접 지정하며, 좌석 재계산으로 해제되지 않는다
- version  : 좌석/상태 동시 갱신 감지를 위한 행 버전 (낙관적 동시성)

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid, Index, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from golf_intranet.db.base import Base, enum_values


class CourseTimeStatus(str, Enum):
    UNSOLD = "미판매"
    SOLD_OUT = "판매완료"
    CLOSED_BY_OTHER = "타업체마감"


class Requirements(str, Enum):
    NONE = "조건없음"
    MEMBERSHIP = "인회필"
    DEPOSIT = "예변필"
    MEMBERSHIP_AND_DEPOSIT = "인회필/예변필"


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class CourseTime(Base):
    __tablename__ = "course_times"
    __table_args__ = (
        Index("ix_course_times_reserved_time", "reserved_time"),
        Index("ix_course_times_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    author_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)
    course_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("courses.id"), nullable=True)
    site_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("site_ids.id"), nullable=True)

    reserved_time: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    reserved_name: Mapped[str] = mapped_column(String(50), nullable=False)

    green_fee: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    charge_fee: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    requirements: Mapped[Requirements] = mapped_column(
        SAEnum(Requirements, name="course_time_requirements", values_callable=enum_values),
        nullable=False,
        default=Requirements.NONE,
    )
    flag: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    memo: Mapped[str | None] = mapped_column(String(500), nullable=True)

    status: Mapped[CourseTimeStatus] = mapped_column(
        SAEnum(CourseTimeStatus, name="course_time_status", values_callable=enum_values),
        nullable=False,
        default=CourseTimeStatus.UNSOLD,
    )
    join_num: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # 코스 타임 삭제 시 소속 조인도 함께 삭제
    join_persons = relationship(
        "JoinPerson",
        back_populates="course_time",
        cascade="all, delete-orphan",
        order_by="JoinPerson.created_at",
    )
    course = relationship("Course")

    __mapper_args__ = {"version_id_col": version}
