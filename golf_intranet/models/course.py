import uuid
import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, String, Uuid, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from golf_intranet.db.base import Base, enum_values


class Region(str, Enum):
    GYEONGGI_NORTH = "경기북부"
    GYEONGGI_SOUTH = "경기남부"
    CHUNGCHEONG = "충청도"
    GYEONGNAM = "경상남도"
    GANGWON = "강원도"


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Course(Base):
    """골프장 코스. 코스 타임 등록 시 선택 대상.

    삭제는 Soft Delete(is_deleted)로만 처리하여 과거 코스 타임 참조를 유지한다.
    """

    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    region: Mapped[Region] = mapped_column(
        SAEnum(Region, name="golf_region", values_callable=enum_values), nullable=False
    )
    golf_club_name: Mapped[str] = mapped_column(String(100), nullable=False)
    course_name: Mapped[str] = mapped_column(String(100), nullable=False)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    deleted_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


class SiteId(Base):
    """예약 사이트 계정(아이디) 정보.

    - disabled: 사용 중지된 계정
    - hidden  : 코스 타임 등록 화면에서 숨김
    """

    __tablename__ = "site_ids"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    site_id: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    deleted_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
