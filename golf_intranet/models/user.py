"""
user.py

인트라넷 사용자(User) 및 사용자 유형(UserType) 모델 정의 파일.

- manager : 코스 타임을 등록하고 조인을 판매하는 매니저
- admin   : 사용자 / 골프장 / 사이트 계정 관리 및 입금 현황 조회

로그인 ID 는 전화번호이며, 매니저별 수수료율(charge_rate)은
조인 등록 시 기본 수수료율로 사용된다.

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import String, Boolean, DateTime, Float, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from golf_intranet.db.base import Base


class UserType(str, Enum):
    MANAGER = "manager"
    ADMIN = "admin"


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


"""
사용자(User) 모델

- phone_number 는 활성 사용자 기준 로그인 식별자
- type 으로 관리자 / 매니저 구분
- is_deleted / deleted_at 으로 Soft Delete 지원

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    phone_number: Mapped[str] = mapped_column(String(30), index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)

    type: Mapped[UserType] = mapped_column(default=UserType.MANAGER)
    charge_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    deleted_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    @property
    def is_admin(self) -> bool:
        return self.type == UserType.ADMIN
