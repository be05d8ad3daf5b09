"""
join_person.py

조인(JoinPerson) 모델 정의 파일.

조인은 코스 타임 한 건에 붙는 좌석 묶음이며,
join_type 에 따라 1~4석을 차지한다 (좌석 가중치는 services.occupancy 참고).

입금 상태(status)는 입금확인전 → (입금확인중 →) 입금완료 → 환불확인중 → 환불완료
순서로만 진행되며 (services.join_persons.ALLOWED_TRANSITIONS), 어떤 상태든 좌석 점유에는 영향을 주지 않는다.
(조인이 삭제될 때까지 좌석을 차지)

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Uuid, Index, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from golf_intranet.db.base import Base, enum_values


"""
조인 유형

- DB 에는 영문 태그(TRANSFER, MF ...)로 저장
- 화면/요청에서는 한글 라벨(양도, 남여 ...)도 허용 → JoinType.parse

"""

class JoinType(str, Enum):
    TRANSFER = "TRANSFER"
    MF = "MF"
    M = "M"
    F = "F"
    MM = "MM"
    FF = "FF"
    MMM = "MMM"
    MMF = "MMF"
    MFF = "MFF"
    FFF = "FFF"

    @property
    def label(self) -> str:
        return JOIN_TYPE_LABELS[self]

    @classmethod
    def parse(cls, value) -> "JoinType":
        if isinstance(value, cls):
            return value
        text = str(value).strip() if value is not None else ""
        if text in cls.__members__:
            return cls[text]
        for member, label in JOIN_TYPE_LABELS.items():
            if label == text:
                return member
        raise ValueError(f"unknown join_type: {value!r}")


JOIN_TYPE_LABELS = {
    JoinType.TRANSFER: "양도",
    JoinType.MF: "남여",
    JoinType.M: "남",
    JoinType.F: "여",
    JoinType.MM: "남남",
    JoinType.FF: "여여",
    JoinType.MMM: "남남남",
    JoinType.MMF: "남남여",
    JoinType.MFF: "남여여",
    JoinType.FFF: "여여여",
}


class JoinPersonStatus(str, Enum):
    PENDING_CONFIRM = "PENDING_CONFIRM"
    CONFIRMING = "CONFIRMING"
    CONFIRMED = "CONFIRMED"
    REFUND_PENDING = "REFUND_PENDING"
    REFUNDED = "REFUNDED"

    @property
    def label(self) -> str:
        return JOIN_STATUS_LABELS[self]

    @classmethod
    def parse(cls, value) -> "JoinPersonStatus":
        if isinstance(value, cls):
            return value
        text = str(value).strip() if value is not None else ""
        if text in cls.__members__:
            return cls[text]
        for member, label in JOIN_STATUS_LABELS.items():
            if label == text:
                return member
        raise ValueError(f"unknown join status: {value!r}")


JOIN_STATUS_LABELS = {
    JoinPersonStatus.PENDING_CONFIRM: "입금확인전",
    JoinPersonStatus.CONFIRMING: "입금확인중",
    JoinPersonStatus.CONFIRMED: "입금완료",
    JoinPersonStatus.REFUND_PENDING: "환불확인중",
    JoinPersonStatus.REFUNDED: "환불완료",
}


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class JoinPerson(Base):
    __tablename__ = "join_persons"
    __table_args__ = (
        Index("ix_join_persons_time_id", "time_id"),
        Index("ix_join_persons_manager_id", "manager_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    time_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("course_times.id", ondelete="CASCADE"), nullable=False
    )
    manager_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id"), nullable=True)

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)

    join_type: Mapped[JoinType] = mapped_column(
        SAEnum(JoinType, name="join_type", values_callable=enum_values), nullable=False
    )

    green_fee: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    charge_fee: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    charge_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    status: Mapped[JoinPersonStatus] = mapped_column(
        SAEnum(JoinPersonStatus, name="join_person_status", values_callable=enum_values),
        nullable=False,
        default=JoinPersonStatus.PENDING_CONFIRM,
    )
    refund_reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    refund_account: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    course_time = relationship("CourseTime", back_populates="join_persons")
