"""
services/admin.py

관리자 관련 비즈니스 로직(Service) 모음.

주요 기능:
- 현재 활성 관리자 계정 수 계산
- 전화번호(로그인 ID) 중복 검사
- 관리자 유형 변경/삭제 시 안전장치 제공 (마지막 관리자 보호)

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어는 라우터에서 수행
- 정책 위반은 ValueError 로 알린다

관련 파일:
- golf_intranet.models.user       : User / UserType 모델
- golf_intranet.routers.admin     : 관리자 사용자 관리 API

"""

import uuid

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from golf_intranet.models.user import User, UserType


def count_admins(db: Session) -> int:
    return db.scalar(
        select(func.count())
        .select_from(User)
        .where(User.type == UserType.ADMIN, User.is_deleted.is_(False))
    ) or 0


def get_active_user_by_phone(db: Session, phone_number: str) -> User | None:
    return db.scalar(
        select(User).where(User.phone_number == phone_number, User.is_deleted.is_(False))
    )


def ensure_phone_available(db: Session, phone_number: str, *, exclude_id: uuid.UUID | None = None) -> None:
    existing = get_active_user_by_phone(db, phone_number)
    if existing and existing.id != exclude_id:
        raise ValueError("phone number already registered")


def ensure_not_last_admin(db: Session, user: User) -> None:
    """활성 관리자가 1명뿐이면 그 관리자의 강등/삭제를 막는다."""
    if user.type == UserType.ADMIN and count_admins(db) <= 1:
        raise ValueError("cannot remove the last admin")
