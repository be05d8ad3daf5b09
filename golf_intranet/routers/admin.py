"""
admin.py

관리자 전용 사용자(매니저 / 관리자) 관리 API.

주요 기능:
- 사용자 생성 (관리자가 직접 계정 발급)
- 활성 사용자 목록 / 상세 조회
- 이름 / 유형 / 수수료율 / 비밀번호 수정
- 사용자 삭제 (Soft Delete)

안전장치:
- 자기 자신의 유형 변경 / 삭제 금지
- 마지막 관리자 강등 / 삭제 금지

"""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import select

from golf_intranet.core.deps import get_db, get_current_admin
from golf_intranet.core.security import get_password_hash
from golf_intranet.models.user import User, UserType
from golf_intranet.schemas.user import UserCreateRequest, UserUpdateRequest, UserResponse
from golf_intranet.services.admin import ensure_not_last_admin, ensure_phone_available

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/users", tags=["admin"])


def _get_active_user(db: Session, user_id: uuid.UUID) -> User:
    user = db.scalar(select(User).where(User.id == user_id, User.is_deleted.is_(False)))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# 사용자 생성
@router.post("", response_model=UserResponse)
def create_user(
    body: UserCreateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    try:
        ensure_phone_available(db, body.phone_number)
        user = User(
            phone_number=body.phone_number,
            password_hash=get_password_hash(body.password),
            name=body.name,
            type=body.type,
            charge_rate=body.charge_rate,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise

    logger.info("User created by admin=%s: user=%s type=%s", admin.id, user.id, user.type.value)
    return user


# 활성 사용자 목록 (이름순)
@router.get("", response_model=list[UserResponse])
def list_users(
    user_type: UserType | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    stmt = select(User).where(User.is_deleted.is_(False))
    if user_type is not None:
        stmt = stmt.where(User.type == user_type)
    return db.scalars(stmt.order_by(User.name)).all()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    return _get_active_user(db, user_id)


# 사용자 정보 수정 (보낸 필드만 반영)
@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: uuid.UUID,
    body: UserUpdateRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    user = _get_active_user(db, user_id)
    changes = body.model_dump(exclude_unset=True)

    if "type" in changes and changes["type"] != user.type:
        # 자기 자신 유형 변경 금지
        if user.id == admin.id:
            raise HTTPException(status_code=400, detail="Cannot change your own type")
        try:
            ensure_not_last_admin(db, user)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    try:
        password = changes.pop("password", None)
        if password:
            user.password_hash = get_password_hash(password)
        for key, value in changes.items():
            if value is not None:
                setattr(user, key, value)
        db.commit()
        db.refresh(user)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return user


# 사용자 삭제 (Soft Delete)
@router.delete("/{user_id}")
def delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    user = _get_active_user(db, user_id)

    if user.id == admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete yourself")
    try:
        ensure_not_last_admin(db, user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    snapshot = {
        "id": str(user.id),
        "name": user.name,
        "phone_number": user.phone_number,
        "type": user.type.value,
    }

    try:
        user.is_deleted = True
        user.deleted_at = datetime.now(timezone.utc)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    logger.info("User deleted by admin=%s: user=%s", admin.id, snapshot["id"])
    return {"message": "User deleted", "data": snapshot}
