"""
black_lists.py

블랙리스트(거래 주의 고객) API.

- 등록 / 목록 조회 / 전화번호 조회 : 로그인한 모든 사용자
- 삭제(Soft Delete)               : 등록자 본인 또는 관리자

"""

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from sqlalchemy import select, desc

from golf_intranet.core.deps import get_db, get_current_user
from golf_intranet.models.black_list import BlackList
from golf_intranet.models.user import User
from golf_intranet.schemas.black_list import BlackListCreateRequest, BlackListResponse

router = APIRouter(prefix="/black-lists", tags=["black-lists"])


@router.post("", response_model=BlackListResponse)
def create_black_list(
    body: BlackListCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = BlackList(author_id=current_user.id, **body.model_dump())
    try:
        db.add(entry)
        db.commit()
        db.refresh(entry)
    except Exception:
        db.rollback()
        raise
    return entry


# phone_number 지정 시 해당 번호만 (조인 등록 전 확인용)
@router.get("", response_model=list[BlackListResponse])
def list_black_lists(
    phone_number: str | None = Query(default=None, description="예: 010-1234-5678"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    stmt = select(BlackList).where(BlackList.is_deleted.is_(False))
    if phone_number:
        stmt = stmt.where(BlackList.phone_number == phone_number)
    return db.scalars(stmt.order_by(desc(BlackList.created_at))).all()


@router.delete("/{entry_id}")
def delete_black_list(
    entry_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = db.scalar(select(BlackList).where(BlackList.id == entry_id, BlackList.is_deleted.is_(False)))
    if not entry:
        raise HTTPException(status_code=404, detail="Black list entry not found")

    if not current_user.is_admin and entry.author_id != current_user.id:
        raise HTTPException(status_code=403, detail="Only the author or an admin can delete this entry")

    try:
        entry.is_deleted = True
        entry.deleted_at = datetime.now(timezone.utc)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    return {"message": "Black list entry deleted", "data": {"id": str(entry_id)}}
