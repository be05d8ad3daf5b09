"""
admin_courses.py

골프장 코스 / 예약 사이트 계정(site id) 관리 API.

- 목록 조회는 로그인한 모든 사용자 (코스 타임 등록 화면에서 사용)
- 생성 / 수정 / 삭제는 관리자 전용
- 삭제는 Soft Delete (기존 코스 타임의 참조 유지)

"""

import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select

from golf_intranet.core.deps import get_db, get_current_user, get_current_admin
from golf_intranet.models.course import Course, Region, SiteId
from golf_intranet.models.user import User
from golf_intranet.schemas.course import (
    CourseCreateRequest,
    CourseUpdateRequest,
    CourseResponse,
    SiteIdCreateRequest,
    SiteIdUpdateRequest,
    SiteIdResponse,
)

router = APIRouter(prefix="/admin", tags=["admin-courses"])


def _get_course(db: Session, course_id: uuid.UUID) -> Course:
    course = db.scalar(select(Course).where(Course.id == course_id, Course.is_deleted.is_(False)))
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


def _get_site(db: Session, site_pk: uuid.UUID) -> SiteId:
    site = db.scalar(select(SiteId).where(SiteId.id == site_pk, SiteId.is_deleted.is_(False)))
    if not site:
        raise HTTPException(status_code=404, detail="Site id not found")
    return site


def _commit(db: Session, obj) -> None:
    try:
        db.commit()
        db.refresh(obj)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")


# 코스

@router.post("/courses", response_model=CourseResponse)
def create_course(
    body: CourseCreateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    duplicate = db.scalar(
        select(Course).where(
            Course.golf_club_name == body.golf_club_name,
            Course.course_name == body.course_name,
            Course.is_deleted.is_(False),
        )
    )
    if duplicate:
        raise HTTPException(status_code=400, detail="Course already exists")

    course = Course(**body.model_dump())
    db.add(course)
    _commit(db, course)
    return course


# 지역 / 골프장명 / 코스명 순 정렬
@router.get("/courses", response_model=list[CourseResponse])
def list_courses(
    region: Region | None = None,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    stmt = select(Course).where(Course.is_deleted.is_(False))
    if region is not None:
        stmt = stmt.where(Course.region == region)
    return db.scalars(stmt.order_by(Course.region, Course.golf_club_name, Course.course_name)).all()


@router.patch("/courses/{course_id}", response_model=CourseResponse)
def update_course(
    course_id: uuid.UUID,
    body: CourseUpdateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    course = _get_course(db, course_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(course, key, value)
    _commit(db, course)
    return course


@router.delete("/courses/{course_id}")
def delete_course(
    course_id: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    course = _get_course(db, course_id)
    course.is_deleted = True
    course.deleted_at = datetime.now(timezone.utc)
    _commit(db, course)
    return {"message": "Course deleted", "data": {"id": str(course.id)}}


# 예약 사이트 계정

@router.post("/site-ids", response_model=SiteIdResponse)
def create_site_id(
    body: SiteIdCreateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    site = SiteId(**body.model_dump())
    db.add(site)
    _commit(db, site)
    return site


# 숨김 계정은 include_hidden=true 일 때만 포함
@router.get("/site-ids", response_model=list[SiteIdResponse])
def list_site_ids(
    include_hidden: bool = False,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    stmt = select(SiteId).where(SiteId.is_deleted.is_(False))
    if not include_hidden:
        stmt = stmt.where(SiteId.hidden.is_(False))
    return db.scalars(stmt.order_by(SiteId.name)).all()


@router.patch("/site-ids/{site_pk}", response_model=SiteIdResponse)
def update_site_id(
    site_pk: uuid.UUID,
    body: SiteIdUpdateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    site = _get_site(db, site_pk)
    for key, value in body.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(site, key, value)
    _commit(db, site)
    return site


@router.delete("/site-ids/{site_pk}")
def delete_site_id(
    site_pk: uuid.UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_admin),
):
    site = _get_site(db, site_pk)
    site.is_deleted = True
    site.deleted_at = datetime.now(timezone.utc)
    _commit(db, site)
    return {"message": "Site id deleted", "data": {"id": str(site.id)}}
