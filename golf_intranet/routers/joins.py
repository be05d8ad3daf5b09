"""
joins.py

조인 단건 API 모음.

- 조인 취소(삭제)  : 남은 조인 기준으로 코스 타임 좌석 재계산
- 조인 유형 변경   : 정원 검사 후 변경, 좌석 재계산

취소 / 유형 변경은 조인을 등록한 매니저, 코스 타임 등록자, 관리자만 가능.
입금 상태 변경은 관리자 입금 현황 API(routers.admin_deposits)에서 처리한다.

"""

import uuid

from fastapi import APIRouter, Depends, HTTPException

from golf_intranet.core.deps import get_current_user, get_join_store
from golf_intranet.models.join_person import JoinPerson
from golf_intranet.models.user import User
from golf_intranet.schemas.course_time import CourseTimeResponse
from golf_intranet.schemas.join_person import (
    JoinOccupancyResponse,
    JoinPersonResponse,
    JoinTypeUpdateRequest,
)
from golf_intranet.services import join_tracker
from golf_intranet.services.errors import NotFound
from golf_intranet.services.join_store import JoinStore

router = APIRouter(prefix="/joins", tags=["joins"])


def _get_editable_join(store: JoinStore, join_id: uuid.UUID, user: User) -> JoinPerson:
    join_person = store.get_join_person(join_id)
    if join_person is None:
        raise NotFound("join person", join_id)

    if user.is_admin or join_person.manager_id == user.id:
        return join_person

    course_time = store.get_course_time(join_person.time_id)
    if course_time is not None and course_time.author_id == user.id:
        return join_person

    raise HTTPException(
        status_code=403,
        detail="Only the join's manager, the course time author or an admin can modify this join",
    )


@router.get("/{join_id}", response_model=JoinPersonResponse)
def get_join(
    join_id: uuid.UUID,
    store: JoinStore = Depends(get_join_store),
    _: User = Depends(get_current_user),
):
    join_person = store.get_join_person(join_id)
    if join_person is None:
        raise HTTPException(status_code=404, detail="Join person not found")
    return join_person


# 조인 취소 → 갱신된 코스 타임 반환
@router.delete("/{join_id}", response_model=CourseTimeResponse)
def remove_join(
    join_id: uuid.UUID,
    store: JoinStore = Depends(get_join_store),
    current_user: User = Depends(get_current_user),
):
    _get_editable_join(store, join_id, current_user)
    return join_tracker.remove_join(store, join_id)


@router.patch("/{join_id}/type", response_model=JoinOccupancyResponse)
def change_type(
    join_id: uuid.UUID,
    body: JoinTypeUpdateRequest,
    store: JoinStore = Depends(get_join_store),
    current_user: User = Depends(get_current_user),
):
    _get_editable_join(store, join_id, current_user)
    join_person, course_time = join_tracker.change_join_type(store, join_id, body.join_type)
    return JoinOccupancyResponse(
        join_person=JoinPersonResponse.model_validate(join_person),
        course_time=CourseTimeResponse.model_validate(course_time),
    )
