"""
services/join_store.py

조인 / 코스 타임 저장소(Store).

좌석 점유 로직(services.join_tracker)이 사용하는 최소한의 데이터 접근 계약을
SQLAlchemy Session 위에 구현한다.

- list_join_persons(time_id)                    : 실제 조인 행 조회 (좌석 재계산 기준)
- insert_join_person(**fields)                  : 조인 저장
- delete_join_person(join_id)                   : 조인 삭제 (없으면 NotFound)
- update_course_time_occupancy(time_id, ...)     : join_num / status 기록 (없으면 NotFound)

설계 원칙:
- 쓰기 메서드는 각각 즉시 commit 한다
  (조인 쓰기와 코스 타임 쓰기는 하나의 트랜잭션으로 묶이지 않음)
- 실패 시 rollback 후 DataStoreError 로 변환하여 올린다
- 코스 타임 갱신은 version 컬럼으로 동시 수정 여부를 검사한다

"""

import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from golf_intranet.models.course_time import CourseTime, CourseTimeStatus
from golf_intranet.models.join_person import JoinPerson
from golf_intranet.services.errors import DataStoreError, NotFound


class JoinStore:
    def __init__(self, db: Session):
        self.db = db

    # 조회

    def get_course_time(self, time_id: uuid.UUID) -> CourseTime | None:
        try:
            return self.db.get(CourseTime, time_id, populate_existing=True)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load course time", operation="get_course_time") from e

    def get_join_person(self, join_id: uuid.UUID) -> JoinPerson | None:
        try:
            return self.db.get(JoinPerson, join_id, populate_existing=True)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load join person", operation="get_join_person") from e

    def list_join_persons(self, time_id: uuid.UUID) -> list[JoinPerson]:
        try:
            return list(
                self.db.scalars(
                    select(JoinPerson)
                    .where(JoinPerson.time_id == time_id)
                    .order_by(JoinPerson.created_at)
                    .execution_options(populate_existing=True)
                ).all()
            )
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to list join persons", operation="list_join_persons") from e

    # 쓰기

    def insert_join_person(self, **fields) -> JoinPerson:
        join_person = JoinPerson(**fields)
        self.db.add(join_person)
        self._commit("insert_join_person")
        self.db.refresh(join_person)
        return join_person

    def update_join_person(self, join_person: JoinPerson, **fields) -> JoinPerson:
        for key, value in fields.items():
            setattr(join_person, key, value)
        self._commit("update_join_person")
        self.db.refresh(join_person)
        return join_person

    def delete_join_person(self, join_id: uuid.UUID) -> None:
        join_person = self.get_join_person(join_id)
        if join_person is None:
            raise NotFound("join person", join_id)
        self.db.delete(join_person)
        self._commit("delete_join_person")

    def update_course_time_occupancy(
        self,
        time_id: uuid.UUID,
        *,
        join_num: int,
        status: CourseTimeStatus,
    ) -> CourseTime:
        course_time = self.get_course_time(time_id)
        if course_time is None:
            raise NotFound("course time", time_id)
        course_time.join_num = join_num
        course_time.status = status
        self._commit("update_course_time_occupancy")
        self.db.refresh(course_time)
        return course_time

    def _commit(self, operation: str) -> None:
        try:
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise DataStoreError(
                "Course time was modified concurrently", operation=operation
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DataStoreError(f"Database error: {type(e).__name__}", operation=operation) from e
