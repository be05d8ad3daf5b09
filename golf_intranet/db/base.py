"""
base.py

SQLAlchemy ORM Base 정의 파일.

모든 모델(User, Course, SiteId, CourseTime, JoinPerson, BlackList)은
이 Base를 기준으로 테이블 메타데이터가 관리되며,
Alembic 마이그레이션 또한 이 Base를 기준으로 동작한다.

"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def enum_values(enum_cls):
    """SAEnum values_callable 용: 이름 대신 값(한글 라벨 등)을 DB에 저장."""
    return [member.value for member in enum_cls]
