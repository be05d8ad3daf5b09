import os

# app import 전에 필수 설정 채우기 (.env 없이도 테스트 가능하도록)
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from golf_intranet.main import app as fastapi_app
from golf_intranet.core.config import settings
from golf_intranet.core.deps import get_db
from golf_intranet.db.base import Base

# 모델 import (Base.metadata에 테이블 등록)
from golf_intranet.models import black_list, course, course_time, join_person, user  # noqa: F401


TEST_DB_URL = settings.TEST_DATABASE_URL or os.getenv("TEST_DATABASE_URL") or "sqlite+pysqlite:///:memory:"

if TEST_DB_URL.startswith("sqlite"):
    # 인메모리 DB는 커넥션 하나를 모든 세션이 공유해야 같은 DB를 본다
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(TEST_DB_URL, pool_pre_ping=True)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """테스트 전체 시작/종료 때만 스키마 생성/삭제"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """각 테스트마다 데이터 초기화 (테이블은 유지, row만 삭제)"""
    yield
    # FK 의존성 순서의 역순으로 삭제
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db_session():
    """테스트에서 직접 DB 조작할 때 쓰는 세션"""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
