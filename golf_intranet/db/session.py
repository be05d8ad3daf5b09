"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

FastAPI 의존성(get_db)을 통해
요청 단위로 세션을 생성/종료하는 구조를 지원한다.

- pool_pre_ping=True 로 유휴 연결 오류 방지
- SQLite URL 이면 요청 스레드 간 커넥션 공유 허용

관련 파일:
- golf_intranet.core.config      : DATABASE_URL 설정
- golf_intranet.core.deps        : get_db 의존성

"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from golf_intranet.core.config import settings


def build_engine(url: str, **kwargs):
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
