"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

골프 티타임 재판매 인트라넷 백엔드의 설정과 라우터 등록을 담당한다.

주요 역할:
- 로깅 초기화
- FastAPI 앱 인스턴스 생성 및 CORS 미들웨어 설정
- 도메인별 라우터(auth, admin, course-times, joins, black-lists, deposits) 등록
- 좌석 처리 오류(OccupancyError)를 JSON 응답으로 변환
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임

"""

import logging

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from golf_intranet.core.config import settings
from golf_intranet.core.deps import get_db
from golf_intranet.core.logging_setup import setup_logging
from golf_intranet.routers import (
    auth,
    admin,
    admin_courses,
    admin_deposits,
    black_lists,
    course_times,
    joins,
)
from golf_intranet.services.errors import OccupancyError, PartialWriteFailure

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)

app = FastAPI(title="Golf Intranet Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(admin_courses.router)
app.include_router(admin_deposits.router)
app.include_router(course_times.router)
app.include_router(joins.router)
app.include_router(black_lists.router)


"""
좌석 처리 오류 응답 변환

- detail : 사람이 읽는 메시지
- error  : 운영자 판단용 상세 정보
           (정원 초과 시 현재/요청/정원 좌석 수, 부분 실패 시 needs_reconciliation 등)

"""
@app.exception_handler(OccupancyError)
async def occupancy_error_handler(request: Request, exc: OccupancyError):
    if not isinstance(exc, PartialWriteFailure):
        logger.info(
            "Occupancy request failed: %s %s -> %d %s",
            request.method, request.url.path, exc.status_code, exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "error": {"type": type(exc).__name__, **exc.details},
        },
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    value = db.execute(text("SELECT 1")).scalar_one()
    return {"db": "ok", "value": value}
