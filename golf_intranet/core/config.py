"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

.env 환경 변수들을 Pydantic BaseSettings로 로드하여
인트라넷 백엔드 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보 (운영 / 테스트)
- JWT Access Token 시크릿 및 만료 정책
- CORS 허용 도메인 목록
- 로그 레벨 / 로그 파일 경로

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 코스 타임 정원(4석) 같은 도메인 상수는 설정이 아니라 코드에 둔다

관련 파일:
- golf_intranet.main             : CORS / 로깅 초기화 시 설정 사용
- golf_intranet.core.security    : JWT 시크릿 / 만료 설정 사용
- golf_intranet.db.session       : DATABASE_URL 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12

    # 프론트엔드(대시보드) 주소
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # 로깅
    # - LOG_FILE 미설정 시 콘솔(stderr)에만 출력
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None


settings = Settings()
