"""
logging_setup.py

애플리케이션 로깅 설정.

- 콘솔(stderr) 핸들러는 항상 등록
- LOG_FILE 이 설정되면 RotatingFileHandler 추가 (10MB × 5개 백업)
- 각 모듈은 logging.getLogger(__name__) 으로 로거를 얻어 사용한다

조인 좌석 관련 로그 레벨 기준:
- INFO    : 조인 추가 / 취소 / 재계산
- WARNING : 정원 초과 거절, 동시 요청으로 인한 초과 예약 감지
- ERROR   : 조인은 저장됐지만 코스 타임 갱신이 실패한 경우 (재계산 필요)

"""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger("golf_intranet")
    root.setLevel(log_level)

    # 재호출 시 핸들러 중복 등록 방지
    if root.handlers:
        return

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
