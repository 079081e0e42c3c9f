"""
공통 헬퍼 함수
"""
import logging
import sys
from typing import Optional

from .configuration import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: Optional[str] = None) -> int:
    """루트 로거 설정 후 적용된 로깅 레벨 반환"""
    if level is None:
        level = config.LOG_LEVEL
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )
    logging.getLogger().setLevel(log_level)

    # httpx 요청 로그는 WARNING 이상만
    httpx_logger = logging.getLogger("httpx")
    httpx_logger.setLevel(logging.WARNING)
    httpx_logger.propagate = True

    # 패키지 로거는 루트 핸들러 사용
    for logger_name in ["anchor_resolver", "uvicorn", "uvicorn.access", "uvicorn.error", "main"]:
        logger_instance = logging.getLogger(logger_name)
        logger_instance.setLevel(log_level)
        logger_instance.propagate = True
        logger_instance.handlers.clear()

    return log_level
