"""
logging.py

애플리케이션 전역 로깅 설정 파일.

- 모든 모듈이 동일한 포맷으로 stdout에 로그를 남기도록 설정
- 포맷: 시각 | 레벨 | 모듈 | 메시지
- 앱 시작 시(main.py) 한 번만 configure_logging 호출

사용 예:
    from sif_cms.core.logging import get_logger
    logger = get_logger(__name__)
    logger.warning("bucket delete failed: %s", path)

"""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).info("Logging initialized with level %s", level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
