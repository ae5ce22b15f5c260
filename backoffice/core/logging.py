"""
로깅 설정

loguru 기반으로 콘솔 로그를 구성하고, 표준 logging 레코드(uvicorn, sqlalchemy 등)를
loguru로 전달합니다.
"""

import inspect
import logging
import sys

from loguru import logger

from backoffice.core.config import Settings


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """표준 logging 레코드를 loguru로 전달하는 핸들러"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # logging 모듈 내부 프레임을 건너뛰어 실제 호출 위치를 표시
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(settings: Settings) -> None:
    """
    애플리케이션 로깅을 초기화합니다.

    Args:
        settings: 애플리케이션 설정 (log_level, app_env 사용)
    """
    debug_traces = not settings.is_production

    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        backtrace=debug_traces,
        diagnose=debug_traces,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
