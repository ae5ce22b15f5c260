"""
로깅 설정 테스트
"""

import logging

from loguru import logger

from backoffice.core.config import Settings
from backoffice.core.logging import InterceptHandler, configure_logging


def test_standard_logging_is_routed_to_loguru():
    """표준 logging 레코드가 loguru 싱크로 전달되는지 테스트"""
    configure_logging(Settings(_env_file=None, log_level="DEBUG"))
    messages = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")

    try:
        logging.getLogger("sqlalchemy.engine").warning("pool exhausted")
    finally:
        logger.remove(sink_id)

    assert any("pool exhausted" in str(m) for m in messages)
    assert any(
        isinstance(h, InterceptHandler) for h in logging.getLogger().handlers
    )


def test_intercepted_record_points_at_caller():
    """loguru 레코드의 위치가 logging 내부가 아닌 실제 호출 함수인지 테스트"""
    configure_logging(Settings(_env_file=None, log_level="DEBUG"))
    records = []
    sink_id = logger.add(lambda m: records.append(m.record), level="DEBUG")

    try:
        logging.getLogger("backoffice.orders").info("order created")
    finally:
        logger.remove(sink_id)

    record = next(r for r in records if r["message"] == "order created")
    assert record["function"] == "test_intercepted_record_points_at_caller"
    assert record["file"].name == "test_logging.py"
    assert record["name"] != "logging"
