"""Logging service module.

loguru 기반 로깅 설정(LOG_* 환경 변수)을 제공합니다.
"""

from stdmeta.logging.config import LoggingConfig, get_logging_config

__all__ = [
    "LoggingConfig",
    "get_logging_config",
]
