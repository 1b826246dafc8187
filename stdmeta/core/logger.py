"""Loguru logging setup for stdmeta.

콘솔(사람이 읽는 형식)과 회전 파일 싱크를 구성합니다. 저장소/검증 모듈은
``from loguru import logger`` 또는 get_context_logger()로 로깅합니다.

Features:
    - Console sink: 기본 형식 또는 [data_type/filename] 컨텍스트 포함 형식
    - File sink: 텍스트 또는 JSON 직렬화, 크기 기반 회전 + 보관 + 압축
    - Context binding: 데이터 타입/파일명 단위 로그 추적
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from stdmeta.logging.config import LoggingConfig, get_logging_config

if TYPE_CHECKING:
    from loguru import Logger

# =============================================================================
# Console Format Templates
# =============================================================================

CONSOLE_FORMAT_DEFAULT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

CONSOLE_FORMAT_WITH_CONTEXT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<dim>[{extra[data_type]}/{extra[filename]}]</dim> "
    "<level>{message}</level>"
)

# 바인딩되지 않은 로그도 컨텍스트 형식을 렌더링할 수 있도록 기본값 지정
_CONTEXT_DEFAULTS: dict[str, str] = {"data_type": "-", "filename": "-"}


# =============================================================================
# Setup Functions
# =============================================================================


def setup_logger_from_config(config: LoggingConfig | None = None) -> None:
    """LoggingConfig로 로거 초기화.

    Args:
        config: LoggingConfig 인스턴스 (None이면 LOG_* 환경 변수에서 로드)
    """
    if config is None:
        config = get_logging_config()

    _setup_logger_internal(config)


def setup_logger(
    log_dir: Path | str = Path("logs"),
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    *,
    enable_file: bool = True,
    show_context: bool = False,
) -> None:
    """최소 설정으로 로거 초기화.

    CLI 단발 실행은 enable_file=False로 파일 싱크 없이 사용합니다.

    Args:
        log_dir: 로그 파일 디렉토리 (default: "logs")
        console_level: 콘솔 출력 레벨 (default: "INFO")
        file_level: 파일 출력 레벨 (default: "DEBUG")
        enable_file: 회전 파일 싱크 사용 여부
        show_context: 콘솔에 [data_type/filename] 표시

    Example:
        >>> from stdmeta.core.logger import setup_logger, logger
        >>> setup_logger(console_level="DEBUG", enable_file=False, show_context=True)
        >>> logger.bind(data_type="term", filename="term.json").info("Loaded 12 entries")
    """
    config = LoggingConfig(
        log_dir=Path(log_dir),
        console_level=console_level,  # type: ignore[arg-type]
        file_level=file_level,  # type: ignore[arg-type]
        enable_file=enable_file,
        show_context=show_context,
    )
    _setup_logger_internal(config)


def _setup_logger_internal(config: LoggingConfig) -> None:
    logger.remove()
    logger.configure(extra=_CONTEXT_DEFAULTS)

    # 1. Console
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT_WITH_CONTEXT if config.show_context else CONSOLE_FORMAT_DEFAULT,
        level=config.console_level,
        colorize=True,
        backtrace=config.backtrace,
        diagnose=config.diagnose,
    )

    # 2. File
    if config.enable_file:
        log_path = Path(config.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        _setup_file_sink(logger, log_path, config)

    logger.debug(
        f"Logger initialized: console={config.console_level}, "
        f"file={config.file_level if config.enable_file else 'off'}, dir={config.log_dir}"
    )


def _setup_file_sink(target: Logger, log_path: Path, config: LoggingConfig) -> None:
    """회전 파일 싱크 추가 (JSON이면 serialize, 아니면 기본 텍스트 형식).

    Args:
        target: Logger instance
        log_path: 로그 디렉토리
        config: 로깅 설정
    """
    suffix = "json" if config.json_logs else "log"
    target.add(
        log_path / f"{config.file_prefix}_{{time:YYYY-MM-DD}}.{suffix}",
        format="{message}" if config.json_logs else CONSOLE_FORMAT_DEFAULT,
        level=config.file_level,
        rotation=config.rotation,
        retention=config.retention,
        compression=config.compression,
        serialize=config.json_logs,
        enqueue=True,
        backtrace=config.backtrace,
        diagnose=False,
    )


def get_context_logger(
    *, data_type: str | None = None, filename: str | None = None, **extra: str
) -> Logger:
    """데이터 타입/파일명이 바인딩된 로거.

    Args:
        data_type: 데이터 타입 (e.g., "term")
        filename: 대상 파일명 (e.g., "term.json")
        **extra: 추가 컨텍스트

    Returns:
        Logger with context bound
    """
    bound: dict[str, str] = dict(extra)
    if data_type is not None:
        bound["data_type"] = data_type
    if filename is not None:
        bound["filename"] = filename
    return logger.bind(**bound)


__all__ = [
    "CONSOLE_FORMAT_DEFAULT",
    "CONSOLE_FORMAT_WITH_CONTEXT",
    "get_context_logger",
    "logger",
    "setup_logger",
    "setup_logger_from_config",
]
