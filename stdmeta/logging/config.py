"""Logging configuration model.

LOG_ 접두사 환경 변수(또는 .env)에서 로깅 설정을 로드합니다.

Example:
    LOG_CONSOLE_LEVEL=DEBUG LOG_SHOW_CONTEXT=true uv run stdmeta check relations
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """로깅 설정.

    Attributes:
        log_dir: 로그 파일 디렉토리
        file_prefix: 로그 파일명 접두사 (<prefix>_YYYY-MM-DD.log)
        console_level / file_level: 싱크별 최소 레벨
        rotation / retention / compression: 파일 회전 정책
        json_logs: 파일 로그를 JSON으로 직렬화
        enable_file: 파일 싱크 사용 여부 (CLI 단발 실행은 False)
        show_context: 콘솔에 [data_type/filename] 컨텍스트 표시
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Files
    log_dir: Path = Field(default=Path("logs"), description="로그 파일 디렉토리")
    file_prefix: str = Field(default="stdmeta", min_length=1, description="로그 파일명 접두사")

    # Levels
    console_level: LogLevel = Field(default="INFO", description="콘솔 최소 레벨")
    file_level: LogLevel = Field(default="DEBUG", description="파일 최소 레벨")

    # Rotation
    rotation: str = Field(default="20 MB", description="회전 정책 (e.g., '20 MB', '1 day')")
    retention: str = Field(default="14 days", description="회전 파일 보관 기간")
    compression: str = Field(default="gz", description="회전 파일 압축 형식")

    # Sinks
    json_logs: bool = Field(default=False, description="파일 로그 JSON 직렬화")
    enable_file: bool = Field(default=True, description="파일 싱크 사용")
    show_context: bool = Field(default=False, description="콘솔 컨텍스트 표시")

    # Diagnostics
    diagnose: bool = Field(default=False, description="Traceback 변수값 표시")
    backtrace: bool = Field(default=True, description="전체 Traceback 표시")


def get_logging_config() -> LoggingConfig:
    """환경 변수에서 로깅 설정 로드."""
    return LoggingConfig()
