"""Pydantic Settings for configuration management.

This module provides centralized configuration management using
pydantic-settings. All settings are loaded from environment variables
and/or .env files with type validation.

Features:
    - Data directory layout (one sub-directory per data type)
    - History log and display-settings file locations
    - Environment variable loading from .env (STDMETA_ prefix)
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """표준 관리 엔진 설정.

    환경 변수 또는 .env 파일에서 설정을 로드합니다.

    Environment Variables:
        - STDMETA_DATA_DIR: 데이터 파일 루트 경로 (기본: static/data)
        - STDMETA_HISTORY_PATH: 히스토리 로그 파일 (기본: static/data/history.json)
        - STDMETA_SETTINGS_PATH: 표시 설정 파일 (기본: static/global/settings.yaml)
        - STDMETA_LOG_DIR: 로그 저장 경로 (기본: logs)

    Example:
        >>> settings = get_settings()
        >>> print(settings.data_dir)
        PosixPath('static/data')
    """

    model_config = SettingsConfigDict(
        env_prefix="STDMETA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Directory Paths
    # ==========================================================================
    data_dir: Path = Field(
        default=Path("static/data"),
        description="데이터 파일 루트 경로 (타입별 하위 디렉토리)",
    )
    history_path: Path = Field(
        default=Path("static/data/history.json"),
        description="히스토리 로그 파일 경로",
    )
    settings_path: Path = Field(
        default=Path("static/global/settings.yaml"),
        description="표시 설정 파일 경로",
    )
    log_dir: Path = Field(
        default=Path("logs"),
        description="로그 파일 저장 경로",
    )

    # ==========================================================================
    # History
    # ==========================================================================
    history_max_logs: int = Field(
        default=1000,
        ge=10,
        description="보관할 최대 히스토리 로그 수",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================
    @field_validator("data_dir", "history_path", "settings_path", "log_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """문자열을 Path 객체로 변환."""
        return Path(v) if isinstance(v, str) else v

    # ==========================================================================
    # Helper Methods
    # ==========================================================================
    def ensure_directories(self) -> None:
        """필요한 디렉토리들을 생성.

        이미 존재하면 무시합니다.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.history_path.parent.mkdir(parents=True, exist_ok=True)
        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> AppSettings:
    """설정 싱글톤 인스턴스 반환.

    lru_cache를 사용하여 설정 객체를 캐싱합니다.

    Returns:
        AppSettings 인스턴스
    """
    return AppSettings()


def clear_settings_cache() -> None:
    """설정 캐시 초기화 (테스트용)."""
    get_settings.cache_clear()
