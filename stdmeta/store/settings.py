"""Display settings service (YAML).

get() / set(patch)만 제공하며, 저장은 set 호출 시점에만 일어납니다.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from stdmeta.core.exceptions import DataParseError, StorageError
from stdmeta.models.base import DataType, StdModel
from stdmeta.store.registry import read_text_file

_DEFAULT_PATH = Path("static/global/settings.yaml")

_VOCABULARY_EXTRA_SYSTEM_FILES = frozenset({"forbidden-words.json", "history.json"})


class DisplaySettings(StdModel):
    """타입별 시스템 파일 표시 여부."""

    show_vocabulary_system_files: bool = False
    show_domain_system_files: bool = False
    show_term_system_files: bool = False
    show_database_system_files: bool = False
    show_entity_system_files: bool = False
    show_attribute_system_files: bool = False
    show_table_system_files: bool = False
    show_column_system_files: bool = False

    def show_system_files(self, data_type: DataType) -> bool:
        return bool(getattr(self, f"show_{data_type.value}_system_files"))


class SettingsService:
    """YAML 기반 표시 설정."""

    def __init__(self, path: Path = _DEFAULT_PATH) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> DisplaySettings:
        """현재 설정 (파일이 없거나 비어 있으면 기본값, 누락 키는 기본값으로 채움)."""
        if not self._path.exists():
            return DisplaySettings()

        try:
            raw = yaml.safe_load(read_text_file(self._path))
        except yaml.YAMLError as e:
            msg = "Settings file is not valid YAML"
            raise DataParseError(msg, context={"path": str(self._path)}) from e
        if not raw:
            return DisplaySettings()

        try:
            return DisplaySettings.model_validate(raw)
        except ValidationError as e:
            msg = "Malformed settings file"
            raise DataParseError(msg, context={"path": str(self._path)}) from e

    def set(self, patch: dict[str, Any]) -> DisplaySettings:
        """부분 갱신 후 저장.

        Args:
            patch: snake_case 또는 camelCase 키 → 값

        Raises:
            StorageError: 알 수 없는 설정 키
        """
        current = self.get().model_dump()
        aliases = {
            info.alias: name
            for name, info in DisplaySettings.model_fields.items()
            if info.alias is not None
        }
        for key, value in patch.items():
            name = aliases.get(key, key)
            if name not in current:
                msg = "Unknown settings key"
                raise StorageError(msg, context={"key": key})
            current[name] = value

        updated = DisplaySettings.model_validate(current)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            yaml.dump(
                updated.model_dump(by_alias=True),
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            ),
            encoding="utf-8",
        )
        logger.debug(f"Settings saved: {self._path}")
        return updated


# ─── System file filter ──────────────────────────────────────────────


def is_system_file(data_type: DataType, filename: str) -> bool:
    """타입별 기본 파일(e.g., domain.json) 여부. 단어집은 금지어/히스토리 파일 포함."""
    if filename == data_type.default_filename:
        return True
    return data_type == DataType.VOCABULARY and filename in _VOCABULARY_EXTRA_SYSTEM_FILES


def filter_files(data_type: DataType, files: list[str], *, show_system_files: bool) -> list[str]:
    """표시용 파일 목록.

    사용자 파일이 하나도 없으면 설정과 무관하게 시스템 파일을 보여줍니다.
    """
    user_files = [name for name in files if not is_system_file(data_type, name)]
    if not show_system_files and user_files:
        return user_files
    return list(files)
