"""Store - 파일 기반 협력자 (데이터 파일, 히스토리, 표시 설정)."""

from stdmeta.store.context import DefinitionFileSelection, load_mapping_context
from stdmeta.store.history import HistoryStore
from stdmeta.store.registry import ENTRY_MODELS, DataRegistry
from stdmeta.store.settings import DisplaySettings, SettingsService, filter_files, is_system_file

__all__ = [
    "ENTRY_MODELS",
    "DataRegistry",
    "DefinitionFileSelection",
    "DisplaySettings",
    "HistoryStore",
    "SettingsService",
    "filter_files",
    "is_system_file",
    "load_mapping_context",
]
