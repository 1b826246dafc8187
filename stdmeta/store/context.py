"""Consistent MappingContext loading.

5개 정의서 + 도메인을 한 번에 읽어 단일 스냅샷을 구성합니다.
"""

from __future__ import annotations

from loguru import logger
from pydantic import BaseModel, ConfigDict

from stdmeta.models.base import DataType
from stdmeta.models.design import MappingContext
from stdmeta.store.registry import DataRegistry

_CONTEXT_FIELDS: dict[DataType, str] = {
    DataType.DATABASE: "databases",
    DataType.ENTITY: "entities",
    DataType.ATTRIBUTE: "attributes",
    DataType.TABLE: "tables",
    DataType.COLUMN: "columns",
    DataType.DOMAIN: "domains",
}


class DefinitionFileSelection(BaseModel):
    """타입별 선택 파일명 (None이면 미선택)."""

    model_config = ConfigDict(frozen=True)

    database: str | None = None
    entity: str | None = None
    attribute: str | None = None
    table: str | None = None
    column: str | None = None
    domain: str | None = None

    def get(self, data_type: DataType) -> str | None:
        return getattr(self, data_type.value)


def load_mapping_context(
    registry: DataRegistry,
    selection: DefinitionFileSelection | None = None,
    *,
    fallback_to_first: bool = True,
) -> tuple[MappingContext, DefinitionFileSelection]:
    """MappingContext 로드.

    Args:
        registry: 데이터 저장소
        selection: 타입별 명시 파일명
        fallback_to_first: 명시 파일이 없을 때 디렉토리의 첫 파일 사용 여부

    Returns:
        (스냅샷, 실제로 사용된 파일 선택)

    Raises:
        DataFileNotFoundError: 명시한 파일이 없는 경우
        DataParseError: 파일 형식 오류
    """
    selection = selection or DefinitionFileSelection()
    lists: dict[str, list] = {}
    used: dict[str, str | None] = {}

    for data_type, field_name in _CONTEXT_FIELDS.items():
        filename = selection.get(data_type)
        if not filename and fallback_to_first:
            files = registry.list_files(data_type)
            filename = files[0] if files else None

        used[data_type.value] = filename
        lists[field_name] = list(registry.load(data_type, filename).entries) if filename else []

    context = MappingContext(**lists)
    logger.debug(
        "Mapping context loaded: "
        + ", ".join(f"{name}={len(items)}" for name, items in lists.items())
    )
    return context, DefinitionFileSelection(**used)
