"""Shared base models.

- DataType: 8개 데이터 타입 Enum (닫힌 집합)
- StdModel: camelCase JSON 별칭을 사용하는 frozen 모델 기반 클래스
- BaseEntry: id/createdAt/updatedAt 공통 필드
- DataFile: 저장 파일 구조 {entries, lastUpdated, totalCount, mapping?}
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Generic, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def now_iso() -> str:
    """현재 시각 ISO-8601 문자열 (UTC, 밀리초)."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ─── Enums ───────────────────────────────────────────────────────────


class DataType(StrEnum):
    """데이터 타입."""

    VOCABULARY = "vocabulary"
    DOMAIN = "domain"
    TERM = "term"
    DATABASE = "database"
    ENTITY = "entity"
    ATTRIBUTE = "attribute"
    TABLE = "table"
    COLUMN = "column"

    @property
    def default_filename(self) -> str:
        """타입별 기본 파일명 (e.g., domain.json)."""
        return f"{self.value}.json"

    @property
    def is_definition(self) -> bool:
        """5개 정의서(database/entity/attribute/table/column) 여부."""
        return self in DEFINITION_TYPES


DEFINITION_TYPES: tuple[DataType, ...] = (
    DataType.DATABASE,
    DataType.ENTITY,
    DataType.ATTRIBUTE,
    DataType.TABLE,
    DataType.COLUMN,
)


# ─── Models ──────────────────────────────────────────────────────────


class StdModel(BaseModel):
    """camelCase 별칭 + frozen 기반 모델."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict[str, Any]:
        """저장/전송용 camelCase dict."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BaseEntry(StdModel):
    """모든 엔트리 공통 필드."""

    id: str = Field(description="불투명 고유 식별자")
    created_at: str = Field(default_factory=now_iso, description="생성 시각 (ISO-8601)")
    updated_at: str = Field(default_factory=now_iso, description="수정 시각 (ISO-8601)")

    def apply_patch(self, patch: dict[str, Any], *, touch: bool = True) -> Self:
        """필드 패치 적용 (frozen model → copy + modify).

        Args:
            patch: snake_case 필드명 → 새 값
            touch: updated_at 갱신 여부

        Returns:
            패치가 적용된 새 엔트리
        """
        unknown = set(patch) - set(type(self).model_fields)
        if unknown:
            msg = f"Unknown fields in patch: {sorted(unknown)}"
            raise ValueError(msg)
        update = dict(patch)
        if touch:
            update["updated_at"] = now_iso()
        return self.model_copy(update=update)


EntryT = TypeVar("EntryT", bound=BaseEntry)


class DataFile(StdModel, Generic[EntryT]):
    """저장 파일 구조."""

    entries: list[EntryT] = Field(default_factory=list)
    last_updated: str = Field(default_factory=now_iso)
    total_count: int = Field(default=0, ge=0)
    mapping: dict[str, str] | None = Field(default=None, description="연관 파일 매핑")

    def with_entries(self, entries: list[EntryT]) -> Self:
        """엔트리 교체 + lastUpdated/totalCount 갱신."""
        return self.model_copy(
            update={
                "entries": list(entries),
                "last_updated": now_iso(),
                "total_count": len(entries),
            }
        )
