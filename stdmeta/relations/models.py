"""Design relation models.

- RelationSpec: 6개 관계 규칙 정의
- RelationIssue / RelationValidationSummary / DesignRelationValidationResult: 검증 결과
- RelationSyncUpdate / RelationSyncChange / RelationSyncSuggestion / DesignRelationSyncPlan: 동기화 계획
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import Field

from stdmeta.models.base import DataType, StdModel


class RelationId(StrEnum):
    DB_ENTITY = "DB_ENTITY"
    DB_TABLE = "DB_TABLE"
    ENTITY_ATTRIBUTE = "ENTITY_ATTRIBUTE"
    ENTITY_TABLE = "ENTITY_TABLE"
    TABLE_COLUMN = "TABLE_COLUMN"
    ATTRIBUTE_COLUMN = "ATTRIBUTE_COLUMN"


class RelationSeverity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


Cardinality = Literal["1:1", "1:N", "N:1", "N:N"]


class RelationSpec(StdModel):
    """관계 규칙."""

    id: RelationId
    name: str
    source_type: DataType
    target_type: DataType
    mapping_key: str
    cardinality: Cardinality
    severity: RelationSeverity
    description: str


class RelationIssue(StdModel):
    """매칭 실패 레코드."""

    relation_id: RelationId
    severity: RelationSeverity
    source_type: DataType
    target_type: DataType
    target_id: str
    target_label: str
    expected_key: str = Field(description="원본 값 기준 기대 키 (e.g., 'MAIN|사용자')")
    reason: str


class RelationValidationSummary(StdModel):
    """관계별 집계."""

    relation_id: RelationId
    relation_name: str
    total_checked: int = 0
    matched: int = 0
    unmatched: int = 0
    severity: RelationSeverity
    mapping_key: str
    issues: list[RelationIssue] = Field(default_factory=list)


class RelationTotals(StdModel):
    total_checked: int = 0
    matched: int = 0
    unmatched: int = 0
    error_count: int = 0
    warning_count: int = 0


class DesignRelationValidationResult(StdModel):
    specs: list[RelationSpec]
    summaries: list[RelationValidationSummary]
    totals: RelationTotals

    def summary(self, relation_id: RelationId | str) -> RelationValidationSummary:
        """relation_id로 요약 조회."""
        for summary in self.summaries:
            if summary.relation_id == relation_id:
                return summary
        msg = f"Unknown relation id: {relation_id}"
        raise KeyError(msg)


# ─── Sync plan ───────────────────────────────────────────────────────

SyncField = Literal["related_entity_name", "schema_name", "table_english_name"]


class RelationSyncUpdate(StdModel):
    """단일 레코드 패치 제안 (snake_case 필드명 → 새 값)."""

    id: str
    patch: dict[str, Any]
    target_label: str
    reason: str


class RelationSyncChange(StdModel):
    """필드 단위 변경 미리보기."""

    target_type: Literal["table", "column"]
    target_id: str
    target_label: str
    field: SyncField
    before: str
    after: str
    reason: str


class RelationSyncSuggestionCandidate(StdModel):
    column_id: str
    column_label: str
    schema_name: str | None = None
    table_english_name: str | None = None
    related_entity_name: str | None = None


class RelationSyncSuggestion(StdModel):
    """속성 → 컬럼 연결 후보 (수동 선택 전용, 자동 적용하지 않음)."""

    attribute_id: str
    attribute_name: str
    schema_name: str
    entity_name: str
    candidates: list[RelationSyncSuggestionCandidate]


class SyncCounts(StdModel):
    table_candidates: int = 0
    column_candidates: int = 0
    total_candidates: int = 0
    field_changes: int = 0
    attribute_column_suggestions: int = 0


class DesignRelationSyncPreview(StdModel):
    counts: SyncCounts
    changes: list[RelationSyncChange] = Field(default_factory=list)
    suggestions: list[RelationSyncSuggestion] = Field(default_factory=list)


class DesignRelationSyncPlan(StdModel):
    preview: DesignRelationSyncPreview
    table_updates: list[RelationSyncUpdate] = Field(default_factory=list)
    column_updates: list[RelationSyncUpdate] = Field(default_factory=list)

    @property
    def suggestions(self) -> list[RelationSyncSuggestion]:
        return self.preview.suggestions

    @property
    def is_empty(self) -> bool:
        return not self.table_updates and not self.column_updates
