"""Relations - 5개 정의서 간 관계 검증 및 동기화 계획."""

from stdmeta.relations.index import KeyIndex, LookupResult, LookupStatus
from stdmeta.relations.models import (
    DesignRelationSyncPlan,
    DesignRelationSyncPreview,
    DesignRelationValidationResult,
    RelationId,
    RelationIssue,
    RelationSeverity,
    RelationSpec,
    RelationSyncChange,
    RelationSyncSuggestion,
    RelationSyncUpdate,
    RelationValidationSummary,
    SyncCounts,
)
from stdmeta.relations.sync import apply_sync_plan, build_design_relation_sync_plan
from stdmeta.relations.validator import DESIGN_RELATION_SPECS, validate_design_relations

__all__ = [
    "DESIGN_RELATION_SPECS",
    "DesignRelationSyncPlan",
    "DesignRelationSyncPreview",
    "DesignRelationValidationResult",
    "KeyIndex",
    "LookupResult",
    "LookupStatus",
    "RelationId",
    "RelationIssue",
    "RelationSeverity",
    "RelationSpec",
    "RelationSyncChange",
    "RelationSyncSuggestion",
    "RelationSyncUpdate",
    "RelationValidationSummary",
    "SyncCounts",
    "apply_sync_plan",
    "build_design_relation_sync_plan",
    "validate_design_relations",
]
