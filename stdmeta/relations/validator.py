"""Design relation validator.

5개 정의서 간 이름 기반 참조 무결성을 6개 관계 규칙으로 검증합니다.

Rules:
    - 소스 키 집합은 정규화 복합 키(emptyLikeDash)로 구성
    - 대상 레코드의 키가 집합에 있으면 matched, 없으면 RelationIssue
    - 키가 비어 있는 레코드도 검사 대상이며 unmatched로 집계
    - error_count는 error 규칙, warning_count는 warning 규칙의 unmatched 합
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from loguru import logger

from stdmeta.models.base import DataType
from stdmeta.models.design import (
    MappingContext,
    attribute_label,
    column_label,
    entity_label,
    table_label,
)
from stdmeta.naming.keys import KeyPart, build_composite_key
from stdmeta.relations.models import (
    DesignRelationValidationResult,
    RelationId,
    RelationIssue,
    RelationSeverity,
    RelationSpec,
    RelationTotals,
    RelationValidationSummary,
)

T = TypeVar("T")

DESIGN_RELATION_SPECS: tuple[RelationSpec, ...] = (
    RelationSpec(
        id=RelationId.DB_ENTITY,
        name="데이터베이스 -> 엔터티",
        source_type=DataType.DATABASE,
        target_type=DataType.ENTITY,
        mapping_key="logicalDbName",
        cardinality="1:N",
        severity=RelationSeverity.ERROR,
        description="엔터티의 logicalDbName이 데이터베이스 logicalDbName에 존재해야 합니다.",
    ),
    RelationSpec(
        id=RelationId.DB_TABLE,
        name="데이터베이스 -> 테이블",
        source_type=DataType.DATABASE,
        target_type=DataType.TABLE,
        mapping_key="physicalDbName",
        cardinality="1:N",
        severity=RelationSeverity.ERROR,
        description="테이블의 physicalDbName이 데이터베이스 physicalDbName에 존재해야 합니다.",
    ),
    RelationSpec(
        id=RelationId.ENTITY_ATTRIBUTE,
        name="엔터티 -> 속성",
        source_type=DataType.ENTITY,
        target_type=DataType.ATTRIBUTE,
        mapping_key="schemaName + entityName",
        cardinality="1:N",
        severity=RelationSeverity.ERROR,
        description="속성의 schemaName/entityName 조합이 엔터티에 존재해야 합니다.",
    ),
    RelationSpec(
        id=RelationId.ENTITY_TABLE,
        name="엔터티 -> 테이블",
        source_type=DataType.ENTITY,
        target_type=DataType.TABLE,
        mapping_key="schemaName + relatedEntityName(entityName)",
        cardinality="1:N",
        severity=RelationSeverity.ERROR,
        description=(
            "테이블의 schemaName/relatedEntityName 조합이 엔터티 "
            "schemaName/entityName(보조: tableKoreanName)에 존재해야 합니다."
        ),
    ),
    RelationSpec(
        id=RelationId.TABLE_COLUMN,
        name="테이블 -> 컬럼",
        source_type=DataType.TABLE,
        target_type=DataType.COLUMN,
        mapping_key="schemaName + tableEnglishName",
        cardinality="1:N",
        severity=RelationSeverity.ERROR,
        description="컬럼의 schemaName/tableEnglishName 조합이 테이블에 존재해야 합니다.",
    ),
    RelationSpec(
        id=RelationId.ATTRIBUTE_COLUMN,
        name="속성 -> 컬럼(보조)",
        source_type=DataType.ATTRIBUTE,
        target_type=DataType.COLUMN,
        mapping_key="schemaName + entityName(relatedEntityName) + attributeName(columnKoreanName)",
        cardinality="1:1",
        severity=RelationSeverity.WARNING,
        description="속성과 컬럼의 논리-물리 연결 후보를 점검합니다. 불일치는 경고로 취급합니다.",
    ),
)


def _key_set(items: Iterable[T], parts: Callable[[T], Sequence[KeyPart]]) -> set[str]:
    keys = (build_composite_key(parts(item), empty_like_dash=True) for item in items)
    return {key for key in keys if key}


def _expected_key(parts: Sequence[KeyPart]) -> str:
    return "|".join("" if part is None else str(part) for part in parts)


def _check(
    spec: RelationSpec,
    records: Iterable[T],
    key_parts: Callable[[T], Sequence[KeyPart]],
    source_keys: Iterable[set[str]],
    label: Callable[[T], str],
    reason: str,
) -> RelationValidationSummary:
    """단일 관계 규칙 검사."""
    key_sets = list(source_keys)
    matched = 0
    issues: list[RelationIssue] = []

    for record in records:
        parts = key_parts(record)
        key = build_composite_key(parts, empty_like_dash=True)
        if key and any(key in keys for keys in key_sets):
            matched += 1
            continue
        issues.append(
            RelationIssue(
                relation_id=spec.id,
                severity=spec.severity,
                source_type=spec.source_type,
                target_type=spec.target_type,
                target_id=record.id,  # type: ignore[attr-defined]
                target_label=label(record),
                expected_key=_expected_key(parts),
                reason=reason,
            )
        )

    return RelationValidationSummary(
        relation_id=spec.id,
        relation_name=spec.name,
        total_checked=matched + len(issues),
        matched=matched,
        unmatched=len(issues),
        severity=spec.severity,
        mapping_key=spec.mapping_key,
        issues=issues,
    )


def validate_design_relations(
    context: MappingContext | dict[str, Any],
) -> DesignRelationValidationResult:
    """6개 관계 규칙 검증 (단일 스냅샷).

    Args:
        context: MappingContext 또는 같은 형태의 dict

    Raises:
        ContextShapeError: context 형태가 잘못된 경우
    """
    ctx = MappingContext.coerce(context)
    specs = {spec.id: spec for spec in DESIGN_RELATION_SPECS}

    db_logical = _key_set(ctx.databases, lambda db: [db.logical_db_name])
    db_physical = _key_set(ctx.databases, lambda db: [db.physical_db_name])
    entity_keys = _key_set(ctx.entities, lambda e: [e.schema_name, e.entity_name])
    entity_korean_keys = _key_set(ctx.entities, lambda e: [e.schema_name, e.table_korean_name])
    table_keys = _key_set(ctx.tables, lambda t: [t.schema_name, t.table_english_name])
    column_logical_keys = _key_set(
        ctx.columns, lambda c: [c.schema_name, c.related_entity_name, c.column_korean_name]
    )

    summaries = [
        _check(
            specs[RelationId.DB_ENTITY],
            ctx.entities,
            lambda e: [e.logical_db_name],
            [db_logical],
            entity_label,
            "참조하는 logicalDbName이 데이터베이스 정의서에 없습니다.",
        ),
        _check(
            specs[RelationId.DB_TABLE],
            ctx.tables,
            lambda t: [t.physical_db_name],
            [db_physical],
            table_label,
            "참조하는 physicalDbName이 데이터베이스 정의서에 없습니다.",
        ),
        _check(
            specs[RelationId.ENTITY_ATTRIBUTE],
            ctx.attributes,
            lambda a: [a.schema_name, a.entity_name],
            [entity_keys],
            attribute_label,
            "속성이 참조하는 schema/entity 조합이 엔터티 정의서에 없습니다.",
        ),
        _check(
            specs[RelationId.ENTITY_TABLE],
            ctx.tables,
            lambda t: [t.schema_name, t.related_entity_name],
            [entity_keys, entity_korean_keys],
            table_label,
            "테이블의 relatedEntityName이 엔터티 정의서(entityName/tableKoreanName)에 없습니다.",
        ),
        _check(
            specs[RelationId.TABLE_COLUMN],
            ctx.columns,
            lambda c: [c.schema_name, c.table_english_name],
            [table_keys],
            column_label,
            "컬럼이 참조하는 schema/table 조합이 테이블 정의서에 없습니다.",
        ),
        _check(
            specs[RelationId.ATTRIBUTE_COLUMN],
            ctx.attributes,
            lambda a: [a.schema_name, a.entity_name, a.attribute_name],
            [column_logical_keys],
            attribute_label,
            "속성명 기준으로 연결 가능한 컬럼(relatedEntityName + columnKoreanName)을 찾지 못했습니다.",
        ),
    ]

    totals = RelationTotals(
        total_checked=sum(s.total_checked for s in summaries),
        matched=sum(s.matched for s in summaries),
        unmatched=sum(s.unmatched for s in summaries),
        error_count=sum(s.unmatched for s in summaries if s.severity == RelationSeverity.ERROR),
        warning_count=sum(
            s.unmatched for s in summaries if s.severity == RelationSeverity.WARNING
        ),
    )
    logger.info(
        f"Design relation validation: checked={totals.total_checked}, "
        f"unmatched={totals.unmatched}, errors={totals.error_count}, "
        f"warnings={totals.warning_count}"
    )
    return DesignRelationValidationResult(
        specs=list(DESIGN_RELATION_SPECS), summaries=summaries, totals=totals
    )
