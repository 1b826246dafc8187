"""Design relation sync planner.

관계 검증에서 발견된 불일치를 보정하는 필드 단위 패치를 계산합니다.

Flow:
    1. 테이블 패스: relatedEntityName → 엔터티명 보정 (엔터티가 유일할 때만)
    2. 컬럼 패스: 패치된 테이블 기준으로 소유 테이블을 찾아
       schemaName / tableEnglishName / relatedEntityName 보정
    3. 속성 → 컬럼 후보: 패치된 컬럼 기준으로 최대 3개 후보 제안 (자동 적용 없음)

후보가 여럿인 키(AMBIGUOUS)는 절대 추측하지 않고 건너뜁니다.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from stdmeta.models.design import (
    AttributeEntry,
    ColumnEntry,
    EntityEntry,
    MappingContext,
    TableEntry,
    column_label,
    table_label,
)
from stdmeta.naming.keys import build_composite_key, normalize_key
from stdmeta.relations.index import KeyIndex, LookupResult
from stdmeta.relations.models import (
    DesignRelationSyncPlan,
    DesignRelationSyncPreview,
    RelationSyncChange,
    RelationSyncSuggestion,
    RelationSyncSuggestionCandidate,
    RelationSyncUpdate,
    SyncCounts,
)

MAX_SUGGESTION_CANDIDATES = 3

COLUMN_SYNC_FIELDS: tuple[str, ...] = ("schema_name", "table_english_name", "related_entity_name")


def _norm(value: str | None) -> str:
    return normalize_key(value, empty_like_dash=True)


def _patched(items: list[Any], updates: list[RelationSyncUpdate]) -> list[Any]:
    patches = {update.id: update.patch for update in updates}
    return [
        item.model_copy(update=patches[item.id]) if item.id in patches else item for item in items
    ]


# ─── Table pass ──────────────────────────────────────────────────────


def _resolve_entity_name(
    table: TableEntry,
    by_name: KeyIndex[EntityEntry],
    by_korean: KeyIndex[EntityEntry],
) -> tuple[str | None, str]:
    """테이블의 정식 relatedEntityName과 사유. 보정 불가 시 (None, "")."""
    schema = _norm(table.schema_name)
    if not schema:
        return None, ""

    related = _norm(table.related_entity_name)
    if related:
        if by_name.contains([schema, related]):
            return None, ""
        result = by_korean.lookup([schema, related])
        reason = "relatedEntityName이 엔터티 한글명과 일치하여 엔터티명으로 보정"
    else:
        korean = _norm(table.table_korean_name)
        if not korean:
            return None, ""
        result = by_korean.lookup([schema, korean])
        reason = "tableKoreanName과 일치하는 엔터티를 찾아 relatedEntityName을 보정"

    if result.is_ambiguous:
        logger.debug(
            f"Ambiguous entity match skipped: table={table_label(table)}, "
            f"candidates={len(result.candidates)}"
        )
        return None, ""
    if result.target is None or not result.target.entity_name:
        return None, ""
    return result.target.entity_name, reason


def _plan_tables(
    ctx: MappingContext, changes: list[RelationSyncChange]
) -> list[RelationSyncUpdate]:
    by_name = KeyIndex(ctx.entities, lambda e: [e.schema_name, e.entity_name])
    by_korean = KeyIndex(ctx.entities, lambda e: [e.schema_name, e.table_korean_name])

    updates: list[RelationSyncUpdate] = []
    for table in ctx.tables:
        canonical, reason = _resolve_entity_name(table, by_name, by_korean)
        if not canonical or canonical == table.related_entity_name:
            continue

        label = table_label(table)
        updates.append(
            RelationSyncUpdate(
                id=table.id,
                patch={"related_entity_name": canonical},
                target_label=label,
                reason=reason,
            )
        )
        changes.append(
            RelationSyncChange(
                target_type="table",
                target_id=table.id,
                target_label=label,
                field="related_entity_name",
                before=table.related_entity_name or "",
                after=canonical,
                reason=reason,
            )
        )
    return updates


# ─── Column pass ─────────────────────────────────────────────────────


class _TableIndexes:
    def __init__(self, tables: list[TableEntry]) -> None:
        self.by_schema_english = KeyIndex(tables, lambda t: [t.schema_name, t.table_english_name])
        self.by_schema_korean = KeyIndex(tables, lambda t: [t.schema_name, t.table_korean_name])
        self.by_english = KeyIndex(tables, lambda t: [t.table_english_name])
        self.by_schema_entity = KeyIndex(tables, lambda t: [t.schema_name, t.related_entity_name])


def _resolve_owner_table(
    column: ColumnEntry, indexes: _TableIndexes
) -> tuple[TableEntry | None, str]:
    """컬럼의 소유 테이블과 사유. 유일하게 결정되지 않으면 (None, "")."""
    if indexes.by_schema_english.contains([column.schema_name, column.table_english_name]):
        return None, ""

    by_english = indexes.by_english.lookup([column.table_english_name])
    if by_english.is_ambiguous:
        logger.debug(
            f"Ambiguous table match skipped: column={column_label(column)}, "
            f"tableEnglishName={column.table_english_name}, candidates={len(by_english.candidates)}"
        )
        return None, ""

    attempts: list[tuple[LookupResult[TableEntry], str]] = [
        (
            indexes.by_schema_korean.lookup([column.schema_name, column.table_english_name]),
            "컬럼 tableEnglishName이 테이블 한글명으로 입력되어 영문명으로 보정",
        ),
        (by_english, "tableEnglishName 단일 매칭으로 schema/relatedEntity를 보정"),
        (
            indexes.by_schema_entity.lookup([column.schema_name, column.related_entity_name]),
            "schema+relatedEntityName 단일 매칭으로 tableEnglishName을 보정",
        ),
    ]
    for result, reason in attempts:
        if result.target is not None:
            return result.target, reason
    return None, ""


def _plan_columns(
    ctx: MappingContext, tables: list[TableEntry], changes: list[RelationSyncChange]
) -> list[RelationSyncUpdate]:
    indexes = _TableIndexes(tables)

    updates: list[RelationSyncUpdate] = []
    for column in ctx.columns:
        table, reason = _resolve_owner_table(column, indexes)
        if table is None:
            continue

        patch: dict[str, str] = {}
        for field in COLUMN_SYNC_FIELDS:
            new_value = getattr(table, field)
            if new_value and new_value != getattr(column, field):
                patch[field] = new_value
        if not patch:
            continue

        label = column_label(column)
        updates.append(
            RelationSyncUpdate(id=column.id, patch=patch, target_label=label, reason=reason)
        )
        changes.extend(
            RelationSyncChange(
                target_type="column",
                target_id=column.id,
                target_label=label,
                field=field,
                before=getattr(column, field) or "",
                after=value,
                reason=reason,
            )
            for field, value in patch.items()
        )
    return updates


# ─── Attribute → Column suggestions ──────────────────────────────────


def _suggest_columns(
    attributes: list[AttributeEntry], columns: list[ColumnEntry]
) -> list[RelationSyncSuggestion]:
    """정확히 연결되는 컬럼이 없는 속성에 대해 이름이 포함 관계인 컬럼 후보 제안.

    후보는 같은 schema + 엔터티의 컬럼 중 컬럼한글명이 속성명을 포함하거나
    속성명에 포함되는 것이며, 길이 차이가 작은 순으로 최대 3개입니다.
    """
    by_entity = KeyIndex(columns, lambda c: [c.schema_name, c.related_entity_name])
    exact_keys = {
        key
        for key in (
            build_composite_key(
                [c.schema_name, c.related_entity_name, c.column_korean_name], empty_like_dash=True
            )
            for c in columns
        )
        if key
    }

    suggestions: list[RelationSyncSuggestion] = []
    for attribute in attributes:
        exact = build_composite_key(
            [attribute.schema_name, attribute.entity_name, attribute.attribute_name],
            empty_like_dash=True,
        )
        if not exact or exact in exact_keys:
            continue

        name = _norm(attribute.attribute_name)
        scored: list[tuple[int, ColumnEntry]] = []
        for column in by_entity.lookup([attribute.schema_name, attribute.entity_name]).candidates:
            column_name = _norm(column.column_korean_name)
            if column_name and (name in column_name or column_name in name):
                scored.append((abs(len(column_name) - len(name)), column))
        if not scored:
            continue

        scored.sort(key=lambda pair: pair[0])
        suggestions.append(
            RelationSyncSuggestion(
                attribute_id=attribute.id,
                attribute_name=attribute.attribute_name or attribute.id,
                schema_name=attribute.schema_name or "",
                entity_name=attribute.entity_name or "",
                candidates=[
                    RelationSyncSuggestionCandidate(
                        column_id=column.id,
                        column_label=column_label(column),
                        schema_name=column.schema_name,
                        table_english_name=column.table_english_name,
                        related_entity_name=column.related_entity_name,
                    )
                    for _, column in scored[:MAX_SUGGESTION_CANDIDATES]
                ],
            )
        )
    return suggestions


# ─── Public API ──────────────────────────────────────────────────────


def build_design_relation_sync_plan(
    context: MappingContext | dict[str, Any],
) -> DesignRelationSyncPlan:
    """관계 동기화 계획 계산 (순수 함수, 적용하지 않음).

    Args:
        context: MappingContext 또는 같은 형태의 dict

    Returns:
        preview(counts/changes/suggestions) + table_updates + column_updates

    Raises:
        ContextShapeError: context 형태가 잘못된 경우
    """
    ctx = MappingContext.coerce(context)
    changes: list[RelationSyncChange] = []

    table_updates = _plan_tables(ctx, changes)
    effective_tables = _patched(ctx.tables, table_updates)

    column_updates = _plan_columns(ctx, effective_tables, changes)
    effective_columns = _patched(ctx.columns, column_updates)

    suggestions = _suggest_columns(ctx.attributes, effective_columns)

    counts = SyncCounts(
        table_candidates=len(table_updates),
        column_candidates=len(column_updates),
        total_candidates=len(table_updates) + len(column_updates),
        field_changes=len(changes),
        attribute_column_suggestions=len(suggestions),
    )
    logger.info(
        f"Design relation sync plan: tables={counts.table_candidates}, "
        f"columns={counts.column_candidates}, fields={counts.field_changes}, "
        f"suggestions={counts.attribute_column_suggestions}"
    )
    return DesignRelationSyncPlan(
        preview=DesignRelationSyncPreview(counts=counts, changes=changes, suggestions=suggestions),
        table_updates=table_updates,
        column_updates=column_updates,
    )


def apply_sync_plan(
    context: MappingContext | dict[str, Any], plan: DesignRelationSyncPlan
) -> MappingContext:
    """계획의 테이블/컬럼 패치를 적용한 새 스냅샷 (updated_at 갱신).

    저장은 호출자 책임입니다.
    """
    ctx = MappingContext.coerce(context)
    table_patches = {update.id: update.patch for update in plan.table_updates}
    column_patches = {update.id: update.patch for update in plan.column_updates}

    tables = [
        t.apply_patch(table_patches[t.id]) if t.id in table_patches else t for t in ctx.tables
    ]
    columns = [
        c.apply_patch(column_patches[c.id]) if c.id in column_patches else c for c in ctx.columns
    ]
    return ctx.model_copy(update={"tables": tables, "columns": columns})
