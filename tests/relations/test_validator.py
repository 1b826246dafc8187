"""Design relation validator 테스트."""

from __future__ import annotations

import pytest

from stdmeta.core.exceptions import ContextShapeError
from stdmeta.models.design import EntityEntry, MappingContext, TableEntry
from stdmeta.relations.models import RelationId, RelationSeverity
from stdmeta.relations.validator import DESIGN_RELATION_SPECS, validate_design_relations


class TestRelationSpecs:
    def test_six_specs(self) -> None:
        assert [spec.id for spec in DESIGN_RELATION_SPECS] == list(RelationId)

    def test_only_attribute_column_is_warning(self) -> None:
        warnings = [s.id for s in DESIGN_RELATION_SPECS if s.severity == RelationSeverity.WARNING]
        assert warnings == [RelationId.ATTRIBUTE_COLUMN]


class TestValidateDesignRelations:
    def test_one_valid_one_invalid_per_relation(self, relation_context: MappingContext) -> None:
        result = validate_design_relations(relation_context)

        assert len(result.specs) == 6
        assert len(result.summaries) == 6
        for relation_id in RelationId:
            summary = result.summary(relation_id)
            assert (summary.matched, summary.unmatched) == (1, 1), relation_id

        assert result.totals.unmatched == 6
        assert result.totals.error_count == 5
        assert result.totals.warning_count == 1

    def test_issue_carries_expected_key(self, relation_context: MappingContext) -> None:
        result = validate_design_relations(relation_context)
        issue = result.summary(RelationId.TABLE_COLUMN).issues[0]

        assert issue.target_id == "col-2"
        assert issue.target_label == "MISSING_NM"
        assert issue.expected_key == "BKSP|TB_MISSING"
        assert issue.severity == RelationSeverity.ERROR

    def test_accepts_camel_case_dict(self, relation_context: MappingContext) -> None:
        payload = relation_context.to_json_dict()
        result = validate_design_relations(payload)
        assert result.totals.unmatched == 6

    def test_empty_key_counted_unmatched(self) -> None:
        context = MappingContext(
            entities=[EntityEntry(id="e-1", schema_name="MAIN", entity_name="사용자")],
            tables=[
                TableEntry(id="t-1", schema_name="MAIN", related_entity_name="-"),
                TableEntry(id="t-2", schema_name="MAIN", related_entity_name="사용자"),
            ],
        )
        summary = validate_design_relations(context).summary(RelationId.ENTITY_TABLE)

        assert summary.total_checked == 2
        assert summary.unmatched == 1
        assert summary.issues[0].target_id == "t-1"

    def test_entity_table_matches_korean_table_name(self) -> None:
        context = MappingContext(
            entities=[
                EntityEntry(
                    id="e-1", schema_name="MAIN", entity_name="사용자", table_korean_name="회원"
                )
            ],
            tables=[TableEntry(id="t-1", schema_name="main", related_entity_name="회원")],
        )
        summary = validate_design_relations(context).summary(RelationId.ENTITY_TABLE)
        assert summary.matched == 1

    def test_empty_context(self) -> None:
        result = validate_design_relations(MappingContext())
        assert result.totals.total_checked == 0
        assert all(s.issues == [] for s in result.summaries)

    def test_malformed_context_raises(self) -> None:
        with pytest.raises(ContextShapeError):
            validate_design_relations({"tables": "not-a-list"})

    def test_unknown_summary_id(self, relation_context: MappingContext) -> None:
        with pytest.raises(KeyError):
            validate_design_relations(relation_context).summary("UNKNOWN")
