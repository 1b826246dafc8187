"""KeyIndex 테스트 (태그된 조회 결과)."""

from __future__ import annotations

from stdmeta.models.design import TableEntry
from stdmeta.relations.index import KeyIndex, LookupStatus


def _tables() -> list[TableEntry]:
    return [
        TableEntry(id="t-1", schema_name="MAIN", table_english_name="TB_USER"),
        TableEntry(id="t-2", schema_name="A", table_english_name="TB_DUP"),
        TableEntry(id="t-3", schema_name="B", table_english_name="tb_dup"),
        TableEntry(id="t-4", schema_name="-", table_english_name="TB_NO_SCHEMA"),
    ]


class TestKeyIndexLookup:
    def test_resolved(self) -> None:
        index = KeyIndex(_tables(), lambda t: [t.schema_name, t.table_english_name])
        result = index.lookup([" main ", "tb_user"])

        assert result.status == LookupStatus.RESOLVED
        assert result.is_resolved
        assert result.target is not None
        assert result.target.id == "t-1"

    def test_unmatched(self) -> None:
        index = KeyIndex(_tables(), lambda t: [t.schema_name, t.table_english_name])
        result = index.lookup(["MAIN", "TB_NONE"])

        assert result.status == LookupStatus.UNMATCHED
        assert result.target is None
        assert result.candidates == ()

    def test_ambiguous_never_resolves(self) -> None:
        index = KeyIndex(_tables(), lambda t: [t.table_english_name])
        result = index.lookup(["TB_DUP"])

        assert result.is_ambiguous
        assert result.target is None
        assert {t.id for t in result.candidates} == {"t-2", "t-3"}

    def test_empty_key_is_unmatched(self) -> None:
        index = KeyIndex(_tables(), lambda t: [t.schema_name, t.table_english_name])
        assert index.lookup([None, "TB_USER"]).status == LookupStatus.UNMATCHED

    def test_dash_treated_as_empty(self) -> None:
        index = KeyIndex(_tables(), lambda t: [t.schema_name, t.table_english_name])
        assert len(index) == 3
        assert not index.contains(["-", "TB_NO_SCHEMA"])

    def test_dash_kept_without_flag(self) -> None:
        index = KeyIndex(
            _tables(), lambda t: [t.schema_name, t.table_english_name], empty_like_dash=False
        )
        assert index.contains(["-", "TB_NO_SCHEMA"])
        assert "-|tb_no_schema" in index
