"""Vocabulary validation 테스트."""

from __future__ import annotations

from stdmeta.models.vocabulary import ForbiddenWordEntry, ForbiddenWordType, VocabularyEntry
from stdmeta.validation.models import ValidationIssue
from stdmeta.validation.vocabulary import (
    ABBREVIATION_DUPLICATE,
    FORBIDDEN_WORD,
    REQUIRED_FIELD,
    SYNONYM_CONFLICT,
    find_forbidden_word,
    validate_vocabulary,
)

_FORBIDDEN = [
    ForbiddenWordEntry(id="f-1", keyword="임시", type=ForbiddenWordType.STANDARD_NAME),
    ForbiddenWordEntry(id="f-2", keyword="TMP", type=ForbiddenWordType.ABBREVIATION),
]


def _types(errors: list[ValidationIssue]) -> list[str]:
    return [e.type for e in errors]


class TestValidateVocabulary:
    def test_sample_vocabulary_passes(self, vocabulary_entries: list[VocabularyEntry]) -> None:
        report = validate_vocabulary(vocabulary_entries, _FORBIDDEN)
        assert report.failed_count == 0
        assert report.passed_count == len(vocabulary_entries)

    def test_required_fields(self) -> None:
        report = validate_vocabulary([VocabularyEntry(id="v-1", standard_name=" ")])
        result = report.failed_entries[0]
        assert _types(result.errors) == [REQUIRED_FIELD, REQUIRED_FIELD]
        assert [e.field for e in result.errors] == ["standardName", "abbreviation"]

    def test_forbidden_word_in_standard_name(self) -> None:
        entry = VocabularyEntry(id="v-1", standard_name="임시번호", abbreviation="TNO")
        report = validate_vocabulary([entry], _FORBIDDEN)
        result = report.failed_entries[0]
        assert _types(result.errors) == [FORBIDDEN_WORD]
        assert result.errors[0].field == "standardName"

    def test_forbidden_word_applies_to_its_type_only(self) -> None:
        entry = VocabularyEntry(id="v-1", standard_name="TMP값", abbreviation="VAL")
        assert validate_vocabulary([entry], _FORBIDDEN).failed_count == 0

    def test_synonym_conflict(self, vocabulary_entries: list[VocabularyEntry]) -> None:
        guest = VocabularyEntry(id="v-guest", standard_name="손님", abbreviation="GST")
        report = validate_vocabulary([*vocabulary_entries, guest])

        assert report.failed_count == 1
        result = report.failed_entries[0]
        assert result.entry.id == "v-guest"
        assert _types(result.errors) == [SYNONYM_CONFLICT]
        assert "[고객]" in result.errors[0].message

    def test_abbreviation_duplicate_case_insensitive(self) -> None:
        entries = [
            VocabularyEntry(id="v-1", standard_name="번호", abbreviation="NO"),
            VocabularyEntry(id="v-2", standard_name="넘버", abbreviation="no"),
        ]
        report = validate_vocabulary(entries)
        assert report.failed_count == 2
        for result in report.failed_entries:
            assert _types(result.errors) == [ABBREVIATION_DUPLICATE]


class TestFindForbiddenWord:
    def test_match(self) -> None:
        found = find_forbidden_word("사용자", "USER_TMP", _FORBIDDEN)
        assert found is not None
        assert found.id == "f-2"

    def test_no_match(self) -> None:
        assert find_forbidden_word("사용자", "USER", _FORBIDDEN) is None
