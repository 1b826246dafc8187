"""Vocabulary validation."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from loguru import logger

from stdmeta.models.vocabulary import ForbiddenWordEntry, ForbiddenWordType, VocabularyEntry
from stdmeta.naming.keys import normalize_key
from stdmeta.validation.models import (
    ValidationIssue,
    ValidationReport,
    ValidationResult,
    sort_issues,
)

REQUIRED_FIELD = "REQUIRED_FIELD"
FORBIDDEN_WORD = "FORBIDDEN_WORD"
SYNONYM_CONFLICT = "SYNONYM_CONFLICT"
ABBREVIATION_DUPLICATE = "ABBREVIATION_DUPLICATE"

VOCABULARY_ERROR_PRIORITY: dict[str, int] = {
    REQUIRED_FIELD: 1,
    FORBIDDEN_WORD: 2,
    SYNONYM_CONFLICT: 3,
    ABBREVIATION_DUPLICATE: 4,
}


def _issue(issue_type: str, message: str, field_name: str) -> ValidationIssue:
    return ValidationIssue.of(
        issue_type, message, field=field_name, priority=VOCABULARY_ERROR_PRIORITY[issue_type]
    )


def find_forbidden_word(
    standard_name: str, abbreviation: str, forbidden_words: Sequence[ForbiddenWordEntry]
) -> ForbiddenWordEntry | None:
    """적용 타입 필드에 금지어 키워드가 포함되어 있으면 첫 번째 금지어 반환."""
    for word in forbidden_words:
        if not word.keyword:
            continue
        target = standard_name if word.type == ForbiddenWordType.STANDARD_NAME else abbreviation
        if target and word.keyword in target:
            return word
    return None


def validate_vocabulary(
    entries: Sequence[VocabularyEntry],
    forbidden_words: Sequence[ForbiddenWordEntry] = (),
) -> ValidationReport[VocabularyEntry]:
    """전체 단어집 검증.

    - REQUIRED_FIELD: 표준단어명/영문약어 누락
    - FORBIDDEN_WORD: 금지어 포함
    - SYNONYM_CONFLICT: 다른 단어의 이음동의어로 이미 등록됨
    - ABBREVIATION_DUPLICATE: 영문약어 중복 (대소문자 무시)
    """
    abbreviation_counts = Counter(
        key for key in (normalize_key(e.abbreviation) for e in entries) if key
    )
    synonym_owner: dict[str, VocabularyEntry] = {}
    for entry in entries:
        for synonym in entry.synonyms:
            synonym_owner.setdefault(synonym.strip(), entry)

    failed: list[ValidationResult[VocabularyEntry]] = []
    for entry in entries:
        issues: list[ValidationIssue] = []
        standard_name = entry.standard_name.strip()
        abbreviation = entry.abbreviation.strip()

        if not standard_name:
            issues.append(
                _issue(REQUIRED_FIELD, "표준단어명(standardName)은 필수입니다.", "standardName")
            )
        if not abbreviation:
            issues.append(
                _issue(REQUIRED_FIELD, "영문약어(abbreviation)는 필수입니다.", "abbreviation")
            )

        forbidden = find_forbidden_word(standard_name, abbreviation, forbidden_words)
        if forbidden is not None:
            issues.append(
                _issue(
                    FORBIDDEN_WORD,
                    f"금지된 단어({forbidden.keyword})가 포함되어 있습니다.",
                    str(forbidden.type),
                )
            )

        if standard_name:
            owner = synonym_owner.get(standard_name)
            if owner is None or owner.id == entry.id:
                owner = next(
                    (
                        other
                        for other in entries
                        if other.id != entry.id
                        and standard_name in (s.strip() for s in other.synonyms)
                    ),
                    None,
                )
            if owner is not None:
                issues.append(
                    _issue(
                        SYNONYM_CONFLICT,
                        f"입력한 표준단어명({standard_name})은/는 이미 "
                        f"[{owner.standard_name}]의 이음동의어로 등록되어 있습니다.",
                        "standardName",
                    )
                )

        if abbreviation and abbreviation_counts[normalize_key(abbreviation)] > 1:
            issues.append(
                _issue(ABBREVIATION_DUPLICATE, "이미 존재하는 영문약어입니다.", "abbreviation")
            )

        if issues:
            failed.append(
                ValidationResult[VocabularyEntry](entry=entry, errors=sort_issues(issues))
            )

    report = ValidationReport[VocabularyEntry].from_results(len(entries), failed)
    logger.info(
        f"Vocabulary validation: total={report.total_count}, "
        f"failed={report.failed_count}, passed={report.passed_count}"
    )
    return report
