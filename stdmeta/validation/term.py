"""Term validation with advisory auto-fix suggestions.

검사 항목 (priority 순):
    1. TERM_NAME_LENGTH     - 용어명은 2단어 이상
    2. TERM_NAME_DUPLICATE  - 파일 내 용어명 중복
    3. TERM_UNIQUENESS      - 용어명+칼럼명+도메인명 조합 중복
    4. TERM_NAME_MAPPING    - 용어명 토큰이 단어집 표준단어명에 없음
    5. COLUMN_NAME_MAPPING  - 칼럼명 토큰이 단어집 영문약어에 없음
    6. TERM_NAME_SUFFIX     - 접미사 단어가 형식단어가 아님
    7. DOMAIN_NAME_MAPPING  - 도메인명이 도메인 목록에 없음

AutoFixSuggestion은 가장 우선순위가 높은 오류 하나에 대해서만 action_type을
정합니다. 적용은 호출자 책임입니다.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from typing import Any

from loguru import logger
from pydantic import Field

from stdmeta.models.base import StdModel
from stdmeta.models.domain import DomainEntry
from stdmeta.models.term import TermEntry
from stdmeta.models.vocabulary import VocabularyEntry
from stdmeta.naming.generator import VocabularyIndex, build_domain_name_set
from stdmeta.naming.keys import (
    build_composite_key,
    normalize_key,
    split_name_tokens,
    split_underscore_parts,
)
from stdmeta.validation.models import (
    AutoFixSuggestion,
    FixAction,
    ValidationIssue,
    ValidationReport,
    ValidationResult,
    sort_issues,
)

TERM_NAME_LENGTH = "TERM_NAME_LENGTH"
TERM_NAME_DUPLICATE = "TERM_NAME_DUPLICATE"
TERM_UNIQUENESS = "TERM_UNIQUENESS"
TERM_NAME_MAPPING = "TERM_NAME_MAPPING"
COLUMN_NAME_MAPPING = "COLUMN_NAME_MAPPING"
TERM_NAME_SUFFIX = "TERM_NAME_SUFFIX"
DOMAIN_NAME_MAPPING = "DOMAIN_NAME_MAPPING"

TERM_ERROR_PRIORITY: dict[str, int] = {
    TERM_NAME_LENGTH: 1,
    TERM_NAME_DUPLICATE: 2,
    TERM_UNIQUENESS: 3,
    TERM_NAME_MAPPING: 4,
    COLUMN_NAME_MAPPING: 5,
    TERM_NAME_SUFFIX: 6,
    DOMAIN_NAME_MAPPING: 7,
}


class TermValidationContext(StdModel):
    """용어 검증에 필요한 단어집/도메인 스냅샷."""

    vocabulary: list[VocabularyEntry] = Field(default_factory=list)
    domains: list[DomainEntry] = Field(default_factory=list)
    vocabulary_filename: str = Field(default="vocabulary.json", description="ADD_VOCABULARY 대상 파일")


def _issue(issue_type: str, message: str, field_name: str) -> ValidationIssue:
    return ValidationIssue.of(
        issue_type, message, field=field_name, priority=TERM_ERROR_PRIORITY[issue_type]
    )


def _triple_key(entry: TermEntry) -> str:
    return build_composite_key([entry.term_name, entry.column_name, entry.domain_name])


def _unmapped_tokens(value: str | None, lookup: Callable[[str], Any]) -> list[str]:
    """소문자 토큰 키로 조회되지 않는 원문 토큰."""
    return [
        token
        for token, key in zip(split_name_tokens(value), split_underscore_parts(value), strict=True)
        if lookup(key) is None
    ]


class _TermChecker:
    """스냅샷 단위 사전 계산 (카운트 맵, 단어집 인덱스)."""

    def __init__(self, entries: Sequence[TermEntry], context: TermValidationContext) -> None:
        self.entries = entries
        self.context = context
        self.vocabulary = VocabularyIndex(context.vocabulary)
        self.domain_names = build_domain_name_set(context.domains)
        self.term_name_counts = Counter(
            key for key in (normalize_key(e.term_name) for e in entries) if key
        )
        self.triple_counts = Counter(key for key in (_triple_key(e) for e in entries) if key)

    def check(self, entry: TermEntry) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        term_parts = split_name_tokens(entry.term_name)
        column_parts = split_name_tokens(entry.column_name)
        has_enough_parts = len(term_parts) >= 2

        if not has_enough_parts:
            issues.append(
                _issue(TERM_NAME_LENGTH, "용어명은 2단어 이상의 조합이어야 합니다.", "termName")
            )

        if has_enough_parts and self.term_name_counts[normalize_key(entry.term_name)] > 1:
            issues.append(
                _issue(
                    TERM_NAME_DUPLICATE,
                    f"이미 존재하는 용어명입니다: {entry.term_name.strip()}",
                    "termName",
                )
            )

        triple = _triple_key(entry)
        if triple and self.triple_counts[triple] > 1:
            issues.append(
                _issue(
                    TERM_UNIQUENESS,
                    "용어명, 칼럼명, 도메인명 조합이 이미 존재합니다.",
                    "termName",
                )
            )

        if has_enough_parts:
            unmapped = _unmapped_tokens(entry.term_name, self.vocabulary.by_standard_name)
            if unmapped:
                issues.append(
                    _issue(
                        TERM_NAME_MAPPING,
                        f"용어명의 다음 단어가 단어집에 없습니다: {', '.join(unmapped)}",
                        "termName",
                    )
                )

        if column_parts:
            unmapped = _unmapped_tokens(entry.column_name, self.vocabulary.by_abbreviation)
            if unmapped:
                issues.append(
                    _issue(
                        COLUMN_NAME_MAPPING,
                        f"칼럼명의 다음 단어가 단어집 영문약어에 없습니다: {', '.join(unmapped)}",
                        "columnName",
                    )
                )

        if has_enough_parts:
            suffix = term_parts[-1]
            suffix_entry = self.vocabulary.by_standard_name(suffix)
            if suffix_entry is not None and suffix_entry.is_formal_word is False:
                issues.append(
                    _issue(
                        TERM_NAME_SUFFIX,
                        f"용어명의 접미사 '{suffix}'은(는) 형식단어가 아닙니다.",
                        "termName",
                    )
                )

        if entry.domain_name.strip() and normalize_key(entry.domain_name) not in self.domain_names:
            issues.append(
                _issue(
                    DOMAIN_NAME_MAPPING,
                    f"도메인명 '{entry.domain_name.strip()}'이(가) 도메인 목록에 없습니다.",
                    "domainName",
                )
            )

        return sort_issues(issues)

    # ─── Auto-fix ─────────────────────────────────────────────────────

    def suggest(self, entry: TermEntry, errors: list[ValidationIssue]) -> AutoFixSuggestion | None:
        """오류 우선순위 순으로 첫 action_type이 정해질 때까지 제안을 누적."""
        reasons: list[str] = []
        update: dict[str, Any] = {"metadata": {}}
        error_types = {error.type for error in errors}

        handlers = {
            TERM_NAME_LENGTH: self._suggest_term_name_length,
            TERM_NAME_DUPLICATE: self._suggest_term_name_duplicate,
            TERM_UNIQUENESS: self._suggest_term_uniqueness,
            TERM_NAME_MAPPING: self._suggest_term_name_mapping,
            COLUMN_NAME_MAPPING: self._suggest_column_name_mapping,
            TERM_NAME_SUFFIX: self._suggest_term_name_suffix,
            DOMAIN_NAME_MAPPING: self._suggest_domain_name_mapping,
        }
        for error in errors:
            if update.get("action_type"):
                break
            handlers[error.type](entry, error_types, reasons, update)

        if not reasons:
            return None
        return AutoFixSuggestion(reason="\n".join(reasons), **update)

    def _other_ids(self, entry: TermEntry, *, triple: bool) -> list[str]:
        if triple:
            key = _triple_key(entry)
            return [e.id for e in self.entries if e.id != entry.id and _triple_key(e) == key]
        key = normalize_key(entry.term_name)
        return [
            e.id for e in self.entries if e.id != entry.id and normalize_key(e.term_name) == key
        ]

    def _suggest_term_name_length(
        self, entry: TermEntry, error_types: set[str], reasons: list[str], update: dict[str, Any]
    ) -> None:
        reasons.append(
            f"용어명 '{entry.term_name}'은(는) 2단어 이상의 조합이어야 합니다. 해당 항목을 삭제해주세요."
        )
        update["action_type"] = FixAction.DELETE_TERM

    def _suggest_duplicate(
        self, entry: TermEntry, reasons: list[str], update: dict[str, Any], *, triple: bool
    ) -> None:
        others = self._other_ids(entry, triple=triple)
        if not others:
            return
        subject = (
            f"용어명 '{entry.term_name}', 컬럼명 '{entry.column_name}', "
            f"도메인명 '{entry.domain_name}' 조합이"
            if triple
            else f"용어명 '{entry.term_name}'은(는)"
        )
        reasons.append(
            f"{subject} 현재 파일 내에서 중복되어 사용되고 있습니다. "
            f"중복된 항목 ID: {', '.join(others)}. 중복 항목 중 하나를 삭제해주세요."
        )
        update["action_type"] = FixAction.DELETE_DUPLICATE
        update["metadata"]["duplicateEntryIds"] = [entry.id, *others]

    def _suggest_term_name_duplicate(
        self, entry: TermEntry, error_types: set[str], reasons: list[str], update: dict[str, Any]
    ) -> None:
        self._suggest_duplicate(entry, reasons, update, triple=False)

    def _suggest_term_uniqueness(
        self, entry: TermEntry, error_types: set[str], reasons: list[str], update: dict[str, Any]
    ) -> None:
        self._suggest_duplicate(entry, reasons, update, triple=True)

    def _synonym_recommendations(self, word: str) -> list[str]:
        """금칙어/이음동의어로 등록된 단어의 표준단어명 추천."""
        target = normalize_key(word)
        recommendations: list[str] = []
        for vocab in self.context.vocabulary:
            if not vocab.standard_name:
                continue
            aliases = [*vocab.forbidden_words, *vocab.synonyms]
            if any(normalize_key(alias) == target for alias in aliases):
                if vocab.standard_name not in recommendations:
                    recommendations.append(vocab.standard_name)
        return recommendations

    def _suggest_term_name_mapping(
        self, entry: TermEntry, error_types: set[str], reasons: list[str], update: dict[str, Any]
    ) -> None:
        term_parts = split_name_tokens(entry.term_name)
        column_parts = split_name_tokens(entry.column_name)
        unmapped = _unmapped_tokens(entry.term_name, self.vocabulary.by_standard_name)

        with_recommendations: list[dict[str, Any]] = []
        without_recommendations: list[str] = []
        for part in unmapped:
            recommendations = self._synonym_recommendations(part)
            if recommendations:
                with_recommendations.append({"part": part, "recommendations": recommendations})
            else:
                without_recommendations.append(part)

        if with_recommendations:
            hints = ", ".join(
                "'{}' → 표준단어명 '{}'로 수정 권장".format(
                    item["part"], "' 또는 '".join(item["recommendations"])
                )
                for item in with_recommendations
            )
            reasons.append(f"용어명의 다음 단어들이 단어집에 등록되지 않았습니다. {hints}.")
            update["action_type"] = FixAction.SELECT_SYNONYM
            update["metadata"]["unmappedParts"] = with_recommendations

        if without_recommendations:
            reasons.append(
                "용어명의 다음 단어들을 단어집에 표준단어명으로 추가해주세요: "
                f"{', '.join(without_recommendations)}."
            )
            if not update.get("action_type"):
                to_add = []
                for part in without_recommendations:
                    index = term_parts.index(part)
                    abbreviation = (
                        column_parts[index]
                        if index < len(column_parts)
                        else "".join(ch for ch in part.upper() if ch.isascii() and ch.isalnum())
                    )
                    to_add.append({"standardName": part, "abbreviation": abbreviation})
                update["action_type"] = FixAction.ADD_VOCABULARY
                update["metadata"]["vocabularyFilename"] = self.context.vocabulary_filename
                update["metadata"]["vocabularyToAdd"] = to_add

    def _suggest_column_name_mapping(
        self, entry: TermEntry, error_types: set[str], reasons: list[str], update: dict[str, Any]
    ) -> None:
        term_parts = split_name_tokens(entry.term_name)
        column_parts = split_name_tokens(entry.column_name)

        if len(term_parts) != len(column_parts):
            reasons.append(
                f"용어명 '{entry.term_name}'({len(term_parts)}개 단어)과 컬럼명 "
                f"'{entry.column_name}'({len(column_parts)}개 단어)의 단어 개수가 일치하지 않습니다. "
                "용어명의 각 단어에 대응하는 영문약어로 컬럼명을 구성해야 합니다."
            )
            return

        unmapped_indices = [
            i
            for i, part in enumerate(column_parts)
            if self.vocabulary.by_abbreviation(part) is None
        ]
        if TERM_NAME_MAPPING in error_types:
            reasons.append(
                "컬럼명의 다음 단어들을 단어집에 영문약어로 추가해주세요: "
                f"{', '.join(column_parts[i] for i in unmapped_indices)}."
            )
            return

        fixes: list[dict[str, Any]] = []
        hints: list[str] = []
        for i in unmapped_indices:
            vocab = self.vocabulary.by_standard_name(term_parts[i])
            if vocab is None:
                continue
            hints.append(
                f"컬럼명의 {i + 1}번째 단어 '{column_parts[i]}' → 용어명의 {i + 1}번째 단어 "
                f"'{term_parts[i]}'에 해당하는 영문약어 '{vocab.abbreviation}'로 수정 권장"
            )
            fixes.append({"index": i, "oldValue": column_parts[i], "newValue": vocab.abbreviation})

        if fixes:
            fixed = list(column_parts)
            for fix in fixes:
                fixed[fix["index"]] = fix["newValue"]
            reasons.append(", ".join(hints))
            update["action_type"] = FixAction.FIX_COLUMN_NAME
            update["metadata"]["columnNameFixes"] = fixes
            update["column_name"] = "_".join(fixed)

    def _suggest_term_name_suffix(
        self, entry: TermEntry, error_types: set[str], reasons: list[str], update: dict[str, Any]
    ) -> None:
        suffix = split_name_tokens(entry.term_name)[-1]
        suffix_entry = self.vocabulary.by_standard_name(suffix)
        if suffix_entry is None:
            return
        reasons.append(
            f"용어명의 접미사 '{suffix}'은(는) 형식단어여부가 N으로 설정되어 있어 사용할 수 없습니다. "
            "형식단어여부를 Y로 변경해주세요."
        )
        update["action_type"] = FixAction.FIX_VOCABULARY_SUFFIX
        update["metadata"].update(
            {
                "suffixWord": suffix,
                "vocabularyFilename": self.context.vocabulary_filename,
                "vocabularyEntryId": suffix_entry.id,
            }
        )

    def _recommended_domain_names(self, suffix: str) -> list[str]:
        """접미사 단어의 도메인분류에 속한 표준도메인명."""
        suffix_key = normalize_key(suffix)
        categories = {
            normalize_key(vocab.domain_category)
            for vocab in self.context.vocabulary
            if normalize_key(vocab.standard_name) == suffix_key
            and vocab.domain_category
            and vocab.is_domain_category_mapped is not False
        }
        recommended: list[str] = []
        for domain in self.context.domains:
            name = domain.standard_domain_name.strip()
            in_category = normalize_key(domain.domain_category) in categories
            if name and in_category and name not in recommended:
                recommended.append(name)
        return recommended

    def _suggest_domain_name_mapping(
        self, entry: TermEntry, error_types: set[str], reasons: list[str], update: dict[str, Any]
    ) -> None:
        term_parts = split_name_tokens(entry.term_name)
        if not term_parts:
            return
        suffix = term_parts[-1]
        if self.vocabulary.by_standard_name(suffix) is None:
            return

        recommended = self._recommended_domain_names(suffix)
        prefix = (
            f"용어명 접미사 '{suffix}'와(과) 매핑된 도메인명을 찾지 못했습니다. "
            f"혹은 도메인명 '{entry.domain_name}'이(가) 존재하지 않습니다."
        )
        if recommended:
            reasons.append(f"{prefix} {', '.join(recommended)} 중 하나로 수정해주세요.")
            update["metadata"]["recommendedDomainNames"] = recommended
            update["domain_name"] = recommended[0]
        else:
            reasons.append(f"{prefix} 올바른 도메인명으로 수정해주세요.")
        update["action_type"] = FixAction.AUTO_FIX_TERM_EDITOR
        update["metadata"]["suffixWord"] = suffix


def validate_terms(
    entries: Sequence[TermEntry], context: TermValidationContext
) -> ValidationReport[TermEntry]:
    """전체 용어 검증 (같은 파일 내 중복만 검사).

    Returns:
        실패 엔트리만 담은 ValidationReport (각 결과에 AutoFixSuggestion 포함)
    """
    checker = _TermChecker(entries, context)
    failed: list[ValidationResult[TermEntry]] = []
    for entry in entries:
        errors = checker.check(entry)
        if errors:
            failed.append(
                ValidationResult[TermEntry](
                    entry=entry, errors=errors, suggestions=checker.suggest(entry, errors)
                )
            )

    report = ValidationReport[TermEntry].from_results(len(entries), failed)
    logger.info(
        f"Term validation: total={report.total_count}, "
        f"failed={report.failed_count}, passed={report.passed_count}"
    )
    return report
