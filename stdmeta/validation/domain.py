"""Domain validation.

표준도메인명은 항상 Name Generator 결과와 같아야 합니다. 불일치는 검증
오류로 보고하고 자동으로 고치지 않습니다.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from loguru import logger

from stdmeta.models.domain import DomainEntry
from stdmeta.naming.generator import generate_standard_domain_name
from stdmeta.naming.keys import KeyPart, normalize_key
from stdmeta.validation.models import (
    ValidationIssue,
    ValidationReport,
    ValidationResult,
    sort_issues,
)

REQUIRED_FIELD = "REQUIRED_FIELD"
DOMAIN_NAME_MISMATCH = "DOMAIN_NAME_MISMATCH"
DOMAIN_NAME_DUPLICATE = "DOMAIN_NAME_DUPLICATE"

DOMAIN_ERROR_PRIORITY: dict[str, int] = {
    REQUIRED_FIELD: 1,
    DOMAIN_NAME_MISMATCH: 2,
    DOMAIN_NAME_DUPLICATE: 3,
}


def generate_for_entry(entry: DomainEntry) -> str:
    return generate_standard_domain_name(
        entry.domain_category, entry.physical_data_type, entry.data_length, entry.decimal_places
    )


def _validate_entry(
    entry: DomainEntry, generated: str, generated_counts: Counter[str]
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    if not entry.domain_category.strip():
        issues.append(
            ValidationIssue.of(
                REQUIRED_FIELD,
                "도메인 분류명이 필요합니다.",
                field="domainCategory",
                priority=DOMAIN_ERROR_PRIORITY[REQUIRED_FIELD],
            )
        )
    if not entry.physical_data_type.strip():
        issues.append(
            ValidationIssue.of(
                REQUIRED_FIELD,
                "물리 데이터타입이 필요합니다.",
                field="physicalDataType",
                priority=DOMAIN_ERROR_PRIORITY[REQUIRED_FIELD],
            )
        )
    if generated and entry.standard_domain_name != generated:
        issues.append(
            ValidationIssue.of(
                DOMAIN_NAME_MISMATCH,
                f"표준도메인명과 계산값이 다릅니다. 기대값: {generated}",
                field="standardDomainName",
                priority=DOMAIN_ERROR_PRIORITY[DOMAIN_NAME_MISMATCH],
            )
        )
    if generated and generated_counts[generated] > 1:
        issues.append(
            ValidationIssue.of(
                DOMAIN_NAME_DUPLICATE,
                "생성되는 표준도메인명이 중복됩니다.",
                field="standardDomainName",
                priority=DOMAIN_ERROR_PRIORITY[DOMAIN_NAME_DUPLICATE],
            )
        )
    return issues


def validate_domains(entries: Sequence[DomainEntry]) -> ValidationReport[DomainEntry]:
    """전체 도메인 검증.

    1차 패스에서 계산된 표준도메인명 → 개수 맵을 만든 뒤 엔트리별로 평가합니다.
    중복 여부는 쌍별 비교가 아닌 전체 생성 집합에 의존합니다.

    Returns:
        실패 엔트리만 담은 ValidationReport (각 결과에 generated_domain_name 포함)
    """
    generated_by_id = {entry.id: generate_for_entry(entry) for entry in entries}
    generated_counts = Counter(name for name in generated_by_id.values() if name)

    failed: list[ValidationResult[DomainEntry]] = []
    for entry in entries:
        generated = generated_by_id[entry.id]
        issues = _validate_entry(entry, generated, generated_counts)
        if issues:
            failed.append(
                ValidationResult[DomainEntry](
                    entry=entry, errors=sort_issues(issues), generated_domain_name=generated
                )
            )

    report = ValidationReport[DomainEntry].from_results(len(entries), failed)
    logger.info(
        f"Domain validation: total={report.total_count}, "
        f"failed={report.failed_count}, passed={report.passed_count}"
    )
    return report


def check_domain_name_uniqueness(
    category: str,
    physical_type: str,
    existing: Iterable[DomainEntry],
    *,
    length: KeyPart = None,
    decimals: KeyPart = None,
    exclude_id: str | None = None,
) -> ValidationIssue | None:
    """단일 후보 도메인의 필수 필드/표준도메인명 유일성 검사.

    Args:
        category: 도메인분류명
        physical_type: 물리 데이터타입
        existing: 비교 대상 도메인 (여러 파일을 합친 목록 가능)
        exclude_id: 수정 중인 엔트리 id (비교에서 제외)

    Returns:
        첫 번째 이슈 또는 None
    """
    if not (category or "").strip():
        return ValidationIssue.of(
            REQUIRED_FIELD,
            "도메인 분류명이 필요합니다.",
            field="domainCategory",
            priority=DOMAIN_ERROR_PRIORITY[REQUIRED_FIELD],
        )
    if not (physical_type or "").strip():
        return ValidationIssue.of(
            REQUIRED_FIELD,
            "물리 데이터타입이 필요합니다.",
            field="physicalDataType",
            priority=DOMAIN_ERROR_PRIORITY[REQUIRED_FIELD],
        )

    candidate = normalize_key(
        generate_standard_domain_name(category, physical_type, length, decimals)
    )
    for entry in existing:
        if entry.id == exclude_id:
            continue
        if normalize_key(entry.standard_domain_name) == candidate:
            return ValidationIssue.of(
                DOMAIN_NAME_DUPLICATE,
                f"이미 존재하는 표준도메인명입니다: {entry.standard_domain_name}",
                field="standardDomainName",
                priority=DOMAIN_ERROR_PRIORITY[DOMAIN_NAME_DUPLICATE],
            )
    return None
