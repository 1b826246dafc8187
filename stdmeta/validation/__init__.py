"""Validation - 도메인/용어/단어집 엔트리 검증.

검증 결과는 예외가 아닌 ValidationReport 데이터로 반환됩니다.
"""

from stdmeta.validation.domain import check_domain_name_uniqueness, validate_domains
from stdmeta.validation.models import (
    AutoFixSuggestion,
    FixAction,
    ValidationIssue,
    ValidationReport,
    ValidationResult,
    sort_issues,
)
from stdmeta.validation.term import TermValidationContext, validate_terms
from stdmeta.validation.vocabulary import validate_vocabulary

__all__ = [
    "AutoFixSuggestion",
    "FixAction",
    "TermValidationContext",
    "ValidationIssue",
    "ValidationReport",
    "ValidationResult",
    "check_domain_name_uniqueness",
    "sort_issues",
    "validate_domains",
    "validate_terms",
    "validate_vocabulary",
]
