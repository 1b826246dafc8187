"""Validation result models.

검증 결과는 예외가 아닌 데이터입니다. 모든 이슈는 priority를 가지며
낮은 숫자가 먼저 표시됩니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import Field

from stdmeta.models.base import BaseEntry, StdModel

EntryT = TypeVar("EntryT", bound=BaseEntry)


class ValidationIssue(StdModel):
    """단일 검증 이슈."""

    type: str = Field(description="이슈 타입 (e.g., DOMAIN_NAME_MISMATCH)")
    code: str = Field(description="이슈 코드 (현재 type과 동일)")
    message: str
    field: str | None = Field(default=None, description="문제 필드 (camelCase)")
    priority: int = Field(ge=1, description="표시 우선순위 (낮을수록 먼저)")

    @classmethod
    def of(
        cls, issue_type: str, message: str, *, priority: int, field: str | None = None
    ) -> ValidationIssue:
        return cls(
            type=issue_type, code=issue_type, message=message, field=field, priority=priority
        )


def sort_issues(issues: Iterable[ValidationIssue]) -> list[ValidationIssue]:
    """priority 오름차순 안정 정렬."""
    return sorted(issues, key=lambda issue: issue.priority)


class FixAction(StrEnum):
    """용어 자동 수정 제안 액션."""

    DELETE_TERM = "DELETE_TERM"
    DELETE_DUPLICATE = "DELETE_DUPLICATE"
    SELECT_SYNONYM = "SELECT_SYNONYM"
    ADD_VOCABULARY = "ADD_VOCABULARY"
    FIX_COLUMN_NAME = "FIX_COLUMN_NAME"
    FIX_VOCABULARY_SUFFIX = "FIX_VOCABULARY_SUFFIX"
    AUTO_FIX_TERM_EDITOR = "AUTO_FIX_TERM_EDITOR"


class AutoFixSuggestion(StdModel):
    """자동 수정 제안 (권고 전용, 적용은 호출자 책임)."""

    action_type: FixAction | None = None
    reason: str = ""
    term_name: str | None = None
    column_name: str | None = None
    domain_name: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ValidationResult(StdModel, Generic[EntryT]):
    """실패한 엔트리 1건의 검증 결과."""

    entry: EntryT
    errors: list[ValidationIssue]
    generated_domain_name: str | None = Field(default=None, description="도메인 검증 시 기대값")
    suggestions: AutoFixSuggestion | None = None


class ValidationReport(StdModel, Generic[EntryT]):
    """전체 검증 보고서."""

    total_count: int = 0
    failed_count: int = 0
    passed_count: int = 0
    failed_entries: list[ValidationResult[EntryT]] = Field(default_factory=list)

    @classmethod
    def from_results(
        cls, total_count: int, failed: list[ValidationResult[EntryT]]
    ) -> ValidationReport[EntryT]:
        return cls(
            total_count=total_count,
            failed_count=len(failed),
            passed_count=total_count - len(failed),
            failed_entries=failed,
        )
