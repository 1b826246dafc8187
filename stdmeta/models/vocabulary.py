"""Vocabulary (단어집) models.

- VocabularyEntry: 표준단어 ↔ 영문약어/영문명 매핑 (명명 기준의 루트)
- DuplicateInfo: 필드별 중복 여부
- ForbiddenWordEntry: 금지어
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from stdmeta.models.base import BaseEntry, StdModel, now_iso


class DuplicateInfo(StdModel):
    """필드별 중복 여부."""

    standard_name: bool = False
    abbreviation: bool = False
    english_name: bool = False

    @property
    def has_any(self) -> bool:
        return self.standard_name or self.abbreviation or self.english_name


class VocabularyEntry(BaseEntry):
    """단어집 엔트리."""

    standard_name: str = Field(default="", description="표준단어명 (한국어)")
    abbreviation: str = Field(default="", description="영문약어")
    english_name: str = Field(default="", description="영문명")
    description: str = Field(default="", description="설명")
    is_formal_word: bool | None = Field(default=None, description="형식단어여부")
    domain_group: str | None = Field(default=None, description="도메인그룹")
    domain_category: str | None = Field(default=None, description="도메인분류명")
    is_domain_category_mapped: bool | None = Field(default=None, description="도메인분류 매핑 여부")
    synonyms: list[str] = Field(default_factory=list, description="이음동의어")
    forbidden_words: list[str] = Field(default_factory=list, description="금칙어")
    duplicate_info: DuplicateInfo | None = Field(default=None, description="중복 정보")


class ForbiddenWordType(StrEnum):
    """금지어 적용 대상."""

    STANDARD_NAME = "standardName"
    ABBREVIATION = "abbreviation"


class ForbiddenWordEntry(StdModel):
    """금지어 엔트리."""

    id: str
    keyword: str = Field(description="금지어 키워드")
    type: ForbiddenWordType = Field(description="적용 타입")
    reason: str | None = Field(default=None, description="금지 사유")
    created_at: str = Field(default_factory=now_iso)
