"""Term (용어) models."""

from __future__ import annotations

from pydantic import Field

from stdmeta.models.base import BaseEntry


class TermEntry(BaseEntry):
    """용어 엔트리."""

    term_name: str = Field(default="", description="용어명 (단어집 standardName 기반)")
    column_name: str = Field(default="", description="칼럼명 (단어집 abbreviation 기반)")
    domain_name: str = Field(default="", description="도메인명 (standardDomainName 참조)")
    is_mapped_term: bool = Field(default=False, description="용어명 매핑 성공 여부")
    is_mapped_column: bool = Field(default=False, description="칼럼명 매핑 성공 여부")
    is_mapped_domain: bool = Field(default=False, description="도메인 매핑 성공 여부")
    unmapped_term_parts: list[str] = Field(default_factory=list, description="미매핑 용어명 조각")
    unmapped_column_parts: list[str] = Field(default_factory=list, description="미매핑 칼럼명 조각")
