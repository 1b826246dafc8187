"""Domain (도메인) models."""

from __future__ import annotations

from pydantic import Field

from stdmeta.models.base import BaseEntry


class DomainEntry(BaseEntry):
    """도메인 엔트리.

    standard_domain_name은 Name Generator가 domain_category + physical_data_type +
    data_length + decimal_places로부터 계산한 값과 같아야 합니다.
    """

    domain_group: str = Field(default="", description="공통표준도메인그룹명")
    domain_category: str = Field(default="", description="공통표준도메인분류명")
    standard_domain_name: str = Field(default="", description="공통표준도메인명 (계산 값)")
    logical_data_type: str = Field(default="", description="논리 데이터타입")
    physical_data_type: str = Field(default="", description="물리 데이터타입")
    data_length: str | None = Field(default=None, description="데이터길이")
    decimal_places: str | None = Field(default=None, description="데이터소수점길이")
    data_value: str | None = Field(default=None, description="데이터값")
    measurement_unit: str | None = Field(default=None, description="단위")
    revision: str | None = Field(default=None, description="재정차수")
    description: str | None = Field(default=None, description="공통표준도메인설명")
    storage_format: str | None = Field(default=None, description="저장 형식")
    display_format: str | None = Field(default=None, description="표현 형식")
    allowed_values: str | None = Field(default=None, description="허용값")
