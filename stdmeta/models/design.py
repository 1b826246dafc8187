"""Database design (5개 정의서) models.

데이터베이스 → 엔터티 → 속성, 엔터티 ↔ 테이블 → 컬럼, 속성 ↔ 컬럼 관계는
id가 아닌 이름 기반으로 연결됩니다. "-"는 "값 없음"을 의미하는 관례입니다.

- DatabaseEntry, EntityEntry, AttributeEntry, TableEntry, ColumnEntry
- MappingContext: 검증기/동기화 계획기에 전달되는 단일 스냅샷
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError

from stdmeta.core.exceptions import ContextShapeError
from stdmeta.models.base import BaseEntry, StdModel
from stdmeta.models.domain import DomainEntry

# ─── 정의서 엔트리 ────────────────────────────────────────────────────


class DatabaseEntry(BaseEntry):
    """데이터베이스 정의서 엔트리."""

    organization_name: str = Field(default="", description="기관명")
    department_name: str = Field(default="", description="부서명")
    applied_task: str = Field(default="", description="적용업무")
    related_law: str = Field(default="", description="관련법령")
    build_date: str = Field(default="", description="구축일자")
    os_info: str = Field(default="", description="운영체제정보")
    exclusion_reason: str = Field(default="", description="수집제외사유")
    logical_db_name: str | None = Field(default=None, description="논리DB명")
    physical_db_name: str | None = Field(default=None, description="물리DB명")
    db_description: str | None = Field(default=None, description="DB설명")
    dbms_info: str | None = Field(default=None, description="DBMS정보")


class EntityEntry(BaseEntry):
    """엔터티 정의서 엔트리."""

    super_type_entity_name: str = Field(default="", description="수퍼타입엔터티명")
    logical_db_name: str | None = Field(default=None, description="논리DB명")
    schema_name: str | None = Field(default=None, description="스키마명")
    entity_name: str | None = Field(default=None, description="엔터티명")
    entity_description: str | None = Field(default=None, description="엔터티설명")
    primary_identifier: str | None = Field(default=None, description="주식별자")
    table_korean_name: str | None = Field(default=None, description="테이블한글명")


class AttributeEntry(BaseEntry):
    """속성 정의서 엔트리."""

    required_input: str = Field(default="", description="필수입력여부")
    ref_entity_name: str = Field(default="", description="참조엔터티명")
    schema_name: str | None = Field(default=None, description="스키마명")
    entity_name: str | None = Field(default=None, description="엔터티명")
    attribute_name: str | None = Field(default=None, description="속성명")
    attribute_type: str | None = Field(default=None, description="속성유형")
    identifier_flag: str | None = Field(default=None, description="식별자여부")
    ref_attribute_name: str | None = Field(default=None, description="참조속성명")
    attribute_description: str | None = Field(default=None, description="속성설명")


class TableEntry(BaseEntry):
    """테이블 정의서 엔트리."""

    business_classification: str = Field(default="", description="업무분류체계")
    table_volume: str = Field(default="", description="테이블볼륨")
    non_public_reason: str = Field(default="", description="비공개사유")
    open_data_list: str = Field(default="", description="개방데이터목록")
    physical_db_name: str | None = Field(default=None, description="물리DB명")
    table_owner: str | None = Field(default=None, description="테이블소유자")
    subject_area: str | None = Field(default=None, description="주제영역")
    schema_name: str | None = Field(default=None, description="스키마명")
    table_english_name: str | None = Field(default=None, description="테이블영문명")
    table_korean_name: str | None = Field(default=None, description="테이블한글명")
    table_type: str | None = Field(default=None, description="테이블유형")
    related_entity_name: str | None = Field(default=None, description="관련엔터티명")
    table_description: str | None = Field(default=None, description="테이블설명")
    retention_period: str | None = Field(default=None, description="보존기간")
    occurrence_cycle: str | None = Field(default=None, description="발생주기")
    public_flag: str | None = Field(default=None, description="공개/비공개여부")


class ColumnEntry(BaseEntry):
    """컬럼 정의서 엔트리."""

    data_length: str = Field(default="", description="자료길이")
    data_decimal_length: str = Field(default="", description="자료소수점길이")
    data_format: str = Field(default="", description="자료형식")
    pk_info: str = Field(default="", description="PK정보")
    index_name: str = Field(default="", description="인덱스명")
    index_order: str = Field(default="", description="인덱스순번")
    ak_info: str = Field(default="", description="AK정보")
    constraint: str = Field(default="", description="제약조건")
    scope_flag: str | None = Field(default=None, description="사업범위여부")
    subject_area: str | None = Field(default=None, description="주제영역")
    schema_name: str | None = Field(default=None, description="스키마명")
    table_english_name: str | None = Field(default=None, description="테이블영문명")
    column_english_name: str | None = Field(default=None, description="컬럼영문명")
    column_korean_name: str | None = Field(default=None, description="컬럼한글명")
    column_description: str | None = Field(default=None, description="컬럼설명")
    related_entity_name: str | None = Field(default=None, description="연관엔터티명")
    data_type: str | None = Field(default=None, description="자료타입")
    not_null_flag: str | None = Field(default=None, description="NOTNULL여부")
    fk_info: str | None = Field(default=None, description="FK정보")
    personal_info_flag: str | None = Field(default=None, description="개인정보여부")
    encryption_flag: str | None = Field(default=None, description="암호화여부")
    public_flag: str | None = Field(default=None, description="공개/비공개여부")


# ─── Label helpers ───────────────────────────────────────────────────


def entity_label(entity: EntityEntry) -> str:
    return entity.entity_name or entity.table_korean_name or entity.id


def attribute_label(attribute: AttributeEntry) -> str:
    return attribute.attribute_name or attribute.id


def table_label(table: TableEntry) -> str:
    return table.table_english_name or table.table_korean_name or table.id


def column_label(column: ColumnEntry) -> str:
    return column.column_english_name or column.column_korean_name or column.id


# ─── Mapping Context ─────────────────────────────────────────────────


class MappingContext(StdModel):
    """5개 정의서 + 도메인의 단일 스냅샷.

    6개 관계 검증은 모두 같은 스냅샷을 사용해야 결과가 서로 일관됩니다.
    """

    databases: list[DatabaseEntry] = Field(default_factory=list)
    entities: list[EntityEntry] = Field(default_factory=list)
    attributes: list[AttributeEntry] = Field(default_factory=list)
    tables: list[TableEntry] = Field(default_factory=list)
    columns: list[ColumnEntry] = Field(default_factory=list)
    domains: list[DomainEntry] = Field(default_factory=list)

    @classmethod
    def coerce(cls, value: MappingContext | dict[str, Any]) -> MappingContext:
        """MappingContext 또는 dict(camelCase/snake_case)를 MappingContext로 변환.

        Raises:
            ContextShapeError: 형태가 잘못된 경우 (호출자 계약 위반)
        """
        if isinstance(value, MappingContext):
            return value
        if not isinstance(value, dict):
            msg = "MappingContext must be a MappingContext or a dict"
            raise ContextShapeError(msg, context={"got": type(value).__name__})
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            msg = "Malformed MappingContext"
            raise ContextShapeError(msg, context={"errors": e.error_count()}) from e
