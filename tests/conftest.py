"""Shared fixtures for tests.

이 모듈은 테스트에서 공통으로 사용되는 픽스처를 제공합니다.

- 단어집/도메인 샘플 (용어/도메인 검증)
- 5개 정의서 MappingContext 샘플 (관계 검증/동기화)
- tmp_path 기반 데이터 디렉토리 (store/CLI)
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from stdmeta.models.design import (
    AttributeEntry,
    ColumnEntry,
    DatabaseEntry,
    EntityEntry,
    MappingContext,
    TableEntry,
)
from stdmeta.models.domain import DomainEntry
from stdmeta.models.vocabulary import VocabularyEntry

# ---------------------------------------------------------------------------
# 디렉토리 경로 → pytest 마커 자동 매핑
# ---------------------------------------------------------------------------
_DIR_MARKER_MAP: dict[str, str] = {
    "/cli/": "integration",
    "/store/": "integration",
    "/core/": "unit",
    "/models/": "unit",
    "/config/": "unit",
    "/naming/": "unit",
    "/validation/": "unit",
    "/relations/": "unit",
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """디렉토리 경로 기반 자동 마커 부여."""
    for item in items:
        fspath = str(item.fspath)
        for dir_pattern, marker_name in _DIR_MARKER_MAP.items():
            if dir_pattern in fspath:
                item.add_marker(getattr(pytest.mark, marker_name))
                break


_TS = "2026-01-01T00:00:00.000Z"


# ---------------------------------------------------------------------------
# Vocabulary / Domain
# ---------------------------------------------------------------------------


@pytest.fixture
def vocabulary_entries() -> list[VocabularyEntry]:
    """샘플 단어집.

    - 사용자/고객: 일반 단어 (형식단어 아님)
    - 번호/이름/코드: 형식단어 (도메인분류 매핑)
    - 고객: 이음동의어 '손님', 금칙어 '클라이언트'
    """
    return [
        VocabularyEntry(
            id="v-user",
            standard_name="사용자",
            abbreviation="USER",
            english_name="User",
            is_formal_word=False,
            created_at=_TS,
            updated_at=_TS,
        ),
        VocabularyEntry(
            id="v-no",
            standard_name="번호",
            abbreviation="NO",
            english_name="Number",
            is_formal_word=True,
            domain_category="번호",
            is_domain_category_mapped=True,
            created_at=_TS,
            updated_at=_TS,
        ),
        VocabularyEntry(
            id="v-name",
            standard_name="이름",
            abbreviation="NM",
            english_name="Name",
            is_formal_word=True,
            domain_category="명",
            is_domain_category_mapped=True,
            created_at=_TS,
            updated_at=_TS,
        ),
        VocabularyEntry(
            id="v-code",
            standard_name="코드",
            abbreviation="CD",
            english_name="Code",
            is_formal_word=True,
            domain_category="코드",
            created_at=_TS,
            updated_at=_TS,
        ),
        VocabularyEntry(
            id="v-customer",
            standard_name="고객",
            abbreviation="CUST",
            english_name="Customer",
            is_formal_word=False,
            synonyms=["손님"],
            forbidden_words=["클라이언트"],
            created_at=_TS,
            updated_at=_TS,
        ),
    ]


@pytest.fixture
def domain_entries() -> list[DomainEntry]:
    """샘플 도메인 (표준도메인명이 모두 계산값과 일치)."""
    return [
        DomainEntry(
            id="d-no",
            domain_group="공통",
            domain_category="번호",
            standard_domain_name="번호_VARCHAR(20)",
            physical_data_type="VARCHAR",
            data_length="20",
            created_at=_TS,
            updated_at=_TS,
        ),
        DomainEntry(
            id="d-name",
            domain_group="공통",
            domain_category="명",
            standard_domain_name="명_VARCHAR(100)",
            physical_data_type="VARCHAR",
            data_length="100",
            created_at=_TS,
            updated_at=_TS,
        ),
        DomainEntry(
            id="d-amount",
            domain_group="공통",
            domain_category="금액",
            standard_domain_name="금액_DECIMAL(15,2)",
            physical_data_type="DECIMAL",
            data_length="15",
            decimal_places="2",
            created_at=_TS,
            updated_at=_TS,
        ),
    ]


# ---------------------------------------------------------------------------
# Design definitions
# ---------------------------------------------------------------------------


@pytest.fixture
def relation_context() -> MappingContext:
    """6개 관계 규칙마다 유효 1건 + 무효 1건을 갖는 스냅샷."""
    return MappingContext(
        databases=[
            DatabaseEntry(
                id="db-1",
                organization_name="기관",
                department_name="부서",
                applied_task="업무",
                related_law="법령",
                build_date="2026-01-01",
                os_info="Linux",
                exclusion_reason="-",
                logical_db_name="LDB_MAIN",
                physical_db_name="PDB_MAIN",
            ),
        ],
        entities=[
            EntityEntry(
                id="entity-1",
                logical_db_name="LDB_MAIN",
                schema_name="BKSP",
                entity_name="사용자",
                table_korean_name="사용자",
            ),
            EntityEntry(
                id="entity-2",
                logical_db_name="LDB_MISSING",
                schema_name="BKSP",
                entity_name="미존재엔터티",
                table_korean_name="미존재엔터티",
            ),
        ],
        attributes=[
            AttributeEntry(
                id="attr-1",
                required_input="Y",
                ref_entity_name="-",
                schema_name="BKSP",
                entity_name="사용자",
                attribute_name="이름",
            ),
            AttributeEntry(
                id="attr-2",
                required_input="Y",
                ref_entity_name="-",
                schema_name="BKSP",
                entity_name="없는엔터티",
                attribute_name="없는속성",
            ),
        ],
        tables=[
            TableEntry(
                id="table-1",
                physical_db_name="PDB_MAIN",
                schema_name="BKSP",
                table_english_name="TB_USER",
                related_entity_name="사용자",
            ),
            TableEntry(
                id="table-2",
                physical_db_name="PDB_MISSING",
                schema_name="BKSP",
                table_english_name="TB_UNKNOWN",
                related_entity_name="없는엔터티",
            ),
        ],
        columns=[
            ColumnEntry(
                id="col-1",
                schema_name="BKSP",
                table_english_name="TB_USER",
                column_english_name="USER_NM",
                column_korean_name="이름",
                related_entity_name="사용자",
            ),
            ColumnEntry(
                id="col-2",
                schema_name="BKSP",
                table_english_name="TB_MISSING",
                column_english_name="MISSING_NM",
                column_korean_name="없는컬럼",
                related_entity_name="사용자",
            ),
        ],
    )


@pytest.fixture
def sync_context() -> MappingContext:
    """동기화 대상 스냅샷.

    - table-1: relatedEntityName이 엔터티 한글명('사용자테이블')으로 입력됨
    - col-1: tableEnglishName이 테이블 한글명으로 입력됨
    - col-2: schemaName/relatedEntityName 누락
    - attr-1: 정확히 연결되는 컬럼 없음 (부분 일치 후보 1건)
    """
    return MappingContext(
        entities=[
            EntityEntry(
                id="entity-1",
                schema_name="MAIN",
                entity_name="사용자",
                table_korean_name="사용자테이블",
            ),
        ],
        attributes=[
            AttributeEntry(
                id="attr-1",
                schema_name="MAIN",
                entity_name="사용자",
                attribute_name="사용자아이디코드",
                required_input="Y",
                ref_entity_name="-",
            ),
        ],
        tables=[
            TableEntry(
                id="table-1",
                schema_name="MAIN",
                table_english_name="TB_USER",
                table_korean_name="사용자테이블",
                related_entity_name="사용자테이블",
            ),
        ],
        columns=[
            ColumnEntry(
                id="col-1",
                schema_name="MAIN",
                table_english_name="사용자테이블",
                column_english_name="USER_ID",
                column_korean_name="사용자아이디",
                related_entity_name="사용자",
            ),
            ColumnEntry(
                id="col-2",
                schema_name="",
                table_english_name="TB_USER",
                column_english_name="USER_NAME",
                column_korean_name="사용자이름",
                related_entity_name="",
            ),
        ],
    )


# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------


def _write_data_file(
    data_dir: Path, data_type: str, entries: list[Any], filename: str = ""
) -> Path:
    """{entries, lastUpdated, totalCount} 형태의 JSON 파일 작성."""
    path = data_dir / data_type / (filename or f"{data_type}.json")
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "entries": [
            entry.to_json_dict() if hasattr(entry, "to_json_dict") else entry for entry in entries
        ],
        "lastUpdated": _TS,
        "totalCount": len(entries),
    }
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def write_data(data_dir: Path) -> Callable[..., Path]:
    """data_dir에 타입별 데이터 파일을 작성하는 헬퍼."""

    def _write(data_type: str, entries: list[Any], filename: str = "") -> Path:
        return _write_data_file(data_dir, data_type, entries, filename)

    return _write
