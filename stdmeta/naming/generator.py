"""Canonical name generation.

단어집/도메인 구성 요소로부터 표준 이름을 계산합니다.

- generate_standard_domain_name: 도메인분류명 + 물리타입 (+ 길이/소수점) → 표준도메인명
- VocabularyIndex: 표준단어명/영문약어 해시 조회
- derive_term_names: 한글 용어 → 용어명/칼럼명 (미매핑 토큰은 실패가 아닌 부분 결과)
- convert_term: ko-to-en / en-to-ko 단방향 변환
- check_term_mapping / sync_term_mappings: 용어 매핑 플래그 재계산
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from stdmeta.models.domain import DomainEntry
from stdmeta.models.term import TermEntry
from stdmeta.models.vocabulary import VocabularyEntry
from stdmeta.naming.keys import KeyPart, normalize_key, split_name_tokens

UNMAPPED_PLACEHOLDER = "##"

# 길이 파라미터가 없는 타입: 괄호 생략
LENGTHLESS_TYPES: frozenset[str] = frozenset(
    {
        "DATE",
        "DATETIME",
        "TIME",
        "TIMESTAMP",
        "YEAR",
        "INT",
        "INTEGER",
        "BIGINT",
        "SMALLINT",
        "TINYINT",
        "MEDIUMINT",
        "SERIAL",
        "BIGSERIAL",
        "BOOLEAN",
        "BOOL",
        "TEXT",
        "LONGTEXT",
        "MEDIUMTEXT",
        "CLOB",
        "NCLOB",
        "BLOB",
        "LONGBLOB",
        "JSON",
        "UUID",
    }
)

# 소수점 자릿수를 (길이,소수점)으로 표현하는 타입
SCALED_NUMERIC_TYPES: frozenset[str] = frozenset(
    {"DECIMAL", "NUMERIC", "NUMBER", "FLOAT", "DOUBLE", "REAL", "DEC"}
)


def _format_number(value: KeyPart) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def generate_standard_domain_name(
    category: str | None,
    physical_type: str | None,
    length: KeyPart = None,
    decimals: KeyPart = None,
) -> str:
    """표준도메인명 생성 (순수 함수).

    Args:
        category: 도메인분류명 (e.g., "회원")
        physical_type: 물리 데이터타입 (e.g., "VARCHAR")
        length: 데이터길이
        decimals: 소수점자리수

    Returns:
        "{분류명}_{TYPE}" + "(길이)" 또는 "(길이,소수점)",
        분류명이나 타입이 비어 있으면 ""

    Example:
        >>> generate_standard_domain_name("회원", "VARCHAR", "10")
        '회원_VARCHAR(10)'
        >>> generate_standard_domain_name("금액", "decimal", 10, 2)
        '금액_DECIMAL(10,2)'
    """
    category_text = (category or "").strip()
    type_text = (physical_type or "").strip().upper()
    if not category_text or not type_text:
        return ""

    base = f"{category_text}_{type_text}"
    length_text = _format_number(length)
    if type_text in LENGTHLESS_TYPES or not length_text:
        return base

    decimals_text = _format_number(decimals)
    if decimals_text and type_text in SCALED_NUMERIC_TYPES:
        return f"{base}({length_text},{decimals_text})"
    return f"{base}({length_text})"


# ─── Vocabulary lookup ───────────────────────────────────────────────


class VocabularyIndex:
    """단어집 해시 조회 인덱스.

    표준단어명과 영문약어를 각각 정규화 키로 색인합니다.
    같은 키가 여러 번 나오면 먼저 등록된 단어가 우선합니다.
    """

    def __init__(self, entries: Iterable[VocabularyEntry]) -> None:
        self._by_standard_name: dict[str, VocabularyEntry] = {}
        self._by_abbreviation: dict[str, VocabularyEntry] = {}
        for entry in entries:
            name_key = normalize_key(entry.standard_name)
            abbr_key = normalize_key(entry.abbreviation)
            if name_key:
                self._by_standard_name.setdefault(name_key, entry)
            if abbr_key:
                self._by_abbreviation.setdefault(abbr_key, entry)

    def by_standard_name(self, token: str) -> VocabularyEntry | None:
        return self._by_standard_name.get(normalize_key(token))

    def by_abbreviation(self, token: str) -> VocabularyEntry | None:
        return self._by_abbreviation.get(normalize_key(token))

    def resolve(self, token: str) -> VocabularyEntry | None:
        """표준단어명 우선, 없으면 영문약어로 조회."""
        return self.by_standard_name(token) or self.by_abbreviation(token)


class TermNameDerivation(BaseModel):
    """용어명/칼럼명 생성 결과."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="입력 용어")
    term_name: str = Field(description="표준단어명 결합 결과")
    column_name: str = Field(description="영문약어 결합 결과")
    unmapped_parts: list[str] = Field(default_factory=list, description="단어집에 없는 토큰")

    @property
    def is_complete(self) -> bool:
        return not self.unmapped_parts


def derive_term_names(
    phrase: str, vocabulary: VocabularyIndex | Iterable[VocabularyEntry]
) -> TermNameDerivation:
    """한글 용어를 토큰 단위로 단어집에 매핑하여 용어명/칼럼명 생성.

    매핑 실패 토큰은 UNMAPPED_PLACEHOLDER로 채우고 unmapped_parts에 모읍니다.

    Example:
        >>> derive_term_names("사용자_번호", vocab).column_name
        'USER_NO'
    """
    index = vocabulary if isinstance(vocabulary, VocabularyIndex) else VocabularyIndex(vocabulary)
    term_tokens: list[str] = []
    column_tokens: list[str] = []
    unmapped: list[str] = []

    for token in split_name_tokens(phrase):
        entry = index.resolve(token)
        if entry is None:
            unmapped.append(token)
            term_tokens.append(UNMAPPED_PLACEHOLDER)
            column_tokens.append(UNMAPPED_PLACEHOLDER)
            continue
        term_tokens.append(entry.standard_name)
        column_tokens.append(entry.abbreviation)

    return TermNameDerivation(
        source=phrase,
        term_name="_".join(term_tokens),
        column_name="_".join(column_tokens),
        unmapped_parts=unmapped,
    )


class ConvertDirection(StrEnum):
    """용어 변환 방향."""

    KO_TO_EN = "ko-to-en"
    EN_TO_KO = "en-to-ko"


def convert_term(
    term: str,
    vocabulary: VocabularyIndex | Iterable[VocabularyEntry],
    direction: ConvertDirection = ConvertDirection.KO_TO_EN,
) -> str:
    """용어를 한 방향으로 변환 (매핑 실패 토큰은 "##").

    빈 토큰도 위치를 유지하기 위해 그대로 "##"로 변환합니다.
    """
    index = vocabulary if isinstance(vocabulary, VocabularyIndex) else VocabularyIndex(vocabulary)
    converted: list[str] = []
    for token in term.split("_"):
        if direction == ConvertDirection.KO_TO_EN:
            entry = index.by_standard_name(token)
            converted.append(entry.abbreviation if entry else UNMAPPED_PLACEHOLDER)
        else:
            entry = index.by_abbreviation(token)
            converted.append(entry.standard_name if entry else UNMAPPED_PLACEHOLDER)
    return "_".join(converted)


# ─── Term mapping ────────────────────────────────────────────────────


class TermMappingResult(BaseModel):
    """용어 매핑 검사 결과."""

    model_config = ConfigDict(frozen=True)

    is_mapped_term: bool
    is_mapped_column: bool
    is_mapped_domain: bool
    unmapped_term_parts: list[str] = Field(default_factory=list)
    unmapped_column_parts: list[str] = Field(default_factory=list)


def build_domain_name_set(domains: Iterable[DomainEntry]) -> set[str]:
    """도메인 표준도메인명 정규화 집합."""
    return {key for key in (normalize_key(d.standard_domain_name) for d in domains) if key}


def check_term_mapping(
    term_name: str,
    column_name: str,
    domain_name: str,
    vocabulary: VocabularyIndex,
    domain_names: set[str],
) -> TermMappingResult:
    """용어명/칼럼명/도메인명 매핑 여부 검사.

    - 용어명: 각 토큰이 단어집 표준단어명에 있어야 함
    - 칼럼명: 각 토큰이 단어집 영문약어에 있어야 함
    - 도메인명: 도메인 표준도메인명과 정확히(대소문자 무시) 일치해야 함
    """
    term_parts = split_name_tokens(term_name)
    column_parts = split_name_tokens(column_name)

    unmapped_term = [p for p in term_parts if vocabulary.by_standard_name(p) is None]
    unmapped_column = [p for p in column_parts if vocabulary.by_abbreviation(p) is None]

    return TermMappingResult(
        is_mapped_term=bool(term_parts) and not unmapped_term,
        is_mapped_column=bool(column_parts) and not unmapped_column,
        is_mapped_domain=normalize_key(domain_name) in domain_names,
        unmapped_term_parts=unmapped_term,
        unmapped_column_parts=unmapped_column,
    )


class TermSyncResult(BaseModel):
    """용어 매핑 동기화 결과."""

    model_config = ConfigDict(frozen=True)

    entries: list[TermEntry]
    updated: int = 0
    matched_term: int = 0
    matched_column: int = 0
    matched_domain: int = 0


def sync_term_mappings(
    terms: Iterable[TermEntry],
    vocabulary: Iterable[VocabularyEntry],
    domains: Iterable[DomainEntry],
) -> TermSyncResult:
    """모든 용어의 매핑 플래그/미매핑 조각을 재계산.

    변경이 없는 엔트리는 그대로 유지하고 updated_at도 갱신하지 않습니다.
    """
    index = VocabularyIndex(vocabulary)
    domain_names = build_domain_name_set(domains)

    synced: list[TermEntry] = []
    updated = matched_term = matched_column = matched_domain = 0
    for entry in terms:
        result = check_term_mapping(
            entry.term_name, entry.column_name, entry.domain_name, index, domain_names
        )
        matched_term += result.is_mapped_term
        matched_column += result.is_mapped_column
        matched_domain += result.is_mapped_domain

        patch = {
            field: value
            for field, value in result.model_dump().items()
            if getattr(entry, field) != value
        }
        if patch:
            updated += 1
            synced.append(entry.apply_patch(patch))
        else:
            synced.append(entry)

    logger.debug(
        f"Term mapping sync: total={len(synced)}, updated={updated}, "
        f"term={matched_term}, column={matched_column}, domain={matched_domain}"
    )
    return TermSyncResult(
        entries=synced,
        updated=updated,
        matched_term=matched_term,
        matched_column=matched_column,
        matched_domain=matched_domain,
    )
