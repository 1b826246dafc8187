"""Vocabulary duplicate detection.

표준단어명/영문약어/영문명 3개 필드 각각에 대해 대소문자 무시 중복을 찾습니다.
필드 간 그룹은 병합하지 않습니다 (중복 보고는 필드 단위).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from loguru import logger

from stdmeta.models.vocabulary import DuplicateInfo, VocabularyEntry
from stdmeta.naming.keys import normalize_key

UNIQUE_FIELDS: tuple[str, ...] = ("standard_name", "abbreviation", "english_name")


def get_duplicate_groups(entries: Iterable[VocabularyEntry]) -> list[list[VocabularyEntry]]:
    """필드별 중복 그룹 목록.

    스캔 중 필드별 값 → 첫 엔트리 맵을 만들고, 같은 값이 다시 나오면
    "field:value" 그룹을 시작(또는 확장)합니다. 빈 값은 비교하지 않습니다.

    Returns:
        크기 2 이상의 그룹 목록 (발견 순서)
    """
    seen: dict[str, dict[str, VocabularyEntry]] = {field: {} for field in UNIQUE_FIELDS}
    groups: dict[str, list[VocabularyEntry]] = {}

    for entry in entries:
        for field in UNIQUE_FIELDS:
            value = normalize_key(getattr(entry, field))
            if not value:
                continue
            first = seen[field].get(value)
            if first is None:
                seen[field][value] = entry
                continue
            groups.setdefault(f"{field}:{value}", [first]).append(entry)

    return [group for group in groups.values() if len(group) > 1]


def get_duplicate_details(entries: Sequence[VocabularyEntry]) -> dict[str, DuplicateInfo]:
    """id별 중복 필드 정보 (중복이 없는 id는 포함하지 않음)."""
    flags: dict[str, dict[str, bool]] = {}

    for field in UNIQUE_FIELDS:
        by_value: dict[str, list[VocabularyEntry]] = {}
        for entry in entries:
            value = normalize_key(getattr(entry, field))
            if value:
                by_value.setdefault(value, []).append(entry)

        for same_value in by_value.values():
            if len(same_value) < 2:
                continue
            for entry in same_value:
                flags.setdefault(entry.id, {})[field] = True

    return {entry_id: DuplicateInfo(**fields) for entry_id, fields in flags.items()}


def get_duplicate_ids(entries: Iterable[VocabularyEntry]) -> set[str]:
    """중복 그룹에 속한 모든 id."""
    return {entry.id for group in get_duplicate_groups(entries) for entry in group}


def mark_duplicates(entries: Sequence[VocabularyEntry]) -> list[VocabularyEntry]:
    """각 엔트리의 duplicate_info를 현재 스냅샷 기준으로 갱신.

    중복이 없는 엔트리는 duplicate_info를 None으로 되돌립니다.
    updated_at은 변경하지 않습니다 (파생 정보).
    """
    details = get_duplicate_details(entries)
    marked = [
        entry.apply_patch({"duplicate_info": details.get(entry.id)}, touch=False)
        if entry.duplicate_info != details.get(entry.id)
        else entry
        for entry in entries
    ]
    logger.debug(f"Duplicate marking: total={len(entries)}, duplicated={len(details)}")
    return marked
