"""Lookup key normalization.

매핑/관계 비교에 사용하는 키를 정규화하고 조합합니다.

- normalize_key: trim + 소문자화, 선택적으로 "-"를 빈 값으로 취급
- build_composite_key: 하나라도 비면 "" (매칭 불가), 아니면 "|"로 결합
- split_underscore_parts: 언더스코어 분리 + 정규화
"""

from __future__ import annotations

from collections.abc import Iterable

KEY_SEPARATOR = "|"
EMPTY_DASH = "-"

KeyPart = str | int | float | None


def normalize_key(value: KeyPart, *, empty_like_dash: bool = False) -> str:
    """비교용 키 정규화.

    Args:
        value: 원본 값 (문자열/숫자/None)
        empty_like_dash: True면 "-"도 빈 값으로 취급 (정의서 데이터 관례)

    Returns:
        trim + 소문자화된 키, 값이 없으면 ""
    """
    if value is None:
        return ""
    trimmed = str(value).strip()
    if not trimmed:
        return ""
    if empty_like_dash and trimmed == EMPTY_DASH:
        return ""
    return trimmed.lower()


def build_composite_key(parts: Iterable[KeyPart], *, empty_like_dash: bool = False) -> str:
    """정규화된 복합 키 생성.

    부분 키로 인한 오매칭을 막기 위해, 하나라도 비어 있으면 ""를 반환합니다.

    Example:
        >>> build_composite_key([" MAIN ", "사용자"])
        'main|사용자'
        >>> build_composite_key(["MAIN", "-"], empty_like_dash=True)
        ''
    """
    normalized = [normalize_key(part, empty_like_dash=empty_like_dash) for part in parts]
    if not normalized or any(part == "" for part in normalized):
        return ""
    return KEY_SEPARATOR.join(normalized)


def split_name_tokens(value: str | None) -> list[str]:
    """언더스코어 분리 (대소문자 유지, 빈 토큰 제거)."""
    if not value:
        return []
    return [token for token in (part.strip() for part in value.split("_")) if token]


def split_underscore_parts(value: str | None) -> list[str]:
    """언더스코어 분리 + 각 토큰 소문자화."""
    return [token.lower() for token in split_name_tokens(value)]
