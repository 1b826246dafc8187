"""Name-based key index with explicit ambiguity.

이름 기반 관계는 같은 키에 후보가 여러 개일 수 있습니다. 조회 결과는
UNMATCHED / AMBIGUOUS / RESOLVED 중 하나이며, 후보가 여럿이면 절대 첫 번째를
고르지 않습니다.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

from stdmeta.naming.keys import KeyPart, build_composite_key

T = TypeVar("T")


class LookupStatus(StrEnum):
    UNMATCHED = "unmatched"
    AMBIGUOUS = "ambiguous"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """태그된 조회 결과."""

    status: LookupStatus
    candidates: tuple[T, ...] = field(default=())

    @property
    def target(self) -> T | None:
        """RESOLVED일 때만 유일 후보, 그 외 None."""
        return self.candidates[0] if self.status == LookupStatus.RESOLVED else None

    @property
    def is_resolved(self) -> bool:
        return self.status == LookupStatus.RESOLVED

    @property
    def is_ambiguous(self) -> bool:
        return self.status == LookupStatus.AMBIGUOUS


class KeyIndex(Generic[T]):
    """정규화 복합 키 → 후보 목록.

    Example:
        >>> index = KeyIndex(tables, lambda t: [t.schema_name, t.table_english_name])
        >>> index.lookup(["MAIN", "TB_USER"]).status
        <LookupStatus.RESOLVED: 'resolved'>
    """

    def __init__(
        self,
        items: Iterable[T],
        key_parts: Callable[[T], Iterable[KeyPart]],
        *,
        empty_like_dash: bool = True,
    ) -> None:
        self._empty_like_dash = empty_like_dash
        self._buckets: dict[str, list[T]] = {}
        for item in items:
            key = build_composite_key(key_parts(item), empty_like_dash=empty_like_dash)
            if key:
                self._buckets.setdefault(key, []).append(item)

    def key_of(self, parts: Iterable[KeyPart]) -> str:
        return build_composite_key(parts, empty_like_dash=self._empty_like_dash)

    def lookup(self, parts: Iterable[KeyPart]) -> LookupResult[T]:
        key = self.key_of(parts)
        candidates = self._buckets.get(key, []) if key else []
        if not candidates:
            return LookupResult(LookupStatus.UNMATCHED)
        if len(candidates) > 1:
            return LookupResult(LookupStatus.AMBIGUOUS, tuple(candidates))
        return LookupResult(LookupStatus.RESOLVED, (candidates[0],))

    def contains(self, parts: Iterable[KeyPart]) -> bool:
        key = self.key_of(parts)
        return bool(key) and key in self._buckets

    def __contains__(self, key: str) -> bool:
        return key in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
