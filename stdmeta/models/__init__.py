"""Entry models - 단어집/도메인/용어 + 5개 정의서.

- DataType: 데이터 타입 Enum
- VocabularyEntry, DomainEntry, TermEntry: 명명 표준 엔트리
- DatabaseEntry ~ ColumnEntry: 데이터베이스 설계 정의서
- MappingContext: 관계 검증 스냅샷
"""

from stdmeta.models.base import DEFINITION_TYPES, BaseEntry, DataFile, DataType, now_iso
from stdmeta.models.design import (
    AttributeEntry,
    ColumnEntry,
    DatabaseEntry,
    EntityEntry,
    MappingContext,
    TableEntry,
)
from stdmeta.models.domain import DomainEntry
from stdmeta.models.history import HistoryAction, HistoryData, HistoryLogEntry
from stdmeta.models.term import TermEntry
from stdmeta.models.vocabulary import (
    DuplicateInfo,
    ForbiddenWordEntry,
    ForbiddenWordType,
    VocabularyEntry,
)

__all__ = [
    "DEFINITION_TYPES",
    "AttributeEntry",
    "BaseEntry",
    "ColumnEntry",
    "DataFile",
    "DataType",
    "DatabaseEntry",
    "DomainEntry",
    "DuplicateInfo",
    "EntityEntry",
    "ForbiddenWordEntry",
    "ForbiddenWordType",
    "HistoryAction",
    "HistoryData",
    "HistoryLogEntry",
    "MappingContext",
    "TableEntry",
    "TermEntry",
    "VocabularyEntry",
    "now_iso",
]
