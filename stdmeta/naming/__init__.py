"""Naming - 키 정규화, 표준 이름 생성, 중복 탐지."""

from stdmeta.naming.duplicates import (
    get_duplicate_details,
    get_duplicate_groups,
    get_duplicate_ids,
    mark_duplicates,
)
from stdmeta.naming.generator import (
    ConvertDirection,
    TermMappingResult,
    TermNameDerivation,
    TermSyncResult,
    VocabularyIndex,
    check_term_mapping,
    convert_term,
    derive_term_names,
    generate_standard_domain_name,
    sync_term_mappings,
)
from stdmeta.naming.keys import (
    KEY_SEPARATOR,
    build_composite_key,
    normalize_key,
    split_name_tokens,
    split_underscore_parts,
)

__all__ = [
    "KEY_SEPARATOR",
    "ConvertDirection",
    "TermMappingResult",
    "TermNameDerivation",
    "TermSyncResult",
    "VocabularyIndex",
    "build_composite_key",
    "check_term_mapping",
    "convert_term",
    "derive_term_names",
    "generate_standard_domain_name",
    "get_duplicate_details",
    "get_duplicate_groups",
    "get_duplicate_ids",
    "mark_duplicates",
    "normalize_key",
    "split_name_tokens",
    "split_underscore_parts",
    "sync_term_mappings",
]
