"""Core module - exceptions, logging setup, upload error classification."""

from stdmeta.core.exceptions import (
    ContextShapeError,
    DataFileNotFoundError,
    DataParseError,
    StdMetaError,
    StorageError,
    add_context_note,
)

__all__ = [
    "ContextShapeError",
    "DataFileNotFoundError",
    "DataParseError",
    "StdMetaError",
    "StorageError",
    "add_context_note",
]
