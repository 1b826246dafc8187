"""Exception hierarchy 테스트."""

from __future__ import annotations

import pytest

from stdmeta.core.exceptions import (
    ContextShapeError,
    DataFileNotFoundError,
    DataParseError,
    StdMetaError,
    StorageError,
    add_context_note,
)


class TestExceptionHierarchy:
    def test_storage_errors(self) -> None:
        assert issubclass(DataFileNotFoundError, StorageError)
        assert issubclass(DataParseError, StorageError)
        assert issubclass(StorageError, StdMetaError)

    def test_contract_error_is_not_storage(self) -> None:
        assert issubclass(ContextShapeError, StdMetaError)
        assert not issubclass(ContextShapeError, StorageError)

    def test_str_with_context(self) -> None:
        error = DataFileNotFoundError("Data file not found", context={"path": "a.json"})
        assert str(error) == "Data file not found [path=a.json]"
        assert error.context == {"path": "a.json"}

    def test_str_without_context(self) -> None:
        error = StorageError("boom")
        assert str(error) == "boom"
        assert error.context == {}

    def test_add_context_note(self) -> None:
        with pytest.raises(StorageError) as exc_info:
            try:
                raise StorageError("boom")
            except StorageError as e:
                add_context_note(e, "while loading term.json")
                raise
        assert exc_info.value.__notes__ == ["while loading term.json"]
