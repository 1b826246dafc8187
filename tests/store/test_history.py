"""Tests for stdmeta/store/history.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from stdmeta.core.exceptions import DataParseError
from stdmeta.models.base import DataType
from stdmeta.models.history import HistoryAction, HistoryLogEntry
from stdmeta.store.history import HistoryStore


def _log(log_id: str, filename: str | None = None) -> HistoryLogEntry:
    return HistoryLogEntry(
        id=log_id,
        action=HistoryAction.UPDATE,
        data_type=DataType.TERM,
        target_id=f"t-{log_id}",
        target_name=f"용어-{log_id}",
        filename=filename,
    )


class TestHistoryStore:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        data = HistoryStore(tmp_path / "history.json").load()
        assert data.logs == []
        assert data.total_count == 0

    def test_add_prepends(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path / "history.json")
        store.add(_log("1"))
        store.add(_log("2"))

        data = store.load()
        assert [log.id for log in data.logs] == ["2", "1"]
        assert data.total_count == 2

    def test_max_logs_drops_oldest(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path / "history.json", max_logs=3)
        for i in range(5):
            store.add(_log(str(i)))

        assert [log.id for log in store.load().logs] == ["4", "3", "2"]

    def test_filter_by_filename_keeps_unscoped_logs(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path / "history.json")
        store.add(_log("a", "a.json"))
        store.add(_log("b", "b.json"))
        store.add(_log("none"))

        data = store.load("a.json")
        assert [log.id for log in data.logs] == ["none", "a"]
        assert data.total_count == 2

    def test_persisted_as_camel_case(self, tmp_path: Path) -> None:
        path = tmp_path / "history.json"
        HistoryStore(path).add(_log("1"))
        text = path.read_text(encoding="utf-8")

        assert '"targetName": "용어-1"' in text
        assert '"dataType": "term"' in text

    def test_clear(self, tmp_path: Path) -> None:
        store = HistoryStore(tmp_path / "history.json")
        store.add(_log("1"))
        store.clear()
        assert store.load().logs == []

    def test_malformed_file(self, tmp_path: Path) -> None:
        path = tmp_path / "history.json"
        path.write_text('{"logs": [{"id": 1}]}', encoding="utf-8")
        with pytest.raises(DataParseError):
            HistoryStore(path).load()
