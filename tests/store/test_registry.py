"""Tests for stdmeta/store/registry.py."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from stdmeta.core.exceptions import DataFileNotFoundError, DataParseError, StorageError
from stdmeta.models.base import DataFile, DataType
from stdmeta.models.domain import DomainEntry
from stdmeta.models.vocabulary import ForbiddenWordType, VocabularyEntry
from stdmeta.store.registry import DataRegistry


class TestRegistryLoad:
    def test_load_default_file(
        self,
        data_dir: Path,
        write_data: Callable[..., Path],
        vocabulary_entries: list[VocabularyEntry],
    ) -> None:
        write_data("vocabulary", vocabulary_entries)
        data = DataRegistry(data_dir).load(DataType.VOCABULARY)

        assert data.total_count == len(vocabulary_entries)
        assert isinstance(data.entries[0], VocabularyEntry)
        assert data.entries[0].standard_name == "사용자"

    def test_total_count_recomputed(self, data_dir: Path) -> None:
        path = data_dir / "domain" / "domain.json"
        path.parent.mkdir(parents=True)
        payload = {"entries": [{"id": "d-1", "domainCategory": "번호"}], "totalCount": 99}
        path.write_text(json.dumps(payload), encoding="utf-8")

        data = DataRegistry(data_dir).load(DataType.DOMAIN)
        assert data.total_count == 1

    def test_missing_file(self, data_dir: Path) -> None:
        with pytest.raises(DataFileNotFoundError):
            DataRegistry(data_dir).load(DataType.TERM)

    def test_empty_file_is_empty_data(self, data_dir: Path) -> None:
        path = data_dir / "term" / "term.json"
        path.parent.mkdir(parents=True)
        path.write_text("  \n", encoding="utf-8")

        data = DataRegistry(data_dir).load(DataType.TERM)
        assert data.entries == []
        assert data.total_count == 0

    def test_invalid_json(self, data_dir: Path) -> None:
        path = data_dir / "term" / "term.json"
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DataParseError):
            DataRegistry(data_dir).load(DataType.TERM)

    def test_invalid_utf8(self, data_dir: Path) -> None:
        path = data_dir / "domain" / "domain.json"
        path.parent.mkdir(parents=True)
        path.write_bytes(b'{"entries": [], "x": "\xff\xfe"}')

        with pytest.raises(DataParseError, match="not valid UTF-8"):
            DataRegistry(data_dir).load(DataType.DOMAIN)

    def test_unreadable_path(self, data_dir: Path) -> None:
        (data_dir / "term" / "term.json").mkdir(parents=True)

        with pytest.raises(StorageError, match="Failed to read data file"):
            DataRegistry(data_dir).load(DataType.TERM)

    def test_invalid_schema(self, data_dir: Path) -> None:
        path = data_dir / "term" / "term.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"entries": "oops"}), encoding="utf-8")

        with pytest.raises(DataParseError):
            DataRegistry(data_dir).load(DataType.TERM)

    @pytest.mark.parametrize("filename", ["../term.json", "sub/term.json", "term.txt", " "])
    def test_invalid_filename(self, data_dir: Path, filename: str) -> None:
        with pytest.raises(StorageError):
            DataRegistry(data_dir).load(DataType.TERM, filename)


class TestRegistrySave:
    def test_save_then_load(
        self, data_dir: Path, domain_entries: list[DomainEntry]
    ) -> None:
        registry = DataRegistry(data_dir)
        path = registry.save(DataType.DOMAIN, DataFile[DomainEntry](entries=domain_entries))

        assert path == data_dir / "domain" / "domain.json"
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["totalCount"] == 3
        assert raw["entries"][0]["standardDomainName"] == "번호_VARCHAR(20)"

        loaded = registry.load(DataType.DOMAIN)
        assert [e.id for e in loaded.entries] == ["d-no", "d-name", "d-amount"]

    def test_save_custom_filename_leaves_no_temp_files(
        self, data_dir: Path, domain_entries: list[DomainEntry]
    ) -> None:
        registry = DataRegistry(data_dir)
        registry.save(DataType.DOMAIN, DataFile[DomainEntry](entries=domain_entries), "b.json")

        assert registry.list_files(DataType.DOMAIN) == ["b.json"]
        assert [p.name for p in (data_dir / "domain").iterdir()] == ["b.json"]

    def test_list_files_and_exists(
        self, data_dir: Path, write_data: Callable[..., Path]
    ) -> None:
        write_data("table", [], "z.json")
        write_data("table", [])
        registry = DataRegistry(data_dir)

        assert registry.list_files(DataType.TABLE) == ["table.json", "z.json"]
        assert registry.list_files(DataType.COLUMN) == []
        assert registry.exists(DataType.TABLE)
        assert not registry.exists(DataType.TABLE, "missing.json")


class TestForbiddenWords:
    def test_missing_file_is_empty(self, data_dir: Path) -> None:
        assert DataRegistry(data_dir).load_forbidden_words() == []

    def test_load(self, data_dir: Path) -> None:
        payload = [{"id": "f-1", "keyword": "임시", "type": "standardName"}]
        (data_dir / "forbidden-words.json").write_text(
            json.dumps(payload, ensure_ascii=False), encoding="utf-8"
        )
        words = DataRegistry(data_dir).load_forbidden_words()

        assert len(words) == 1
        assert words[0].type == ForbiddenWordType.STANDARD_NAME

    def test_malformed(self, data_dir: Path) -> None:
        (data_dir / "forbidden-words.json").write_text(
            json.dumps([{"id": "f-1"}]), encoding="utf-8"
        )
        with pytest.raises(DataParseError):
            DataRegistry(data_dir).load_forbidden_words()
