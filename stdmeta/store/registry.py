"""JSON-based data registry.

data_dir/<type>/ 디렉토리에 타입별 JSON 파일을 저장/로드:
- CRUD: load, save, list_files, exists
- 금지어: load_forbidden_words (data_dir/forbidden-words.json)

저장은 임시 파일 작성 후 교체(atomic replace)이며, 프로세스 내 쓰기는
Lock으로 직렬화됩니다.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from stdmeta.core.exceptions import DataFileNotFoundError, DataParseError, StorageError
from stdmeta.core.logger import get_context_logger
from stdmeta.models.base import BaseEntry, DataFile, DataType
from stdmeta.models.design import (
    AttributeEntry,
    ColumnEntry,
    DatabaseEntry,
    EntityEntry,
    TableEntry,
)
from stdmeta.models.domain import DomainEntry
from stdmeta.models.term import TermEntry
from stdmeta.models.vocabulary import ForbiddenWordEntry, VocabularyEntry

_DEFAULT_DATA_DIR = Path("static/data")

FORBIDDEN_WORDS_FILENAME = "forbidden-words.json"

ENTRY_MODELS: dict[DataType, type[BaseEntry]] = {
    DataType.VOCABULARY: VocabularyEntry,
    DataType.DOMAIN: DomainEntry,
    DataType.TERM: TermEntry,
    DataType.DATABASE: DatabaseEntry,
    DataType.ENTITY: EntityEntry,
    DataType.ATTRIBUTE: AttributeEntry,
    DataType.TABLE: TableEntry,
    DataType.COLUMN: ColumnEntry,
}

_write_lock = threading.Lock()


def _validate_filename(filename: str) -> str:
    """경로 구분자/상위 경로가 없는 .json 파일명만 허용."""
    name = filename.strip()
    if not name or name != Path(name).name or name in {".", ".."}:
        msg = "Invalid data filename"
        raise StorageError(msg, context={"filename": filename})
    if not name.endswith(".json"):
        msg = "Data filename must end with .json"
        raise StorageError(msg, context={"filename": filename})
    return name


def write_json_atomic(path: Path, payload: Any) -> None:
    """임시 파일에 쓴 뒤 os.replace로 교체."""
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    with _write_lock:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            msg = "Failed to write data file"
            raise StorageError(msg, context={"path": str(path)}) from e


def read_text_file(path: Path) -> str:
    """UTF-8 텍스트 읽기. 디코딩/OS 오류는 저장소 예외로 변환."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = "Data file is not valid UTF-8"
        raise DataParseError(msg, context={"path": str(path), "position": e.start}) from e
    except OSError as e:
        msg = "Failed to read data file"
        raise StorageError(msg, context={"path": str(path)}) from e


def read_json(path: Path) -> Any | None:
    """JSON 파일 읽기. 빈 파일은 None.

    Raises:
        DataFileNotFoundError: 파일 없음
        DataParseError: UTF-8 또는 JSON 형식 오류
        StorageError: 그 외 읽기 실패 (디렉토리, 권한 등)
    """
    if not path.exists():
        msg = "Data file not found"
        raise DataFileNotFoundError(msg, context={"path": str(path)})
    text = read_text_file(path)
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = "Data file is not valid JSON"
        raise DataParseError(msg, context={"path": str(path), "line": e.lineno}) from e


class DataRegistry:
    """타입별 JSON 데이터 파일 저장소."""

    def __init__(self, data_dir: Path = _DEFAULT_DATA_DIR) -> None:
        self._data_dir = data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def type_dir(self, data_type: DataType) -> Path:
        return self._data_dir / data_type.value

    def path_for(self, data_type: DataType, filename: str | None = None) -> Path:
        name = _validate_filename(filename or data_type.default_filename)
        return self.type_dir(data_type) / name

    # ─── CRUD ────────────────────────────────────────────────────────

    def load(self, data_type: DataType, filename: str | None = None) -> DataFile[Any]:
        """타입별 데이터 파일 로드.

        빈 파일은 빈 DataFile로 취급합니다. totalCount는 실제 엔트리 수로
        다시 계산합니다.

        Raises:
            DataFileNotFoundError: 파일 없음
            DataParseError: JSON/스키마 오류
        """
        path = self.path_for(data_type, filename)
        raw = read_json(path)
        if raw is None:
            return DataFile[ENTRY_MODELS[data_type]]()  # type: ignore[index]

        model = DataFile[ENTRY_MODELS[data_type]]  # type: ignore[index]
        try:
            data = model.model_validate(raw)
        except ValidationError as e:
            msg = f"Malformed {data_type} data file"
            raise DataParseError(
                msg, context={"path": str(path), "errors": e.error_count()}
            ) from e

        log = get_context_logger(data_type=str(data_type), filename=path.name)
        log.debug(f"Loaded {len(data.entries)} entries")
        return data.model_copy(update={"total_count": len(data.entries)})

    def save(self, data_type: DataType, data: DataFile[Any], filename: str | None = None) -> Path:
        """데이터 파일 저장 (lastUpdated/totalCount 갱신)."""
        path = self.path_for(data_type, filename)
        payload = data.with_entries(list(data.entries)).to_json_dict()
        write_json_atomic(path, payload)
        log = get_context_logger(data_type=str(data_type), filename=path.name)
        log.info(f"Saved {len(data.entries)} entries")
        return path

    def list_files(self, data_type: DataType) -> list[str]:
        """타입 디렉토리의 JSON 파일명 (이름순)."""
        directory = self.type_dir(data_type)
        if not directory.exists():
            return []
        return sorted(p.name for p in directory.glob("*.json") if p.is_file())

    def exists(self, data_type: DataType, filename: str | None = None) -> bool:
        return self.path_for(data_type, filename).exists()

    # ─── Forbidden words ─────────────────────────────────────────────

    def load_forbidden_words(
        self, filename: str = FORBIDDEN_WORDS_FILENAME
    ) -> list[ForbiddenWordEntry]:
        """금지어 목록 로드 (파일이 없으면 빈 목록)."""
        path = self._data_dir / _validate_filename(filename)
        if not path.exists():
            return []
        raw = read_json(path)
        if raw is None:
            return []
        try:
            return TypeAdapter(list[ForbiddenWordEntry]).validate_python(raw)
        except ValidationError as e:
            msg = "Malformed forbidden words file"
            raise DataParseError(msg, context={"path": str(path)}) from e
