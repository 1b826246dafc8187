"""Append-only history log store.

history.json에 변경 이력을 최신순으로 보관합니다. 최대 보관 수를 넘는
오래된 로그는 저장 시 잘라냅니다.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from stdmeta.core.exceptions import DataFileNotFoundError, DataParseError
from stdmeta.models.base import now_iso
from stdmeta.models.history import HistoryData, HistoryLogEntry
from stdmeta.store.registry import read_json, write_json_atomic

_DEFAULT_PATH = Path("static/data/history.json")
DEFAULT_MAX_LOGS = 1000


class HistoryStore:
    """JSON 기반 히스토리 로그 저장소."""

    def __init__(self, path: Path = _DEFAULT_PATH, max_logs: int = DEFAULT_MAX_LOGS) -> None:
        self._path = path
        self._max_logs = max_logs

    @property
    def path(self) -> Path:
        return self._path

    def load(self, filename: str | None = None) -> HistoryData:
        """히스토리 로드 (파일이 없거나 비어 있으면 빈 히스토리).

        Args:
            filename: 지정 시 해당 파일 로그 + 파일 정보가 없는 로그만 반환
        """
        try:
            raw = read_json(self._path)
        except DataFileNotFoundError:
            return HistoryData()
        if raw is None:
            return HistoryData()

        try:
            data = HistoryData.model_validate(raw)
        except ValidationError as e:
            msg = "Malformed history file"
            raise DataParseError(msg, context={"path": str(self._path)}) from e

        logs = data.logs
        if filename:
            logs = [log for log in logs if not log.filename or log.filename == filename]
        return data.model_copy(update={"logs": logs, "total_count": len(logs)})

    def add(self, entry: HistoryLogEntry) -> HistoryData:
        """로그를 맨 앞에 추가하고 저장."""
        existing = self.load()
        logs = [entry, *existing.logs][: self._max_logs]
        updated = HistoryData(logs=logs, last_updated=now_iso(), total_count=len(logs))
        write_json_atomic(self._path, updated.to_json_dict())
        logger.debug(
            f"History log added: action={entry.action}, target={entry.target_name}, "
            f"total={updated.total_count}"
        )
        return updated

    def clear(self) -> HistoryData:
        """모든 로그 삭제."""
        cleared = HistoryData()
        write_json_atomic(self._path, cleared.to_json_dict())
        return cleared
