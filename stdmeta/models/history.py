"""History log models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import Field

from stdmeta.models.base import DataType, StdModel, now_iso


class HistoryAction(StrEnum):
    """히스토리 액션 타입."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    UPLOAD_MERGE = "UPLOAD_MERGE"
    SYNC = "SYNC"


class HistoryLogEntry(StdModel):
    """히스토리 로그 엔트리."""

    id: str
    action: HistoryAction
    data_type: DataType | None = None
    target_id: str
    target_name: str
    timestamp: str = Field(default_factory=now_iso)
    filename: str | None = None
    details: dict[str, Any] = Field(default_factory=dict, description="before/after 등 세부 정보")


class HistoryData(StdModel):
    """히스토리 파일 구조."""

    logs: list[HistoryLogEntry] = Field(default_factory=list)
    last_updated: str = Field(default_factory=now_iso)
    total_count: int = 0
