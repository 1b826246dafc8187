"""Loguru setup 테스트."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from stdmeta.core.logger import CONSOLE_FORMAT_WITH_CONTEXT, get_context_logger, setup_logger
from stdmeta.logging.config import LoggingConfig


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    yield
    logger.remove()


class TestSetupLogger:
    def test_file_sink(self, tmp_path: Path) -> None:
        setup_logger(log_dir=tmp_path / "logs", console_level="WARNING")
        logger.info("hello")
        logger.complete()

        files = list((tmp_path / "logs").glob("stdmeta_*.log"))
        assert len(files) == 1

    def test_no_file_sink(self, tmp_path: Path) -> None:
        setup_logger(log_dir=tmp_path / "logs", enable_file=False)
        assert not (tmp_path / "logs").exists()

    def test_context_logger_binds_extra(self) -> None:
        records: list[dict] = []
        logger.remove()
        logger.add(lambda message: records.append(message.record["extra"]), level="DEBUG")

        get_context_logger(data_type="term", filename="term.json", op="load").info("x")
        assert records == [{"op": "load", "data_type": "term", "filename": "term.json"}]

    def test_context_format_uses_defaults(self) -> None:
        setup_logger(enable_file=False, show_context=True, console_level="ERROR")
        messages: list[str] = []
        logger.add(messages.append, format=CONSOLE_FORMAT_WITH_CONTEXT, colorize=False)

        logger.info("plain")
        get_context_logger(data_type="term", filename="term.json").info("bound")

        assert "[-/-] plain" in messages[0]
        assert "[term/term.json] bound" in messages[1]


class TestLoggingConfig:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_CONSOLE_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_JSON_LOGS", "true")

        config = LoggingConfig(_env_file=None)  # type: ignore[call-arg]
        assert config.console_level == "DEBUG"
        assert config.json_logs is True
