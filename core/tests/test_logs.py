from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from publishelf_core.config import LoggingConfig, Settings
from publishelf_core.logs import LOG_FILENAME, configure_logging


def _console_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if type(h) is logging.StreamHandler]


def test_configure_logging_writes_to_rotating_file(tmp_path: Path, clean_root_logger) -> None:
    cfg = Settings(logging=LoggingConfig(log_dir=tmp_path / "logs", level="debug"))

    configure_logging(cfg)
    logging.getLogger("publishelf_core.test").info("hello from test")

    file_handlers = [h for h in clean_root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 10 * 1024 * 1024
    assert file_handlers[0].backupCount == 3
    assert clean_root_logger.level == logging.DEBUG

    for handler in file_handlers:
        handler.flush()
    text = (tmp_path / "logs" / LOG_FILENAME).read_text(encoding="utf-8")
    assert "publishelf_core.test - INFO - hello from test" in text


def test_console_handler_only_outside_production(tmp_path: Path, clean_root_logger) -> None:
    before = len(_console_handlers(clean_root_logger))

    configure_logging(Settings(environment="production", logging=LoggingConfig(log_dir=tmp_path)))
    assert len(_console_handlers(clean_root_logger)) == before

    configure_logging(Settings(logging=LoggingConfig(log_dir=tmp_path)))
    assert len(_console_handlers(clean_root_logger)) == max(before, 1)


def test_configure_logging_is_idempotent(tmp_path: Path, clean_root_logger) -> None:
    cfg = Settings(logging=LoggingConfig(log_dir=tmp_path))

    configure_logging(cfg)
    count = len(clean_root_logger.handlers)
    configure_logging(cfg)

    assert len(clean_root_logger.handlers) == count
