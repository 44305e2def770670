from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from publishelf_core.config import Settings

LOG_FORMAT = "%(asctime)s - %(process)d - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "app.log"


def configure_logging(settings: Settings) -> None:
    """Attach the file (and, outside production, console) handlers to the root logger.

    Called once per process: the primary and every worker configure their own
    logging since spawned workers do not inherit handlers.
    """

    cfg = settings.logging
    log_dir = cfg.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    root.setLevel(cfg.level.upper())

    # Avoid adding duplicate handlers if reconfigured
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILENAME,
            maxBytes=cfg.max_size_mb * 1024 * 1024,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if settings.is_production:
        return

    has_console = any(type(h) is logging.StreamHandler for h in root.handlers)
    if not has_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)
