from __future__ import annotations

import socket

import uvicorn

from publishelf_core.app import create_app
from publishelf_core.config import Settings
from publishelf_core.logs import configure_logging


def serve_worker(settings: Settings, sock: socket.socket) -> None:
    """Worker process entry point: serve the app on the primary's socket."""

    configure_logging(settings)

    config = uvicorn.Config(
        create_app(settings),
        log_config=None,
        log_level=settings.logging.level,
        access_log=False,
    )
    server = uvicorn.Server(config)
    server.run(sockets=[sock])
