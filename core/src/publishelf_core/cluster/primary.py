from __future__ import annotations

import logging
import signal
from types import FrameType

from publishelf_core.cluster.process import ProcessSpawner, bind_listener, resolve_worker_count
from publishelf_core.cluster.supervisor import Supervisor
from publishelf_core.cluster.worker import serve_worker
from publishelf_core.config import Settings

logger = logging.getLogger(__name__)


def install_signal_handlers(supervisor: Supervisor) -> None:
    def _handle(signum: int, frame: FrameType | None) -> None:
        logger.info(f"Received {signal.Signals(signum).name}; stopping workers")
        supervisor.request_stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _handle)


def run_primary(settings: Settings) -> None:
    sock = bind_listener(settings)
    worker_count = resolve_worker_count(settings)
    logger.info(f"Total processing units available for workers: {worker_count}")

    supervisor = Supervisor(
        ProcessSpawner(serve_worker, (settings, sock)),
        worker_count,
    )
    install_signal_handlers(supervisor)

    try:
        supervisor.start()
        supervisor.run()
    finally:
        supervisor.stop()
        sock.close()
