from __future__ import annotations

import multiprocessing
import os
import socket
from collections.abc import Callable
from multiprocessing.process import BaseProcess
from typing import Any

import uvicorn

from publishelf_core.config import Settings


def is_primary() -> bool:
    """True for the process that was started directly, False inside a spawned worker."""
    return multiprocessing.parent_process() is None


def available_parallelism() -> int:
    count_fn = getattr(os, "process_cpu_count", None) or os.cpu_count
    return max(1, count_fn() or 1)


def resolve_worker_count(settings: Settings) -> int:
    if settings.cluster.workers is not None:
        return settings.cluster.workers
    return available_parallelism()


def bind_listener(settings: Settings) -> socket.socket:
    """Bind the listening socket once so every worker can accept on it."""
    config = uvicorn.Config(
        "publishelf_core.app:create_app",
        host=settings.network.host,
        port=settings.network.port,
        log_config=None,
    )
    return config.bind_socket()


class ProcessSpawner:
    """Creates worker processes with a ``multiprocessing`` context.

    The default ``spawn`` context gives each worker a fresh interpreter; the
    target and its arguments must therefore be picklable.
    """

    def __init__(
        self,
        target: Callable[..., Any],
        args: tuple[Any, ...] = (),
        *,
        context: str = "spawn",
        name_prefix: str = "publishelf-worker",
    ) -> None:
        self._ctx = multiprocessing.get_context(context)
        self._target = target
        self._args = args
        self._name_prefix = name_prefix
        self._spawned = 0

    def __call__(self) -> BaseProcess:
        self._spawned += 1
        proc = self._ctx.Process(
            target=self._target,
            args=self._args,
            name=f"{self._name_prefix}-{self._spawned}",
        )
        proc.start()
        return proc
