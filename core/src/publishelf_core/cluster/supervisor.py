from __future__ import annotations

import logging
import os
import signal
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from multiprocessing.connection import wait as wait_for_sentinels
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class WorkerHandle(Protocol):
    """The slice of ``multiprocessing.Process`` the supervisor relies on."""

    @property
    def pid(self) -> int | None: ...

    @property
    def sentinel(self) -> int: ...

    @property
    def exitcode(self) -> int | None: ...

    def is_alive(self) -> bool: ...

    def terminate(self) -> None: ...

    def kill(self) -> None: ...

    def join(self, timeout: float | None = None) -> None: ...


@dataclass(frozen=True)
class WorkerExit:
    pid: int
    exitcode: int | None
    signal: str | None

    @classmethod
    def from_handle(cls, handle: WorkerHandle) -> WorkerExit:
        code = handle.exitcode
        # multiprocessing reports death-by-signal as a negative exit code.
        if code is not None and code < 0:
            try:
                name = signal.Signals(-code).name
            except ValueError:
                name = str(-code)
            return cls(pid=handle.pid or 0, exitcode=None, signal=name)
        return cls(pid=handle.pid or 0, exitcode=code, signal=None)


SpawnWorker = Callable[[], WorkerHandle]
OnlineHandler = Callable[[WorkerHandle], None]
ExitHandler = Callable[[WorkerExit], None]
WaitFn = Callable[[Sequence[Any], float | None], list[Any]]


class Supervisor:
    """Keeps ``target_count`` worker processes alive.

    Workers are created through the injected ``spawn_worker`` capability.
    Every worker exit is logged, reported to exit handlers and immediately
    compensated by exactly one new worker, with no backoff and no retry limit.
    """

    def __init__(
        self,
        spawn_worker: SpawnWorker,
        target_count: int,
        *,
        wait: WaitFn = wait_for_sentinels,
    ) -> None:
        if target_count < 1:
            raise ValueError("target_count must be >= 1")

        self.target_count = target_count
        self._spawn_worker = spawn_worker
        self._wait = wait
        self._workers: dict[int, WorkerHandle] = {}
        self._online_handlers: list[OnlineHandler] = []
        self._exit_handlers: list[ExitHandler] = []
        self._stopping = False
        self.spawned_total = 0

    def on_online(self, handler: OnlineHandler) -> None:
        self._online_handlers.append(handler)

    def on_exit(self, handler: ExitHandler) -> None:
        self._exit_handlers.append(handler)

    def count(self) -> int:
        return len(self._workers)

    @property
    def workers(self) -> list[WorkerHandle]:
        return list(self._workers.values())

    @property
    def stopping(self) -> bool:
        return self._stopping

    def spawn(self) -> WorkerHandle:
        handle = self._spawn_worker()
        pid = handle.pid
        if pid is None:
            raise RuntimeError("Worker process did not report a pid after start")

        self._workers[pid] = handle
        self.spawned_total += 1

        logger.info(f"Worker {pid} is online")
        for handler in list(self._online_handlers):
            handler(handle)
        return handle

    def start(self) -> None:
        logger.info(f"Primary process {os.getpid()} is running")
        logger.info(f"Forking {self.target_count} workers...")
        for _ in range(self.target_count):
            self.spawn()

    def handle_exit(self, handle: WorkerHandle) -> WorkerExit:
        if handle.pid is not None:
            self._workers.pop(handle.pid, None)

        # Reap the child so exitcode is populated.
        handle.join(timeout=0)
        event = WorkerExit.from_handle(handle)

        if self._stopping:
            logger.info(
                f"Worker {event.pid} exited (code: {event.exitcode}, signal: {event.signal})"
            )
        else:
            logger.warning(
                f"Worker {event.pid} died (code: {event.exitcode}, signal: {event.signal}). "
                "Restarting..."
            )

        for handler in list(self._exit_handlers):
            handler(event)

        if not self._stopping:
            self.spawn()
        return event

    def poll(self, timeout: float | None = None) -> list[WorkerExit]:
        """Wait up to ``timeout`` seconds for worker exits and handle each one."""

        if not self._workers:
            return []

        by_sentinel = {handle.sentinel: handle for handle in self._workers.values()}
        ready = self._wait(list(by_sentinel), timeout)
        return [self.handle_exit(by_sentinel[s]) for s in ready if s in by_sentinel]

    def run(self, *, poll_interval: float = 0.5) -> None:
        while not self._stopping:
            self.poll(poll_interval)

    def request_stop(self) -> None:
        # Only flips a flag: safe to call from a signal handler.
        self._stopping = True

    def stop(self, *, timeout: float = 10.0) -> None:
        self._stopping = True
        handles = list(self._workers.values())
        if not handles:
            return

        logger.info(f"Stopping {len(handles)} workers...")
        for handle in handles:
            if handle.is_alive():
                handle.terminate()

        deadline = time.monotonic() + timeout
        for handle in handles:
            handle.join(timeout=max(0.0, deadline - time.monotonic()))
            if handle.is_alive():
                logger.warning(f"Worker {handle.pid} did not exit in time; killing it")
                handle.kill()
                handle.join(timeout=1.0)

        self._workers.clear()
        logger.info("All workers stopped")
