from publishelf_core.cluster.process import (
    ProcessSpawner,
    available_parallelism,
    bind_listener,
    is_primary,
    resolve_worker_count,
)
from publishelf_core.cluster.supervisor import Supervisor, WorkerExit, WorkerHandle

__all__ = [
    "ProcessSpawner",
    "Supervisor",
    "WorkerExit",
    "WorkerHandle",
    "available_parallelism",
    "bind_listener",
    "is_primary",
    "resolve_worker_count",
]
