from __future__ import annotations

import os

from publishelf_core.cluster import available_parallelism, is_primary, resolve_worker_count
from publishelf_core.config import ClusterConfig, Settings


def test_test_runner_is_the_primary_process() -> None:
    assert is_primary() is True


def test_available_parallelism_is_at_least_one(monkeypatch) -> None:
    assert available_parallelism() >= 1

    monkeypatch.setattr(os, "process_cpu_count", lambda: None, raising=False)
    monkeypatch.setattr(os, "cpu_count", lambda: None)
    assert available_parallelism() == 1


def test_available_parallelism_prefers_process_cpu_count(monkeypatch) -> None:
    monkeypatch.setattr(os, "process_cpu_count", lambda: 3, raising=False)
    monkeypatch.setattr(os, "cpu_count", lambda: 64)
    assert available_parallelism() == 3


def test_worker_count_defaults_to_processing_units(monkeypatch) -> None:
    monkeypatch.setattr(os, "process_cpu_count", lambda: 6, raising=False)
    assert resolve_worker_count(Settings()) == 6


def test_worker_count_override() -> None:
    assert resolve_worker_count(Settings(cluster=ClusterConfig(workers=2))) == 2
