from __future__ import annotations

import logging

import pytest

from publishelf_core.config import SessionConfig, Settings

TEST_SECRET = "test-secret-0123456789abcdef-0123456789"


@pytest.fixture
def settings() -> Settings:
    return Settings(session=SessionConfig(jwt_secret=TEST_SECRET))


@pytest.fixture
def production_settings() -> Settings:
    return Settings(environment="production", session=SessionConfig(jwt_secret=TEST_SECRET))


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    handlers_before = list(root.handlers)
    level_before = root.level

    yield root

    for handler in list(root.handlers):
        if handler not in handlers_before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level_before)
