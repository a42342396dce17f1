"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from code_quality.api.container import Container, reset_container, set_container
from code_quality.domain.ports.config import AppConfig, PersistenceConfig


@pytest.fixture
def container(tmp_path: Path):
    """Global container whose snapshot store lives under tmp_path."""
    config = AppConfig(persistence=PersistenceConfig(cache_dir=str(tmp_path / "cache")))
    test_container = Container(config)
    set_container(test_container)
    yield test_container
    reset_container()
