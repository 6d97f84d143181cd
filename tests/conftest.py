# tests/conftest.py

"""Shared pytest fixtures for the catalog_browser tests."""

from collections.abc import Generator

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_logs_dir(
    tmp_path_factory: pytest.TempPathFactory,
) -> Generator[None, None, None]:
    """Point Settings.LOGS_DIR at a throwaway ``logs/`` directory."""
    original = Settings.LOGS_DIR
    Settings.LOGS_DIR = tmp_path_factory.mktemp("run") / "logs"
    yield
    Settings.LOGS_DIR = original
