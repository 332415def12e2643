"""Pytest configuration and shared fixtures for the regquery test suite.

The fixtures build a small hive in memory so that the query pipeline can be
exercised without a hive file on disk.
"""

import pytest
from utils import build_sample_hive

from regquery.hive import InMemoryHiveStore, Key


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "timing: Tests that measure elapsed time")


@pytest.fixture
def sample_root() -> Key:
    """Root key of the sample hive."""
    return build_sample_hive()


@pytest.fixture
def sample_store(sample_root) -> InMemoryHiveStore:
    """Parsed in-memory store over the sample hive."""
    store = InMemoryHiveStore(sample_root, hive_path="sample.hve")
    store.parse()
    return store


@pytest.fixture
def hive_file(tmp_path):
    """An existing file to pass as --Hive; the in-memory store never reads it."""
    path = tmp_path / "NTUSER.DAT"
    path.write_bytes(b"regf")
    return path
