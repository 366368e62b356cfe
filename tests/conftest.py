"""Pytest configuration and shared fixtures for all tests."""

from pathlib import Path

import pytest

TEST_DATA_DIR = Path(__file__).parent / "test-data"


@pytest.fixture
def test_data_dir() -> Path:
    """Directory holding sample sources and scripts."""
    return TEST_DATA_DIR


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
