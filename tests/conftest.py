"""
Shared test fixtures and helpers for the certbot-report test suite.

Provides path resolution for the captured `certbot certificates` report
fixtures (.txt) under tests/fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    """Return the absolute path to the test fixtures directory."""
    return FIXTURES_DIR


def fixture_path(filename: str) -> Path:
    """
    Resolve the absolute path to a test fixture file.

    Raises FileNotFoundError if the fixture does not exist.
    """
    path = FIXTURES_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Test fixture not found: {path}")
    return path


def read_fixture(filename: str) -> str:
    """Fixture text with its line endings untouched."""
    return fixture_path(filename).read_bytes().decode("utf-8")
