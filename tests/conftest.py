"""Shared pytest fixtures for loading HTML test fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def rikishi_sample_html() -> str:
    return (FIXTURES_DIR / "rikishi_sample.html").read_text(encoding="utf-8")


@pytest.fixture()
def rikishi_no_table_html() -> str:
    return (FIXTURES_DIR / "rikishi_no_table.html").read_text(encoding="utf-8")
