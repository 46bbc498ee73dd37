"""Shared fixtures for the schedule maker tests."""
from datetime import date

import pytest

from config import ENV_OVERRIDES, ENV_PASSWORD


@pytest.fixture(autouse=True)
def clean_email_env(monkeypatch):
    """Keep the developer's SMTP settings out of the tests (and undo anything load_dotenv sets)."""
    for name in [ENV_PASSWORD, *ENV_OVERRIDES.values()]:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def start_date():
    return date(2024, 1, 1)
