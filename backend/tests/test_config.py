"""Settings tests: URL normalization and timezone validation."""

import pytest
from pydantic import ValidationError

from message_search.config import Settings


def test_plain_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_other_urls_are_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


def test_search_timezone_defaults_to_utc(monkeypatch):
    monkeypatch.delenv("SEARCH_TIMEZONE", raising=False)
    assert Settings().search_timezone == "UTC"


def test_unknown_search_timezone_is_rejected():
    with pytest.raises(ValidationError):
        Settings(search_timezone="Mars/Olympus_Mons")
