"""Tests for settings, logging setup and id generation"""

import logging

from buildtrack.config import Settings, configure_logging
from buildtrack.utils import generate_id


class TestSettings:
    """Test settings loading"""

    def test_defaults(self):
        config = Settings(_env_file=None)

        assert config.database_url.startswith("sqlite+aiosqlite://")
        assert config.admin_password_hash is None
        assert config.min_secret_length == 6

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("BUILDTRACK_DATABASE_URL", "sqlite+aiosqlite:////tmp/other.db")
        monkeypatch.setenv("BUILDTRACK_MIN_SECRET_LENGTH", "8")

        config = Settings(_env_file=None)

        assert config.database_url == "sqlite+aiosqlite:////tmp/other.db"
        assert config.min_secret_length == 8

    def test_configure_logging_sets_level(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging(Settings(_env_file=None, log_level="debug"))

        assert calls["level"] == logging.DEBUG
        assert "%(name)s" in calls["format"]


class TestGenerateId:
    """Test timestamp-derived ids"""

    def test_ids_are_unique_and_increasing(self):
        ids = [generate_id() for _ in range(1000)]

        assert len(set(ids)) == len(ids)
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)

    def test_ids_are_digit_strings(self):
        assert generate_id().isdigit()
