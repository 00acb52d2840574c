"""Tests for the configuration module."""
import pytest

from sprout.config import Config, _parse_int_list, _parse_optional_int


def test_parse_int_list():
    assert _parse_int_list(" 1, 2,,3 ") == [1, 2, 3]
    assert _parse_int_list("") == []


def test_parse_optional_int():
    assert _parse_optional_int("") is None
    assert _parse_optional_int(" 30 ") == 30


class TestValidate:
    @pytest.fixture(autouse=True)
    def valid_config(self, monkeypatch):
        monkeypatch.setattr(Config, "BOT_TOKEN", "token")
        monkeypatch.setattr(Config, "ADMIN_IDS", [1])
        monkeypatch.setattr(Config, "DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        monkeypatch.setattr(Config, "ERRORS_MAX_ENTRIES", None)

    def test_valid(self):
        Config.validate()

    def test_missing_token(self, monkeypatch):
        monkeypatch.setattr(Config, "BOT_TOKEN", "")
        with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
            Config.validate()

    def test_missing_admins(self, monkeypatch):
        monkeypatch.setattr(Config, "ADMIN_IDS", [])
        with pytest.raises(ValueError, match="TELEGRAM_ADMIN_IDS"):
            Config.validate()

    def test_max_entries_must_be_positive(self, monkeypatch):
        monkeypatch.setattr(Config, "ERRORS_MAX_ENTRIES", 0)
        with pytest.raises(ValueError, match="SPROUT_ERRORS_MAX_ENTRIES"):
            Config.validate()
