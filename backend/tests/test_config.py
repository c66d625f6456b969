"""
Happy Thoughts API — Settings Tests
====================================

What we test:
    ✅ PORT / BACKEND_PORT and RESET_DB / RESET_DATABASE aliases
    ✅ Log level is normalized and validated
    ✅ CORS origin list parsing
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from happythoughts.config import Settings


class TestSettings:

    def test_port_alias(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        assert Settings().backend_port == 9000

    @pytest.mark.parametrize("port", ["80", "443"])
    def test_privileged_port_accepted(self, monkeypatch, port):
        monkeypatch.setenv("PORT", port)
        assert Settings().backend_port == int(port)

    def test_port_out_of_range(self):
        with pytest.raises(SettingsValidationError):
            Settings(backend_port=70000)

    def test_backend_port_alias(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.setenv("BACKEND_PORT", "9100")
        assert Settings().backend_port == 9100

    @pytest.mark.parametrize("name", ["RESET_DB", "RESET_DATABASE"])
    def test_reset_aliases(self, monkeypatch, name):
        monkeypatch.setenv(name, "true")
        assert Settings().reset_database is True

    def test_reset_off_by_default(self, monkeypatch):
        monkeypatch.delenv("RESET_DB", raising=False)
        monkeypatch.delenv("RESET_DATABASE", raising=False)
        assert Settings().reset_database is False

    def test_log_level_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(SettingsValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        config = Settings(cors_origins="https://a.example, https://b.example,")
        assert config.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite+aiosqlite:///./x.db").is_sqlite is True
        assert Settings(database_url="postgresql+asyncpg://u:p@h/db").is_sqlite is False
