"""Tests for timestamp helpers and settings."""

import re
from datetime import timezone

from memoria.config import Settings
from memoria.utils.timestamps import parse_timestamp, utc_now_iso


class TestTimestamps:
    """Test suite for timestamp helpers."""

    def test_utc_now_iso_format(self):
        """Test millisecond precision with Z suffix."""
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_now_iso())

    def test_parse_timestamp(self):
        """Test parsing of Z-suffixed timestamps."""
        parsed = parse_timestamp("2024-11-28T10:00:00.000Z")

        assert parsed.year == 2024
        assert parsed.tzinfo == timezone.utc

    def test_invalid_values_sort_first(self):
        """Test that empty or malformed values are the oldest."""
        valid = parse_timestamp("2024-01-01T00:00:00.000Z")

        assert parse_timestamp(None) < valid
        assert parse_timestamp("") < valid
        assert parse_timestamp("ayer") < valid

    def test_naive_timestamp_is_utc(self):
        """Test naive values are treated as UTC."""
        assert parse_timestamp("2024-01-01T00:00:00").tzinfo == timezone.utc


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self):
        """Test navigation defaults."""
        settings = Settings(_env_file=None)

        assert settings.login_route == "/login"
        assert settings.default_route == "/notes"
        assert settings.profile_route == "/profile"
        assert settings.loading_clear_delay == 0.3
        assert settings.max_redirects == 5
        assert settings.uses_emulator is False

    def test_env_override(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("LOADING_CLEAR_DELAY_MS", "50")
        monkeypatch.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8080")

        settings = Settings(_env_file=None)

        assert settings.loading_clear_delay == 0.05
        assert settings.uses_emulator is True
