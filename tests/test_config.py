"""
Tests for configuration
"""

import pytest

from report_filters.config import FilterSettings, get_settings


class TestFilterSettings:
    """Tests for FilterSettings."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("REPORT_FILTERS_LOG_LEVEL", raising=False)
        settings = FilterSettings(_env_file=None)
        assert settings.uncategorized_label == "Uncategorized"
        assert settings.transfer_label == "Transfers"
        assert settings.log_level == "INFO"
        assert settings.directory_file is None

    def test_reads_prefixed_environment(self, monkeypatch):
        """Test environment overrides."""
        monkeypatch.setenv("REPORT_FILTERS_TRANSFER_LABEL", "Moves")
        monkeypatch.setenv("REPORT_FILTERS_JSON_LOGS", "false")
        settings = FilterSettings(_env_file=None)
        assert settings.transfer_label == "Moves"
        assert settings.json_logs is False

    def test_log_level_is_normalized(self):
        """Test level name normalization."""
        assert FilterSettings(log_level=" debug ").log_level == "DEBUG"

    def test_log_level_rejects_unknown(self):
        """Test an unknown level name."""
        with pytest.raises(ValueError, match="Unsupported log level"):
            FilterSettings(log_level="chatty")

    def test_debug_mode_forces_debug_level(self):
        """Test the effective level."""
        assert FilterSettings(log_level="WARNING").effective_log_level == "WARNING"
        assert FilterSettings(log_level="WARNING", debug_mode=True).effective_log_level == "DEBUG"

    def test_missing_directory_file_warns(self, tmp_path):
        """Test a directory file path that does not exist."""
        with pytest.warns(UserWarning, match="Directory file not found"):
            FilterSettings(directory_file=str(tmp_path / "missing.json"))

    def test_get_settings_is_cached(self):
        """Test that settings load once."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
