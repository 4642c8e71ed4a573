"""
Tests for the aggregated application settings.

System role: Verification of environment-driven configuration
"""

from blogsearch.configs import Settings
from blogsearch.configs.database import DatabaseSettings


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.search.supplement_ratio == 0.8

    def test_log_level_from_environment(self, monkeypatch) -> None:
        # Arrange
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        # Act
        settings = Settings(_env_file=None)

        # Assert
        assert settings.log_level == "DEBUG"

    def test_database_reads_only_prefixed_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("POSTGRES_HOST", "db.internal")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        database = DatabaseSettings(_env_file=None)

        assert database.host == "db.internal"
        assert not hasattr(database, "log_level")
