"""
Test suite for environment-driven configuration.

System role: Verification of settings loading
"""

import pytest

from orchestrator.configs import Settings
from orchestrator.configs.database import DatabaseSettings
from orchestrator.configs.ingestion import IngestionSettings
from orchestrator.configs.vector_store import VectorStoreSettings


class TestSettings:
    """Test suite for Settings and its sections."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir("/")
        settings = Settings()

        assert settings.ingestion.max_tokens == 512
        assert settings.ingestion.supported_extensions == [".md", ".txt", ".adoc"]
        assert settings.vector_store.store_type == "faiss"
        assert settings.embedding.timeout_seconds == 30.0

    def test_sections_should_read_prefixed_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test each section honours its own environment prefix."""
        # Arrange
        monkeypatch.setenv("INGESTION_MAX_WORKERS", "8")
        monkeypatch.setenv("INGESTION_INCREMENTAL", "false")
        monkeypatch.setenv("VECTOR_STORE_STORE_TYPE", "memory")
        monkeypatch.setenv("EMBEDDING_PROVIDER", "fake")

        # Act
        settings = Settings()

        # Assert
        assert settings.ingestion.max_workers == 8
        assert settings.ingestion.incremental is False
        assert settings.vector_store.store_type == "memory"
        assert settings.embedding.provider == "fake"

    def test_invalid_values_should_be_rejected(self) -> None:
        with pytest.raises(ValueError):
            IngestionSettings(max_tokens=0)

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("postgres://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("postgresql://u:p@db/app", "postgresql+asyncpg://u:p@db/app"),
            ("sqlite+aiosqlite:///./x.db", "sqlite+aiosqlite:///./x.db"),
        ],
    )
    def test_async_database_url(self, url: str, expected: str) -> None:
        assert DatabaseSettings(url=url).async_database_url == expected

    def test_log_level_should_read_root_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        assert Settings().log_level == "DEBUG"

    def test_vector_store_should_use_settings_config_dict(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the vector store section is configured like its siblings."""
        # Arrange
        monkeypatch.setenv("VECTOR_STORE_HNSW_M", "16")
        monkeypatch.setenv("VECTOR_STORE_COMPACT_RATIO", "0.5")

        # Act
        settings = VectorStoreSettings()

        # Assert
        assert VectorStoreSettings.model_config["env_prefix"] == "VECTOR_STORE_"
        assert settings.hnsw_m == 16
        assert settings.compact_ratio == 0.5
