"""
Test suite for application settings.

Covers defaults, environment prefixes and cross-field validation.

System role: Verification of configuration loading
"""

import pytest
from pydantic import ValidationError

from notchy.configs import (
    OpenAISettings,
    PipelineSettings,
    S3DocumentsSettings,
    Settings,
    VectorStoreSettings,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test away from any local .env file."""
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    """Test suite for default settings."""

    def test_pipeline_defaults(self) -> None:
        settings = PipelineSettings()

        assert (settings.chunk_size, settings.chunk_overlap) == (500, 100)
        assert settings.summary_chars == 500
        assert settings.max_context_chars is None
        assert settings.request_timeout_seconds == 60.0

    def test_vector_store_defaults(self) -> None:
        settings = VectorStoreSettings()

        assert settings.chat_top_k == 3
        assert settings.artifact_top_k == 5

    def test_openai_defaults(self) -> None:
        settings = OpenAISettings()

        assert settings.embedding_model == "text-embedding-ada-002"
        assert settings.chat_temperature == 0.7
        assert settings.chat_max_tokens == 500
        assert settings.max_retries == 0

    def test_settings_should_aggregate_sections(self) -> None:
        settings = Settings()

        assert settings.log_level == "INFO"
        assert isinstance(settings.s3_documents, S3DocumentsSettings)


class TestEnvironmentOverrides:
    """Test suite for environment variable mapping."""

    def test_should_read_prefixed_variables(self, monkeypatch) -> None:
        """Should map each section to its own prefix."""
        monkeypatch.setenv("PINECONE_API_KEY", "pc-key")
        monkeypatch.setenv("PINECONE_INDEX_NAME", "docs")
        monkeypatch.setenv("S3_DOCUMENTS_BUCKET", "uploads-bucket")
        monkeypatch.setenv("PIPELINE_CHUNK_SIZE", "800")
        monkeypatch.setenv("OPENAI_CHAT_MODEL", "gpt-4o")

        settings = Settings()

        assert settings.vector_store.api_key == "pc-key"
        assert settings.vector_store.index_name == "docs"
        assert settings.s3_documents.bucket == "uploads-bucket"
        assert settings.pipeline.chunk_size == 800
        assert settings.openai.chat_model == "gpt-4o"

    def test_should_read_dotenv_file(self, tmp_path) -> None:
        """Should load values from a .env file in the working directory."""
        (tmp_path / ".env").write_text("PIPELINE_SUMMARY_CHARS=250\n")

        assert PipelineSettings().summary_chars == 250


class TestValidation:
    """Test suite for settings validation."""

    def test_should_reject_overlap_not_smaller_than_chunk(self) -> None:
        with pytest.raises(ValidationError, match="chunk_overlap must be smaller"):
            PipelineSettings(chunk_size=100, chunk_overlap=100)

    def test_should_reject_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            PipelineSettings(request_timeout_seconds=0)

    def test_should_reject_zero_top_k(self) -> None:
        with pytest.raises(ValidationError):
            VectorStoreSettings(chat_top_k=0)
