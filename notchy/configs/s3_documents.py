"""
S3 Documents bucket configuration.

Settings for raw document storage bucket and download behaviour.

Dependencies: pydantic_settings
System role: S3 documents bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3DocumentsSettings(BaseSettings):
    """Settings for S3 documents bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_DOCUMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="notchy-documents",
        description="S3 bucket holding uploaded PDFs",
    )
    region: str = Field(
        default="eu-north-1",
        description="AWS region for S3 bucket",
    )
    download_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts per object for transient download failures",
    )
    download_backoff_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Initial backoff between download attempts",
    )
