"""
Request models for the generation endpoints.

Dependencies: pydantic
System role: HTTP request schemas
"""

from pydantic import BaseModel, ConfigDict, Field


class FileKeysRequest(BaseModel):
    """Body accepting either a single `fileKey` or a `fileKeys` list."""

    model_config = ConfigDict(populate_by_name=True)

    file_key: str | None = Field(default=None, alias="fileKey")
    file_keys: list[str] | None = Field(default=None, alias="fileKeys")

    def resolved_file_keys(self) -> list[str]:
        """Return the requested keys, deduplicated, in request order."""
        if self.file_keys:
            keys = self.file_keys
        elif self.file_key:
            keys = [self.file_key]
        else:
            keys = []
        return list(dict.fromkeys(key for key in keys if key))


class SummarizeRequest(BaseModel):
    """Body of the summarize endpoint."""

    text: str = Field(default="", description="Text to summarize")


class SummaryResponse(BaseModel):
    summary: str
