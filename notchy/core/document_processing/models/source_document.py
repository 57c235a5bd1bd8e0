"""
Source document model.

Represents one uploaded PDF after text extraction.

Dependencies: pydantic
System role: Output of the document loader
"""

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field, computed_field


def display_name_for(source_key: str) -> str:
    """Return the path tail of a storage key ("uploads/a/math.pdf" -> "math.pdf")."""
    name = PurePosixPath(source_key).name
    return name or source_key


class SourceDocument(BaseModel):
    """Extracted text of one document plus its prompt summary."""

    model_config = ConfigDict(frozen=True)

    source_key: str = Field(description="Storage key in the documents bucket")
    text: str = Field(description="Trimmed page texts joined by blank lines")
    summary: str = Field(description="Short prefix used as prompt context")
    page_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_name(self) -> str:
        return display_name_for(self.source_key)
