"""Source document data model."""

from pydantic import BaseModel


class SourceDocument(BaseModel):
    """Instructional text loaded from disk, ready to be indexed."""

    title: str
    text: str
    source_path: str
    file_format: str  # "txt", "md"
