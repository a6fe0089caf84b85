"""Segment data model."""

from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


class Segment(BaseModel):
    """A contiguous slice of a source document used as retrieval context.

    Offsets are character positions in the original document text, so
    ``document_text[start_offset:end_offset].strip() == text``.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    document_id: str
    sequence_index: int = Field(default=0, ge=0)
    text: str
    start_offset: int = Field(ge=0)  # Start position in the document text
    end_offset: int = Field(ge=1)  # End position (exclusive)

    @model_validator(mode="after")
    def _check_offsets(self) -> "Segment":
        if self.start_offset >= self.end_offset:
            raise ValueError(
                f"start_offset ({self.start_offset}) must be less than "
                f"end_offset ({self.end_offset})"
            )
        return self
