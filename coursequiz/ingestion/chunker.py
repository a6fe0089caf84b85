"""Paragraph-aware text chunker with character overlap."""

import logging
import re

from coursequiz.config import ChunkingConfig
from coursequiz.models.segment import Segment

logger = logging.getLogger(__name__)

# Blank-line paragraph boundary (two or more consecutive newlines).
PARAGRAPH_BREAK = re.compile(r"\n\n+")


def split_paragraphs(text: str) -> list[tuple[str, str]]:
    """Split text on blank lines, keeping each paragraph's trailing separator.

    Concatenating ``paragraph + separator`` for every pair reproduces the
    input exactly, which keeps segment offsets aligned with the source.

    Args:
        text: The text to split.

    Returns:
        List of ``(paragraph, separator)`` pairs in document order. The last
        pair has an empty separator.
    """
    pieces: list[tuple[str, str]] = []
    pos = 0
    for match in PARAGRAPH_BREAK.finditer(text):
        pieces.append((text[pos : match.start()], match.group()))
        pos = match.end()
    pieces.append((text[pos:], ""))
    return pieces


def chunk_text(
    text: str,
    document_id: str,
    target_size: int = 500,
    overlap_width: int = 50,
) -> list[Segment]:
    """Split text into ordered, overlapping segments.

    Paragraphs are accumulated greedily into a buffer. Once the next paragraph
    would push the buffer past ``target_size``, the buffer is emitted and the
    next buffer starts with its last ``overlap_width`` characters. The size is
    a soft target: a single oversized paragraph is emitted whole.

    Args:
        text: Full document text.
        document_id: Document ID to attach to each segment.
        target_size: Target segment size in characters.
        overlap_width: Characters carried over between consecutive segments.

    Returns:
        Segments with contiguous ``sequence_index`` values starting at 0.

    Raises:
        ValueError: If ``target_size < 1`` or ``overlap_width < 0``.
    """
    if target_size < 1:
        raise ValueError(f"target_size must be positive, got {target_size}")
    if overlap_width < 0:
        raise ValueError(f"overlap_width must be non-negative, got {overlap_width}")

    if not text or not text.strip():
        return []

    segments: list[Segment] = []
    buffer = ""
    start = 0
    position = 0

    for paragraph, separator in split_paragraphs(text):
        if len(buffer) + len(paragraph) > target_size and buffer.strip():
            segments.append(
                Segment(
                    document_id=document_id,
                    sequence_index=len(segments),
                    text=buffer.strip(),
                    start_offset=start,
                    end_offset=position,
                )
            )
            # buffer always mirrors text[start:position]
            buffer = buffer[max(0, len(buffer) - overlap_width) :]
            start = position - len(buffer)

        buffer += paragraph + separator
        position += len(paragraph) + len(separator)

    if buffer.strip():
        segments.append(
            Segment(
                document_id=document_id,
                sequence_index=len(segments),
                text=buffer.strip(),
                start_offset=start,
                end_offset=position,
            )
        )

    logger.debug(
        "Chunked document %s (%d chars) into %d segments",
        document_id,
        len(text),
        len(segments),
    )
    return segments


class ContentChunker:
    """Chunks document text using sizes from a ChunkingConfig.

    Args:
        config: ChunkingConfig with target_size and overlap_width settings.
    """

    def __init__(self, config: ChunkingConfig) -> None:
        self._config = config

    def chunk(self, text: str, document_id: str) -> list[Segment]:
        """Split document text into segments.

        Args:
            text: Full document text.
            document_id: Document ID to attach to each segment.

        Returns:
            Ordered list of Segment objects.
        """
        return chunk_text(
            text,
            document_id,
            target_size=self._config.target_size,
            overlap_width=self._config.overlap_width,
        )
