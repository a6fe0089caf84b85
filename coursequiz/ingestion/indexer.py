"""Document indexing: chunk text and replace the stored segment set."""

import logging

from coursequiz.ingestion.chunker import ContentChunker
from coursequiz.models.segment import Segment
from coursequiz.storage.segments import SegmentStore

logger = logging.getLogger(__name__)


class DocumentIndexer:
    """Re-indexes documents into a SegmentStore.

    Args:
        store: Destination SegmentStore.
        chunker: ContentChunker used to split document text.
    """

    def __init__(self, store: SegmentStore, chunker: ContentChunker) -> None:
        self._store = store
        self._chunker = chunker

    def index(self, document_id: str, text: str) -> list[Segment]:
        """Chunk a document and atomically replace its previous segments.

        Args:
            document_id: Document being (re)indexed.
            text: Current document text.

        Returns:
            The newly stored segments.
        """
        logger.info("Starting indexing for document %s", document_id)
        segments = self._chunker.chunk(text, document_id)
        self._store.replace_segments(document_id, segments)
        logger.info("Indexed %d segments for document %s", len(segments), document_id)
        return segments
