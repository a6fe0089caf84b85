"""Context retrieval over a document's stored segments."""

import logging

from coursequiz.config import RetrievalConfig
from coursequiz.models.segment import Segment
from coursequiz.storage.segments import SegmentStore

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n"


class SegmentRetriever:
    """Builds generation context from the segments of an indexed document.

    Retrieval is keyword- and position-based only: full concatenation,
    substring filtering, or even-stride sampling.

    Args:
        store: SegmentStore holding the indexed segments.
        config: Optional RetrievalConfig; keyword matching is
            case-insensitive by default.
    """

    def __init__(self, store: SegmentStore, config: RetrievalConfig | None = None) -> None:
        self._store = store
        self._config = config or RetrievalConfig()

    def segments(self, document_id: str) -> list[Segment]:
        """All segments of a document ordered by sequence_index."""
        return self._store.list_segments(document_id)

    def full_context(self, document_id: str) -> str:
        """Concatenate every segment of a document, separated by a blank line."""
        return CONTEXT_SEPARATOR.join(s.text for s in self.segments(document_id))

    def by_keyword(self, document_id: str, keyword: str) -> list[Segment]:
        """Return the segments whose text contains ``keyword``, in order.

        Args:
            document_id: Document to search.
            keyword: Substring to look for.

        Returns:
            Matching segments in sequence order.

        Raises:
            ValueError: If keyword is empty.
        """
        if not keyword:
            raise ValueError("keyword must not be empty")

        if self._config.keyword_case_sensitive:
            return [s for s in self.segments(document_id) if keyword in s.text]

        needle = keyword.casefold()
        return [s for s in self.segments(document_id) if needle in s.text.casefold()]

    def sample(self, document_id: str, n: int) -> list[Segment]:
        """Pick up to ``n`` segments spread evenly across the document.

        When the document has more than ``n`` segments, every
        ``total // n``-th segment is taken starting from the first, so the
        selection covers the whole document rather than a prefix.

        Args:
            document_id: Document to sample.
            n: Maximum number of segments to return.

        Returns:
            Sampled segments in sequence order.

        Raises:
            ValueError: If n < 1.
        """
        if n < 1:
            raise ValueError(f"sample size must be at least 1, got {n}")

        all_segments = self.segments(document_id)
        total = len(all_segments)
        if total <= n:
            return all_segments

        stride = total // n
        sampled = [all_segments[i * stride] for i in range(n) if i * stride < total]
        logger.debug(
            "Sampled %d of %d segments (stride %d) for document %s",
            len(sampled),
            total,
            stride,
            document_id,
        )
        return sampled

    def sampled_context(self, document_id: str, n: int) -> str:
        """Concatenate the segments chosen by :meth:`sample`."""
        return CONTEXT_SEPARATOR.join(s.text for s in self.sample(document_id, n))

    def is_indexed(self, document_id: str) -> bool:
        """True if at least one segment is stored for the document."""
        return self._store.count_segments(document_id) > 0
