"""Tests for segment retrieval and even-stride sampling."""

import pytest

from coursequiz.config import RetrievalConfig
from coursequiz.ingestion.retriever import SegmentRetriever
from coursequiz.models.segment import Segment


class InMemoryStore:
    """Minimal SegmentStore keeping segments in a dict."""

    def __init__(self) -> None:
        self._segments: dict[str, list[Segment]] = {}

    def delete_all_segments(self, document_id: str) -> None:
        self._segments.pop(document_id, None)

    def save_segments(self, segments: list[Segment]) -> None:
        for segment in segments:
            self._segments.setdefault(segment.document_id, []).append(segment)

    def list_segments(self, document_id: str) -> list[Segment]:
        return sorted(self._segments.get(document_id, []), key=lambda s: s.sequence_index)

    def count_segments(self, document_id: str) -> int:
        return len(self._segments.get(document_id, []))

    def replace_segments(self, document_id: str, segments: list[Segment]) -> None:
        self._segments[document_id] = list(segments)


def _store_with(n: int, document_id: str = "doc-1") -> InMemoryStore:
    store = InMemoryStore()
    store.save_segments(
        [
            Segment(
                document_id=document_id,
                sequence_index=i,
                text=f"Segment {i} text",
                start_offset=i * 20,
                end_offset=i * 20 + 16,
            )
            for i in range(n)
        ]
    )
    return store


class TestFullContext:
    def test_joins_with_blank_line(self) -> None:
        retriever = SegmentRetriever(_store_with(3))
        assert retriever.full_context("doc-1") == (
            "Segment 0 text\n\nSegment 1 text\n\nSegment 2 text"
        )

    def test_unknown_document_is_empty(self) -> None:
        assert SegmentRetriever(InMemoryStore()).full_context("nope") == ""


class TestByKeyword:
    @pytest.fixture
    def retriever(self) -> SegmentRetriever:
        store = InMemoryStore()
        texts = ["Mitochondria produce ATP", "The nucleus stores DNA", "ATP synthase"]
        store.save_segments(
            [
                Segment(
                    document_id="doc-1", sequence_index=i, text=t, start_offset=0, end_offset=len(t)
                )
                for i, t in enumerate(texts)
            ]
        )
        return SegmentRetriever(store)

    def test_case_insensitive_by_default(self, retriever: SegmentRetriever) -> None:
        matches = retriever.by_keyword("doc-1", "atp")
        assert [s.sequence_index for s in matches] == [0, 2]

    def test_case_sensitive_when_configured(self) -> None:
        store = InMemoryStore()
        store.save_segments(
            [
                Segment(document_id="d", sequence_index=0, text="ATP", start_offset=0, end_offset=3),
                Segment(document_id="d", sequence_index=1, text="atp", start_offset=0, end_offset=3),
            ]
        )
        retriever = SegmentRetriever(store, RetrievalConfig(keyword_case_sensitive=True))
        assert [s.text for s in retriever.by_keyword("d", "ATP")] == ["ATP"]

    def test_no_match(self, retriever: SegmentRetriever) -> None:
        assert retriever.by_keyword("doc-1", "ribosome") == []

    def test_empty_keyword_rejected(self, retriever: SegmentRetriever) -> None:
        with pytest.raises(ValueError):
            retriever.by_keyword("doc-1", "")


class TestSample:
    def test_returns_all_when_total_at_most_n(self) -> None:
        retriever = SegmentRetriever(_store_with(3))
        assert [s.sequence_index for s in retriever.sample("doc-1", 3)] == [0, 1, 2]
        assert [s.sequence_index for s in retriever.sample("doc-1", 10)] == [0, 1, 2]

    def test_even_stride(self) -> None:
        retriever = SegmentRetriever(_store_with(10))
        assert [s.sequence_index for s in retriever.sample("doc-1", 3)] == [0, 3, 6]

    def test_stride_one(self) -> None:
        retriever = SegmentRetriever(_store_with(5))
        assert [s.sequence_index for s in retriever.sample("doc-1", 4)] == [0, 1, 2, 3]

    def test_single_sample_is_first_segment(self) -> None:
        retriever = SegmentRetriever(_store_with(7))
        assert [s.sequence_index for s in retriever.sample("doc-1", 1)] == [0]

    @pytest.mark.parametrize("total,n", [(1, 1), (9, 2), (100, 7), (37, 36), (5, 50)])
    def test_never_exceeds_n(self, total: int, n: int) -> None:
        retriever = SegmentRetriever(_store_with(total))
        sampled = retriever.sample("doc-1", n)
        assert len(sampled) == min(total, n)

    def test_deterministic(self) -> None:
        retriever = SegmentRetriever(_store_with(23))
        assert retriever.sample("doc-1", 5) == retriever.sample("doc-1", 5)

    def test_rejects_n_below_one(self) -> None:
        with pytest.raises(ValueError):
            SegmentRetriever(_store_with(3)).sample("doc-1", 0)

    def test_sampled_context(self) -> None:
        retriever = SegmentRetriever(_store_with(4))
        assert retriever.sampled_context("doc-1", 2) == "Segment 0 text\n\nSegment 2 text"


class TestIsIndexed:
    def test_indexed(self) -> None:
        assert SegmentRetriever(_store_with(1)).is_indexed("doc-1")

    def test_not_indexed(self) -> None:
        assert not SegmentRetriever(_store_with(1)).is_indexed("doc-2")
