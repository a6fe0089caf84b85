"""Course material ingestion: loading, chunking, indexing and retrieval."""

from coursequiz.ingestion.chunker import ContentChunker, chunk_text, split_paragraphs
from coursequiz.ingestion.indexer import DocumentIndexer
from coursequiz.ingestion.loader import DocumentLoader
from coursequiz.ingestion.retriever import SegmentRetriever

__all__ = [
    "ContentChunker",
    "DocumentIndexer",
    "DocumentLoader",
    "SegmentRetriever",
    "chunk_text",
    "split_paragraphs",
]
