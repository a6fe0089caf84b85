"""Entry point: index a course file and print a generated quiz as JSON."""

import argparse
import logging
import sys
from pathlib import Path

from coursequiz.config import load_config
from coursequiz.generation import CancelToken, LazyModelClient, QuizGenerator
from coursequiz.ingestion import ContentChunker, DocumentIndexer, DocumentLoader, SegmentRetriever
from coursequiz.models import Difficulty, GenerationRequest
from coursequiz.storage import SqliteSegmentStore


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a multiple-choice quiz from course text.")
    parser.add_argument("path", type=Path, help="Course text file (.txt or .md)")
    parser.add_argument("--count", type=int, default=5, help="Number of questions")
    parser.add_argument(
        "--difficulty",
        default="MEDIUM",
        choices=[d.name for d in Difficulty],
        type=str.upper,
    )
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    parser.add_argument("--timeout", type=float, default=None, help="Give up after N seconds")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Index the given file and write the quiz to stdout."""
    args = _parse_args(argv)
    config = load_config(args.config)
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    document = DocumentLoader().load(args.path)
    document_id = args.path.stem

    store = SqliteSegmentStore(config.storage.sqlite_path)
    indexer = DocumentIndexer(store, ContentChunker(config.chunking))
    indexer.index(document_id, document.text)

    generator = QuizGenerator(config.generation, LazyModelClient.from_config(config))
    request = GenerationRequest(
        document_id=document_id,
        count=args.count,
        difficulty=Difficulty[args.difficulty],
        title=document.title,
    )
    result = generator.generate_for_request(
        request,
        SegmentRetriever(store, config.retrieval),
        cancel=CancelToken(timeout=args.timeout),
    )

    sys.stdout.write(result.model_dump_json(indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
