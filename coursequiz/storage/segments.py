"""Segment persistence: the store protocol and its SQLite implementation."""

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

from coursequiz.models.segment import Segment
from coursequiz.storage.database import get_connection, initialize_database

logger = logging.getLogger(__name__)

_INSERT_SQL = """
    INSERT INTO segments (id, document_id, sequence_index, text, start_offset, end_offset)
    VALUES (?, ?, ?, ?, ?, ?)
"""


class SegmentStore(Protocol):
    """Storage collaborator holding the segments of each document."""

    def delete_all_segments(self, document_id: str) -> None: ...

    def save_segments(self, segments: list[Segment]) -> None: ...

    def list_segments(self, document_id: str) -> list[Segment]: ...

    def count_segments(self, document_id: str) -> int: ...

    def replace_segments(self, document_id: str, segments: list[Segment]) -> None: ...


def _row_to_segment(row: sqlite3.Row) -> Segment:
    return Segment(
        id=row["id"],
        document_id=row["document_id"],
        sequence_index=row["sequence_index"],
        text=row["text"],
        start_offset=row["start_offset"],
        end_offset=row["end_offset"],
    )


def _segment_params(segment: Segment) -> tuple:
    return (
        segment.id,
        segment.document_id,
        segment.sequence_index,
        segment.text,
        segment.start_offset,
        segment.end_offset,
    )


class SqliteSegmentStore:
    """SegmentStore backed by the ``segments`` table of a SQLite file.

    Every call opens its own connection, so one store instance can be shared
    between threads.

    Args:
        db_path: Path to the SQLite database file. The schema is created on
            first use.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = db_path
        initialize_database(db_path)

    def delete_all_segments(self, document_id: str) -> None:
        conn = get_connection(self._db_path)
        try:
            conn.execute("DELETE FROM segments WHERE document_id = ?", (document_id,))
            conn.commit()
        finally:
            conn.close()

    def save_segments(self, segments: list[Segment]) -> None:
        if not segments:
            return
        conn = get_connection(self._db_path)
        try:
            conn.executemany(_INSERT_SQL, [_segment_params(s) for s in segments])
            conn.commit()
        finally:
            conn.close()

    def replace_segments(self, document_id: str, segments: list[Segment]) -> None:
        """Delete a document's segments and insert new ones in one transaction.

        Readers see either the old set or the new set, never a mix.

        Args:
            document_id: Document whose segments are replaced.
            segments: The new segments; all must belong to ``document_id``.

        Raises:
            ValueError: If a segment belongs to a different document.
        """
        foreign = [s for s in segments if s.document_id != document_id]
        if foreign:
            raise ValueError(
                f"Segment {foreign[0].id} belongs to document "
                f"{foreign[0].document_id}, not {document_id}"
            )

        conn = get_connection(self._db_path)
        try:
            conn.execute("BEGIN IMMEDIATE")
            conn.execute("DELETE FROM segments WHERE document_id = ?", (document_id,))
            conn.executemany(_INSERT_SQL, [_segment_params(s) for s in segments])
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            logger.exception("Failed to replace segments for document %s", document_id)
            raise
        finally:
            conn.close()

    def list_segments(self, document_id: str) -> list[Segment]:
        conn = get_connection(self._db_path)
        try:
            rows = conn.execute(
                "SELECT * FROM segments WHERE document_id = ? ORDER BY sequence_index",
                (document_id,),
            ).fetchall()
        finally:
            conn.close()
        return [_row_to_segment(row) for row in rows]

    def count_segments(self, document_id: str) -> int:
        conn = get_connection(self._db_path)
        try:
            row = conn.execute(
                "SELECT COUNT(*) FROM segments WHERE document_id = ?", (document_id,)
            ).fetchone()
        finally:
            conn.close()
        return int(row[0])
