"""Segment storage."""

from coursequiz.storage.database import get_connection, initialize_database
from coursequiz.storage.segments import SegmentStore, SqliteSegmentStore

__all__ = ["SegmentStore", "SqliteSegmentStore", "get_connection", "initialize_database"]
