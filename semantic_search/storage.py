"""SQLite storage for record embeddings."""

import sqlite3
import threading
import time
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from .kernel import VectorLike
from .serialization import from_bytes, to_bytes


class EmbeddingStorage:
    """SQLite-based storage for embedding vectors keyed by (item_id, kind).

    ``kind`` names the record type ("email", "note", "contact", ...).
    """

    def __init__(self, db_path: str):
        """Initialize storage and create schema.

        Args:
            db_path: Path to SQLite database file
        """
        # Ensure parent directory exists
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._lock = threading.Lock()
        self._create_schema()

    def _create_schema(self):
        """Create embeddings table if it doesn't exist."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS embeddings (
                item_id TEXT NOT NULL,
                kind TEXT NOT NULL,
                embedding BLOB NOT NULL,
                dimensions INTEGER NOT NULL,
                text TEXT,
                created_at INTEGER NOT NULL,
                PRIMARY KEY (item_id, kind)
            )
        """)
        self._conn.commit()

    def _decode(self, blob: bytes, dimensions: int, item_id: str) -> np.ndarray:
        try:
            return from_bytes(blob, dimensions)
        except ValueError as e:
            raise ValueError(f"Corrupt embedding for item_id={item_id}: {e}") from e

    def set(self, item_id: str, kind: str, embedding: VectorLike, text: Optional[str] = None):
        """Store (or replace) the embedding of a record.

        Args:
            item_id: Record identifier
            kind: Record type
            embedding: Embedding vector
            text: Optional plain-text snippet for hybrid search
        """
        blob = to_bytes(embedding)
        dimensions = len(blob) // 4

        with self._lock:
            now = int(time.time())
            self._conn.execute("""
                INSERT INTO embeddings
                (item_id, kind, embedding, dimensions, text, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(item_id, kind) DO UPDATE SET
                    embedding = excluded.embedding,
                    dimensions = excluded.dimensions,
                    text = excluded.text
            """, (item_id, kind, blob, dimensions, text, now))
            self._conn.commit()

    def get(self, item_id: str, kind: str) -> Optional[np.ndarray]:
        """Retrieve a record's embedding.

        Returns:
            Embedding array (float32) or None if not found

        Raises:
            ValueError: If the stored blob does not match its dimensions
        """
        with self._lock:
            row = self._conn.execute(
                "SELECT embedding, dimensions FROM embeddings WHERE item_id = ? AND kind = ?",
                (item_id, kind)
            ).fetchone()

        if row is None:
            return None
        blob, dimensions = row
        return self._decode(blob, dimensions, item_id)

    def delete(self, item_id: str, kind: str) -> bool:
        """Delete a record's embedding. Returns True if a row was removed."""
        with self._lock:
            cursor = self._conn.execute(
                "DELETE FROM embeddings WHERE item_id = ? AND kind = ?",
                (item_id, kind)
            )
            self._conn.commit()
            return cursor.rowcount > 0

    def candidates(self, kind: str) -> List[Tuple[str, np.ndarray, Optional[str]]]:
        """Load every embedding of one kind as ranking candidates.

        Returns:
            ``(item_id, embedding, text)`` tuples in insertion order
        """
        with self._lock:
            rows = self._conn.execute(
                "SELECT item_id, embedding, dimensions, text FROM embeddings "
                "WHERE kind = ? ORDER BY rowid",
                (kind,)
            ).fetchall()

        return [
            (item_id, self._decode(blob, dimensions, item_id), text)
            for item_id, blob, dimensions, text in rows
        ]

    def count(self, kind: Optional[str] = None) -> int:
        with self._lock:
            if kind is None:
                cursor = self._conn.execute("SELECT COUNT(*) FROM embeddings")
            else:
                cursor = self._conn.execute(
                    "SELECT COUNT(*) FROM embeddings WHERE kind = ?", (kind,)
                )
            return cursor.fetchone()[0]

    def close(self):
        """Close database connection."""
        self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
