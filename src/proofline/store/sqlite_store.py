"""SQLite-backed document and suggestion store."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from proofline.models.document import Document
from proofline.models.suggestion import Suggestion, SuggestionStatus
from proofline.store.base import SuggestionStore

DEFAULT_DB_PATH = Path.home() / ".proofline" / "proofline.db"

_SUGGESTION_COLUMNS = (
    "id, document_id, start_index, end_index, original_text, suggested_text, "
    "type, severity, status, explanation, created_at"
)
_DOCUMENT_COLUMNS = "id, owner_id, title, content, readability_score, created_at, updated_at"


class SQLiteSuggestionStore(SuggestionStore):
    """Documents and suggestions in one SQLite file with WAL mode."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    id TEXT PRIMARY KEY,
                    owner_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL DEFAULT '',
                    readability_score REAL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS suggestions (
                    id TEXT PRIMARY KEY,
                    document_id TEXT NOT NULL REFERENCES documents(id) ON DELETE CASCADE,
                    start_index INTEGER NOT NULL,
                    end_index INTEGER NOT NULL,
                    original_text TEXT NOT NULL,
                    suggested_text TEXT NOT NULL,
                    type TEXT NOT NULL,
                    severity TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'pending',
                    explanation TEXT,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_suggestions_doc_status "
                "ON suggestions (document_id, status)"
            )

    # -- documents -------------------------------------------------------

    def create_document(self, owner_id: str, title: str = "Untitled document", content: str = "") -> Document:
        doc = Document(owner_id=owner_id, title=title, content=content)
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO documents ({_DOCUMENT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    doc.id,
                    doc.owner_id,
                    doc.title,
                    doc.content,
                    doc.readability_score,
                    doc.created_at.isoformat(),
                    doc.updated_at.isoformat(),
                ),
            )
        return doc

    def load_document(self, document_id: str) -> Document | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = ?",
                (document_id,),
            ).fetchone()
        return self._row_to_document(row) if row else None

    def list_documents(self, owner_id: str) -> list[Document]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE owner_id = ? ORDER BY updated_at DESC",
                (owner_id,),
            ).fetchall()
        return [self._row_to_document(row) for row in rows]

    def save_content(self, document_id: str, content: str, readability_score: float | None = None) -> None:
        now = datetime.now().isoformat()
        with self._connect() as conn:
            if readability_score is None:
                conn.execute(
                    "UPDATE documents SET content = ?, updated_at = ? WHERE id = ?",
                    (content, now, document_id),
                )
            else:
                conn.execute(
                    "UPDATE documents SET content = ?, readability_score = ?, updated_at = ? WHERE id = ?",
                    (content, readability_score, now, document_id),
                )

    def set_title(self, document_id: str, title: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE documents SET title = ?, updated_at = ? WHERE id = ?",
                (title, datetime.now().isoformat(), document_id),
            )

    def set_readability_score(self, document_id: str, score: float) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE documents SET readability_score = ? WHERE id = ?",
                (score, document_id),
            )

    def delete_document(self, document_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM documents WHERE id = ?", (document_id,))

    # -- suggestions -----------------------------------------------------

    def list_suggestions(self, document_id: str, status: SuggestionStatus | None = None) -> list[Suggestion]:
        query = f"SELECT {_SUGGESTION_COLUMNS} FROM suggestions WHERE document_id = ?"
        params: tuple = (document_id,)
        if status is not None:
            query += " AND status = ?"
            params += (status.value,)
        query += " ORDER BY start_index, created_at"
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_suggestion(row) for row in rows]

    def get_suggestion(self, document_id: str, suggestion_id: str) -> Suggestion | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_SUGGESTION_COLUMNS} FROM suggestions WHERE id = ? AND document_id = ?",
                (suggestion_id, document_id),
            ).fetchone()
        return self._row_to_suggestion(row) if row else None

    def replace_pending_suggestions(self, document_id: str, batch: list[Suggestion]) -> int:
        # One connection context == one transaction: delete and insert commit together
        with self._connect() as conn:
            retired = conn.execute(
                "DELETE FROM suggestions WHERE document_id = ? AND status = ?",
                (document_id, SuggestionStatus.PENDING.value),
            ).rowcount
            conn.executemany(
                f"INSERT INTO suggestions ({_SUGGESTION_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                [self._suggestion_to_row(document_id, s) for s in batch],
            )
        return retired

    def set_suggestion_status(self, document_id: str, suggestion_id: str, status: SuggestionStatus) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE suggestions SET status = ? WHERE id = ? AND document_id = ? AND status = ?",
                (status.value, suggestion_id, document_id, SuggestionStatus.PENDING.value),
            )
            return cursor.rowcount > 0

    def delete_suggestions(self, suggestion_ids: list[str]) -> int:
        if not suggestion_ids:
            return 0
        placeholders = ", ".join("?" for _ in suggestion_ids)
        with self._connect() as conn:
            cursor = conn.execute(
                f"DELETE FROM suggestions WHERE id IN ({placeholders})",
                tuple(suggestion_ids),
            )
            return cursor.rowcount

    # -- row mapping -----------------------------------------------------

    @staticmethod
    def _suggestion_to_row(document_id: str, s: Suggestion) -> tuple:
        return (
            s.id,
            document_id,
            s.start_index,
            s.end_index,
            s.original_text,
            s.suggested_text,
            s.type.value,
            s.severity.value,
            s.status.value,
            s.explanation,
            s.created_at.isoformat(),
        )

    @staticmethod
    def _row_to_suggestion(row: tuple) -> Suggestion:
        return Suggestion(
            id=row[0],
            document_id=row[1],
            start_index=row[2],
            end_index=row[3],
            original_text=row[4],
            suggested_text=row[5],
            type=row[6],
            severity=row[7],
            status=row[8],
            explanation=row[9],
            created_at=datetime.fromisoformat(row[10]),
        )

    @staticmethod
    def _row_to_document(row: tuple) -> Document:
        return Document(
            id=row[0],
            owner_id=row[1],
            title=row[2],
            content=row[3],
            readability_score=row[4],
            created_at=datetime.fromisoformat(row[5]),
            updated_at=datetime.fromisoformat(row[6]),
        )
