from pathlib import Path

import psycopg
from psycopg.rows import dict_row

from lawpaw.classification.models import DocumentMetadata
from lawpaw.database.connection import get_connection
from lawpaw.database.models import LegalDocumentRecord
from lawpaw.processor.exceptions import PersistenceError

_COLUMNS = (
    "id, filename, original_path, new_path, document_type, filing_date, "
    "moving_party, court, judge, docket_number, summary, processed_at"
)


class LegalDocumentsRepository:
    """Database operations for the legal_documents table."""

    def ensure_table(self) -> None:
        """Create the legal_documents table if it does not exist yet."""
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS legal_documents (
                        id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
                        filename TEXT NOT NULL,
                        original_path TEXT NOT NULL,
                        new_path TEXT NOT NULL,
                        document_type TEXT NOT NULL DEFAULT '',
                        filing_date TEXT NOT NULL DEFAULT '',
                        moving_party TEXT NOT NULL DEFAULT '',
                        court TEXT NOT NULL DEFAULT '',
                        judge TEXT NOT NULL DEFAULT '',
                        docket_number TEXT NOT NULL DEFAULT '',
                        summary TEXT NOT NULL DEFAULT '',
                        processed_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                )
                conn.commit()
        except (psycopg.Error, RuntimeError) as exc:
            raise PersistenceError(f"Cannot create legal_documents table: {exc}") from exc

    def insert(
        self,
        metadata: DocumentMetadata,
        original_path: str,
        new_path: str,
    ) -> int:
        """Insert one processed document and return its assigned id.

        Each call is its own short transaction, so concurrent workers never
        block each other.

        Raises:
            PersistenceError: if the pool is not initialized or the write fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO legal_documents
                        (filename, original_path, new_path, document_type, filing_date,
                         moving_party, court, judge, docket_number, summary)
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                        RETURNING id
                        """,
                        (
                            Path(new_path).name,
                            original_path,
                            new_path,
                            metadata.document_type,
                            metadata.filing_date,
                            metadata.moving_party,
                            metadata.court,
                            metadata.judge,
                            metadata.docket_number,
                            metadata.summary,
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except (psycopg.Error, RuntimeError) as exc:
            raise PersistenceError(f"Cannot record {original_path}: {exc}") from exc

        if row is None:
            raise PersistenceError(f"Insert for {original_path} returned no id")
        return int(row[0])

    def find_by_id(self, record_id: int) -> LegalDocumentRecord | None:
        """Find a record by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM legal_documents WHERE id = %s",
                    (record_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return LegalDocumentRecord(**row)

    def delete(self, record_id: int) -> None:
        """Delete a record by ID. Used by integration test cleanup."""
        with get_connection() as conn:
            conn.execute("DELETE FROM legal_documents WHERE id = %s", (record_id,))
            conn.commit()
