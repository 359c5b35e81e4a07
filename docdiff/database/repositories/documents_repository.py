from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docdiff.database.connection import get_connection
from docdiff.database.models import DocumentRecord
from docdiff.jobs.exceptions import DocumentNotFoundError
from docdiff.ocr.models import Paragraph, paragraph_from_dict, paragraph_to_dict


class DocumentsRepository:
    """Database operations for the documents table.

    OCR status transitions (RUNNING, DONE, ERROR) are written only by the
    OCR job.
    """

    def create(self, *, filename: str, blob_id: str, sha256: str, mime_type: str) -> DocumentRecord:
        """Insert a new document in PENDING state."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO documents (filename, blob_id, sha256, mime_type, ocr_status)
                    VALUES (%s, %s, %s, %s, 'PENDING')
                    RETURNING id, uploaded_at, updated_at
                    """,
                    (filename, blob_id, sha256, mime_type),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT INTO documents returned no row")
        return DocumentRecord(
            id=row["id"],
            filename=filename,
            blob_id=blob_id,
            sha256=sha256,
            mime_type=mime_type,
            uploaded_at=row["uploaded_at"],
            updated_at=row["updated_at"],
        )

    def find_by_id(self, document_id: int) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, filename, blob_id, sha256, mime_type, ocr_status,
                           ocr_error, ocr_paragraphs, ocr_text_payload, page_count,
                           uploaded_at, updated_at
                    FROM documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return self._to_record(row)

    def mark_ocr_running(self, document_id: int) -> None:
        """Move a document to RUNNING and clear any previous error.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        self._update(
            document_id,
            """
            UPDATE documents
            SET ocr_status = 'RUNNING', ocr_error = NULL, updated_at = NOW()
            WHERE id = %s
            """,
            (document_id,),
        )

    def mark_ocr_done(
        self,
        document_id: int,
        *,
        paragraphs: list[Paragraph],
        text_payload: str,
        page_count: int,
    ) -> None:
        """Persist the paragraph index and payload, replacing any earlier run.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        self._update(
            document_id,
            """
            UPDATE documents
            SET ocr_status = 'DONE',
                ocr_error = NULL,
                ocr_paragraphs = %s,
                ocr_text_payload = %s,
                page_count = %s,
                updated_at = NOW()
            WHERE id = %s
            """,
            (
                Jsonb([paragraph_to_dict(p) for p in paragraphs]),
                text_payload,
                page_count,
                document_id,
            ),
        )

    def mark_ocr_failed(self, document_id: int, error: str) -> None:
        """Move a document to ERROR with a human-readable message.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        self._update(
            document_id,
            """
            UPDATE documents
            SET ocr_status = 'ERROR', ocr_error = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (error, document_id),
        )

    @staticmethod
    def _update(document_id: int, sql: str, params: tuple[Any, ...]) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, params)  # type: ignore[arg-type]
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    @staticmethod
    def _to_record(row: dict[str, Any]) -> DocumentRecord:
        return DocumentRecord(
            id=row["id"],
            filename=row["filename"],
            blob_id=row["blob_id"],
            sha256=row["sha256"],
            mime_type=row["mime_type"],
            ocr_status=row["ocr_status"],
            ocr_error=row["ocr_error"],
            ocr_paragraphs=[paragraph_from_dict(p) for p in row["ocr_paragraphs"] or []],
            ocr_text_payload=row["ocr_text_payload"],
            page_count=row["page_count"],
            uploaded_at=row["uploaded_at"],
            updated_at=row["updated_at"],
        )
