from typing import Any

import psycopg
from psycopg.rows import dict_row

from docdiff.database.connection import get_connection
from docdiff.database.models import JobRecord


class JobRepository:
    """Database operations for the job_requests table."""

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def enqueue(self, kind: str, entity_id: int) -> int:
        """Insert a pending job request and return its ID."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO job_requests (kind, entity_id, status, attempts)
                    VALUES (%s, %s, 'pending', 0)
                    RETURNING id
                    """,
                    (kind, entity_id),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT INTO job_requests returned no id")
        return int(row[0])

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Claim the next pending job using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, kind, entity_id, status, attempts
                FROM job_requests
                WHERE status = 'pending'
                  AND attempts < %s
                ORDER BY created_at, id
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()

        if row is None:
            conn.commit()
            return None

        conn.execute(
            """
            UPDATE job_requests
            SET status = 'processing', locked_at = NOW(), updated_at = NOW()
            WHERE id = %s
            """,
            (row["id"],),
        )
        conn.commit()

        return JobRecord(
            id=row["id"],
            kind=row["kind"],
            entity_id=row["entity_id"],
            status="processing",
            attempts=row["attempts"],
        )

    def mark_done(self, job_id: int) -> None:
        """Mark a job request as done."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE job_requests
                SET status = 'done', error_message = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (job_id,),
            )
            conn.commit()

    def mark_failed(self, job_id: int, error: str) -> None:
        """Mark a job request as permanently failed."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE job_requests
                SET status = 'failed', attempts = attempts + 1,
                    error_message = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (error, job_id),
            )
            conn.commit()

    def increment_attempts(self, job_id: int, error: str | None = None) -> None:
        """Increment attempt count and return the request to pending."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE job_requests
                SET attempts = attempts + 1, status = 'pending',
                    error_message = %s, locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (error, job_id),
            )
            conn.commit()

    def find_by_id(self, job_id: int) -> JobRecord | None:
        """Find a job request by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, kind, entity_id, status, attempts,
                           error_message, locked_at, created_at, updated_at
                    FROM job_requests
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return JobRecord(
            id=row["id"],
            kind=row["kind"],
            entity_id=row["entity_id"],
            status=row["status"],
            attempts=row["attempts"],
            error_message=row["error_message"],
            locked_at=row["locked_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
