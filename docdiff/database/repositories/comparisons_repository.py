from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docdiff.comparison.models import Difference, difference_from_dict, difference_to_dict
from docdiff.database.connection import get_connection
from docdiff.database.models import ComparisonRecord
from docdiff.jobs.exceptions import ComparisonNotFoundError


class ComparisonsRepository:
    """Database operations for the comparisons table."""

    def create(self, doc_a_id: int, doc_b_id: int) -> ComparisonRecord:
        """Insert a new comparison in CREATED state."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO comparisons (doc_a_id, doc_b_id, status)
                    VALUES (%s, %s, 'CREATED')
                    RETURNING id, created_at, updated_at
                    """,
                    (doc_a_id, doc_b_id),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT INTO comparisons returned no row")
        return ComparisonRecord(
            id=row["id"],
            doc_a_id=doc_a_id,
            doc_b_id=doc_b_id,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def find_by_id(self, comparison_id: int) -> ComparisonRecord:
        """Find a comparison by ID.

        Raises:
            ComparisonNotFoundError: if no comparison with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, doc_a_id, doc_b_id, status, error_message, differences,
                           tokens_used, duration_ms, created_at, updated_at
                    FROM comparisons
                    WHERE id = %s
                    """,
                    (comparison_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ComparisonNotFoundError(f"Comparison {comparison_id} not found")
        return ComparisonRecord(
            id=row["id"],
            doc_a_id=row["doc_a_id"],
            doc_b_id=row["doc_b_id"],
            status=row["status"],
            error_message=row["error_message"],
            differences=[difference_from_dict(d) for d in row["differences"] or []],
            tokens_used=row["tokens_used"],
            duration_ms=row["duration_ms"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def mark_running(self, comparison_id: int) -> None:
        """Move a comparison to COMPARE_RUNNING and clear any previous error."""
        self._update(
            comparison_id,
            """
            UPDATE comparisons
            SET status = 'COMPARE_RUNNING', error_message = NULL, updated_at = NOW()
            WHERE id = %s
            """,
            (comparison_id,),
        )

    def mark_done(
        self,
        comparison_id: int,
        *,
        differences: list[Difference],
        tokens_used: int,
        duration_ms: int,
    ) -> None:
        """Persist a finished run, replacing the previous run's results wholesale."""
        self._update(
            comparison_id,
            """
            UPDATE comparisons
            SET status = 'DONE',
                error_message = NULL,
                differences = %s,
                tokens_used = %s,
                duration_ms = %s,
                updated_at = NOW()
            WHERE id = %s
            """,
            (
                Jsonb([difference_to_dict(d) for d in differences]),
                tokens_used,
                duration_ms,
                comparison_id,
            ),
        )

    def mark_failed(self, comparison_id: int, error: str) -> None:
        """Move a comparison to ERROR with a human-readable message."""
        self._update(
            comparison_id,
            """
            UPDATE comparisons
            SET status = 'ERROR', error_message = %s, updated_at = NOW()
            WHERE id = %s
            """,
            (error, comparison_id),
        )

    @staticmethod
    def _update(comparison_id: int, sql: str, params: tuple[Any, ...]) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, params)  # type: ignore[arg-type]
                if cur.rowcount == 0:
                    raise ComparisonNotFoundError(f"Comparison {comparison_id} not found")
            conn.commit()
