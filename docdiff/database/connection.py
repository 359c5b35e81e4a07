from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool

from docdiff.config.settings import Settings

_pool: ConnectionPool | None = None


def init_pool(settings: Settings) -> None:
    """Initialize the global connection pool from settings.

    The pool is sized to the worker's concurrency so every running job can
    hold a connection while the poll loop claims the next request.
    """
    global _pool  # noqa: PLW0603
    conninfo = (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )
    _pool = ConnectionPool(
        conninfo, min_size=1, max_size=max(2, settings.max_concurrent_jobs + 1)
    )


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn


SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def apply_schema(schema_path: Path | None = None) -> None:
    """Create the documents, comparisons and job_requests tables if missing."""
    sql = (schema_path or SCHEMA_PATH).read_text(encoding="utf-8")
    with get_connection() as conn:
        conn.execute(sql)  # type: ignore[arg-type]
        conn.commit()
