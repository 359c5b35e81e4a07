import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from docdiff.config.settings import Settings
from docdiff.database.connection import apply_schema, close_pool, get_connection, init_pool
from docdiff.database.models import JOB_KIND_OCR, ComparisonRecord, DocumentRecord, JobRecord
from docdiff.database.repositories.comparisons_repository import ComparisonsRepository
from docdiff.database.repositories.documents_repository import DocumentsRepository
from docdiff.database.repositories.job_repository import JobRepository
from docdiff.storage.local_blob_store import LocalBlobStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docdiff_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def empty_job_queue(integration_pool: None) -> None:
    """Drop leftover pending requests so claims only see this test's rows."""
    with get_connection() as conn:
        conn.execute("DELETE FROM job_requests WHERE status IN ('pending', 'processing')")
        conn.commit()


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[tuple[str, int]], None, None]:
    cleanup: list[tuple[str, int]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "job_requests":
                    cur.execute("DELETE FROM job_requests WHERE id = %s", (row_id,))
            for table, row_id in cleanup:
                if table == "comparisons":
                    cur.execute("DELETE FROM comparisons WHERE id = %s", (row_id,))
            for table, row_id in cleanup:
                if table == "documents":
                    cur.execute("DELETE FROM documents WHERE id = %s", (row_id,))
        conn.commit()


@pytest.fixture
def blob_store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "blobs")


@pytest.fixture
def seed_document(
    integration_cleanup: list[tuple[str, int]],
    blob_store: LocalBlobStore,
    sample_pdf_bytes: bytes,
) -> DocumentRecord:
    blob_id = blob_store.store(sample_pdf_bytes, "sample.pdf")
    document = DocumentsRepository().create(
        filename="sample.pdf",
        blob_id=blob_id,
        sha256="a" * 64,
        mime_type="application/pdf",
    )
    integration_cleanup.append(("documents", document.id))
    return document


@pytest.fixture
def seed_document_pair(
    integration_cleanup: list[tuple[str, int]],
    blob_store: LocalBlobStore,
    sample_pdf_bytes: bytes,
) -> tuple[DocumentRecord, DocumentRecord]:
    repo = DocumentsRepository()
    documents = []
    for name in ("a.pdf", "b.pdf"):
        document = repo.create(
            filename=name,
            blob_id=blob_store.store(sample_pdf_bytes, name),
            sha256="b" * 64,
            mime_type="application/pdf",
        )
        integration_cleanup.append(("documents", document.id))
        documents.append(document)
    return documents[0], documents[1]


@pytest.fixture
def seed_comparison(
    integration_cleanup: list[tuple[str, int]],
    seed_document_pair: tuple[DocumentRecord, DocumentRecord],
) -> ComparisonRecord:
    doc_a, doc_b = seed_document_pair
    comparison = ComparisonsRepository().create(doc_a.id, doc_b.id)
    integration_cleanup.append(("comparisons", comparison.id))
    return comparison


@pytest.fixture
def seed_job(
    empty_job_queue: None,
    integration_cleanup: list[tuple[str, int]],
    seed_document: DocumentRecord,
) -> JobRecord:
    repo = JobRepository(max_attempts=3)
    job_id = repo.enqueue(JOB_KIND_OCR, seed_document.id)
    integration_cleanup.append(("job_requests", job_id))
    job = repo.find_by_id(job_id)
    assert job is not None
    return job
