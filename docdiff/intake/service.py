import hashlib

from docdiff.database.models import (
    JOB_KIND_COMPARE,
    JOB_KIND_OCR,
    OCR_DONE,
    ComparisonRecord,
    DocumentRecord,
)
from docdiff.database.repositories.comparisons_repository import ComparisonsRepository
from docdiff.database.repositories.documents_repository import DocumentsRepository
from docdiff.database.repositories.job_repository import JobRepository
from docdiff.jobs.exceptions import PreconditionError, UploadRejectedError
from docdiff.logging.logger import Log
from docdiff.storage.base import BaseBlobStore

PDF_MIME_TYPE = "application/pdf"


class IntakeService:
    """Accepts uploads and comparison requests and queues the matching jobs.

    Every method returns as soon as the job request is queued; callers poll
    the document or comparison status for the outcome.
    """

    def __init__(
        self,
        *,
        blob_store: BaseBlobStore,
        doc_repo: DocumentsRepository,
        comparison_repo: ComparisonsRepository,
        job_repo: JobRepository,
        max_upload_mb: int = 50,
    ) -> None:
        self._blob_store = blob_store
        self._doc_repo = doc_repo
        self._comparison_repo = comparison_repo
        self._job_repo = job_repo
        self._max_upload_bytes = max_upload_mb * 1024 * 1024

    def upload_document(self, content: bytes, filename: str, mime_type: str) -> DocumentRecord:
        """Store a PDF, create its PENDING record and queue OCR.

        Raises:
            UploadRejectedError: for empty, oversized or non-PDF uploads.
        """
        if mime_type != PDF_MIME_TYPE:
            raise UploadRejectedError("Only PDF files are allowed")
        if not content:
            raise UploadRejectedError("No file uploaded")
        if len(content) > self._max_upload_bytes:
            raise UploadRejectedError("File too large")

        sha256 = hashlib.sha256(content).hexdigest()
        blob_id = self._blob_store.store(content, filename)
        document = self._doc_repo.create(
            filename=filename,
            blob_id=blob_id,
            sha256=sha256,
            mime_type=mime_type,
        )
        self._job_repo.enqueue(JOB_KIND_OCR, document.id)
        Log.info(f"Accepted upload '{filename}' as document {document.id}, OCR queued")
        return document

    def rerun_ocr(self, document_id: int) -> None:
        """Queue a new OCR run for an existing document.

        Raises:
            DocumentNotFoundError: if the document does not exist.
        """
        self._doc_repo.find_by_id(document_id)
        self._job_repo.enqueue(JOB_KIND_OCR, document_id)
        Log.info(f"OCR re-run queued for document {document_id}")

    def request_comparison(self, doc_a_id: int, doc_b_id: int) -> ComparisonRecord:
        """Create a CREATED comparison and queue the compare job.

        Raises:
            DocumentNotFoundError: if either document does not exist.
            PreconditionError: if OCR is not DONE on both documents.
        """
        doc_a = self._doc_repo.find_by_id(doc_a_id)
        doc_b = self._doc_repo.find_by_id(doc_b_id)
        if doc_a.ocr_status != OCR_DONE or doc_b.ocr_status != OCR_DONE:
            raise PreconditionError(
                "OCR not ready on one or both documents "
                f"(document {doc_a_id}: {doc_a.ocr_status}, "
                f"document {doc_b_id}: {doc_b.ocr_status})"
            )
        comparison = self._comparison_repo.create(doc_a_id, doc_b_id)
        self._job_repo.enqueue(JOB_KIND_COMPARE, comparison.id)
        Log.info(f"Comparison {comparison.id} created, compare queued")
        return comparison

    def rerun_comparison(self, comparison_id: int) -> None:
        """Queue a new compare run for an existing comparison.

        Raises:
            ComparisonNotFoundError: if the comparison does not exist.
        """
        self._comparison_repo.find_by_id(comparison_id)
        self._job_repo.enqueue(JOB_KIND_COMPARE, comparison_id)
        Log.info(f"Compare re-run queued for comparison {comparison_id}")
