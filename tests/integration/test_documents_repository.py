import pytest

from docdiff.database.models import OCR_DONE, OCR_ERROR, OCR_PENDING, OCR_RUNNING, DocumentRecord
from docdiff.database.repositories.documents_repository import DocumentsRepository
from docdiff.jobs.exceptions import DocumentNotFoundError
from docdiff.ocr.models import BoundingBox, Paragraph

PARAGRAPHS = [
    Paragraph("P1_0_0", 1, 0, 0, "Hello", BoundingBox(10, 10, 50, 20)),
    Paragraph("P2_1_0", 2, 1, 0, "World", BoundingBox(0, 0, 100, 5.5)),
]


@pytest.mark.integration
class TestDocumentsRepository:
    def test_create_starts_pending(self, seed_document: DocumentRecord) -> None:
        document = DocumentsRepository().find_by_id(seed_document.id)
        assert document.ocr_status == OCR_PENDING
        assert document.ocr_paragraphs == []
        assert document.filename == "sample.pdf"
        assert document.uploaded_at is not None

    def test_find_by_id_raises_for_unknown(self, integration_pool: None) -> None:
        with pytest.raises(DocumentNotFoundError):
            DocumentsRepository().find_by_id(-1)

    def test_mark_ocr_done_persists_paragraphs(self, seed_document: DocumentRecord) -> None:
        repo = DocumentsRepository()
        repo.mark_ocr_running(seed_document.id)
        assert repo.find_by_id(seed_document.id).ocr_status == OCR_RUNNING

        repo.mark_ocr_done(
            seed_document.id,
            paragraphs=PARAGRAPHS,
            text_payload="=== DOCUMENT ===\n\n",
            page_count=2,
        )

        document = repo.find_by_id(seed_document.id)
        assert document.ocr_status == OCR_DONE
        assert document.ocr_paragraphs == PARAGRAPHS
        assert document.ocr_text_payload == "=== DOCUMENT ===\n\n"
        assert document.page_count == 2

    def test_mark_ocr_failed_then_running_clears_error(self, seed_document: DocumentRecord) -> None:
        repo = DocumentsRepository()
        repo.mark_ocr_failed(seed_document.id, "provider down")
        failed = repo.find_by_id(seed_document.id)
        assert failed.ocr_status == OCR_ERROR
        assert failed.ocr_error == "provider down"

        repo.mark_ocr_running(seed_document.id)
        assert repo.find_by_id(seed_document.id).ocr_error is None

    def test_transition_on_unknown_document_raises(self, integration_pool: None) -> None:
        with pytest.raises(DocumentNotFoundError):
            DocumentsRepository().mark_ocr_running(-1)
