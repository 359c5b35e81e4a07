from docdiff.database.models import DocumentRecord
from docdiff.database.repositories.documents_repository import DocumentsRepository
from docdiff.jobs.exceptions import error_message
from docdiff.logging.logger import Log
from docdiff.ocr.base import BaseOcrClient
from docdiff.ocr.paragraph_index import build_paragraph_index
from docdiff.ocr.text_payload import build_text_payload
from docdiff.storage.base import BaseBlobStore


class OcrJob:
    """Drives one document through PENDING -> RUNNING -> DONE | ERROR.

    Pipeline: mark running -> load blob -> OCR -> index -> payload -> persist.
    The OCR provider call is not retried here.
    """

    PAYLOAD_LABEL = "DOCUMENT"

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        blob_store: BaseBlobStore,
        ocr_client: BaseOcrClient,
    ) -> None:
        self._doc_repo = doc_repo
        self._blob_store = blob_store
        self._ocr_client = ocr_client

    def run(self, document_id: int) -> None:
        """Run the OCR job; every failure after RUNNING ends in ERROR.

        Raises:
            DocumentNotFoundError: if the document does not exist.
        """
        self._doc_repo.mark_ocr_running(document_id)
        Log.info(f"[ocr-job] RUNNING docId={document_id}")
        try:
            self._process(document_id)
        except Exception as exc:
            message = error_message(exc)
            Log.error(f"[ocr-job] ERROR docId={document_id}: {message}")
            self._doc_repo.mark_ocr_failed(document_id, message)

    def _process(self, document_id: int) -> None:
        # Step 1: Load document bytes
        document: DocumentRecord = self._doc_repo.find_by_id(document_id)
        content = self._blob_store.retrieve(document.blob_id)
        Log.info(f"Loaded {len(content)} bytes for document {document_id}")

        # Step 2: OCR
        pages = self._ocr_client.process_document(content, document.mime_type)
        Log.info(f"OCR returned {len(pages)} pages for document {document_id}")

        # Step 3: Index paragraphs and render the tagged payload
        index = build_paragraph_index(pages)
        text_payload = build_text_payload(index.paragraphs, self.PAYLOAD_LABEL)

        # Step 4: Persist
        self._doc_repo.mark_ocr_done(
            document_id,
            paragraphs=index.paragraphs,
            text_payload=text_payload,
            page_count=index.page_count,
        )
        Log.info(
            f"[ocr-job] DONE docId={document_id} paragraphs={len(index.paragraphs)} "
            f"pages={index.page_count}"
        )
