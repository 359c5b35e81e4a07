from abc import ABC, abstractmethod

from docdiff.ocr.models import OcrPage


class BaseOcrClient(ABC):
    """Contract for all OCR provider adapters."""

    @abstractmethod
    def process_document(self, content: bytes, mime_type: str) -> list[OcrPage]:
        """Run OCR on a document.

        Args:
            content: Raw document bytes.
            mime_type: Media type of the content, e.g. ``application/pdf``.

        Returns:
            Pages in document order with nested blocks, paragraphs, words
            and symbols.

        Raises:
            OcrError: on any failure.
        """
