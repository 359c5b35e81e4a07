from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import vision

from docdiff.ocr.base import BaseOcrClient
from docdiff.ocr.exceptions import OcrError, OcrNetworkError
from docdiff.ocr.models import OcrPage
from docdiff.ocr.parser import parse_pages


class VisionOcrClientAdapter(BaseOcrClient):
    """OCR client adapter built on Google Cloud Vision document text detection.

    Uses the synchronous ``batch_annotate_files`` call with inline content,
    which returns ``full_text_annotation.pages`` per rendered page.
    """

    def __init__(self, *, timeout_seconds: int) -> None:
        self._client = vision.ImageAnnotatorClient()
        self._timeout_seconds = timeout_seconds

    def process_document(self, content: bytes, mime_type: str) -> list[OcrPage]:
        request = vision.AnnotateFileRequest(
            input_config=vision.InputConfig(content=content, mime_type=mime_type),
            features=[
                vision.Feature(type_=vision.Feature.Type.DOCUMENT_TEXT_DETECTION)
            ],
        )
        try:
            response = self._client.batch_annotate_files(
                requests=[request],
                timeout=self._timeout_seconds,
            )
        except google_exceptions.GoogleAPICallError as exc:
            raise OcrNetworkError(f"OCR provider API error: {exc}") from exc
        except google_exceptions.RetryError as exc:
            raise OcrNetworkError(f"OCR provider network error: {exc}") from exc

        if not response.responses:
            raise OcrError("OCR provider returned no file responses")
        file_response = response.responses[0]
        if file_response.error.message:
            raise OcrError(f"OCR provider file error: {file_response.error.message}")

        raw_pages: list[dict[str, Any]] = []
        for image_response in file_response.responses:
            if image_response.error.message:
                raise OcrError(
                    f"OCR provider page error: {image_response.error.message}"
                )
            raw_pages.extend(
                vision.Page.to_dict(page)
                for page in image_response.full_text_annotation.pages
            )
        return parse_pages(raw_pages)
