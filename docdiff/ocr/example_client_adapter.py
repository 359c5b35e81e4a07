"""Example OCR client adapter.

Use this module as a reference when implementing new OCR provider adapters.
Implement BaseOcrClient and register the provider in OcrClientFactory.
"""

from typing import ClassVar

from docdiff.ocr.base import BaseOcrClient
from docdiff.ocr.models import OcrPage
from docdiff.ocr.parser import parse_pages


class ExampleOcrClientAdapter(BaseOcrClient):
    """Example adapter that returns a fixed single-page OCR result.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_PAGES: ClassVar[list[dict[str, object]]] = [
        {
            "width": 1000,
            "height": 1000,
            "blocks": [
                {
                    "paragraphs": [
                        {
                            "boundingBox": {
                                "normalizedVertices": [
                                    {"x": 0.1, "y": 0.1},
                                    {"x": 0.9, "y": 0.1},
                                    {"x": 0.9, "y": 0.2},
                                    {"x": 0.1, "y": 0.2},
                                ]
                            },
                            "words": [
                                {"symbols": [{"text": c} for c in "Example"]},
                                {"symbols": [{"text": c} for c in "document"]},
                            ],
                        }
                    ]
                }
            ],
        }
    ]

    def process_document(self, content: bytes, mime_type: str) -> list[OcrPage]:
        _ = content, mime_type
        return parse_pages(self.DEFAULT_PAGES)
