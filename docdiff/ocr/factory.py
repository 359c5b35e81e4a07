from docdiff.config.settings import Settings
from docdiff.ocr.base import BaseOcrClient
from docdiff.ocr.example_client_adapter import ExampleOcrClientAdapter
from docdiff.ocr.vision_client_adapter import VisionOcrClientAdapter


class OcrClientFactory:
    """Creates the configured OCR provider adapter."""

    PROVIDERS = ("vision", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrClient:
        provider = settings.ocr_provider.lower()
        if provider == "vision":
            return VisionOcrClientAdapter(timeout_seconds=settings.ocr_timeout_seconds)
        if provider == "example":
            return ExampleOcrClientAdapter()
        raise ValueError(
            f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
