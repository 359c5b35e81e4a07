class OcrError(Exception):
    """Raised when OCR processing fails."""


class OcrNetworkError(OcrError):
    """Raised when the OCR provider call fails due to network/infrastructure issues."""


class OcrContractError(OcrError):
    """Raised when the OCR provider response does not match the expected shape."""
