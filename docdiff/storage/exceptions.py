class BlobStoreError(Exception):
    """Base exception for blob storage errors."""


class BlobNotFoundError(BlobStoreError):
    """Raised when no blob exists for the given id."""
