from abc import ABC, abstractmethod
from collections.abc import Iterator


class BaseBlobStore(ABC):
    """Contract for raw document byte storage addressed by opaque id."""

    @abstractmethod
    def store(self, content: bytes, filename: str) -> str:
        """Persist content and return its blob id."""

    @abstractmethod
    def retrieve(self, blob_id: str) -> bytes:
        """Return the full content of a blob.

        Raises:
            BlobNotFoundError: if the blob does not exist.
        """

    @abstractmethod
    def stream(self, blob_id: str, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        """Yield the blob content in chunks.

        Raises:
            BlobNotFoundError: if the blob does not exist.
        """
