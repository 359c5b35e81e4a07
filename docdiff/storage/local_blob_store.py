import re
import uuid
from collections.abc import Iterator
from pathlib import Path

from docdiff.logging.logger import Log
from docdiff.storage.base import BaseBlobStore
from docdiff.storage.exceptions import BlobNotFoundError, BlobStoreError

_BLOB_ID = re.compile(r"^[0-9a-f]{32}$")


def blob_file_path(root: Path, blob_id: str) -> Path:
    """Build path to blob file: {root}/{blob_id[:2]}/{blob_id}"""
    return root / blob_id[:2] / blob_id


class LocalBlobStore(BaseBlobStore):
    """Stores blobs as files under a root directory, sharded by id prefix."""

    BLOBS_ROOT = Path("/app/blobs")

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else self.BLOBS_ROOT

    def store(self, content: bytes, filename: str) -> str:
        blob_id = uuid.uuid4().hex
        path = blob_file_path(self._root, blob_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise BlobStoreError(f"Failed to store blob for '{filename}': {exc}") from exc
        Log.info(f"Stored {len(content)} bytes for '{filename}' as blob {blob_id}")
        return blob_id

    def retrieve(self, blob_id: str) -> bytes:
        return self._resolve_path(blob_id).read_bytes()

    def stream(self, blob_id: str, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        path = self._resolve_path(blob_id)
        with path.open("rb") as fh:
            while chunk := fh.read(chunk_size):
                yield chunk

    def _resolve_path(self, blob_id: str) -> Path:
        if not _BLOB_ID.match(blob_id):
            raise BlobNotFoundError(f"Invalid blob id: {blob_id!r}")
        path = blob_file_path(self._root, blob_id)
        if not path.exists():
            raise BlobNotFoundError(f"Blob not found: {blob_id}")
        return path
